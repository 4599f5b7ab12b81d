"""
Utility modules: instance loaders, generators, structured logging and the
error taxonomy.
"""
