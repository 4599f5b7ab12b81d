"""
Name -> class table for the 2-SAT engines.

Engines register themselves with the ``register_solver`` decorator when
their module is imported; ``SolverRegistry.load_engines`` imports the
built-in ``scc`` and ``papadimitriou`` modules.
"""

import importlib
import logging

from .base import SolverBase

# Set up logging
logger = logging.getLogger(__name__)

ENGINE_MODULES = ("scc_solver", "papadimitriou_solver")


class SolverRegistry:
    """
    Registered engines plus the name used when a caller asks for none.

    Only classes are stored; ``create`` builds a fresh engine every time.
    """

    _registry: dict[str, type[SolverBase]] = {}
    _default_solver: str | None = None

    @classmethod
    def register(cls, name: str, solver_cls: type[SolverBase]) -> None:
        if not (isinstance(solver_cls, type) and issubclass(solver_cls, SolverBase)):
            raise TypeError(f"{solver_cls!r} is not a SolverBase subclass")
        if cls._registry.get(name, solver_cls) is not solver_cls:
            logger.warning(f"Engine '{name}' re-registered by {solver_cls.__name__}")

        solver_cls.solver_name = name
        cls._registry[name] = solver_cls

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._registry.pop(name, None)
        if cls._default_solver == name:
            cls._default_solver = None

    @classmethod
    def set_default(cls, name: str) -> None:
        cls.get(name)
        cls._default_solver = name

    @classmethod
    def get(cls, name: str | None = None) -> type[SolverBase]:
        """
        Look up an engine class.

        Args:
            name: Engine name, or None for the default engine

        Returns:
            The registered engine class

        Raises:
            ValueError: If the name is unknown or no default is set
        """
        name = name if name is not None else cls._default_solver
        if name is None:
            raise ValueError("No default engine set")
        try:
            return cls._registry[name]
        except KeyError:
            known = ", ".join(sorted(cls._registry)) or "none"
            raise ValueError(f"Unknown engine '{name}' (registered: {known})") from None

    @classmethod
    def list_solvers(cls) -> list[str]:
        return sorted(cls._registry)

    @classmethod
    def create(cls, name: str | None = None, *args, **kwargs) -> SolverBase:
        """Build a new engine; arguments go to the engine constructor."""
        return cls.get(name)(*args, **kwargs)

    @classmethod
    def load_engines(cls) -> None:
        """Import the built-in engine modules so their decorators run."""
        package_name = __name__.rsplit(".", 1)[0]
        for module_name in ENGINE_MODULES:
            importlib.import_module(f"{package_name}.{module_name}")
        logger.debug(f"Registered engines: {cls.list_solvers()}")


def register_solver(name: str):
    """Class decorator that registers an engine under ``name``."""

    def decorator(solver_cls: type[SolverBase]) -> type[SolverBase]:
        SolverRegistry.register(name, solver_cls)
        return solver_cls

    return decorator
