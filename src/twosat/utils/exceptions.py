"""
Custom exceptions for the 2-SAT decision engines.

This module defines the error taxonomy shared by the instance model, the
engines and the instance loaders, allowing for more detailed error handling
and reporting.
"""

from typing import Any


class DecisionError(Exception):
    """Base class for all 2-SAT decision errors."""

    def __init__(self, message: str = None):
        """
        Initialize the exception.

        Args:
            message: Optional error message
        """
        self.message = message
        super().__init__(message)


class InvalidLiteralError(DecisionError, ValueError):
    """
    Exception raised when a clause references a literal outside [1, N].

    This covers the literal 0 as well as literals whose magnitude exceeds
    the declared variable count.
    """

    def __init__(
        self,
        message: str = "Invalid literal",
        literal: int = None,
        num_vars: int = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            literal: The offending literal
            num_vars: Declared variable count of the instance
        """
        self.literal = literal
        self.num_vars = num_vars

        # Enhance the message with details if available
        details = []
        if literal is not None:
            details.append(f"literal={literal}")
        if num_vars is not None:
            details.append(f"num_vars={num_vars}")
        if details:
            message = f"{message} ({', '.join(details)})"

        super().__init__(message)


class InvalidClauseError(DecisionError, ValueError):
    """
    Exception raised when a loaded clause is not a 2-clause.

    This occurs when a clause has no literals or more than two literals.
    """

    def __init__(self, message: str = "Invalid clause detected", clause: list[int] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            clause: The invalid clause
        """
        self.clause = clause

        if clause is not None:
            message = f"{message}: {clause}"

        super().__init__(message)


class InstanceFormatError(DecisionError, ValueError):
    """Exception raised when instance text cannot be parsed."""

    def __init__(self, message: str = "Malformed instance", line_number: int = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            line_number: 1-based line number where parsing failed
        """
        self.line_number = line_number

        if line_number is not None:
            message = f"{message} at line {line_number}"

        super().__init__(message)


class VerdictMismatchError(DecisionError):
    """
    Exception raised when the randomized engine claims satisfiability for an
    instance the deterministic engine proved unsatisfiable.

    A randomized ``True`` is always backed by a model, so this can only mean
    a bug in one of the engines.
    """

    def __init__(
        self,
        message: str = "Engines disagree on an exact verdict",
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Optional per-engine result summary
        """
        self.details = details or {}
        super().__init__(message)
