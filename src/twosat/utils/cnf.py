"""
Instance file handling utilities.

This module reads 2-SAT instances in two formats and writes DIMACS:

- the plain two-column format: a first line holding the variable count N,
  then one clause per line as two space-separated signed integers;
- DIMACS CNF, restricted to clauses of one or two literals (a unit clause
  ``a`` is read as ``(a v a)``).
"""

import os
from typing import TextIO

from twosat.instance import Clause, Instance
from twosat.utils.exceptions import InstanceFormatError, InvalidClauseError

DIMACS_EXTENSIONS = (".cnf", ".dimacs")


def _lines(source: str | TextIO) -> list[str]:
    if isinstance(source, str):
        return source.splitlines()
    return source.readlines()


def _to_clause(literals: list[int]) -> Clause:
    if len(literals) == 1:
        return Clause(literals[0], literals[0])
    if len(literals) == 2:
        return Clause(literals[0], literals[1])
    raise InvalidClauseError("2-SAT clauses need one or two literals", clause=literals)


def parse_two_sat(source: str | TextIO) -> Instance:
    """
    Parse an instance in the plain two-column format.

    Args:
        source: Instance text as a string or file-like object

    Returns:
        The parsed Instance

    Raises:
        InstanceFormatError: If a line is not made of integers
        InvalidClauseError: If a clause line does not hold exactly two literals
        InvalidLiteralError: If a literal is 0 or exceeds the variable count
    """
    num_vars = None
    clauses = []

    for line_number, line in enumerate(_lines(source), start=1):
        line = line.strip()
        if not line:
            continue

        try:
            values = [int(token) for token in line.split()]
        except ValueError:
            raise InstanceFormatError(f"Non-integer token in {line!r}", line_number)

        if num_vars is None:
            if len(values) != 1:
                raise InstanceFormatError("First line must hold the variable count", line_number)
            num_vars = values[0]
            if num_vars < 0:
                raise InstanceFormatError(f"Negative variable count {num_vars}", line_number)
            continue

        if len(values) != 2:
            raise InvalidClauseError(f"Line {line_number} is not a 2-clause", clause=values)
        clauses.append(Clause(values[0], values[1]))

    if num_vars is None:
        raise InstanceFormatError("Missing variable count")

    return Instance(num_vars, clauses)


def parse_dimacs(source: str | TextIO) -> Instance:
    """
    Parse a 2-CNF instance from DIMACS format.

    Clauses may span several lines; each one ends at a ``0`` token.

    Args:
        source: DIMACS content as a string or file-like object

    Returns:
        The parsed Instance

    Raises:
        InstanceFormatError: If the problem line is missing or invalid
        InvalidClauseError: If a clause has more than two literals
    """
    num_vars = None
    expected_clauses = None
    clauses = []
    current_clause: list[int] = []

    for line_number, line in enumerate(_lines(source), start=1):
        line = line.strip()

        # Skip empty lines, comments and the end marker some generators emit
        if not line or line.startswith("c") or line.startswith("%"):
            continue

        if line.startswith("p"):
            if num_vars is not None:
                raise InstanceFormatError("Multiple problem lines", line_number)
            parts = line.split()
            if len(parts) < 4 or parts[1] != "cnf":
                raise InstanceFormatError(f"Invalid problem line: {line}", line_number)
            try:
                num_vars = int(parts[2])
                expected_clauses = int(parts[3])
            except ValueError:
                raise InstanceFormatError(f"Invalid numbers in problem line: {line}", line_number)
            if num_vars < 0 or expected_clauses < 0:
                raise InstanceFormatError(f"Negative counts in problem line: {line}", line_number)
            continue

        try:
            values = [int(token) for token in line.split()]
        except ValueError:
            raise InstanceFormatError(f"Non-integer token in {line!r}", line_number)

        for value in values:
            if value == 0:
                if current_clause:
                    clauses.append(_to_clause(current_clause))
                    current_clause = []
            else:
                current_clause.append(value)

    # Add the last clause if the terminating 0 is missing
    if current_clause:
        clauses.append(_to_clause(current_clause))

    if num_vars is None:
        raise InstanceFormatError("No problem line found")

    if len(clauses) != expected_clauses:
        raise InstanceFormatError(
            f"Expected {expected_clauses} clauses, but found {len(clauses)}"
        )

    return Instance(num_vars, clauses)


def load_instance(file_path: str) -> Instance:
    """
    Load an instance from a file, choosing the format by extension.

    Args:
        file_path: Path to a ``.cnf``/``.dimacs`` file or a plain two-column file

    Returns:
        The parsed Instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        InstanceFormatError: If the file cannot be decoded as text
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Instance file not found: {file_path}")

    try:
        with open(file_path) as f:
            if file_path.lower().endswith(DIMACS_EXTENSIONS):
                return parse_dimacs(f)
            return parse_two_sat(f)
    except UnicodeDecodeError as e:
        raise InstanceFormatError(f"{file_path} is not a text file: {e.reason}") from e


def instance_to_dimacs(instance: Instance, comments: list[str] | None = None) -> str:
    """
    Convert an instance to DIMACS format.

    Args:
        instance: The instance to write
        comments: Comment lines to include

    Returns:
        DIMACS format string representation
    """
    lines = [f"c {comment}" for comment in comments or []]
    lines.append(f"p cnf {instance.num_vars} {instance.num_clauses}")
    for clause in instance:
        lines.append(f"{clause.first} {clause.second} 0")
    return "\n".join(lines) + "\n"


def instance_to_two_sat(instance: Instance) -> str:
    """Convert an instance to the plain two-column format."""
    lines = [str(instance.num_vars)]
    lines.extend(f"{clause.first} {clause.second}" for clause in instance)
    return "\n".join(lines) + "\n"


def save_instance(instance: Instance, file_path: str) -> None:
    """
    Write an instance to a file, choosing the format by extension.

    Args:
        instance: The instance to write
        file_path: Destination path
    """
    directory = os.path.dirname(os.path.abspath(file_path))
    os.makedirs(directory, exist_ok=True)

    if file_path.lower().endswith(DIMACS_EXTENSIONS):
        content = instance_to_dimacs(instance)
    else:
        content = instance_to_two_sat(instance)

    with open(file_path, "w") as f:
        f.write(content)
