"""Batch driver: decide many instance files with one or more engines."""

import logging
import os
from typing import Any

from twosat.decision import solve
from twosat.utils.cnf import DIMACS_EXTENSIONS, load_instance
from twosat.utils.exceptions import DecisionError
from twosat.utils.logging_utils import StructuredLogger

# Set up logging
logger = logging.getLogger(__name__)

INSTANCE_EXTENSIONS = (".txt",) + DIMACS_EXTENSIONS


def find_instance_files(path: str) -> list[str]:
    """If path is a file -> [path]. If directory -> all instance files under it, sorted."""
    if os.path.isfile(path):
        return [path]

    found: list[str] = []
    for root, _, files in os.walk(path):
        for name in files:
            if name.lower().endswith(INSTANCE_EXTENSIONS):
                found.append(os.path.join(root, name))
    found.sort()
    return found


def run_benchmarks(
    files: list[str],
    engines: list[str],
    structured_logger: StructuredLogger | None = None,
    engine_options: dict[str, dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """
    Decide every file with every engine.

    Args:
        files: Instance file paths, in answer-string order
        engines: Registered engine names
        structured_logger: Optional sink for per-result records
        engine_options: Per-engine keyword options

    Returns:
        Dictionary with the per-result ``records`` and, per engine, an
        ``answers`` string holding one "1" (satisfiable) or "0" per file
    """
    engine_options = engine_options or {}
    records: list[dict[str, Any]] = []
    answers = {engine: "" for engine in engines}

    for path in files:
        name = os.path.basename(path)
        try:
            instance = load_instance(path)
        except DecisionError as e:
            logger.error(f"Skipping {name}: {e}")
            if structured_logger is not None:
                structured_logger.log_exception(name, type(e).__name__, str(e))
            for engine in engines:
                answers[engine] += "?"
            continue

        for engine in engines:
            result = solve(instance, engine, **engine_options.get(engine, {}))
            answers[engine] += "1" if result.verdict else "0"

            record = {"file": name, "path": path, **result.to_dict()}
            records.append(record)
            if structured_logger is not None:
                structured_logger.log_result(name, result, path=path)

            logger.info(f"[{engine}] {name} -> {result.status.value} ({result.runtime:.4f}s)")

    for engine, answer in answers.items():
        logger.info(f"[{engine}] answer string: {answer}")

    return {"records": records, "answers": answers}
