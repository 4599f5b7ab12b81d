"""
Logging utilities for 2-SAT runs.

This module provides a StructuredLogger class that records per-instance
engine results in JSON Lines or CSV format, a NumpyJSONEncoder for
serializing numpy values to JSON, and ``configure_logging`` for setting up
Python's built-in logging from the configuration.
"""

import csv
import json
import logging
import os
import time
from datetime import datetime
from typing import Any

import numpy as np

from twosat.solvers.base import SolverResult


class NumpyJSONEncoder(json.JSONEncoder):
    """JSON encoder that can handle NumPy arrays and scalars."""

    def default(self, obj):
        """Convert numpy objects to standard Python types."""
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.bool_):
            return bool(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


class StructuredLogger:
    """
    A logger for structured run records.

    This logger can output data in JSON Lines or CSV format.
    It maintains separate files for different event types.
    """

    FORMAT_JSON = "json"
    FORMAT_CSV = "csv"

    def __init__(self, output_dir: str, experiment_name: str, format_type: str = "json"):
        """
        Initialize the structured logger.

        Args:
            output_dir: Directory to save log files in
            experiment_name: Name of the run (used in filenames)
            format_type: Format to save logs in ("json" or "csv")
        """
        if format_type not in (self.FORMAT_JSON, self.FORMAT_CSV):
            raise ValueError(f"Unsupported log format: {format_type}")

        self.output_dir = output_dir
        self.experiment_name = experiment_name
        self.format_type = format_type

        # Ensure the output directory exists
        os.makedirs(output_dir, exist_ok=True)

        self.files = {}
        self.write_counts = {}
        self.metadata = {
            "experiment_name": experiment_name,
            "start_time": datetime.now().isoformat(),
            "log_files": {},
        }

    def _get_file(self, event_type: str) -> tuple:
        """
        Get the file handle for a given event type.

        Args:
            event_type: Type of event (used in filename)

        Returns:
            Tuple of (file_handle, is_new)
        """
        if event_type not in self.files:
            ext = ".jsonl" if self.format_type == self.FORMAT_JSON else ".csv"
            filepath = os.path.join(self.output_dir, f"{self.experiment_name}_{event_type}{ext}")
            self.metadata["log_files"][event_type] = filepath

            file = open(
                filepath,
                "w",
                newline="" if self.format_type == self.FORMAT_CSV else None,
            )
            self.files[event_type] = file
            self.write_counts[event_type] = 0
            return file, True

        return self.files[event_type], False

    def _write_event(self, event_type: str, data: dict[str, Any]):
        """
        Write an event to the appropriate log file.

        Args:
            event_type: Type of event
            data: Data to log
        """
        file, is_new = self._get_file(event_type)

        if self.format_type == self.FORMAT_JSON:
            file.write(json.dumps(data, cls=NumpyJSONEncoder) + "\n")
        else:
            # CSV rows are flat; nested values are stored as JSON strings
            row = {
                key: json.dumps(value, cls=NumpyJSONEncoder)
                if isinstance(value, (dict, list))
                else value
                for key, value in data.items()
            }
            writer = csv.DictWriter(file, fieldnames=list(row.keys()))
            if is_new:
                writer.writeheader()
            writer.writerow(row)
        file.flush()

        self.write_counts[event_type] += 1

    def log_result(self, instance_name: str, result: SolverResult, **extra):
        """
        Log one engine result.

        Args:
            instance_name: Name of the decided instance (usually the file name)
            result: The engine result
            **extra: Additional columns
        """
        data = {
            "instance": instance_name,
            "engine": result.engine,
            "status": result.status.value,
            "verdict": result.verdict,
            "exact": result.exact,
            "runtime": result.runtime,
            "satisfied_clauses": result.satisfied_clauses,
            "total_clauses": result.total_clauses,
            "statistics": result.statistics,
            "timestamp": time.time(),
        }
        data.update(extra)
        self._write_event("result", data)

    def log_exception(
        self,
        instance_name: str,
        exception_type: str,
        exception_message: str,
    ):
        """
        Log an exception raised while loading or deciding an instance.

        Args:
            instance_name: Name of the instance
            exception_type: Type of the exception
            exception_message: Exception message
        """
        data = {
            "instance": instance_name,
            "exception_type": exception_type,
            "exception_message": exception_message,
            "timestamp": time.time(),
        }
        self._write_event("exception", data)

    def close(self):
        """Close all open file handles."""
        for file in self.files.values():
            file.close()
        self.files = {}

    def finalize(self) -> str:
        """
        Close all files and write the metadata file.

        Returns:
            Path to the metadata file
        """
        self.close()

        self.metadata["end_time"] = datetime.now().isoformat()
        self.metadata["record_counts"] = self.write_counts

        metadata_path = os.path.join(self.output_dir, f"{self.experiment_name}_metadata.json")
        with open(metadata_path, "w") as f:
            json.dump(self.metadata, f, indent=2)

        return metadata_path


def create_logger(
    experiment_name: str,
    output_dir: str = "results",
    format_type: str = "json",
) -> StructuredLogger:
    """
    Create a structured logger with default settings.

    Args:
        experiment_name: Name of the run
        output_dir: Directory to save logs in
        format_type: Format to save logs in ("json" or "csv")

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(
        output_dir=output_dir,
        experiment_name=experiment_name,
        format_type=format_type,
    )


def configure_logging(
    level: str | int = "INFO",
    log_file: str | None = None,
    fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> logging.Logger:
    """
    Configure the ``twosat`` logger hierarchy.

    Args:
        level: Logging level name or number
        log_file: Optional file that receives the same records
        fmt: Record format

    Returns:
        The configured ``twosat`` logger
    """
    logger = logging.getLogger("twosat")
    logger.setLevel(level if isinstance(level, int) else level.upper())

    # Remove any existing handlers
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(fmt)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
