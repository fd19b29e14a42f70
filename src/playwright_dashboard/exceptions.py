"""
Custom exceptions for the Playwright dashboard generator.
"""

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


class DashboardError(Exception):
    """Base exception for dashboard generation errors."""

    pass


class ResultsNotFoundError(DashboardError):
    """Raised when the test results document does not exist."""

    def __init__(self, path: PathLike):
        self.path = str(path)
        super().__init__(f"{self.path} not found")


class ResultsReadError(DashboardError):
    """Raised when the test results document exists but cannot be read."""

    def __init__(self, path: PathLike, original_error: Exception):
        self.path = str(path)
        self.original_error = original_error
        super().__init__(f"Unable to read {self.path}: {original_error}")


class MalformedResultsError(DashboardError):
    """Raised when the test results document is not valid JSON or has the wrong shape."""

    def __init__(self, path: PathLike, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to parse JSON from {self.path}: {reason}")


class ReportWriteError(DashboardError):
    """Raised when the dashboard cannot be written to its output directory."""

    def __init__(self, output_dir: PathLike, original_error: Exception):
        self.output_dir = str(output_dir)
        self.original_error = original_error
        super().__init__(
            f'Failed to generate dashboard in "{self.output_dir}": {original_error}'
        )
