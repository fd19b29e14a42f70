"""
Common interface of the dashboard's output formats.
"""

from abc import ABC, abstractmethod

from ..models import DashboardSummary


class ReportGenerator(ABC):
    """Renders one aggregated Playwright run into a single text document.

    Subclasses are pure: the same summary and settings always give the same
    document, and nothing is written to disk here.
    """

    #: Short label used in log messages
    format_name = "report"

    @abstractmethod
    def generate(self, summary: DashboardSummary) -> str:
        """Render ``summary`` (totals, ordered groups and per-test records)."""
