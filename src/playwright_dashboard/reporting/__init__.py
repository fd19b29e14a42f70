"""
Reporting modules for the Playwright dashboard generator.
"""

from .base import ReportGenerator
from .console import ConsoleReporter
from .html_reporter import HTMLReporter, render_dashboard
from .json_reporter import JSONReporter

__all__ = ["ReportGenerator", "ConsoleReporter", "HTMLReporter", "JSONReporter", "render_dashboard"]
