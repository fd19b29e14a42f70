"""
Plain-text run summary printed by the CLI after the dashboard is written.
"""

import os
import sys
from typing import Optional, TextIO

from ..models import DashboardSummary, StatusKind
from ..results import pass_rate
from .base import ReportGenerator

_ANSI = {
    "bold": "\033[1m",
    "green": "\033[92m",
    "red": "\033[91m",
    "yellow": "\033[93m",
    "magenta": "\033[95m",
}
_RESET = "\033[0m"

# SetConsoleMode flag that makes the Windows console interpret ANSI sequences
_ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
_STD_OUTPUT_HANDLE = -11


def _enable_windows_ansi() -> bool:
    try:
        import ctypes

        kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
        handle = kernel32.GetStdHandle(_STD_OUTPUT_HANDLE)
        mode = ctypes.c_ulong()
        if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            return False
        return bool(
            kernel32.SetConsoleMode(handle, mode.value | _ENABLE_VIRTUAL_TERMINAL_PROCESSING)
        )
    except (AttributeError, OSError):
        return False


def _supports_color(stream: Optional[TextIO] = None) -> bool:
    """
    Decide whether colour codes should be written to ``stream`` (default stdout).

    ``NO_COLOR`` beats ``FORCE_COLOR``. Without either, colour requires an
    interactive terminal.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return False
    if sys.platform == "win32":
        return _enable_windows_ansi()
    return True


class ConsoleReporter(ReportGenerator):
    """
    Summarise a run for the terminal: totals, per-suite counts and failures.

    Args:
        color: Force colour on or off; detected from the environment and
            ``stream`` when None
        stream: Stream the report will be printed to
    """

    format_name = "console"

    def __init__(self, color: Optional[bool] = None, stream: Optional[TextIO] = None) -> None:
        self.color = _supports_color(stream) if color is None else color

    def _paint(self, text: str, style: str) -> str:
        if not self.color:
            return text
        return f"{_ANSI[style]}{text}{_RESET}"

    def _group_style(self, passed: int, failed: int, total: int) -> str:
        if passed == total:
            return "green"
        return "red" if failed else "yellow"

    def generate(self, summary: DashboardSummary) -> str:
        totals = summary.totals
        lines = [
            "",
            self._paint("Test Run Summary", "bold"),
            "=" * 60,
            f"  Total Tests: {totals.total}",
            "  " + self._paint(f"Passed: {totals.passed}", "green"),
            "  " + self._paint(f"Failed: {totals.failed}", "red"),
            "  " + self._paint(f"Skipped: {totals.skipped}", "yellow"),
            "  " + self._paint(f"Flaky: {totals.flaky}", "magenta"),
            f"  Duration: {totals.duration_seconds:.1f}s",
            f"  Pass Rate: {pass_rate(totals.passed, totals.total)}%",
        ]

        if summary.groups:
            lines += ["", self._paint("Suites:", "bold")]
            width = max(len(name) for name in summary.groups)
            for name, group in summary.groups.items():
                style = self._group_style(group.passed, group.failed, group.total)
                count = self._paint(f"{group.passed}/{group.total}", style)
                lines.append(f"  {name.ljust(width)}  {count}")

        failed = [r for r in summary.records if r.status == StatusKind.FAILED]
        if failed:
            lines += ["", self._paint("Failed Tests:", "bold")]
            for record in failed:
                label = self._paint(f"✗ {record.group} › {record.title}", "red")
                lines.append(f"  {label} ({record.duration_seconds:.2f}s)")

        lines.append("")
        return "\n".join(lines)
