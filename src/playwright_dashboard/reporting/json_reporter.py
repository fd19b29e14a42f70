"""
JSON reporter for an aggregated test run.
"""

import json

from ..models import DashboardSummary
from ..results import pass_rate
from .base import ReportGenerator


class JSONReporter(ReportGenerator):
    """Machine-readable run summary, written by ``--json-summary`` for CI jobs."""

    format_name = "json"

    def generate(self, summary: DashboardSummary) -> str:
        totals = summary.totals
        report = {
            "summary": {
                "total": totals.total,
                "passed": totals.passed,
                "failed": totals.failed,
                "skipped": totals.skipped,
                "flaky": totals.flaky,
                "duration_seconds": totals.duration_seconds,
                "pass_rate": pass_rate(totals.passed, totals.total),
                "success": summary.success,
            },
            "groups": [
                {
                    "name": name,
                    "total": group.total,
                    "passed": group.passed,
                    "failed": group.failed,
                    "skipped": group.skipped,
                    "flaky": group.flaky,
                }
                for name, group in summary.groups.items()
            ],
            "results": [
                {
                    "group": r.group,
                    "title": r.title,
                    "status": r.status.value,
                    "duration_ms": r.duration_ms,
                }
                for r in summary.records
            ],
        }

        return json.dumps(report, indent=2)
