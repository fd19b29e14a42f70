"""
Dashboard generation pipeline: load, flatten, aggregate, render, write.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import DashboardConfig
from .loader import load_result_tree
from .models import DashboardSummary
from .reporting import HTMLReporter, JSONReporter
from .results import summarize
from .writer import write_report

logger = logging.getLogger(__name__)


@dataclass
class DashboardResult:
    """Outcome of a successful dashboard generation."""

    report_path: Path
    summary: DashboardSummary
    json_summary_path: Optional[Path] = None


def generate_dashboard(
    config: DashboardConfig, generated_at: Optional[datetime] = None
) -> DashboardResult:
    """
    Generate the dashboard described by ``config``.

    Nothing is written unless the results document loads successfully. Both
    outputs are rendered before either is written, and the JSON summary is
    written before the dashboard.

    Args:
        config: Input/output locations and presentation settings
        generated_at: Timestamp for the header (default: now)

    Returns:
        DashboardResult with the written paths and the aggregated run

    Raises:
        ResultsNotFoundError, ResultsReadError, MalformedResultsError: On input problems
        ReportWriteError: If the dashboard or the JSON summary cannot be written
    """
    logger.info("Loading results from %s", config.input_file)
    tree = load_result_tree(config.input_file)
    summary = summarize(tree)
    logger.debug(
        "Aggregated %d tests in %d groups", summary.totals.total, len(summary.groups)
    )

    reporter = HTMLReporter(
        title=config.title,
        generated_at=generated_at,
        footer_links=[(link.label, link.url) for link in config.footer_links],
    )
    document = reporter.generate(summary)
    summary_document = JSONReporter().generate(summary) if config.json_summary else None
    logger.debug("Rendered %s report (%d characters)", reporter.format_name, len(document))

    # A failed summary write must leave no index.html behind
    json_summary_path = None
    if summary_document is not None:
        target = Path(config.json_summary)
        json_summary_path = write_report(target.parent, summary_document, filename=target.name)
    report_path = write_report(config.output_dir, document)

    return DashboardResult(
        report_path=report_path,
        summary=summary,
        json_summary_path=json_summary_path,
    )
