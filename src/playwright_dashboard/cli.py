"""
Command-line interface for the Playwright dashboard generator.
"""

import logging
import sys
from typing import Optional

import click

from .config import ConfigurationError, load_config, validate_config
from .dashboard import generate_dashboard
from .exceptions import (
    MalformedResultsError,
    ReportWriteError,
    ResultsNotFoundError,
    ResultsReadError,
)
from .reporting import ConsoleReporter

logger = logging.getLogger(__name__)


@click.command()
@click.argument("input_path", required=False, type=click.Path())
@click.argument("output_dir", required=False, type=click.Path())
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file (YAML)",
)
@click.option("--title", type=str, help="Dashboard title (overrides config)")
@click.option(
    "--json-summary",
    type=click.Path(dir_okay=False),
    help="Also write a JSON summary of the run to this file",
)
@click.option(
    "--quiet",
    is_flag=True,
    default=False,
    help="Do not print the run summary after generating the dashboard",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="WARNING",
    help="Logging level",
)
def main(
    input_path: Optional[str],
    output_dir: Optional[str],
    config: Optional[str],
    title: Optional[str],
    json_summary: Optional[str],
    quiet: bool,
    log_level: str,
) -> None:
    """
    Playwright Dashboard - Static HTML dashboard from Playwright JSON results.

    INPUT_PATH defaults to test-results.json and OUTPUT_DIR to dashboard.
    The dashboard is written to OUTPUT_DIR/index.html.

    Examples:

      # Use the defaults
      pw-dashboard

      # Explicit input and output
      pw-dashboard reports/results.json public/dashboard

      # Custom title and a machine-readable summary for CI
      pw-dashboard --title "Booking API" --json-summary dashboard/summary.json
    """
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    try:
        dashboard_config = load_config(config)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    # Command-line values win over config file and environment
    if input_path:
        dashboard_config.input_file = input_path
    if output_dir:
        dashboard_config.output_dir = output_dir
    if title:
        dashboard_config.title = title
    if json_summary:
        dashboard_config.json_summary = json_summary

    errors = validate_config(dashboard_config)
    if errors:
        click.echo("Configuration errors:", err=True)
        for error in errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)

    rerun = dashboard_config.rerun_command

    try:
        result = generate_dashboard(dashboard_config)
    except ResultsNotFoundError as e:
        logger.error("Results not found: %s", e.path)
        click.echo(f"Error: {e.path} not found. Run tests first: {rerun}", err=True)
        sys.exit(1)
    except ResultsReadError as e:
        logger.error("Unable to read results: %s", e)
        click.echo(f"Error: {e}", err=True)
        click.echo(f"Check file permissions or re-run your tests: {rerun}", err=True)
        sys.exit(1)
    except MalformedResultsError as e:
        logger.error("Malformed results: %s", e)
        click.echo(f"Error: Failed to parse JSON from {e.path}.", err=True)
        click.echo(f"Reason: {e.reason}", err=True)
        click.echo(
            f"The results file may be incomplete or corrupted. "
            f"Try re-running your tests: {rerun}",
            err=True,
        )
        sys.exit(1)
    except ReportWriteError as e:
        logger.error("Write failed: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Dashboard generated → {result.report_path}")
    if result.json_summary_path is not None:
        click.echo(f"JSON summary written to: {result.json_summary_path}")
    if not quiet:
        click.echo(ConsoleReporter().generate(result.summary))

    totals = result.summary.totals
    logger.info(
        "Dashboard complete: %d tests, %d passed, %d failed",
        totals.total,
        totals.passed,
        totals.failed,
    )


if __name__ == "__main__":
    main()
