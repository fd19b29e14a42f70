"""
Test result flattening and aggregation.
"""

import logging
import math
import posixpath
import re
from typing import Dict, List, Optional, Tuple

from .models import (
    DashboardSummary,
    GroupTotals,
    ResultTree,
    StatusKind,
    Suite,
    TestCase,
    TestRecord,
    Totals,
)

logger = logging.getLogger(__name__)

UNGROUPED = "Ungrouped"

# Outcome reported by the runner for the test as a whole (retries included)
_OUTCOME_STATUSES = {
    "expected": StatusKind.PASSED,
    "unexpected": StatusKind.FAILED,
    "skipped": StatusKind.SKIPPED,
    "flaky": StatusKind.FLAKY,
}

# Status of a single attempt
_ATTEMPT_STATUSES = {
    "passed": StatusKind.PASSED,
    "failed": StatusKind.FAILED,
    "timedOut": StatusKind.FAILED,
    "skipped": StatusKind.SKIPPED,
}

_TEST_SUFFIX = re.compile(r"\.(spec|test)\.[cm]?[jt]sx?$")


def group_from_file(file: Optional[str]) -> str:
    """
    Derive a group name from a spec's source file.

    The directory part and a trailing test suffix such as ``.spec.ts`` are
    removed: ``tests/auth.spec.ts`` becomes ``auth``.
    """
    if not file:
        return UNGROUPED
    name = posixpath.basename(file.replace("\\", "/"))
    return _TEST_SUFFIX.sub("", name) or UNGROUPED


def classify_status(test: TestCase) -> StatusKind:
    """
    Classify a test by its final outcome.

    The runner's overall outcome wins when present, since it already marks
    tests that passed on retry as flaky. Otherwise the last attempt decides.
    """
    if test.status is not None:
        return _OUTCOME_STATUSES.get(test.status, StatusKind.UNKNOWN)

    attempt = test.last_attempt
    if attempt is None or attempt.status is None:
        return StatusKind.UNKNOWN
    return _ATTEMPT_STATUSES.get(attempt.status, StatusKind.UNKNOWN)


def _append_specs(suite: Suite, group: Optional[str], records: List[TestRecord]) -> None:
    for spec in suite.specs:
        spec_group = group or group_from_file(spec.file or suite.file)
        for test in spec.tests:
            attempt = test.last_attempt
            records.append(
                TestRecord(
                    group=spec_group,
                    title=spec.title,
                    status=classify_status(test),
                    duration_ms=attempt.duration_ms if attempt is not None else 0.0,
                )
            )


def flatten_tests(tree: ResultTree) -> List[TestRecord]:
    """
    Flatten a result tree into per-test records.

    Suites are walked depth-first, child suites before the suite's own
    specs. Each test is assigned to its innermost titled suite, or to a
    name derived from its spec file when no enclosing suite has a title.
    The walk uses an explicit stack, so nesting depth is not bounded by
    the interpreter's recursion limit.

    Args:
        tree: Parsed result tree

    Returns:
        List of TestRecord in discovery order
    """
    records: List[TestRecord] = []
    # (suite, inherited group, children already pushed)
    stack: List[Tuple[Suite, Optional[str], bool]] = [
        (suite, None, False) for suite in reversed(tree.suites)
    ]
    while stack:
        suite, group, expanded = stack.pop()
        if expanded:
            _append_specs(suite, group, records)
            continue
        group = suite.title or group
        stack.append((suite, group, True))
        stack.extend((child, group, False) for child in reversed(suite.suites))
    logger.debug("Flattened %d tests", len(records))
    return records


def aggregate_results(
    records: List[TestRecord], run_duration_ms: Optional[float] = None
) -> Tuple[Totals, Dict[str, GroupTotals]]:
    """
    Aggregate test records into run totals and per-group totals.

    Unknown statuses are counted as skipped so they never drop out of the
    totals.

    Args:
        records: Flattened test records
        run_duration_ms: Run duration reported by the results document, if any

    Returns:
        Tuple of (Totals, mapping of group name to GroupTotals in first-seen order)
    """
    totals = Totals()
    groups: Dict[str, GroupTotals] = {}
    summed_ms = 0.0

    for record in records:
        group = groups.get(record.group)
        if group is None:
            group = groups[record.group] = GroupTotals()

        if record.status == StatusKind.PASSED:
            attr = "passed"
        elif record.status == StatusKind.FAILED:
            attr = "failed"
        elif record.status == StatusKind.FLAKY:
            attr = "flaky"
        else:
            attr = "skipped"

        for counters in (totals, group):
            counters.total += 1
            setattr(counters, attr, getattr(counters, attr) + 1)
        summed_ms += record.duration_ms

    duration_ms = run_duration_ms if run_duration_ms is not None else summed_ms
    totals.duration_seconds = duration_ms / 1000.0
    return totals, groups


def pass_rate(passed: int, total: int) -> int:
    """
    Return the pass rate as a whole percentage.

    Halves round up. An empty run has a pass rate of 0.
    """
    if total == 0:
        return 0
    return int(math.floor(100 * passed / total + 0.5))


def pass_rate_tier(pct: int) -> str:
    """Return the severity tier for a pass rate: ``full``, ``warn`` or ``low``."""
    if pct == 100:
        return "full"
    if pct >= 80:
        return "warn"
    return "low"


def summarize(tree: ResultTree) -> DashboardSummary:
    """Flatten and aggregate a result tree."""
    records = flatten_tests(tree)
    totals, groups = aggregate_results(records, tree.duration_ms)
    return DashboardSummary(totals=totals, groups=groups, records=records)
