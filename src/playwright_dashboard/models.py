"""
Data models for the Playwright dashboard generator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class StatusKind(Enum):
    """Final classification of a test for reporting."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    FLAKY = "flaky"
    UNKNOWN = "unknown"


@dataclass
class Attempt:
    """One recorded execution of a test."""

    status: Optional[str] = None
    duration_ms: float = 0.0


@dataclass
class TestCase:
    """A test inside a spec, with its attempts in chronological order."""

    __test__ = False

    status: Optional[str] = None
    results: List[Attempt] = field(default_factory=list)

    @property
    def last_attempt(self) -> Optional[Attempt]:
        """Return the authoritative (most recent) attempt, if any."""
        return self.results[-1] if self.results else None


@dataclass
class Spec:
    """A titled test definition in a source file."""

    title: str
    file: Optional[str] = None
    tests: List[TestCase] = field(default_factory=list)


@dataclass
class Suite:
    """A node in the result tree; suites nest to any depth."""

    title: Optional[str] = None
    file: Optional[str] = None
    suites: List["Suite"] = field(default_factory=list)
    specs: List[Spec] = field(default_factory=list)


@dataclass
class ResultTree:
    """Root of a parsed test-run result document."""

    suites: List[Suite] = field(default_factory=list)
    duration_ms: Optional[float] = None


@dataclass(frozen=True)
class TestRecord:
    """Flattened result of a single test."""

    __test__ = False

    group: str
    title: str
    status: StatusKind
    duration_ms: float

    @property
    def duration_seconds(self) -> float:
        return self.duration_ms / 1000.0


@dataclass
class GroupTotals:
    """Per-group counters. Unknown statuses are counted as skipped."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    flaky: int = 0


@dataclass
class Totals:
    """Run-level counters and duration."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    flaky: int = 0
    duration_seconds: float = 0.0


@dataclass
class DashboardSummary:
    """Aggregated view of a test run consumed by report generators."""

    totals: Totals
    groups: Dict[str, GroupTotals]
    records: List[TestRecord]

    @property
    def success(self) -> bool:
        """Return True if no test failed."""
        return self.totals.failed == 0
