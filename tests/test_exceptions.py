"""Tests for custom exceptions."""

from pathlib import Path

from src.playwright_dashboard.exceptions import (
    DashboardError,
    MalformedResultsError,
    ReportWriteError,
    ResultsNotFoundError,
    ResultsReadError,
)


class TestDashboardError:
    """Tests for base exception."""

    def test_is_exception(self):
        assert issubclass(DashboardError, Exception)

    def test_message(self):
        err = DashboardError("boom")
        assert str(err) == "boom"


class TestResultsNotFoundError:
    """Tests for missing input error."""

    def test_inherits_from_base(self):
        assert issubclass(ResultsNotFoundError, DashboardError)

    def test_attributes(self):
        err = ResultsNotFoundError(Path("results.json"))
        assert err.path == "results.json"
        assert "results.json not found" in str(err)


class TestResultsReadError:
    """Tests for unreadable input error."""

    def test_inherits_from_base(self):
        assert issubclass(ResultsReadError, DashboardError)

    def test_attributes(self):
        orig = PermissionError("denied")
        err = ResultsReadError("results.json", orig)
        assert err.original_error is orig
        assert "denied" in str(err)


class TestMalformedResultsError:
    """Tests for parse error."""

    def test_inherits_from_base(self):
        assert issubclass(MalformedResultsError, DashboardError)

    def test_attributes(self):
        err = MalformedResultsError("results.json", "Expecting value: line 1 column 1")
        assert err.path == "results.json"
        assert err.reason == "Expecting value: line 1 column 1"
        assert "Failed to parse JSON from results.json" in str(err)


class TestReportWriteError:
    """Tests for write error."""

    def test_inherits_from_base(self):
        assert issubclass(ReportWriteError, DashboardError)

    def test_attributes(self):
        orig = OSError("read-only file system")
        err = ReportWriteError("dashboard", orig)
        assert err.output_dir == "dashboard"
        assert err.original_error is orig
        assert "dashboard" in str(err)
        assert "read-only file system" in str(err)
