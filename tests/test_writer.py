"""Tests for the output writer."""

from unittest.mock import patch

import pytest

from src.playwright_dashboard.exceptions import ReportWriteError
from src.playwright_dashboard.writer import REPORT_FILENAME, write_report


class TestWriteReport:
    """Tests for write_report."""

    def test_writes_index_html(self, tmp_path):
        out_path = write_report(tmp_path, "<html></html>")
        assert out_path == tmp_path / REPORT_FILENAME
        assert out_path.name == "index.html"
        assert out_path.read_text(encoding="utf-8") == "<html></html>"

    def test_creates_nested_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "dashboard"
        out_path = write_report(str(target), "doc")
        assert target.is_dir()
        assert out_path.read_text(encoding="utf-8") == "doc"

    def test_overwrites_existing_file(self, tmp_path):
        write_report(tmp_path, "first")
        out_path = write_report(tmp_path, "second")
        assert out_path.read_text(encoding="utf-8") == "second"

    def test_custom_filename(self, tmp_path):
        out_path = write_report(tmp_path, "{}", filename="summary.json")
        assert out_path == tmp_path / "summary.json"

    def test_writes_utf8(self, tmp_path):
        out_path = write_report(tmp_path, "Dashboard → ✓")
        assert out_path.read_bytes() == "Dashboard → ✓".encode("utf-8")

    def test_directory_is_a_file(self, tmp_path):
        blocker = tmp_path / "dashboard"
        blocker.write_text("not a directory")
        with pytest.raises(ReportWriteError) as exc_info:
            write_report(blocker, "doc")
        assert exc_info.value.output_dir == str(blocker)
        assert isinstance(exc_info.value.original_error, OSError)

    def test_write_failure_wrapped(self, tmp_path):
        with patch("pathlib.Path.write_text", side_effect=PermissionError("denied")):
            with pytest.raises(ReportWriteError) as exc_info:
                write_report(tmp_path, "doc")
        assert "denied" in str(exc_info.value)
