"""Tests for loading result documents."""

import json
from unittest.mock import patch

import pytest

from src.playwright_dashboard.exceptions import (
    MalformedResultsError,
    ResultsNotFoundError,
    ResultsReadError,
)
from src.playwright_dashboard.loader import load_result_tree, parse_result_tree


def _document():
    return {
        "config": {"workers": 1},
        "suites": [
            {
                "title": "auth.spec.ts",
                "file": "auth.spec.ts",
                "suites": [
                    {
                        "title": "Auth",
                        "specs": [
                            {
                                "title": "creates a token",
                                "file": "auth.spec.ts",
                                "tests": [
                                    {
                                        "status": "expected",
                                        "results": [{"status": "passed", "duration": 300}],
                                    }
                                ],
                            }
                        ],
                    }
                ],
            }
        ],
        "stats": {"duration": 1234.5, "expected": 1},
    }


def _nested_document(depth):
    """A document whose suites nest ``depth`` levels deep around one spec."""
    leaf = (
        '{"title": "leaf", "specs": [{"title": "deep", '
        '"tests": [{"status": "expected"}]}]}'
    )
    return (
        '{"suites": ['
        + '{"suites": [' * depth
        + leaf
        + "]}" * depth
        + "]}"
    )


class TestParseResultTree:
    """Tests for parse_result_tree."""

    def test_parses_nested_tree(self):
        tree = parse_result_tree(_document())
        assert tree.duration_ms == 1234.5
        assert len(tree.suites) == 1
        outer = tree.suites[0]
        assert outer.title == "auth.spec.ts"
        assert outer.file == "auth.spec.ts"
        inner = outer.suites[0]
        assert inner.title == "Auth"
        spec = inner.specs[0]
        assert spec.title == "creates a token"
        test = spec.tests[0]
        assert test.status == "expected"
        assert test.results[0].status == "passed"
        assert test.results[0].duration_ms == 300.0

    def test_missing_optional_fields(self):
        tree = parse_result_tree({"suites": [{"specs": [{"title": "t", "tests": [{}]}]}]})
        assert tree.duration_ms is None
        suite = tree.suites[0]
        assert suite.title is None
        assert suite.suites == []
        test = suite.specs[0].tests[0]
        assert test.status is None
        assert test.results == []

    def test_null_fields_treated_as_absent(self):
        tree = parse_result_tree({"suites": [{"title": None, "suites": None, "specs": None}]})
        assert tree.suites[0].title is None
        assert tree.suites[0].specs == []

    def test_missing_suites(self):
        tree = parse_result_tree({})
        assert tree.suites == []

    def test_attempt_without_duration(self):
        tree = parse_result_tree(
            {"suites": [{"specs": [{"title": "t", "tests": [{"results": [{"status": "passed"}]}]}]}]}
        )
        assert tree.suites[0].specs[0].tests[0].results[0].duration_ms == 0.0

    def test_top_level_must_be_object(self):
        with pytest.raises(ValueError, match="expected object"):
            parse_result_tree([1, 2, 3])

    def test_suites_must_be_list(self):
        with pytest.raises(ValueError, match=r"\$\.suites: expected array"):
            parse_result_tree({"suites": {"title": "x"}})

    def test_duration_must_be_number(self):
        doc = {"suites": [{"specs": [{"title": "t", "tests": [{"results": [{"duration": "5"}]}]}]}]}
        with pytest.raises(ValueError, match="duration: expected number"):
            parse_result_tree(doc)

    def test_boolean_duration_rejected(self):
        with pytest.raises(ValueError):
            parse_result_tree({"stats": {"duration": True}})

    def test_error_location_points_at_field(self):
        doc = {"suites": [{"suites": [{"title": 42}]}]}
        with pytest.raises(ValueError, match=r"\$\.suites\[0\]\.suites\[0\]\.title"):
            parse_result_tree(doc)


class TestLoadResultTree:
    """Tests for load_result_tree."""

    def test_loads_file(self, tmp_path):
        path = tmp_path / "test-results.json"
        path.write_text(json.dumps(_document()), encoding="utf-8")
        tree = load_result_tree(path)
        assert tree.suites[0].suites[0].title == "Auth"

    def test_accepts_string_path(self, tmp_path):
        path = tmp_path / "test-results.json"
        path.write_text('{"suites": []}', encoding="utf-8")
        assert load_result_tree(str(path)).suites == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResultsNotFoundError) as exc_info:
            load_result_tree(tmp_path / "nope.json")
        assert exc_info.value.path.endswith("nope.json")

    def test_directory_is_not_found(self, tmp_path):
        with pytest.raises(ResultsNotFoundError):
            load_result_tree(tmp_path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "test-results.json"
        path.write_text('{"suites": [', encoding="utf-8")
        with pytest.raises(MalformedResultsError) as exc_info:
            load_result_tree(path)
        assert exc_info.value.reason

    def test_empty_file_is_malformed(self, tmp_path):
        path = tmp_path / "test-results.json"
        path.write_text("", encoding="utf-8")
        with pytest.raises(MalformedResultsError):
            load_result_tree(path)

    def test_wrong_shape_is_malformed(self, tmp_path):
        path = tmp_path / "test-results.json"
        path.write_text('{"suites": "nope"}', encoding="utf-8")
        with pytest.raises(MalformedResultsError) as exc_info:
            load_result_tree(path)
        assert "expected array" in exc_info.value.reason

    def test_invalid_utf8_is_malformed(self, tmp_path):
        path = tmp_path / "test-results.json"
        path.write_bytes(b'{"suites": ["\xff"]}')
        with pytest.raises(MalformedResultsError):
            load_result_tree(path)

    def test_read_error(self, tmp_path):
        path = tmp_path / "test-results.json"
        path.write_text("{}", encoding="utf-8")
        with patch("pathlib.Path.read_text", side_effect=PermissionError("denied")):
            with pytest.raises(ResultsReadError) as exc_info:
                load_result_tree(path)
        assert isinstance(exc_info.value.original_error, PermissionError)

    def test_deeply_nested_suites_load(self, tmp_path):
        path = tmp_path / "test-results.json"
        path.write_text(_nested_document(300), encoding="utf-8")
        tree = load_result_tree(path)
        suite = tree.suites[0]
        depth = 0
        while suite.suites:
            suite = suite.suites[0]
            depth += 1
        assert depth == 300
        assert suite.title == "leaf"
        assert suite.specs[0].title == "deep"

    def test_decoder_recursion_is_malformed(self, tmp_path):
        path = tmp_path / "test-results.json"
        path.write_text('{"suites": []}', encoding="utf-8")
        with patch(
            "src.playwright_dashboard.loader.json.loads",
            side_effect=RecursionError("maximum recursion depth exceeded"),
        ):
            with pytest.raises(MalformedResultsError) as exc_info:
                load_result_tree(path)
        assert "nesting too deep" in exc_info.value.reason

    def test_extreme_nesting_never_escapes_as_recursion_error(self, tmp_path):
        path = tmp_path / "test-results.json"
        path.write_text(_nested_document(100000), encoding="utf-8")
        # Either the decoder gives up and the document is malformed, or it
        # decodes and the tree is built without recursion.
        try:
            tree = load_result_tree(path)
        except MalformedResultsError as e:
            assert "nesting too deep" in e.reason
        else:
            assert len(tree.suites) == 1
