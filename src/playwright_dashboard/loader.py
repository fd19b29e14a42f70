"""
Loading of Playwright JSON result documents into a typed result tree.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import MalformedResultsError, ResultsNotFoundError, ResultsReadError
from .models import Attempt, ResultTree, Spec, Suite, TestCase

logger = logging.getLogger(__name__)


class _ShapeError(ValueError):
    """Raised internally when a field has an unexpected type."""

    def __init__(self, location: str, expected: str, value: Any):
        super().__init__(f"{location}: expected {expected}, got {type(value).__name__}")


def _optional_str(data: Dict[str, Any], key: str, location: str) -> Optional[str]:
    if key not in data or data[key] is None:
        return None
    value = data[key]
    if not isinstance(value, str):
        raise _ShapeError(f"{location}.{key}", "string", value)
    return value


def _optional_number(data: Dict[str, Any], key: str, location: str) -> Optional[float]:
    if key not in data or data[key] is None:
        return None
    value = data[key]
    # bool is an int subclass but never a duration
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _ShapeError(f"{location}.{key}", "number", value)
    return float(value)


def _optional_list(data: Dict[str, Any], key: str, location: str) -> List[Any]:
    if key not in data or data[key] is None:
        return []
    value = data[key]
    if not isinstance(value, list):
        raise _ShapeError(f"{location}.{key}", "array", value)
    return value


def _require_object(value: Any, location: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise _ShapeError(location, "object", value)
    return value


def _parse_attempt(data: Any, location: str) -> Attempt:
    data = _require_object(data, location)
    duration = _optional_number(data, "duration", location)
    return Attempt(
        status=_optional_str(data, "status", location),
        duration_ms=duration if duration is not None else 0.0,
    )


def _parse_test(data: Any, location: str) -> TestCase:
    data = _require_object(data, location)
    return TestCase(
        status=_optional_str(data, "status", location),
        results=[
            _parse_attempt(item, f"{location}.results[{i}]")
            for i, item in enumerate(_optional_list(data, "results", location))
        ],
    )


def _parse_spec(data: Any, location: str) -> Spec:
    data = _require_object(data, location)
    return Spec(
        title=_optional_str(data, "title", location) or "",
        file=_optional_str(data, "file", location),
        tests=[
            _parse_test(item, f"{location}.tests[{i}]")
            for i, item in enumerate(_optional_list(data, "tests", location))
        ],
    )


def _parse_suites(items: List[Any], location: str) -> List[Suite]:
    """Parse a list of suites without recursing into nested suites."""
    parsed: List[Suite] = []
    # Each entry fills one target list, so sibling order is kept
    stack = [(items, location, parsed)]
    while stack:
        raw_items, list_location, target = stack.pop()
        for i, item in enumerate(raw_items):
            item_location = f"{list_location}[{i}]"
            data = _require_object(item, item_location)
            suite = Suite(
                title=_optional_str(data, "title", item_location),
                file=_optional_str(data, "file", item_location),
                specs=[
                    _parse_spec(spec, f"{item_location}.specs[{j}]")
                    for j, spec in enumerate(_optional_list(data, "specs", item_location))
                ],
            )
            target.append(suite)
            children = _optional_list(data, "suites", item_location)
            if children:
                stack.append((children, f"{item_location}.suites", suite.suites))
    return parsed


def parse_result_tree(data: Any) -> ResultTree:
    """
    Convert a decoded result document into a ResultTree.

    Unknown keys are ignored; optional keys may be absent or null.

    Args:
        data: Decoded JSON value

    Returns:
        ResultTree

    Raises:
        ValueError: If a known field has the wrong type
    """
    root = _require_object(data, "$")
    duration_ms = None
    if root.get("stats") is not None:
        stats = _require_object(root["stats"], "$.stats")
        duration_ms = _optional_number(stats, "duration", "$.stats")

    return ResultTree(
        suites=_parse_suites(_optional_list(root, "suites", "$"), "$.suites"),
        duration_ms=duration_ms,
    )


def load_result_tree(path: Union[str, Path]) -> ResultTree:
    """
    Read and parse a Playwright JSON result document.

    Args:
        path: Location of the result document

    Returns:
        Parsed ResultTree

    Raises:
        ResultsNotFoundError: If the path does not exist or is not a file
        ResultsReadError: If the file cannot be read
        MalformedResultsError: If the content is not JSON of the expected shape
    """
    path = Path(path)
    if not path.is_file():
        raise ResultsNotFoundError(path)

    logger.debug("Reading results from %s", path)
    try:
        contents = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedResultsError(path, str(e))
    except OSError as e:
        raise ResultsReadError(path, e)

    try:
        data = json.loads(contents)
    except json.JSONDecodeError as e:
        raise MalformedResultsError(path, str(e))
    except RecursionError:
        raise MalformedResultsError(path, "nesting too deep to decode")

    try:
        tree = parse_result_tree(data)
    except ValueError as e:
        raise MalformedResultsError(path, str(e))

    logger.debug("Loaded %d top-level suites from %s", len(tree.suites), path)
    return tree
