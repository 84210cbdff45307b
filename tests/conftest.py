"""Pytest marker auto-assignment by folder and shared schema fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from webforms import logger

SAMPLE_SCHEMA_PATH = Path(__file__).parent / "data" / "form_schema_sample.json"


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except Exception:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")


@pytest.fixture
def sample_schema_path() -> Path:
    """Return the path of the bundled Form.io sample document."""
    return SAMPLE_SCHEMA_PATH


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """Return the decoded Form.io sample document."""
    return json.loads(SAMPLE_SCHEMA_PATH.read_text(encoding="utf-8"))
