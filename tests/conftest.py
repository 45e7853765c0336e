"""Shared fixtures for the extraction tests."""

from pathlib import Path

import pytest

from tstranslate.classes import Catalog

TESTS_DIR = Path(__file__).parent
FIXTURES_DIR = TESTS_DIR / "fixtures"


@pytest.fixture
def catalog() -> Catalog:
    return Catalog()


@pytest.fixture
def write_source(tmp_path):
    """Write a source file under tmp_path and return its path."""

    def _write(name: str, code: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(code, encoding="utf-8")
        return path

    return _write
