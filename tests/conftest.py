"""Pytest configuration and shared fixtures for the todofilter test suite."""

import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Verbosity, settings
from utils import cleanup_test_dir, create_test_temp_dir, para, pandoc_document

from todofilter.formats import TargetFormat, select_format

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def isolated_config(monkeypatch, temp_dir) -> Path:
    """Run the test from an empty directory with no config discovery leaks.

    Returns
    -------
    Path
        The working directory

    """
    monkeypatch.delenv("TODOFILTER_CONFIG", raising=False)
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("HOME", str(temp_dir))
    return temp_dir


@pytest.fixture
def html() -> TargetFormat:
    return select_format("html")


@pytest.fixture
def latex() -> TargetFormat:
    return select_format("latex")


@pytest.fixture
def sample_pandoc_json() -> dict:
    """A small document shaped like ``pandoc -t json`` output.

    Returns
    -------
    dict
        Pandoc JSON document with one inline annotation, one TODO block and
        an untouched code block.

    """
    return pandoc_document(
        {"t": "Header", "c": [1, ["intro", [], []], [{"t": "Str", "c": "Introduction"}]]},
        para("The lexer is greedy (TODO check (again)) here."),
        para("TODO: write the section on tokens"),
        {"t": "CodeBlock", "c": [["", ["kotlin"], []], "val x = f(TODO)"]},
        meta={"title": {"t": "MetaInlines", "c": [{"t": "Str", "c": "Manual"}]}},
    )
