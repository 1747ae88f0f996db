"""Pytest configuration and shared fixtures for the srclight test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import cleanup_test_dir, create_test_temp_dir

from srclight.blocks import SourceBlock
from srclight.highlighters import HighlighterRegistry, register_builtin_highlighters

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")
    config.addinivalue_line("markers", "security: Tests of the safe mode gate")


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
def registry() -> HighlighterRegistry:
    """Provide a registry with the built-in highlighters and no plugin discovery."""
    registry = HighlighterRegistry(discover=False)
    register_builtin_highlighters(registry)
    return registry


@pytest.fixture
def callout_block() -> SourceBlock:
    """Provide a five-line Ruby block with callouts on lines 1, 3 and 5.

    Returns
    -------
    SourceBlock
        Line 3 carries two marks; line 5 is the last line and has no
        trailing blank line.

    """
    return SourceBlock.from_text(
        "require 'sinatra' # <1>\n"
        "\n"
        "get '/hi' do # <2> <3>\n"
        "  'Hello World!'\n"
        "end # <4>",
        "ruby",
    )
