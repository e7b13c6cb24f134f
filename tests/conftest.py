"""
Pytest configuration and shared fixtures for all erltype tests.

The lark parser is the only expensive object; it is built once per session
and shared, which is safe because parsing keeps no state between calls.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from erltype.frontend.parser import Parser
from erltype.translator import Translator


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_parser():
    """Session-scoped parser with lark's grammar cache."""
    return Parser()


@pytest.fixture(scope="session")
def session_translator(session_parser):
    """Session-scoped translator using the shared parser and default formatter."""
    return Translator(parser=session_parser)


# =============================================================================
# Class-scoped fixtures (shared within a test class)
# =============================================================================

@pytest.fixture(scope="class")
def parser(session_parser):
    return session_parser


@pytest.fixture(scope="class")
def translator(session_translator):
    return session_translator


@pytest.fixture
def no_color(monkeypatch):
    """Plain diagnostics regardless of the terminal."""
    monkeypatch.setenv("NO_COLOR", "1")


def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "cli: marks tests that drive the command-line entry point"
    )
