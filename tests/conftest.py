"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

from junitview.config import get_settings
from junitview.reports.report_set import ReportSet

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


A_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<testsuites>
    <testsuite name="Auth" tests="2" failures="1">
        <testcase classname="auth.LoginTest" name="login_ok" time="0.12"/>
        <testcase classname="auth.LoginTest" name="login_bad_password" time="0.30">
            <failure message="expected 401, got 200" type="AssertionError">
AssertionError: expected 401, got 200
    at auth.LoginTest.login_bad_password(LoginTest.java:42)
            </failure>
        </testcase>
    </testsuite>
</testsuites>
"""

B_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<testsuites>
    <testsuite name="Empty" tests="0"/>
</testsuites>
"""


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-fuzz",
        action="store_true",
        default=False,
        help="Run fuzz tests (slower, more hypothesis examples)",
    )


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "fuzz: marks tests as fuzz tests (slower, more hypothesis examples)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip fuzz tests unless explicitly enabled."""
    if config.getoption("--run-fuzz"):
        return
    skip_fuzz = pytest.mark.skip(reason="need --run-fuzz option to run")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Settings are cached per process; tests that set env vars need a fresh copy."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop logging configuration that points at a stream captured by a previous test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def scenario_sources() -> list[tuple[str, bytes]]:
    """Two files: a.xml with one failing suite, b.xml with one empty suite."""
    return [("a.xml", A_XML), ("b.xml", B_XML)]


@pytest.fixture
def scenario_set(scenario_sources) -> ReportSet:
    return ReportSet.load(scenario_sources, max_workers=1)


@pytest.fixture
def reports_dir(tmp_path: Path, scenario_sources) -> Path:
    """Directory holding the scenario files plus a non-XML file."""
    for name, data in scenario_sources:
        (tmp_path / name).write_bytes(data)
    (tmp_path / "notes.txt").write_text("not a report")
    return tmp_path
