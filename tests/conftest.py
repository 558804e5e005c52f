"""
Pytest configuration and shared fixtures for composerkit tests.
"""

import sys
from pathlib import Path
from typing import Callable

import pytest

from composerkit.fixtures import clear_mock_outputs


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "posix: marks tests that execute real shell scripts"
    )


def pytest_collection_modifyitems(config, items):
    """Skip tests that run shell scripts on Windows."""
    if sys.platform != "win32":
        return
    skip_posix = pytest.mark.skip(reason="requires a POSIX shell")
    for item in items:
        if "posix" in item.keywords:
            item.add_marker(skip_posix)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_mock_outputs():
    """Start and end every test with an empty process-wide fixture table."""
    clear_mock_outputs()
    yield
    clear_mock_outputs()


@pytest.fixture
def fake_composer(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory writing an executable shell script that stands in for Composer.

    Usage:
        script = fake_composer('echo "Composer version 2.5.0"')
    """

    def _create(body: str = 'echo "$@"', name: str = "composer") -> Path:
        script = tmp_path / name
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(0o755)
        return script

    return _create


@pytest.fixture
def non_executable_file(tmp_path: Path) -> Path:
    """Regular file without execute bits."""
    path = tmp_path / "composer.txt"
    path.write_text("not a program")
    path.chmod(0o644)
    return path
