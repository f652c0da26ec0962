"""Shared pytest fixtures for the fundamentals test suite."""

import logging
import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from fundamentals.config import reset_config
from fundamentals.observability.logging import get_logger

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "fatal: exercises a fatal error in a child interpreter")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Give every test a fresh configuration resolved from an empty directory."""
    for name in ("FUNDAMENTALS_BUILD_MODE", "FUNDAMENTALS_FATAL_EXIT_CODE", "FUNDAMENTALS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()
    package_logger = get_logger()
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def run_child(tmp_path):
    """Run a snippet in a fresh interpreter and return the completed process."""

    def _run(source, *, env=None, timeout=30):
        script = tmp_path / "child.py"
        script.write_text(textwrap.dedent(source), encoding="utf-8")
        child_env = {
            key: value
            for key, value in os.environ.items()
            if not key.startswith("FUNDAMENTALS_")
        }
        child_env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(PROJECT_ROOT), os.environ.get("PYTHONPATH")])
        )
        if env:
            child_env.update(env)
        return subprocess.run(
            [sys.executable, str(script)],
            cwd=str(tmp_path),
            env=child_env,
            capture_output=True,
            text=True,
            timeout=timeout,
        )

    return _run
