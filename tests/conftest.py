"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from pipesh import Session
from pipesh.cli import cli
from pipesh.settings import resolve_settings


@pytest.fixture(autouse=True)
def clear_pipesh_env(monkeypatch):
    """Keep $PIPESH_* from the developer's environment out of the tests."""
    for name in ("PIPESH_SHELL", "PIPESH_ARGV", "PIPESH_PIPEFAIL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def session():
    """Session in the default shell mode."""
    return Session(resolve_settings())


@pytest.fixture
def argv_session():
    """Session that runs commands as argument vectors."""
    return Session(resolve_settings(use_shell=False))


@pytest.fixture
def open_fds():
    """Return a function listing this process's open descriptors.

    Skips the test where /proc/self/fd is not available.
    """
    fd_dir = Path("/proc/self/fd")
    if not fd_dir.is_dir():
        pytest.skip("/proc/self/fd not available")

    def _open_fds():
        return set(os.listdir(fd_dir))

    return _open_fds


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args and optional input.

    Usage:
        result = invoke(["run", "--capture", "ls"])
        assert result.exit_code == 0
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke
