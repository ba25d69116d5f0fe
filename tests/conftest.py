"""Pytest configuration and shared fixtures for all tests."""

import subprocess

import pytest

from patch_facts.logging_config import setup_logging


@pytest.fixture(autouse=True)
def disable_sentry_for_tests(monkeypatch):
    """Keep Sentry off for every test; tests that need it patch sentry_sdk.init."""
    monkeypatch.setenv("TELEMETRY", "false")
    monkeypatch.delenv("SENTRY_DSN", raising=False)


@pytest.fixture
def host_root(tmp_path):
    """A fake filesystem root; use ``host_root.write(path, text)`` to add host files."""

    class HostRoot:
        path = tmp_path

        def write(self, absolute: str, text: str = ""):
            target = tmp_path / absolute.lstrip("/")
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text)
            return target

    return HostRoot()


@pytest.fixture
def completed():
    """Factory for CompletedProcess objects as returned by run_command."""

    def _completed(cmd, stdout="", stderr="", returncode=0):
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)

    return _completed


@pytest.fixture(autouse=True)
def reset_logging():
    """Rebind the log handler to the real stderr after tests that swap streams (CliRunner, capsys)."""
    yield
    setup_logging("INFO")
