"""Tests for settings resolution."""

from pipesh.settings import DEFAULT_SHELL, Settings, resolve_settings


def test_defaults(monkeypatch):
    monkeypatch.setattr("pipesh.settings.shutil.which", lambda name: None)
    settings = resolve_settings()
    assert settings == Settings(shell=DEFAULT_SHELL, use_shell=True, pipefail=False)


def test_shell_found_on_path(monkeypatch):
    monkeypatch.setattr("pipesh.settings.shutil.which", lambda name: "/usr/bin/sh")
    assert resolve_settings().shell == "/usr/bin/sh"


def test_environment(monkeypatch):
    monkeypatch.setenv("PIPESH_SHELL", "/bin/dash")
    monkeypatch.setenv("PIPESH_ARGV", "1")
    monkeypatch.setenv("PIPESH_PIPEFAIL", "yes")
    settings = resolve_settings()
    assert settings.shell == "/bin/dash"
    assert settings.use_shell is False
    assert settings.pipefail is True


def test_falsy_environment(monkeypatch):
    monkeypatch.setenv("PIPESH_ARGV", "0")
    monkeypatch.setenv("PIPESH_PIPEFAIL", "off")
    settings = resolve_settings()
    assert settings.use_shell is True
    assert settings.pipefail is False


def test_explicit_arguments_override_environment(monkeypatch):
    monkeypatch.setenv("PIPESH_SHELL", "/bin/dash")
    monkeypatch.setenv("PIPESH_ARGV", "1")
    settings = resolve_settings(shell="/bin/bash", use_shell=True, pipefail=True)
    assert settings == Settings(shell="/bin/bash", use_shell=True, pipefail=True)
