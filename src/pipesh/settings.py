"""Execution settings resolved from CLI options and the environment."""

import os
import shutil
from dataclasses import dataclass
from typing import Optional

DEFAULT_SHELL = "/bin/sh"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Resolved execution settings."""

    shell: str = DEFAULT_SHELL
    use_shell: bool = True
    pipefail: bool = False


def _env_flag(name: str) -> Optional[bool]:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip().lower() in _TRUTHY


def _detect_shell() -> str:
    return shutil.which("sh") or DEFAULT_SHELL


def resolve_settings(
    shell: Optional[str] = None,
    use_shell: Optional[bool] = None,
    pipefail: Optional[bool] = None,
) -> Settings:
    """Resolve settings.

    Resolution order, per field:
    1. Explicit argument (CLI option)
    2. Environment: $PIPESH_SHELL, $PIPESH_ARGV, $PIPESH_PIPEFAIL
    3. Defaults: ``sh`` found on PATH, shell mode, pipefail off

    Reads fresh from the environment each time.

    Args:
        shell: Path to a POSIX shell
        use_shell: Interpret command lines with the shell grammar
        pipefail: Fail a pipeline when any stage fails, not only the last

    Returns:
        Settings
    """
    if shell is None:
        shell = os.environ.get("PIPESH_SHELL") or _detect_shell()

    if use_shell is None:
        argv_mode = _env_flag("PIPESH_ARGV")
        use_shell = not argv_mode if argv_mode is not None else True

    if pipefail is None:
        pipefail = bool(_env_flag("PIPESH_PIPEFAIL"))

    return Settings(shell=shell, use_shell=use_shell, pipefail=pipefail)


__all__ = ["DEFAULT_SHELL", "Settings", "resolve_settings"]
