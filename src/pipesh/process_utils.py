"""Process spawning utilities shared by the process and pipeline runners.

Every command runs under a POSIX shell wrapper. The wrapper checks that the
executable can be found before running anything; if it cannot, the child
itself reports ``<name>: command not found`` on stderr and exits with 127,
so the parent only ever sees an exit status.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Sequence
from typing import Any

from loguru import logger

from .command import Command

CommandArg = str | os.PathLike[str]

COMMAND_NOT_FOUND = 127

_WRAPPER_NAME = "pipesh"

_REPORT_NOT_FOUND = '{ printf "%s: command not found\\n" "$1" >&2; exit 127; }'

# $0 = shell, $1 = executable name, $2 = command string interpreted by the
# shell. The name is expanded like the line before the lookup, and the
# positional parameters are cleared so the line sees what plain `sh -c` gives.
SHELL_WRAPPER = (
    'eval "command -v $1" >/dev/null 2>&1 || ' + _REPORT_NOT_FOUND + "; "
    '__pipesh_line=$2; set --; eval "$__pipesh_line"'
)

# $1..$n = argument vector, never re-interpreted
ARGV_WRAPPER = (
    'command -v "$1" >/dev/null 2>&1 || ' + _REPORT_NOT_FOUND + '; exec "$@"'
)


def _normalize_command(cmd: Sequence[CommandArg]) -> list[str]:
    """Check a wrapper argument vector: strings or paths, non-blank executable."""
    if not cmd:
        msg = "Command must include at least one argument"
        raise ValueError(msg)

    normalized: list[str] = []
    for arg in cmd:
        if isinstance(arg, os.PathLike):
            value = os.fspath(arg)
        elif isinstance(arg, str):
            value = arg
        else:
            msg = "Command arguments must be strings or os.PathLike"
            raise TypeError(msg)
        normalized.append(value)

    if not normalized[0].strip():
        msg = "Executable cannot be empty or whitespace"
        raise ValueError(msg)

    return normalized


def popen_with_validation(
    cmd: Sequence[CommandArg], **kwargs: Any
) -> subprocess.Popen[Any]:
    """Spawn a wrapper process once its argument vector has been checked."""
    normalized_cmd = _normalize_command(cmd)
    return subprocess.Popen(normalized_cmd, **kwargs)  # noqa: S603


def wrapper_argv(shell: str, command: Command, use_shell: bool) -> list[str]:
    """Build the argv that runs ``command`` under the shell wrapper.

    Args:
        shell: Path to a POSIX shell
        command: Command to run
        use_shell: Interpret ``command.line`` with the shell grammar when True,
            otherwise exec ``command.argv`` as-is

    Returns:
        Argument vector for Popen
    """
    if use_shell:
        return [shell, "-c", SHELL_WRAPPER, shell, command.name, command.line]
    return [shell, "-c", ARGV_WRAPPER, _WRAPPER_NAME, *command.argv]


def spawn(
    shell: str,
    command: Command,
    *,
    use_shell: bool,
    stdin: int | None = None,
    stdout: int | None = None,
) -> subprocess.Popen[bytes]:
    """Spawn ``command`` with stdin/stdout rebound to the given descriptors.

    ``None`` inherits the parent's stream. The child inherits no other
    descriptor of the parent.
    """
    argv = wrapper_argv(shell, command, use_shell)
    proc = popen_with_validation(argv, stdin=stdin, stdout=stdout, close_fds=True)
    logger.debug(
        "spawned pid={} mode={} command={!r}",
        proc.pid,
        "shell" if use_shell else "argv",
        command.line,
    )
    return proc


def close_fds(fds) -> None:
    """Close every descriptor in ``fds`` that is not None."""
    for fd in fds:
        if fd is not None:
            os.close(fd)


__all__ = [
    "ARGV_WRAPPER",
    "COMMAND_NOT_FOUND",
    "SHELL_WRAPPER",
    "close_fds",
    "popen_with_validation",
    "spawn",
    "wrapper_argv",
]
