"""Single-command execution.

Runs one Command as a child process, optionally capturing its stdout through
a pipe, and enforces the exit-status contract: a non-zero status raises
BadStatus, a zero status returns the objectified output (or None when output
is not captured).
"""

import os
from dataclasses import dataclass
from typing import Any, List, Optional

from loguru import logger

from .command import Command
from .errors import BadStatus
from .objectify import ObjectifierRegistry
from .process_utils import close_fds, spawn
from .settings import Settings


@dataclass
class ProcessResult:
    """Runtime record of one spawned process."""

    pid: int
    status: Optional[int] = None
    lines: Optional[List[str]] = None

    @property
    def ok(self) -> bool:
        return self.status == 0


def decode_lines(data: bytes) -> List[str]:
    """Split captured bytes on newlines, dropping the trailing empty line.

    Only ``\\n`` (and a ``\\r`` before it) ends a line; form feeds and other
    control characters stay inside the line.
    """
    lines = data.decode("utf-8", errors="replace").split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class ProcessRunner:
    """Executes single commands for a Session."""

    def __init__(self, settings: Settings, objectifiers: ObjectifierRegistry):
        self.settings = settings
        self.objectifiers = objectifiers

    def use_shell(self, command: Command) -> bool:
        if command.options.shell is not None:
            return command.options.shell
        return self.settings.use_shell

    def start(self, command: Command) -> ProcessResult:
        """Spawn ``command``, capture its output if requested, and wait for it.

        The child is always waited on, even when reading its output fails.
        """
        if not command.options.captures:
            proc = spawn(
                self.settings.shell, command, use_shell=self.use_shell(command)
            )
            result = ProcessResult(pid=proc.pid)
            result.status = proc.wait()
            logger.debug("pid={} exited with status {}", result.pid, result.status)
            return result

        read_fd, write_fd = os.pipe()
        try:
            proc = spawn(
                self.settings.shell,
                command,
                use_shell=self.use_shell(command),
                stdout=write_fd,
            )
        except BaseException:
            close_fds((read_fd,))
            raise
        finally:
            # The child holds its own copy; ours would keep EOF from arriving.
            close_fds((write_fd,))

        result = ProcessResult(pid=proc.pid)
        try:
            with os.fdopen(read_fd, "rb") as stream:
                data = stream.read()
        finally:
            result.status = proc.wait()
            logger.debug("pid={} exited with status {}", result.pid, result.status)

        result.lines = decode_lines(data)
        return result

    def run(self, command: Command) -> Any:
        """Run ``command`` and return its value.

        Returns:
            None when output is not captured, otherwise the captured lines
            narrowed by the command's filter/range and passed through the
            configured objectifier

        Raises:
            BadStatus: If the process exits with a non-zero status; captured
                output is discarded
            UnknownObjectifierError: If the objectifier name is not registered
        """
        result = self.start(command)
        if not result.ok:
            raise BadStatus(result.status, command.line)

        if result.lines is None:
            return None
        lines = command.select(result.lines)
        return self.objectifiers.apply(command.options.objectify, lines)


__all__ = ["ProcessResult", "ProcessRunner", "decode_lines"]
