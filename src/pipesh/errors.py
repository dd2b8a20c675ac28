"""Error types raised while building and running commands."""

from __future__ import annotations

from typing import Sequence


class CommandError(Exception):
    """Base class for all pipesh errors."""


class CommandSyntaxError(CommandError):
    """Raised when a command cannot be built from its arguments.

    Always raised before any process is spawned.
    """


class BadStatus(CommandError):
    """A process terminated with a non-zero exit status."""

    def __init__(self, status: int, command: str | None = None):
        self.status = status
        self.command = command
        super().__init__(status)

    def __str__(self) -> str:
        if self.command:
            return f"{self.command!r} failed with exit status {self.status}"
        return f"Command failed with exit status {self.status}"


class PipelineError(CommandError):
    """Raised when a pipeline cannot be assembled."""


class PipelineStatusError(BadStatus):
    """A pipeline finished with a failing stage.

    ``status`` is the status that decided the failure; ``statuses`` holds the
    exit status of every stage in order.
    """

    def __init__(self, status: int, statuses: Sequence[int], command: str | None = None):
        self.statuses = list(statuses)
        super().__init__(status, command)

    def __str__(self) -> str:
        return f"Pipeline failed with exit statuses {self.statuses}"


class UnknownObjectifierError(CommandError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown objectifier: {name}")


__all__ = [
    "BadStatus",
    "CommandError",
    "CommandSyntaxError",
    "PipelineError",
    "PipelineStatusError",
    "UnknownObjectifierError",
]
