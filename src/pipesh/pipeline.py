"""Pipeline execution.

Chains commands with OS pipes: the head reads the inherited stdin, the tail
writes the inherited stdout, and each neighbouring pair shares one anonymous
pipe. The parent closes its copy of every pipe endpoint as soon as the stage
using it has been spawned; a stray write end left open in the parent would
keep the downstream reader from ever seeing end-of-stream.
"""

import os
import subprocess
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple

from loguru import logger

from .command import Command
from .errors import CommandSyntaxError, PipelineError, PipelineStatusError
from .process_utils import close_fds, spawn
from .runner import ProcessResult, ProcessRunner


@dataclass(frozen=True)
class Pipeline:
    """Ordered chain of at least two commands."""

    commands: Tuple[Command, ...]
    pipefail: Optional[bool] = None

    def __post_init__(self):
        object.__setattr__(self, "commands", tuple(self.commands))
        if len(self.commands) < 2:
            raise PipelineError(
                f"pipeline needs at least 2 commands, got {len(self.commands)}"
            )
        for command in self.commands:
            if not isinstance(command, Command):
                raise PipelineError(f"pipeline stage is not a Command: {command!r}")
            if command.options.captures:
                raise CommandSyntaxError(
                    f"objectify is not available inside a pipeline: {command.line}"
                )

    @classmethod
    def of(cls, commands: Iterable[Command], pipefail: Optional[bool] = None) -> "Pipeline":
        return cls(tuple(commands), pipefail)

    @property
    def line(self) -> str:
        return " | ".join(command.line for command in self.commands)

    def __len__(self) -> int:
        return len(self.commands)


@dataclass
class PipelineResult:
    """Per-stage results of a finished pipeline."""

    stages: List[ProcessResult] = field(default_factory=list)

    @property
    def statuses(self) -> List[Optional[int]]:
        return [stage.status for stage in self.stages]

    @property
    def status(self) -> Optional[int]:
        """Exit status of the tail stage."""
        return self.stages[-1].status if self.stages else None

    def failed_status(self, pipefail: bool) -> int:
        """Status that decides failure; 0 when the pipeline succeeded.

        With ``pipefail`` the rightmost non-zero stage status wins, as in bash.
        """
        if pipefail:
            return next((s for s in reversed(self.statuses) if s != 0), 0)
        return self.status or 0


class PipelineRunner:
    """Spawns and waits for the stages of a Pipeline."""

    def __init__(self, runner: ProcessRunner):
        self.runner = runner

    def start(self, pipeline: Pipeline) -> PipelineResult:
        """Spawn every stage, then wait for all of them.

        If a spawn fails, the endpoints still held by the parent are closed
        and the stages already running are waited on before re-raising.
        """
        shell = self.runner.settings.shell
        last = len(pipeline.commands) - 1
        processes: List[subprocess.Popen] = []
        held: Set[int] = set()
        current = None  # (read_fd, write_fd) of the pipe feeding the next stage

        try:
            for index, command in enumerate(pipeline.commands):
                if index == 0:
                    stdin = None
                    current = os.pipe()
                    held.update(current)
                    stdout = current[1]
                elif index == last:
                    stdin = current[0]
                    stdout = None
                else:
                    stdin = current[0]
                    current = os.pipe()
                    held.update(current)
                    stdout = current[1]

                try:
                    proc = spawn(
                        shell,
                        command,
                        use_shell=self.runner.use_shell(command),
                        stdin=stdin,
                        stdout=stdout,
                    )
                finally:
                    ends = [fd for fd in (stdin, stdout) if fd is not None]
                    close_fds(ends)
                    held.difference_update(ends)
                processes.append(proc)
                logger.debug("stage {} of {} is pid {}", index + 1, last + 1, proc.pid)
        finally:
            close_fds(sorted(held))
            result = PipelineResult(
                stages=[ProcessResult(pid=proc.pid) for proc in processes]
            )
            for stage, proc in zip(result.stages, processes):
                stage.status = proc.wait()

        logger.debug("pipeline {!r} finished with statuses {}", pipeline.line, result.statuses)
        return result

    def run(self, pipeline: Pipeline) -> PipelineResult:
        """Run ``pipeline`` to completion.

        Raises:
            PipelineStatusError: If the tail stage fails, or with pipefail any
                stage fails; carries the statuses of all stages
        """
        pipefail = pipeline.pipefail
        if pipefail is None:
            pipefail = self.runner.settings.pipefail

        result = self.start(pipeline)
        status = result.failed_status(pipefail)
        if status != 0:
            raise PipelineStatusError(status, result.statuses, pipeline.line)
        return result


__all__ = ["Pipeline", "PipelineResult", "PipelineRunner"]
