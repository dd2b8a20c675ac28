"""Session: the execution context commands run in."""

from typing import Any, Optional, Sequence

import click

from .command import Command, build
from .objectify import Objectifier, ObjectifierRegistry
from .options import Configure
from .pipeline import Pipeline, PipelineResult, PipelineRunner
from .runner import ProcessRunner
from .settings import Settings, resolve_settings


class Session:
    """Owns the objectifier registry and settings used to run commands.

    Example:
        session = Session()
        session.run("ls", flags.l, "/tmp")              # output goes to stdout
        names = session.run("ls", configure=lambda o: None)   # list of lines
        session.pipe(session.command("ls"), session.command("wc", flags.l))
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        objectifiers: Optional[ObjectifierRegistry] = None,
    ):
        self.settings = settings or resolve_settings()
        self.objectifiers = objectifiers or ObjectifierRegistry()
        self.runner = ProcessRunner(self.settings, self.objectifiers)
        self.pipeline_runner = PipelineRunner(self.runner)

    def command(
        self, name: str, *args: Any, configure: Optional[Configure] = None
    ) -> Command:
        """Build a Command without running it."""
        return build(name, args, configure)

    def execute(self, command: Command) -> Any:
        return self.runner.run(command)

    def run(self, name: str, *args: Any, configure: Optional[Configure] = None) -> Any:
        """Build and run a command; see ProcessRunner.run for the result."""
        return self.execute(self.command(name, *args, configure=configure))

    def pipe(
        self, *commands: Command, pipefail: Optional[bool] = None
    ) -> PipelineResult:
        """Run ``commands`` as a pipeline."""
        return self.pipeline_runner.run(Pipeline(commands, pipefail))

    def register_objectifier(self, name: str, func: Objectifier) -> None:
        self.objectifiers.register(name, func)

    def objectifier_names(self) -> Sequence[str]:
        return self.objectifiers.names()


pass_session = click.make_pass_decorator(Session, ensure=True)


__all__ = ["Session", "pass_session"]
