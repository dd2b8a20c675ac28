"""pipesh CLI main entry point with global options."""

import sys

import click
from loguru import logger

from ..context import Session
from ..settings import resolve_settings


@click.group()
@click.option(
    "--shell",
    type=click.Path(dir_okay=False),
    help="POSIX shell used to run commands (overrides $PIPESH_SHELL)",
)
@click.option(
    "--argv/--no-argv",
    "argv_mode",
    default=None,
    help="Run commands as argument vectors instead of shell command lines",
)
@click.option("--verbose", "-v", is_flag=True, help="Log process events to stderr")
@click.pass_context
def cli(ctx, shell, argv_mode, verbose):
    """pipesh - run commands and pipelines, optionally capturing output."""
    if verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")
        logger.enable("pipesh")

    use_shell = None if argv_mode is None else not argv_mode
    ctx.obj = Session(resolve_settings(shell=shell, use_shell=use_shell))


# Register commands at module level so tests can import cli with commands attached
from .commands.objectifiers import objectifiers
from .commands.pipe import pipe
from .commands.run import run

cli.add_command(run)
cli.add_command(pipe)
cli.add_command(objectifiers)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
