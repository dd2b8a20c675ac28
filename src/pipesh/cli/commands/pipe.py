"""Pipe command - chain commands with OS pipes."""

import click

from ...context import pass_session
from ...errors import BadStatus, CommandSyntaxError, PipelineError
from ...parsing import parse_line
from ..helpers import fail, fail_status


@click.command()
@click.option(
    "--pipefail/--no-pipefail",
    default=None,
    help="Fail when any stage fails, not only the last (overrides $PIPESH_PIPEFAIL)",
)
@click.argument("stages", nargs=-1, required=True)
@pass_session
def pipe(session, pipefail, stages):
    """Run STAGES as a pipeline; each stage is one quoted command line.

    The first stage reads this process's stdin and the last writes its
    stdout.

    Examples:
        pipesh pipe "ls :l /tmp" "grep txt" "wc :l"
        pipesh pipe --pipefail "cat data.txt" "sort" "uniq :c"
    """
    try:
        commands = [parse_line(stage) for stage in stages]
        session.pipe(*commands, pipefail=pipefail)
    except (CommandSyntaxError, PipelineError) as e:
        fail(f"Invalid pipeline: {e}")
    except BadStatus as e:
        fail_status(e)
