"""Run command - execute one command, optionally capturing its output."""

import click

from ...context import pass_session
from ...errors import BadStatus, CommandSyntaxError, UnknownObjectifierError
from ...parsing import parse_words
from ..helpers import (
    echo_value,
    fail,
    fail_status,
    parse_filter_option,
    parse_lines_option,
)


@click.command(
    context_settings=dict(
        ignore_unknown_options=True, allow_interspersed_args=False
    )
)
@click.option(
    "--objectify",
    "objectifier",
    metavar="NAME",
    help="Capture output and convert it with the named objectifier",
)
@click.option(
    "--capture", "-c", is_flag=True, help="Capture output as a list of lines"
)
@click.option(
    "--filter", "pattern", metavar="REGEX", help="Keep captured lines matching REGEX"
)
@click.option(
    "--lines",
    "lines_spec",
    metavar="N|A..B",
    help="Keep captured line N, or lines A through B",
)
@click.argument("name")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@pass_session
def run(session, objectifier, capture, pattern, lines_spec, name, args):
    """Run NAME with ARGS.

    Arguments are passed as-is; an argument written ``:x`` becomes the flag
    ``-x``. Without --capture/--objectify the command writes straight to
    stdout.

    Examples:
        pipesh run ls :l /tmp
        pipesh run --capture --filter '\\.py$' ls src
        pipesh run --objectify json cat data.json
    """
    arguments = parse_words(list(args))

    selector = parse_filter_option(pattern)
    if selector is not None:
        arguments.append(selector)
    span = parse_lines_option(lines_spec)
    if span is not None:
        arguments.append(span)
    if objectifier:
        arguments.append({"objectify": objectifier})
    elif capture:
        arguments.append({"objectify": True})

    try:
        value = session.run(name, *arguments)
    except CommandSyntaxError as e:
        fail(f"Invalid command syntax: {e}")
    except UnknownObjectifierError as e:
        fail(str(e))
    except BadStatus as e:
        fail_status(e)

    echo_value(value)
