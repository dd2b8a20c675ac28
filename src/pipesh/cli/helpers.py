"""Shared helpers for CLI commands."""

import json
import re
import sys
from typing import Any, Optional

import click

from ..errors import BadStatus
from ..tokens import Span


def exit_code_for(status: Optional[int]) -> int:
    """Map a process status to this process's exit code.

    Statuses outside 1..255 (signals, reported as negatives) exit with 1.
    """
    if status is not None and 0 < status < 256:
        return status
    return 1


def fail(message: str, code: int = 1):
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


def fail_status(error: BadStatus):
    fail(str(error), exit_code_for(error.status))


def parse_lines_option(value: Optional[str]) -> Any:
    """Parse ``--lines``: ``N`` for one line, ``A..B`` for an inclusive range."""
    if value is None:
        return None
    try:
        if ".." in value:
            lower, upper = value.split("..", 1)
            return Span(int(lower), int(upper))
        return int(value)
    except ValueError:
        raise click.BadParameter(
            f"expected N or A..B, got {value!r}", param_hint="--lines"
        ) from None


def parse_filter_option(value: Optional[str]) -> Optional[re.Pattern]:
    if value is None:
        return None
    try:
        return re.compile(value)
    except re.error as e:
        raise click.BadParameter(str(e), param_hint="--filter") from None


def echo_value(value: Any) -> None:
    """Echo a captured value: one line per list item, JSON for non-strings."""
    if value is None:
        return
    items = value if isinstance(value, list) else [value]
    for item in items:
        if isinstance(item, str):
            click.echo(item)
        else:
            click.echo(json.dumps(item, default=str))
