"""Command descriptors.

A Command is the validated, immutable description of one external command
invocation. It is built from a raw argument list whose tokens are classified
in a fixed order:

    1. leading run of strings, flags and nested sequences (flattened)
    2. at most one filter and at most one range, in either order
    3. at most one trailing configuration map

Anything left over is a construction error. Building never spawns a process.
"""

import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import CommandSyntaxError
from .options import CommandOptions, Configure, resolve_options
from .render import render_argv, render_line
from .tokens import Flag, Span, flatten, is_positional

Token = Union[str, Flag]
LineSelector = Union[int, Span]


@dataclass(frozen=True)
class Command:
    name: str
    tokens: Tuple[Token, ...] = ()
    filter: Optional[re.Pattern] = None
    span: Optional[LineSelector] = None
    options: CommandOptions = field(default_factory=CommandOptions)

    def __post_init__(self):
        # Render eagerly so a bad token fails here, not at spawn time.
        self.line

    @cached_property
    def line(self) -> str:
        """Command string handed to the shell."""
        return render_line(self.name, self.tokens)

    @cached_property
    def argv(self) -> List[str]:
        return render_argv(self.name, self.tokens)

    def select(self, lines: Sequence[str]) -> List[str]:
        """Narrow captured lines by the filter, then by the range."""
        selected = list(lines)
        if self.filter is not None:
            selected = [line for line in selected if self.filter.search(line)]

        if self.span is None:
            return selected
        if isinstance(self.span, int):
            try:
                return [selected[self.span]]
            except IndexError:
                return []

        count = len(selected)
        lower = self.span.lower + count if self.span.lower < 0 else self.span.lower
        upper = self.span.upper + count if self.span.upper < 0 else self.span.upper
        if upper < 0:
            return []
        return selected[max(lower, 0) : upper + 1]

    def __str__(self) -> str:
        return self.line


def _syntax_error(reason: str):
    raise CommandSyntaxError(reason)


def _as_range(token: Any) -> Optional[LineSelector]:
    """Return the token as a line selector, or None if it is not a range."""
    if isinstance(token, bool):
        return None
    if isinstance(token, int):
        return token
    if isinstance(token, Span):
        span = token
    elif isinstance(token, range):
        if token.step != 1:
            _syntax_error(f"invalid range: {token}")
        span = Span.from_range(token)
    else:
        return None

    for bound in (span.lower, span.upper):
        if isinstance(bound, bool) or not isinstance(bound, int):
            _syntax_error(f"invalid range bounds: {span.lower!r}..{span.upper!r}")
    if not span.is_valid():
        _syntax_error(f"invalid range: {span}")
    return span


def parse_args(
    args: Sequence[Any],
) -> Tuple[List[Any], Optional[re.Pattern], Optional[LineSelector], Optional[Mapping]]:
    """Classify a raw argument list.

    Args:
        args: Ordered heterogeneous argument list

    Returns:
        (flattened positional tokens, filter, range, configuration map)

    Raises:
        CommandSyntaxError: On duplicate filter/range, invalid range, or
            left-over arguments
    """
    args = list(args)
    index = 0

    positional = []
    while index < len(args) and is_positional(args[index]):
        positional.append(args[index])
        index += 1

    pattern = None
    span = None
    while index < len(args):
        token = args[index]
        if isinstance(token, re.Pattern):
            if pattern is not None:
                _syntax_error("Only one filter is allowed")
            pattern = token
        else:
            selector = _as_range(token)
            if selector is None:
                break
            if span is not None:
                _syntax_error("Only one range is allowed")
            span = selector
        index += 1

    remaining = args[index:]
    values = None
    if remaining:
        values = remaining[0]
        if not isinstance(values, Mapping):
            _syntax_error(
                f"last argument should be a configuration map: {values!r}"
            )
        if len(remaining) > 1:
            leftover = ", ".join(repr(a) for a in remaining[1:])
            _syntax_error(f"left over arguments: {leftover}")

    return flatten(positional), pattern, span, values


def build(
    name: str, args: Sequence[Any] = (), configure: Optional[Configure] = None
) -> Command:
    """Build a validated Command.

    Args:
        name: Executable name
        args: Raw argument list (see module docstring)
        configure: Optional callback receiving an ``OptionsBuilder``; implies
            ``objectify=True`` unless it sets something else

    Returns:
        Immutable Command

    Raises:
        CommandSyntaxError: If the arguments do not form a valid command
    """
    if not isinstance(name, str) or not name.strip():
        _syntax_error(f"command name must be a non-empty string: {name!r}")

    tokens, pattern, span, values = parse_args(args)
    options = resolve_options(values, configure)
    return Command(
        name=name,
        tokens=tuple(tokens),
        filter=pattern,
        span=span,
        options=options,
    )


__all__ = ["Command", "LineSelector", "Token", "build", "parse_args"]
