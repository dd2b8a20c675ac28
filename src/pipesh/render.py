"""Render command tokens into a command line or an argument vector.

Strings are passed verbatim. Quoting them for the shell is the caller's job.
"""

from typing import Any, List, Sequence

from .errors import CommandSyntaxError
from .tokens import Flag


def render_token(token: Any) -> str:
    """Render one positional token.

    Args:
        token: ``Flag`` or ``str``

    Returns:
        ``-<name>`` for a flag, the string itself otherwise

    Raises:
        CommandSyntaxError: For any other token type
    """
    if isinstance(token, Flag):
        return str(token)
    if isinstance(token, str):
        return token
    raise CommandSyntaxError(f"argument should be a Flag or string: {token!r}")


def render_argv(name: str, tokens: Sequence[Any]) -> List[str]:
    return [name, *(render_token(t) for t in tokens)]


def render_line(name: str, tokens: Sequence[Any]) -> str:
    """Render ``name`` followed by the space-joined tokens."""
    return " ".join(render_argv(name, tokens))


__all__ = ["render_argv", "render_line", "render_token"]
