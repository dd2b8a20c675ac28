"""Line-oriented command parser.

Turns ``"ls :lh /tmp"`` into ``build("ls", [flags.lh, "/tmp"])``. Words are
split with shlex in non-POSIX mode, so quotes stay in place and the rendered
line reaches the shell as it was written. No other shell grammar (globbing,
redirection, pipes) is understood here.
"""

import shlex
from typing import Any, List, Optional

from .command import Command, build
from .errors import CommandSyntaxError
from .options import Configure
from .tokens import Flag

FLAG_PREFIX = ":"


def parse_word(word: str) -> Any:
    """``:name`` becomes ``Flag(name)``; anything else stays a literal."""
    if word.startswith(FLAG_PREFIX) and len(word) > len(FLAG_PREFIX):
        return Flag(word[len(FLAG_PREFIX) :])
    return word


def parse_words(words: List[str]) -> List[Any]:
    return [parse_word(w) for w in words]


def parse_line(line: str, configure: Optional[Configure] = None) -> Command:
    """Parse one command line into a Command.

    Raises:
        CommandSyntaxError: On an empty line or unbalanced quotes
    """
    try:
        words = shlex.split(line, posix=False)
    except ValueError as e:
        raise CommandSyntaxError(f"Invalid command syntax: {e}") from e

    if not words:
        raise CommandSyntaxError("Empty command")

    return build(words[0], parse_words(words[1:]), configure)


__all__ = ["FLAG_PREFIX", "parse_line", "parse_word", "parse_words"]
