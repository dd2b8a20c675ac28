"""Argument token types for command construction.

A command is built from a heterogeneous list of tokens:

    "~/src"              literal string, passed verbatim
    Flag("lh")           flag, rendered as "-lh" (also spelled flags.lh)
    ["a", flags.v]       nested sequences, flattened in place
    re.compile("x")      line filter
    3, Span(1, 4)        single line index, inclusive line range
    {"objectify": True}  trailing configuration map
"""

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List


@dataclass(frozen=True)
class Flag:
    """Symbolic flag token."""

    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Flag name must be a non-empty string")

    def __str__(self) -> str:
        return f"-{self.name}"


class _FlagFactory:
    """Attribute access shorthand: ``flags.lh == Flag("lh")``."""

    def __getattr__(self, name: str) -> Flag:
        if name.startswith("__"):
            raise AttributeError(name)
        return Flag(name)

    def __call__(self, name: str) -> Flag:
        return Flag(name)


flags = _FlagFactory()


@dataclass(frozen=True)
class Span:
    """Inclusive line range. Negative bounds count from the last line."""

    lower: int
    upper: int

    @classmethod
    def from_range(cls, value: range) -> "Span":
        """Convert a builtin ``range`` (exclusive stop) to an inclusive span."""
        if value.step != 1:
            raise ValueError(f"range step must be 1: {value}")
        return cls(value.start, value.stop - 1)

    def is_valid(self) -> bool:
        return self.upper >= self.lower

    def __str__(self) -> str:
        return f"{self.lower}..{self.upper}"


def is_positional(token: Any) -> bool:
    """True for tokens consumed by the leading positional run."""
    return isinstance(token, (str, Flag, list, tuple))


def flatten(tokens: Iterable[Any]) -> List[Any]:
    """Recursively flatten nested lists/tuples, preserving order."""
    return list(_iter_flat(tokens))


def _iter_flat(tokens: Iterable[Any]) -> Iterator[Any]:
    for token in tokens:
        if isinstance(token, (list, tuple)):
            yield from _iter_flat(token)
        else:
            yield token


__all__ = ["Flag", "Span", "flags", "flatten", "is_positional"]
