"""Objectifiers: named transforms from captured output lines to a value."""

import json
from typing import Any, Callable, Dict, List, Optional, Sequence

from .errors import UnknownObjectifierError

Objectifier = Callable[[Sequence[str]], Any]

DEFAULT_OBJECTIFIER = "split_lines"


def split_lines(lines: Sequence[str]) -> List[str]:
    """Lines as captured, in order."""
    return list(lines)


def parse_json(lines: Sequence[str]) -> Any:
    """Whole output parsed as a single JSON document."""
    return json.loads("\n".join(lines))


def parse_ndjson(lines: Sequence[str]) -> List[Any]:
    """One JSON value per non-blank line."""
    return [json.loads(line) for line in lines if line.strip()]


class ObjectifierRegistry:
    """Maps objectifier names to transforms.

    One registry is owned by each Session; names are resolved only when
    captured output is being converted.
    """

    def __init__(self, defaults: bool = True):
        self._objectifiers: Dict[str, Objectifier] = {}
        if defaults:
            self.register(DEFAULT_OBJECTIFIER, split_lines)
            self.register("json", parse_json)
            self.register("ndjson", parse_ndjson)

    def register(self, name: str, func: Optional[Objectifier] = None):
        """Register ``func`` under ``name``; a later registration replaces it.

        Without ``func`` this returns a decorator:

            @registry.register("count")
            def count(lines):
                return len(lines)
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Objectifier name must be a non-empty string")

        if func is None:

            def decorator(f: Objectifier) -> Objectifier:
                self.register(name, f)
                return f

            return decorator

        if not callable(func):
            raise TypeError(f"Objectifier {name!r} must be callable")
        self._objectifiers[name] = func
        return func

    def resolve(self, name: str) -> Objectifier:
        try:
            return self._objectifiers[name]
        except KeyError:
            raise UnknownObjectifierError(name) from None

    def apply(self, spec: bool | str, lines: Sequence[str]) -> Any:
        """Convert captured lines according to an ``objectify`` option value."""
        if spec is True:
            return list(lines)
        return self.resolve(spec)(lines)

    def names(self) -> List[str]:
        return sorted(self._objectifiers)

    def __contains__(self, name: object) -> bool:
        return name in self._objectifiers

    def __len__(self) -> int:
        return len(self._objectifiers)


__all__ = [
    "DEFAULT_OBJECTIFIER",
    "Objectifier",
    "ObjectifierRegistry",
    "parse_json",
    "parse_ndjson",
    "split_lines",
]
