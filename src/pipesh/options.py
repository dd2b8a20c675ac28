"""Per-command configuration map."""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import CommandSyntaxError


class CommandOptions(BaseModel):
    """Validated configuration map of a command.

    objectify: ``None``/``False`` leaves stdout alone, ``True`` captures the
        output as a list of lines, a string names a registered objectifier.
    shell: per-command override of the session's interpretation mode;
        ``False`` runs the command as an argument vector, never through the
        shell grammar.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    objectify: bool | str | None = None
    shell: bool | None = None

    @field_validator("objectify")
    @classmethod
    def objectifier_name_not_blank(cls, v: bool | str | None) -> bool | str | None:
        if isinstance(v, str) and not v.strip():
            raise ValueError("objectifier name cannot be empty")
        return v

    @property
    def captures(self) -> bool:
        return self.objectify is not None and self.objectify is not False

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "CommandOptions":
        try:
            return cls.model_validate(dict(values))
        except ValidationError as e:
            raise CommandSyntaxError(f"invalid configuration map: {e}") from e


class OptionsBuilder:
    """Receiver for configuration callbacks.

    Each setter overwrites its key, so the final options never depend on the
    order in which distinct keys were set.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    def objectify(self, value: bool | str = True) -> "OptionsBuilder":
        self._values["objectify"] = value
        return self

    def shell(self, enabled: bool = True) -> "OptionsBuilder":
        self._values["shell"] = enabled
        return self

    def build(self) -> CommandOptions:
        return CommandOptions.from_mapping(self._values)


Configure = Callable[[OptionsBuilder], Any]


def resolve_options(
    values: Optional[Mapping[str, Any]], configure: Optional[Configure] = None
) -> CommandOptions:
    """Merge the trailing map with an optional configuration callback.

    A callback implies ``objectify=True`` unless it sets something else; it is
    applied after the trailing map.
    """
    if configure is None:
        return CommandOptions.from_mapping(values or {})

    builder = OptionsBuilder(values)
    builder.objectify()
    configure(builder)
    return builder.build()


__all__ = ["CommandOptions", "Configure", "OptionsBuilder", "resolve_options"]
