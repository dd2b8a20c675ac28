"""pipesh: run structured command descriptors as processes and pipelines."""

from loguru import logger

from .command import Command, build
from .context import Session
from .errors import (
    BadStatus,
    CommandError,
    CommandSyntaxError,
    PipelineError,
    PipelineStatusError,
    UnknownObjectifierError,
)
from .objectify import ObjectifierRegistry
from .options import CommandOptions, OptionsBuilder
from .parsing import parse_line
from .pipeline import Pipeline, PipelineResult
from .settings import Settings, resolve_settings
from .tokens import Flag, Span, flags

logger.disable("pipesh")

__all__ = [
    "__version__",
    "BadStatus",
    "Command",
    "CommandError",
    "CommandOptions",
    "CommandSyntaxError",
    "Flag",
    "ObjectifierRegistry",
    "OptionsBuilder",
    "Pipeline",
    "PipelineError",
    "PipelineResult",
    "PipelineStatusError",
    "Session",
    "Settings",
    "Span",
    "UnknownObjectifierError",
    "build",
    "flags",
    "parse_line",
    "resolve_settings",
]

__version__ = "0.1.0"
