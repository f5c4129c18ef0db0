"""Generate python source code that rebuilds runtime values"""
from __future__ import annotations

from importlib import metadata

from .generator import DEFAULT_HEADER, Generator, Literal, dumps
from .imports import ImportRegistry, TypeNamer, walk_dependencies
from .render import (
    LiteralFallbackWarning,
    UnreadableFieldError,
    quote,
    render_literal,
)
from .types import describe, describe_value

# https://packaging.python.org/en/latest/guides/single-sourcing-package-version/
__version__ = metadata.version(__name__)

__all__ = (
    "DEFAULT_HEADER",
    "Generator",
    "ImportRegistry",
    "Literal",
    "LiteralFallbackWarning",
    "TypeNamer",
    "UnreadableFieldError",
    "describe",
    "describe_value",
    "dumps",
    "quote",
    "render_literal",
    "walk_dependencies",
)
