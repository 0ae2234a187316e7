# dot_gen/errors.py
from __future__ import annotations

from typing import Literal, Optional

RenderFailureKind = Literal["missing", "syntax", "undefined", "evaluation"]


class DotGenError(Exception):
    """Base class for every failure the CLI reports to the user."""


class InputError(DotGenError):
    """The input document is missing, unreadable, or not a mapping."""


class ParseError(DotGenError):
    """A required key is absent or a section has the wrong shape."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class ConfigError(DotGenError):
    """The override configuration cannot be read or decoded."""


class TemplateRenderError(DotGenError):
    """A template could not be found or evaluated.

    This one is recoverable: the assembler switches to the fallback
    generator for the element that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        template: str,
        element: str,
        kind: RenderFailureKind = "evaluation",
        cause: Optional[BaseException] = None,
    ) -> None:
        self.template = template
        self.element = element
        self.kind = kind
        self.cause = cause
        super().__init__(message)


class OutputError(DotGenError):
    """The destination could not be written."""


class GraphvizError(DotGenError):
    """The external drawing tool is missing or exited non-zero."""
