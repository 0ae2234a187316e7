# dot_gen/templating.py
"""Template-based rendering on top of Jinja2.

Every render call returns a `RenderOutcome` instead of raising: lookup and
evaluation failures are classified into a `TemplateRenderError` so the
caller can decide to fall back.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
)

from .config import DiagramConfig, Templates
from .dot_fmt import dot_filters
from .errors import RenderFailureKind, TemplateRenderError
from .model import Diagram, Entity, Relationship
from .styles import StyleResolver

LOG = logging.getLogger(__name__)

BUILTIN_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


@dataclass(frozen=True)
class RenderOutcome:
    """Either rendered text or the classified reason there is none."""

    text: Optional[str] = None
    error: Optional[TemplateRenderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_environment(templates: Templates) -> Environment:
    """Jinja2 environment: user template directory first, shipped templates second."""
    loaders: list[BaseLoader] = []
    if templates.base_path is not None:
        loaders.append(FileSystemLoader(str(templates.base_path)))
    loaders.append(FileSystemLoader(str(BUILTIN_TEMPLATE_DIR)))

    env = Environment(
        loader=ChoiceLoader(loaders),
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters.update(dot_filters())
    return env


def _classify(exc: BaseException) -> RenderFailureKind:
    if isinstance(exc, TemplateNotFound):
        return "missing"
    if isinstance(exc, TemplateSyntaxError):
        return "syntax"
    if isinstance(exc, UndefinedError):
        return "undefined"
    return "evaluation"


class TemplateRenderer:
    """Renders the diagram wrapper, entities and relationships from templates."""

    def __init__(
        self,
        config: DiagramConfig,
        resolver: Optional[StyleResolver] = None,
        environment: Optional[Environment] = None,
    ) -> None:
        self.config = config
        self.resolver = resolver or StyleResolver(config)
        self.environment = environment or build_environment(config.templates)

    def render(self, template_name: str, element: str, **context: Any) -> RenderOutcome:
        """Render one named template. Never raises."""
        try:
            template = self.environment.get_template(template_name)
            text = template.render(
                config=self.config,
                settings=self.config.settings,
                table=self.config.settings.table,
                styles=self.resolver,
                **context,
            )
        except Exception as e:  # any template failure is recoverable here
            kind = _classify(e)
            message = f"{kind} template {template_name!r} for {element}: {e}"
            return RenderOutcome(
                error=TemplateRenderError(
                    message, template=template_name, element=element, kind=kind, cause=e
                )
            )
        return RenderOutcome(text=text)

    def render_entity(self, entity: Entity) -> RenderOutcome:
        return self.render(
            self.config.templates.entity, f"entity {entity.id!r}", entity=entity
        )

    def render_relationship(self, relationship: Relationship) -> RenderOutcome:
        return self.render(
            self.config.templates.relationship,
            f"relationship {relationship.display_id!r}",
            relationship=relationship,
        )

    def render_diagram(
        self,
        diagram: Diagram,
        entity_blocks: Sequence[str],
        relationship_blocks: Sequence[str],
    ) -> RenderOutcome:
        return self.render(
            self.config.templates.main,
            f"diagram {diagram.title!r}",
            diagram=diagram,
            entity_blocks=list(entity_blocks),
            relationship_blocks=list(relationship_blocks),
        )
