# dot_gen/assembler.py
from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, TypeVar

from .config import DiagramConfig, load_config
from .fallback import fallback_diagram, fallback_entity, fallback_relationship
from .io import load_document
from .model import Diagram, Entity, Relationship
from .parse import parse_diagram
from .styles import StyleResolver
from .templating import RenderOutcome, TemplateRenderer

LOG = logging.getLogger(__name__)

T = TypeVar("T")


class DiagramAssembler:
    """Renders a `Diagram` element by element, falling back per element.

    Entities and relationships are rendered first so the wrapper (templated
    or not) only concatenates finished blocks; a broken entity template
    therefore never affects relationships or the wrapper.
    """

    def __init__(
        self,
        config: DiagramConfig,
        renderer: Optional[TemplateRenderer] = None,
        *,
        max_workers: int = 1,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer(config, StyleResolver(config))
        self.max_workers = max(1, int(max_workers))
        self.fallback_count = 0
        self._lock = threading.Lock()

    def _settle(self, outcome: RenderOutcome, fallback: Callable[[], str]) -> str:
        if outcome.ok and outcome.text is not None:
            return outcome.text
        LOG.warning("template rendering failed, using fallback: %s", outcome.error)
        with self._lock:
            self.fallback_count += 1
        return fallback()

    def render_entity(self, entity: Entity) -> str:
        return self._settle(
            self.renderer.render_entity(entity), lambda: fallback_entity(entity)
        )

    def render_relationship(self, relationship: Relationship) -> str:
        return self._settle(
            self.renderer.render_relationship(relationship),
            lambda: fallback_relationship(relationship),
        )

    def _map(self, fn: Callable[[T], str], items: Sequence[T]) -> list[str]:
        if self.max_workers == 1 or len(items) < 2:
            return [fn(item) for item in items]
        # Executor.map yields results in input order.
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(fn, items))

    def assemble(self, diagram: Diagram) -> str:
        """Render the whole document as one text value."""
        self.fallback_count = 0
        entity_blocks = self._map(self.render_entity, diagram.entities)
        relationship_blocks = self._map(self.render_relationship, diagram.relationships)

        text = self._settle(
            self.renderer.render_diagram(diagram, entity_blocks, relationship_blocks),
            lambda: fallback_diagram(diagram, self.config, entity_blocks, relationship_blocks),
        )
        LOG.info(
            "assembled diagram %r: %d entities, %d relationships, %d fallback(s)",
            diagram.title,
            len(diagram.entities),
            len(diagram.relationships),
            self.fallback_count,
        )
        return text


def generate_dot(
    document: dict[str, Any],
    config: Optional[DiagramConfig] = None,
    *,
    max_workers: int = 1,
) -> str:
    """Parse `document` and render it with `config` (defaults when None)."""
    diagram = parse_diagram(document)
    return DiagramAssembler(config or load_config(), max_workers=max_workers).assemble(diagram)


def convert_file(
    input_path: Path,
    config_path: Optional[Path] = None,
    *,
    max_workers: int = 1,
) -> str:
    """Load, parse, configure and render; the result is not written anywhere."""
    document = load_document(input_path)
    diagram = parse_diagram(document)
    config = load_config(config_path)
    return DiagramAssembler(config, max_workers=max_workers).assemble(diagram)
