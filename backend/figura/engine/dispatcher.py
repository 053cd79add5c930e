"""Dispatcher — diagram type to domain renderer, with per-diagram fault isolation."""

from __future__ import annotations

import inspect
import logging
import time
from typing import Any

from pydantic import ValidationError

from figura.engine.context import RenderContext
from figura.engine.registry import RendererRegistry, RendererSpec, load_renderers
from figura.models.spec import DiagramSpec, DiagramType
from figura.models.svg_document import Placeholder, RenderOutput

logger = logging.getLogger(__name__)

NO_SPEC_MESSAGE = "No diagram specification"
FAILED_MESSAGE = "Diagram rendering failed"


class Dispatcher:
    """Routes each spec to its renderer. ``render`` never raises."""

    def __init__(self, ctx: RenderContext | None = None, registry: RendererRegistry | None = None) -> None:
        self.ctx = ctx or RenderContext()
        self.registry = registry or load_renderers()

    def resolve(self, type_tag: str) -> RendererSpec:
        """Renderer for a type tag; unknown tags get the generic renderer."""
        try:
            diagram_type = DiagramType(type_tag)
        except ValueError:
            diagram_type = DiagramType.GENERIC_SVG
        if diagram_type not in self.registry:
            diagram_type = DiagramType.GENERIC_SVG
        return self.registry.get(diagram_type)

    async def render(self, spec: DiagramSpec | dict[str, Any] | None) -> RenderOutput:
        if spec is None:
            return Placeholder(message=NO_SPEC_MESSAGE)
        if not isinstance(spec, DiagramSpec):
            try:
                spec = DiagramSpec.model_validate(spec)
            except ValidationError as e:
                logger.warning("Unreadable diagram spec: %s", e)
                return Placeholder(message=NO_SPEC_MESSAGE)
        if not spec.type:
            return Placeholder(message=NO_SPEC_MESSAGE)

        handler = self.resolve(spec.type)
        start = time.perf_counter()
        try:
            data = handler.data_model.model_validate(spec.data)
            result = handler.fn(data, spec.title, self.ctx)
            if inspect.isawaitable(result):
                result = await result
        except Exception:
            logger.exception("Renderer %s failed for %r", handler.diagram_type.value, spec.title)
            return Placeholder(message=spec.description or spec.title or FAILED_MESSAGE)

        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("Rendered %s in %.1fms", handler.diagram_type.value, elapsed)
        return result
