"""Renderer registry — every domain renderer is a function registered via decorator.

Usage:
    @renderer(DiagramType.CELL, data_model=CellData)
    def render_cell(data: CellData, title: str | None, ctx: RenderContext) -> RenderOutput:
        ...

Adding a domain = creating one module under ``figura.engine.renderers`` with
the decorator. ``load_renderers`` imports them all.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from pydantic import BaseModel

from figura.models.spec import DiagramType

if TYPE_CHECKING:
    from figura.engine.context import RenderContext

logger = logging.getLogger(__name__)

RENDERERS_PACKAGE = "figura.engine.renderers"


@dataclass
class RendererSpec:
    diagram_type: DiagramType
    fn: Callable[[Any, "str | None", "RenderContext"], Any]
    data_model: type[BaseModel]
    description: str = ""


class RendererRegistry:
    """One renderer per diagram type."""

    def __init__(self) -> None:
        self._renderers: dict[DiagramType, RendererSpec] = {}

    def register(self, spec: RendererSpec) -> None:
        if spec.diagram_type in self._renderers:
            raise ValueError(f"Duplicate renderer for type: {spec.diagram_type.value}")
        self._renderers[spec.diagram_type] = spec
        logger.debug("Registered renderer %s (%s)", spec.diagram_type.value, spec.fn.__name__)

    def get(self, diagram_type: DiagramType) -> RendererSpec:
        return self._renderers[diagram_type]

    def __contains__(self, diagram_type: object) -> bool:
        return diagram_type in self._renderers

    def all(self) -> list[RendererSpec]:
        return [self._renderers[t] for t in DiagramType if t in self._renderers]

    def missing(self) -> list[DiagramType]:
        """Diagram types with no registered renderer."""
        return [t for t in DiagramType if t not in self._renderers]

    @property
    def count(self) -> int:
        return len(self._renderers)


# Module-level singleton
_registry = RendererRegistry()


def get_registry() -> RendererRegistry:
    return _registry


def renderer(diagram_type: DiagramType, *, data_model: type[BaseModel], description: str = ""):
    """Decorator to register a domain renderer."""

    def decorator(fn):
        _registry.register(RendererSpec(
            diagram_type=diagram_type,
            fn=fn,
            data_model=data_model,
            description=description or (fn.__doc__ or "").strip().split("\n")[0],
        ))
        return fn

    return decorator


def load_renderers() -> RendererRegistry:
    """Import all renderer modules so @renderer decorators fire."""
    package = importlib.import_module(RENDERERS_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        if module_name.startswith("_"):
            continue
        importlib.import_module(f"{RENDERERS_PACKAGE}.{module_name}")
    return _registry
