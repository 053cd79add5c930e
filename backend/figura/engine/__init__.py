"""Figura diagram rendering engine."""

from figura.engine.registry import renderer, get_registry, load_renderers
from figura.engine.context import RenderContext
from figura.engine.dispatcher import Dispatcher
from figura.engine.batch import BatchRenderer, BatchReport
from figura.engine.host import DiagramContainer, HostDocument

__all__ = [
    "renderer",
    "get_registry",
    "load_renderers",
    "RenderContext",
    "Dispatcher",
    "BatchRenderer",
    "BatchReport",
    "DiagramContainer",
    "HostDocument",
]
