"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from figura.config import settings
from figura.engine.collaborators import Collaborators
from figura.engine.context import RenderContext
from figura.engine.dispatcher import Dispatcher


def get_settings():
    return settings


@lru_cache
def get_dispatcher() -> Dispatcher:
    """One dispatcher per process, sharing the process-wide id allocator."""
    return Dispatcher(RenderContext(collaborators=Collaborators.default()))
