"""RenderContext — what a domain renderer may use besides its own data."""

from __future__ import annotations

from dataclasses import dataclass, field

from figura.engine.collaborators import Collaborators
from figura.engine.config import RenderConfig
from figura.engine.ids import IdAllocator, get_id_allocator


@dataclass
class RenderContext:
    ids: IdAllocator = field(default_factory=get_id_allocator)
    collaborators: Collaborators = field(default_factory=Collaborators)
    config: RenderConfig = field(default_factory=RenderConfig)

    def new_id(self, suffix: str | None = None) -> str:
        ident = self.ids.next()
        return f"{ident}-{suffix}" if suffix else ident
