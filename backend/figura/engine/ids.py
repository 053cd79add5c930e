"""Process-wide id allocator for unique element ids (marker ids, root ids)."""

from __future__ import annotations

import itertools
import threading

from figura.config import settings


class IdAllocator:
    """Mints strictly increasing ids: ``dia-1``, ``dia-2``, ... Never reset."""

    def __init__(self, prefix: str = "dia", start: int = 0) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start + 1)
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            return f"{self.prefix}-{next(self._counter)}"


# Module-level singleton, one per process
_allocator = IdAllocator(prefix=settings.figura_id_prefix)


def get_id_allocator() -> IdAllocator:
    return _allocator
