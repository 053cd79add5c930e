"""Batch driver — renders every pending container of a host document exactly once."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from pydantic import ValidationError

from figura.engine.dispatcher import Dispatcher
from figura.engine.host import HostDocument
from figura.models.svg_document import Placeholder

logger = logging.getLogger(__name__)

UNREADABLE_MESSAGE = "Diagram data could not be read"


@dataclass
class BatchReport:
    rendered: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.rendered + self.failed + self.skipped


class BatchRenderer:
    """Walks containers in document order, one at a time."""

    def __init__(self, dispatcher: Dispatcher | None = None) -> None:
        self.dispatcher = dispatcher or Dispatcher()

    async def render_all(self, document: HostDocument) -> BatchReport:
        report = BatchReport()
        start = time.perf_counter()

        for index, container in enumerate(document.containers):
            if container.rendered:
                report.skipped += 1
                continue

            try:
                spec = container.load_spec()
            except (ValueError, ValidationError) as e:
                logger.warning("Container %d has an unreadable payload: %s", index, e)
                container.attach(Placeholder(message=UNREADABLE_MESSAGE))
                report.failed += 1
                continue

            output = await self.dispatcher.render(spec)
            container.attach(output)
            if isinstance(output, Placeholder) and output.kind == "error":
                report.failed += 1
            else:
                report.rendered += 1

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Batch done: %d rendered, %d failed, %d skipped (%.1fms)",
            report.rendered, report.failed, report.skipped, elapsed,
        )
        return report
