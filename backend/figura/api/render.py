"""POST /api/render — one diagram; POST /api/render/document — a whole HTML document."""

from __future__ import annotations

import logging
import time
import xml.etree.ElementTree as ET

from fastapi import APIRouter, Depends

from figura.dependencies import get_dispatcher
from figura.engine.batch import BatchRenderer
from figura.engine.dispatcher import Dispatcher
from figura.engine.host import HostDocument
from figura.models.requests import RenderDocumentRequest, RenderRequest
from figura.models.responses import BatchReportModel, RenderDocumentResponse, RenderResponse
from figura.models.svg_document import SvgElement, output_kind
from figura.svg.inspect import inspect_svg
from figura.svg.serializer import serialize_output

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/render", response_model=RenderResponse)
async def render(req: RenderRequest, dispatcher: Dispatcher = Depends(get_dispatcher)) -> RenderResponse:
    output = await dispatcher.render(req.spec)
    markup = serialize_output(output)

    summary = None
    if isinstance(output, SvgElement):
        try:
            summary = inspect_svg(markup)
        except ET.ParseError as e:
            logger.warning("Rendered SVG did not parse back: %s", e)

    return RenderResponse(
        type=str((req.spec or {}).get("type", "")),
        kind=output_kind(output),
        markup=markup,
        summary=summary,
    )


@router.post("/render/document", response_model=RenderDocumentResponse)
async def render_document(
    req: RenderDocumentRequest, dispatcher: Dispatcher = Depends(get_dispatcher),
) -> RenderDocumentResponse:
    start = time.perf_counter()
    document = HostDocument.from_html(req.html)
    report = await BatchRenderer(dispatcher).render_all(document)
    return RenderDocumentResponse(
        html=document.to_html(),
        report=BatchReportModel(rendered=report.rendered, failed=report.failed, skipped=report.skipped),
        processing_time_ms=(time.perf_counter() - start) * 1000,
    )
