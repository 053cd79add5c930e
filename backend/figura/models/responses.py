"""API response models."""

from __future__ import annotations

from pydantic import BaseModel

from figura.models.svg_document import SvgSummary


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    environment: str = ""
    renderers_registered: int = 0


class RenderResponse(BaseModel):
    type: str = ""
    # svg | markup | error | note
    kind: str
    markup: str
    summary: SvgSummary | None = None


class BatchReportModel(BaseModel):
    rendered: int = 0
    failed: int = 0
    skipped: int = 0


class RenderDocumentResponse(BaseModel):
    html: str
    report: BatchReportModel
    processing_time_ms: float = 0.0
