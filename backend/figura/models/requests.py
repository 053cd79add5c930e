"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RenderRequest(BaseModel):
    spec: dict[str, Any] | None = Field(None, description="One diagram spec: {type, title?, data}")


class RenderDocumentRequest(BaseModel):
    html: str = Field(..., description="HTML holding .diagram-container[data-diagram] elements")
