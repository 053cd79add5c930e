"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from figura.config import Settings
from figura.dependencies import get_settings
from figura.engine.registry import get_registry
from figura.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        environment=settings.figura_env,
        renderers_registered=get_registry().count,
    )
