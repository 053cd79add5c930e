"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from figura.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.figura_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Figura",
        description="Diagram spec rendering engine — structured figure descriptions to SVG",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all renderer modules to trigger registration
    _register_renderers()

    from figura.api.router import api_router

    app.include_router(api_router)

    return app


def _register_renderers() -> None:
    """Import all renderer modules so @renderer decorators fire."""
    from figura.engine.registry import load_renderers

    registry = load_renderers()
    missing = registry.missing()
    if missing:
        logging.getLogger(__name__).warning("No renderer for: %s", ", ".join(t.value for t in missing))


app = create_app()
