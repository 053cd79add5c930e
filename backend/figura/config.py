"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    figura_env: str = "development"
    figura_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Prefix for minted element ids (dia-1, dia-2, ...)
    figura_id_prefix: str = "dia"

    # Collaborators
    enable_matplotlib_charts: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
