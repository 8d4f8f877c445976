"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    mindentity_log_level: str = "info"

    # CLI defaults
    mindentity_default_size: int = 1024
    mindentity_default_grid_size: int = 8

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
