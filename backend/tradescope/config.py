"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    gemini_api_key: str = ""
    tradescope_env: str = "development"
    tradescope_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Model routing
    model_analysis: str = "gemini-2.5-flash"
    model_image: str = "gemini-2.5-flash-image"
    analysis_temperature: float = 0.2

    # Viewer
    viewport_min_scale: float = 1.0
    viewport_max_scale: float = 8.0
    zoom_sensitivity: float = 0.002
    overlay_stroke_width: float = 0.8

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
