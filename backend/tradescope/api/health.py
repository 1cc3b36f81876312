"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from tradescope.config import settings
from tradescope.inference.model_router import get_model_for_task
from tradescope.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        inference_configured=bool(settings.gemini_api_key),
        analysis_model=get_model_for_task("analyze"),
        image_model=get_model_for_task("continue"),
    )


@router.get("/prompts")
async def prompts() -> dict[str, str]:
    from tradescope.inference.prompts import get_all_templates

    return get_all_templates()
