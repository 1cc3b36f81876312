"""POST /api/analyze — one-shot chart analysis with rendered overlay."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, File, Query, UploadFile

from tradescope.config import Settings
from tradescope.dependencies import get_inference_client, get_settings
from tradescope.inference.client import InferenceClient
from tradescope.models.image import UploadedImage
from tradescope.models.responses import AnalyzeResponse, PanelResponse
from tradescope.viewer.overlay import build_panel, render_overlay_svg

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    file: UploadFile = File(..., description="Chart image (PNG, JPG, or WEBP)"),
    scale: float = Query(default=1.0, ge=1.0, description="Viewer zoom the overlay stroke is sized for"),
    client: InferenceClient = Depends(get_inference_client),
    settings: Settings = Depends(get_settings),
) -> AnalyzeResponse:
    image = UploadedImage.from_upload(await file.read(), file.content_type, file.filename or "")

    start = time.perf_counter()
    result = await client.analyze(image.data, image.mime_type)
    elapsed = (time.perf_counter() - start) * 1000
    logger.info("Analyzed %s in %.0fms", image.filename or "upload", elapsed)

    return AnalyzeResponse(
        result=result,
        panel=PanelResponse(**build_panel(result)),
        overlay_svg=render_overlay_svg(result, settings.overlay_stroke_width / scale),
    )
