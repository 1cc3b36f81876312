"""POST /api/continue — generate a chart continuation from a prior analysis."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile

from tradescope.dependencies import get_inference_client
from tradescope.errors import InputError
from tradescope.inference.client import InferenceClient
from tradescope.inference.errors import InvalidAnalysisStructureError
from tradescope.inference.schema import load_json, validate_analysis
from tradescope.models.image import UploadedImage
from tradescope.models.responses import ContinuationResponse

router = APIRouter()


@router.post("/continue", response_model=ContinuationResponse)
async def continue_chart(
    file: UploadFile = File(..., description="The original chart image"),
    analysis: str = Form(..., description="AnalysisResult JSON returned by /api/analyze"),
    client: InferenceClient = Depends(get_inference_client),
) -> ContinuationResponse:
    image = UploadedImage.from_upload(await file.read(), file.content_type, file.filename or "")

    try:
        prior = validate_analysis(load_json(analysis))
    except (ValueError, InvalidAnalysisStructureError) as e:
        raise InputError(f"Invalid analysis: {e}") from e

    generated = await client.generate_continuation(image.data, image.mime_type, prior)
    return ContinuationResponse(image_base64=generated.base64, mime_type=generated.mime_type)
