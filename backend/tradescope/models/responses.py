"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tradescope.models.analysis import AnalysisResult


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    inference_configured: bool = False
    analysis_model: str = ""
    image_model: str = ""


class ErrorResponse(BaseModel):
    label: str
    detail: str


class PanelResponse(BaseModel):
    recommendation: str
    tone: str
    color: str
    confidence: int | float
    prediction: str
    rationale: str


class AnalyzeResponse(BaseModel):
    result: AnalysisResult
    panel: PanelResponse
    overlay_svg: str


class ContinuationResponse(BaseModel):
    image_base64: str
    mime_type: str = "image/png"


class ImageInfo(BaseModel):
    filename: str = ""
    mime_type: str
    size: int


class ViewportResponse(BaseModel):
    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    dragging: bool = False
    css_transform: str = ""
    stroke_width: float = 0.8
    cursor: str = "default"


class SessionErrorResponse(BaseModel):
    label: str
    message: str


class SessionSnapshot(BaseModel):
    id: str
    image: ImageInfo | None = None
    analysis: AnalysisResult | None = None
    panel: PanelResponse | None = None
    analyzing: bool = False
    error: SessionErrorResponse | None = None
    viewer_open: bool = False
    viewing: str = "original"
    has_continuation: bool = False
    continuation: ContinuationResponse | None = None
    generating: bool = False
    generation_error: SessionErrorResponse | None = None
    overlay_svg: str | None = None
    viewport: ViewportResponse = Field(default_factory=ViewportResponse)
