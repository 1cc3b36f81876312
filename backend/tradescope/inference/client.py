"""Gemini client for chart analysis and continuation-image generation."""

from __future__ import annotations

import base64
import logging
from collections.abc import Iterator
from typing import Any

from google.genai import types

from tradescope.config import Settings, settings as default_settings
from tradescope.inference.errors import (
    AnalysisFailedError,
    GenerationFailedError,
    InferenceError,
    NoImageProducedError,
)
from tradescope.inference.model_router import get_model_for_task
from tradescope.inference.prompts import (
    ANALYSIS_RESPONSE_SCHEMA,
    build_analysis_prompt,
    build_continuation_prompt,
)
from tradescope.inference.schema import load_json, validate_analysis
from tradescope.models.analysis import AnalysisResult
from tradescope.models.image import DEFAULT_GENERATED_MIME, GeneratedContinuationImage

logger = logging.getLogger(__name__)


def _request_contents(image_bytes: bytes, mime_type: str, prompt: str) -> list[types.Content]:
    """Image first, instruction second, as a single user turn."""
    return [
        types.Content(
            role="user",
            parts=[
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                types.Part.from_text(text=prompt),
            ],
        )
    ]


def _iter_parts(response: Any) -> Iterator[Any]:
    for candidate in response.candidates or []:
        content = candidate.content
        if content is None:
            continue
        yield from content.parts or []


def extract_inline_image(response: Any) -> tuple[bytes, str] | None:
    """Return (bytes, mime) of the first part carrying inline image data."""
    for part in _iter_parts(response):
        blob = getattr(part, "inline_data", None)
        if blob is None or not blob.data:
            continue
        data = blob.data
        if isinstance(data, str):
            data = base64.b64decode(data)
        return data, blob.mime_type or DEFAULT_GENERATED_MIME
    return None


class InferenceClient:
    """Two async calls against Gemini. Holds no image between calls.

    `client` is a `google.genai.Client`; one is created lazily from
    settings when not supplied.
    """

    def __init__(self, settings: Settings | None = None, client: Any | None = None) -> None:
        self.settings = settings or default_settings
        self._client = client

    def _genai(self) -> Any:
        if self._client is None:
            if not self.settings.gemini_api_key:
                raise InferenceError("GEMINI_API_KEY is not configured")

            from google import genai

            self._client = genai.Client(api_key=self.settings.gemini_api_key)
        return self._client

    async def analyze(self, image_bytes: bytes, mime_type: str) -> AnalysisResult:
        model_id = get_model_for_task("analyze", self.settings)
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=ANALYSIS_RESPONSE_SCHEMA,
            temperature=self.settings.analysis_temperature,
        )

        try:
            response = await self._genai().aio.models.generate_content(
                model=model_id,
                contents=_request_contents(image_bytes, mime_type, build_analysis_prompt()),
                config=config,
            )
            payload = load_json(response.text or "")
            result = validate_analysis(payload)
        except Exception as e:
            logger.warning("Chart analysis failed (%s): %s", model_id, e)
            raise AnalysisFailedError(f"Failed to analyze chart: {e}") from e

        logger.info(
            "Chart analyzed with %s: %s at %s%% confidence",
            model_id, result.recommendation.value, result.confidence,
        )
        return result

    async def generate_continuation(
        self,
        image_bytes: bytes,
        mime_type: str,
        prior: AnalysisResult,
    ) -> GeneratedContinuationImage:
        model_id = get_model_for_task("continue", self.settings)
        config = types.GenerateContentConfig(response_modalities=[types.Modality.IMAGE])

        try:
            response = await self._genai().aio.models.generate_content(
                model=model_id,
                contents=_request_contents(image_bytes, mime_type, build_continuation_prompt(prior)),
                config=config,
            )
        except Exception as e:
            logger.warning("Chart continuation failed (%s): %s", model_id, e)
            raise GenerationFailedError(f"Failed to continue chart: {e}") from e

        found = extract_inline_image(response)
        if found is None:
            logger.warning("Chart continuation from %s returned no image part", model_id)
            raise NoImageProducedError()

        data, generated_mime = found
        logger.info("Generated %d-byte continuation (%s) with %s", len(data), generated_mime, model_id)
        return GeneratedContinuationImage(data=data, mime_type=generated_mime)

    async def continue_chart(self, image_bytes: bytes, mime_type: str, prior: AnalysisResult) -> bytes:
        """Raw bytes of the generated continuation image."""
        image = await self.generate_continuation(image_bytes, mime_type, prior)
        return image.data
