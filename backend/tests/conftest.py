"""Shared test fixtures."""

from __future__ import annotations

import copy
import json
from types import SimpleNamespace
from typing import Any

import pytest

from tradescope.config import Settings
from tradescope.inference.client import InferenceClient


# 1x1 transparent PNG; the service never decodes it locally
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000d49444154789c6360000002000001e221bc330000000049454e44ae426082"
)

GENERATED_PNG = b"\x89PNG\r\n\x1a\ngenerated-continuation"

HOLD_PAYLOAD: dict[str, Any] = {
    "prediction": "sideways drift",
    "recommendation": "HOLD",
    "confidence": 55,
    "rationale": "Price is ranging between support and resistance with flat volume.",
    "annotation": {"type": "line", "start": {"x": 10, "y": 50}, "end": {"x": 90, "y": 55}},
}

BUY_PAYLOAD: dict[str, Any] = {
    "prediction": "Breakout above the descending trendline",
    "recommendation": "BUY",
    "confidence": 78,
    "rationale": "Higher lows, RSI recovering from oversold, volume expanding on green candles.",
    "annotation": {"type": "arrow", "start": {"x": 62.5, "y": 70}, "end": {"x": 95, "y": 22.25}},
}


def payload(**overrides: Any) -> dict[str, Any]:
    """Deep copy of BUY_PAYLOAD with top-level overrides."""
    data = copy.deepcopy(BUY_PAYLOAD)
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# Fake google-genai client
# ---------------------------------------------------------------------------

def text_response(data: Any) -> SimpleNamespace:
    text = data if isinstance(data, str) else json.dumps(data)
    return SimpleNamespace(text=text, candidates=[])


def image_response(data: bytes | None = GENERATED_PNG, mime_type: str = "image/png") -> SimpleNamespace:
    parts = [SimpleNamespace(text="Here is the continued chart.", inline_data=None)]
    if data is not None:
        parts.append(SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type)))
    return SimpleNamespace(text=None, candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


class FakeModels:
    """Stands in for `client.aio.models`. Replays queued responses or raises queued errors."""

    def __init__(self, responses: list[Any]) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    async def generate_content(self, *, model: str, contents: Any, config: Any = None) -> Any:
        self.calls.append({"model": model, "contents": contents, "config": config})
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class FakeGenaiClient:
    def __init__(self, *responses: Any) -> None:
        self.models = FakeModels(list(responses))
        self.aio = SimpleNamespace(models=self.models)


def make_inference_client(*responses: Any) -> tuple[InferenceClient, FakeGenaiClient]:
    fake = FakeGenaiClient(*responses)
    return InferenceClient(Settings(gemini_api_key="test-key"), client=fake), fake


@pytest.fixture
def hold_payload() -> dict[str, Any]:
    return copy.deepcopy(HOLD_PAYLOAD)


@pytest.fixture
def buy_payload() -> dict[str, Any]:
    return copy.deepcopy(BUY_PAYLOAD)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(gemini_api_key="test-key")
