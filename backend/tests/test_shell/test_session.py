"""Tests for the headless chart session (upload → analyze → viewer → continuation)."""

from __future__ import annotations

import asyncio

import pytest

from tradescope.config import Settings
from tradescope.errors import (
    MissingAnalysisError,
    SessionBusyError,
    SessionNotFoundError,
    UnsupportedImageError,
)
from tradescope.shell.session import ChartSession
from tradescope.shell.store import SessionStore
from tests.conftest import (
    BUY_PAYLOAD,
    GENERATED_PNG,
    HOLD_PAYLOAD,
    PNG_BYTES,
    image_response,
    make_inference_client,
    payload,
    text_response,
)


def _session() -> ChartSession:
    return ChartSession("s1", Settings(gemini_api_key="test-key"))


def _analyzed(*extra_responses) -> tuple[ChartSession, object, object]:
    session = _session()
    client, fake = make_inference_client(text_response(BUY_PAYLOAD), *extra_responses)
    session.upload(PNG_BYTES, "image/png", "chart.png")
    asyncio.run(session.analyze(client))
    return session, client, fake


class _GatedClient:
    """Inference client whose calls block until released."""

    def __init__(self, result=None, error=None) -> None:
        self.release = asyncio.Event()
        self.result = result
        self.error = error

    async def analyze(self, image_bytes, mime_type):
        await self.release.wait()
        if self.error:
            raise self.error
        return self.result

    async def generate_continuation(self, image_bytes, mime_type, prior):
        await self.release.wait()
        if self.error:
            raise self.error
        return self.result


class TestUpload:
    def test_upload_captures_image(self):
        session = _session()
        image = session.upload(PNG_BYTES, "image/png", "chart.png")
        assert session.image is image
        assert image.mime_type == "image/png"
        assert image.size == len(PNG_BYTES)
        assert image.base64.startswith("iVBORw0KGgo")

    @pytest.mark.parametrize("mime", ["image/gif", "application/pdf", None])
    def test_rejects_unsupported_type(self, mime):
        session = _session()
        with pytest.raises(UnsupportedImageError):
            session.upload(PNG_BYTES, mime)
        assert session.image is None

    def test_reupload_replaces_everything(self):
        session, _, _ = _analyzed()
        session.open_viewer()
        session.upload(b"second", "image/jpeg")
        assert session.image.data == b"second"
        assert session.analysis is None
        assert not session.viewer_open


class TestAnalyze:
    def test_no_image_makes_no_call(self):
        session = _session()
        client, fake = make_inference_client()
        assert asyncio.run(session.analyze(client)) is None
        assert session.error.message == "Please upload an image first."
        assert fake.models.calls == []

    def test_success(self):
        session, _, fake = _analyzed()
        assert session.analysis.recommendation.value == "BUY"
        assert session.error is None
        assert not session.analyzing
        assert len(fake.models.calls) == 1

    def test_strong_buy_rejected_without_partial_result(self):
        session = _session()
        client, _ = make_inference_client(text_response(payload(recommendation="STRONG_BUY")))
        session.upload(PNG_BYTES, "image/png")
        asyncio.run(session.analyze(client))
        assert session.analysis is None
        assert session.overlay_svg() is None
        assert session.error.label == "Analysis Failed"
        assert session.error.message.startswith("Failed to analyze chart: Invalid analysis data structure")
        assert not session.analyzing

    def test_retry_after_failure(self):
        session = _session()
        client, _ = make_inference_client(RuntimeError("timeout"), text_response(HOLD_PAYLOAD))
        session.upload(PNG_BYTES, "image/png")
        asyncio.run(session.analyze(client))
        assert session.error is not None
        asyncio.run(session.analyze(client))
        assert session.error is None
        assert session.analysis.prediction == "sideways drift"

    def test_busy_flag(self):
        async def scenario():
            session = _session()
            session.upload(PNG_BYTES, "image/png")
            gated = _GatedClient()
            first = asyncio.create_task(session.analyze(gated))
            await asyncio.sleep(0)
            assert session.analyzing
            with pytest.raises(SessionBusyError):
                await session.analyze(gated)
            gated.release.set()
            await first

        asyncio.run(scenario())

    def test_late_result_after_reset_is_dropped(self):
        session, _, _ = _analyzed()
        prior = session.analysis
        session.upload(PNG_BYTES, "image/png")

        async def scenario():
            gated = _GatedClient(result=prior)
            task = asyncio.create_task(session.analyze(gated))
            await asyncio.sleep(0)
            session.reset()
            gated.release.set()
            assert await task is None
            assert session.analysis is None
            assert not session.analyzing

        asyncio.run(scenario())


class TestViewer:
    def test_open_requires_analysis(self):
        session = _session()
        with pytest.raises(MissingAnalysisError):
            session.open_viewer()

    def test_open_close_resets_viewport(self):
        session, _, _ = _analyzed()
        session.open_viewer()
        session.viewport.wheel(100, 100, delta_y=-300)
        session.close_viewer()
        assert session.viewport.state.scale == 1.0
        session.viewport.wheel(100, 100, delta_y=-300)
        session.open_viewer()
        assert session.viewport.state.offset == (0.0, 0.0)

    def test_overlay_tracks_zoom(self):
        session, _, _ = _analyzed()
        session.open_viewer()
        assert 'stroke-width="0.8"' in session.overlay_svg()
        session.viewport.wheel(0, 0, delta_y=-500)  # scale 2
        assert 'stroke-width="0.4"' in session.overlay_svg()


class TestContinuation:
    def test_requires_analysis(self):
        session = _session()
        session.upload(PNG_BYTES, "image/png")
        client, _ = make_inference_client()
        with pytest.raises(MissingAnalysisError):
            asyncio.run(session.generate_continuation(client))

    def test_success_switches_to_generated_and_resets(self):
        session, client, fake = _analyzed(image_response())
        session.open_viewer()
        session.viewport.wheel(50, 50, delta_y=-300)

        generated = asyncio.run(session.generate_continuation(client))

        assert generated.data == GENERATED_PNG
        assert session.showing_generated
        assert session.overlay_svg() is None
        assert session.viewport.state.scale == 1.0
        # same original image goes out on the second call
        assert fake.models.calls[1]["contents"][0].parts[0].inline_data.data == PNG_BYTES

    def test_no_image_keeps_original(self):
        session, client, _ = _analyzed(image_response(data=None))
        session.open_viewer()
        assert asyncio.run(session.generate_continuation(client)) is None
        assert session.generation_error.label == "Generation Failed"
        assert session.generation_error.message == "No image was generated in the response."
        assert not session.showing_generated
        assert session.overlay_svg() is not None
        assert session.analysis is not None
        assert not session.generating

    def test_switch_views(self):
        session, client, _ = _analyzed(image_response())
        session.open_viewer()
        asyncio.run(session.generate_continuation(client))

        session.viewport.wheel(10, 10, delta_y=-300)
        assert session.view_original()
        assert session.viewport.state.scale == 1.0
        assert not session.view_original()

        session.viewport.wheel(10, 10, delta_y=-300)
        assert session.view_generated()
        assert session.viewport.state.scale == 1.0

    def test_view_generated_without_continuation(self):
        session, _, _ = _analyzed()
        assert not session.view_generated()

    def test_close_viewer_drops_continuation_and_late_image(self):
        session, _, _ = _analyzed()
        session.open_viewer()

        async def scenario():
            gated = _GatedClient(result=object())
            task = asyncio.create_task(session.generate_continuation(gated))
            await asyncio.sleep(0)
            session.close_viewer()
            gated.release.set()
            assert await task is None
            assert session.continuation is None
            assert not session.showing_generated

        asyncio.run(scenario())

    def test_reanalysis_drops_previous_continuation(self):
        session, client, _ = _analyzed(image_response(), text_response(HOLD_PAYLOAD))
        session.open_viewer()
        asyncio.run(session.generate_continuation(client))
        assert session.showing_generated

        asyncio.run(session.analyze(client))

        assert session.analysis.recommendation.value == "HOLD"
        assert session.continuation is None
        assert not session.showing_generated
        assert not session.viewer_open
        assert session.viewport.state.scale == 1.0
        assert "#eab308" in session.overlay_svg()

    def test_reanalysis_drops_in_flight_continuation(self):
        session, _, _ = _analyzed()
        hold_client, _ = make_inference_client(text_response(HOLD_PAYLOAD))

        async def scenario():
            gated = _GatedClient(result=object())
            task = asyncio.create_task(session.generate_continuation(gated))
            await asyncio.sleep(0)
            await session.analyze(hold_client)
            gated.release.set()
            assert await task is None

        asyncio.run(scenario())
        assert session.analysis.recommendation.value == "HOLD"
        assert session.continuation is None
        assert not session.generating

    def test_reset_clears_everything(self):
        session, client, _ = _analyzed(image_response())
        session.open_viewer()
        asyncio.run(session.generate_continuation(client))
        session.reset()
        assert session.image is None
        assert session.analysis is None
        assert session.continuation is None
        assert not session.viewer_open
        assert session.viewport.state.scale == 1.0


class TestStore:
    def test_create_get_discard(self):
        store = SessionStore(Settings())
        session = store.create()
        assert store.get(session.id) is session
        assert len(store) == 1
        store.discard(session.id)
        with pytest.raises(SessionNotFoundError):
            store.get(session.id)
