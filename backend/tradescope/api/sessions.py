"""Session endpoints — one call per user action, each returning the full render state."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from tradescope.dependencies import get_inference_client, get_session_store
from tradescope.inference.client import InferenceClient
from tradescope.models.requests import PointerRequest, ViewRequest, WheelRequest
from tradescope.models.responses import (
    ContinuationResponse,
    ImageInfo,
    PanelResponse,
    SessionErrorResponse,
    SessionSnapshot,
    ViewportResponse,
)
from tradescope.shell.session import ChartSession, SessionError
from tradescope.shell.store import SessionStore
from tradescope.viewer.overlay import build_panel

router = APIRouter(prefix="/sessions")


def _error(err: SessionError | None) -> SessionErrorResponse | None:
    if err is None:
        return None
    return SessionErrorResponse(label=err.label, message=err.message)


def snapshot(session: ChartSession) -> SessionSnapshot:
    """Everything the front end needs to draw the current screen."""
    vp = session.viewport
    image = session.image
    generated = session.continuation

    return SessionSnapshot(
        id=session.id,
        image=ImageInfo(filename=image.filename, mime_type=image.mime_type, size=image.size) if image else None,
        analysis=session.analysis,
        panel=PanelResponse(**build_panel(session.analysis)) if session.analysis else None,
        analyzing=session.analyzing,
        error=_error(session.error),
        viewer_open=session.viewer_open,
        viewing="generated" if session.showing_generated else "original",
        has_continuation=generated is not None,
        continuation=(
            ContinuationResponse(image_base64=generated.base64, mime_type=generated.mime_type)
            if generated else None
        ),
        generating=session.generating,
        generation_error=_error(session.generation_error),
        overlay_svg=session.overlay_svg(),
        viewport=ViewportResponse(
            scale=vp.state.scale,
            offset_x=vp.state.offset_x,
            offset_y=vp.state.offset_y,
            dragging=vp.state.dragging,
            css_transform=vp.css_transform,
            stroke_width=vp.stroke_width,
            cursor=vp.cursor,
        ),
    )


def _session(session_id: str, store: SessionStore = Depends(get_session_store)) -> ChartSession:
    return store.get(session_id)


@router.post("", response_model=SessionSnapshot, status_code=201)
async def create_session(store: SessionStore = Depends(get_session_store)) -> SessionSnapshot:
    return snapshot(store.create())


@router.get("/{session_id}", response_model=SessionSnapshot)
async def get_session(session: ChartSession = Depends(_session)) -> SessionSnapshot:
    return snapshot(session)


@router.delete("/{session_id}", response_model=SessionSnapshot)
async def reset_session(session: ChartSession = Depends(_session)) -> SessionSnapshot:
    session.reset()
    return snapshot(session)


@router.put("/{session_id}/image", response_model=SessionSnapshot)
async def upload_image(
    file: UploadFile = File(..., description="Chart image (PNG, JPG, or WEBP)"),
    session: ChartSession = Depends(_session),
) -> SessionSnapshot:
    session.upload(await file.read(), file.content_type, file.filename or "")
    return snapshot(session)


@router.post("/{session_id}/analyze", response_model=SessionSnapshot)
async def analyze_session(
    session: ChartSession = Depends(_session),
    client: InferenceClient = Depends(get_inference_client),
) -> SessionSnapshot:
    await session.analyze(client)
    return snapshot(session)


@router.post("/{session_id}/continuation", response_model=SessionSnapshot)
async def generate_continuation(
    session: ChartSession = Depends(_session),
    client: InferenceClient = Depends(get_inference_client),
) -> SessionSnapshot:
    await session.generate_continuation(client)
    return snapshot(session)


# -- viewer ------------------------------------------------------------------


@router.post("/{session_id}/viewer/open", response_model=SessionSnapshot)
async def open_viewer(session: ChartSession = Depends(_session)) -> SessionSnapshot:
    session.open_viewer()
    return snapshot(session)


@router.post("/{session_id}/viewer/close", response_model=SessionSnapshot)
async def close_viewer(session: ChartSession = Depends(_session)) -> SessionSnapshot:
    session.close_viewer()
    return snapshot(session)


@router.post("/{session_id}/viewer/reset", response_model=SessionSnapshot)
async def reset_viewport(session: ChartSession = Depends(_session)) -> SessionSnapshot:
    session.viewport.reset()
    return snapshot(session)


@router.post("/{session_id}/viewer/wheel", response_model=SessionSnapshot)
async def wheel(req: WheelRequest, session: ChartSession = Depends(_session)) -> SessionSnapshot:
    session.viewport.wheel(req.x, req.y, req.delta_y)
    return snapshot(session)


@router.post("/{session_id}/viewer/pointer-down", response_model=SessionSnapshot)
async def pointer_down(req: PointerRequest, session: ChartSession = Depends(_session)) -> SessionSnapshot:
    session.viewport.pointer_down(req.x, req.y)
    return snapshot(session)


@router.post("/{session_id}/viewer/pointer-move", response_model=SessionSnapshot)
async def pointer_move(req: PointerRequest, session: ChartSession = Depends(_session)) -> SessionSnapshot:
    session.viewport.pointer_move(req.x, req.y)
    return snapshot(session)


@router.post("/{session_id}/viewer/pointer-up", response_model=SessionSnapshot)
async def pointer_up(session: ChartSession = Depends(_session)) -> SessionSnapshot:
    session.viewport.pointer_up()
    return snapshot(session)


@router.post("/{session_id}/viewer/view", response_model=SessionSnapshot)
async def switch_view(req: ViewRequest, session: ChartSession = Depends(_session)) -> SessionSnapshot:
    if req.image == "generated":
        session.view_generated()
    else:
        session.view_original()
    return snapshot(session)
