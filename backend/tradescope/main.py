"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tradescope.config import settings
from tradescope.errors import InputError, SessionBusyError, SessionNotFoundError
from tradescope.inference.errors import InferenceError
from tradescope.models.responses import ErrorResponse

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.tradescope_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, label: str, detail: str) -> JSONResponse:
    body = ErrorResponse(label=label, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _register_error_handlers(app: FastAPI) -> None:
    """Every failure is reported, none is fatal. Inference errors keep their call-site label."""

    @app.exception_handler(InputError)
    async def _input_error(request: Request, exc: InputError) -> JSONResponse:
        return _error_response(400, "Input Required", str(exc))

    @app.exception_handler(SessionNotFoundError)
    async def _not_found(request: Request, exc: SessionNotFoundError) -> JSONResponse:
        return _error_response(404, "Not Found", str(exc))

    @app.exception_handler(SessionBusyError)
    async def _busy(request: Request, exc: SessionBusyError) -> JSONResponse:
        return _error_response(409, "Busy", str(exc))

    @app.exception_handler(InferenceError)
    async def _inference_error(request: Request, exc: InferenceError) -> JSONResponse:
        return _error_response(502, exc.label, str(exc))


def create_app() -> FastAPI:
    app = FastAPI(
        title="TradeScope",
        description="Chart analysis — Gemini predictions overlaid on a zoomable chart viewer",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    from tradescope.api.router import api_router

    app.include_router(api_router)
    logger.info("TradeScope app created (env=%s, analysis model=%s)", settings.tradescope_env, settings.model_analysis)

    return app


app = create_app()
