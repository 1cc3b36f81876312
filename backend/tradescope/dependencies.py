"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from tradescope.config import settings
from tradescope.inference.client import InferenceClient
from tradescope.shell.store import SessionStore


def get_settings():
    return settings


@lru_cache(maxsize=1)
def get_inference_client() -> InferenceClient:
    return InferenceClient(settings)


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    return SessionStore(settings)
