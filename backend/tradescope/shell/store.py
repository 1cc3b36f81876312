"""In-memory session registry. Nothing outlives the process."""

from __future__ import annotations

import logging
import uuid

from tradescope.config import Settings, settings as default_settings
from tradescope.errors import SessionNotFoundError
from tradescope.shell.session import ChartSession

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings
        self._sessions: dict[str, ChartSession] = {}

    def create(self) -> ChartSession:
        session = ChartSession(uuid.uuid4().hex, self.settings)
        self._sessions[session.id] = session
        logger.debug("Created session %s", session.id)
        return session

    def get(self, session_id: str) -> ChartSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(f"Unknown session {session_id!r}") from None

    def discard(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
