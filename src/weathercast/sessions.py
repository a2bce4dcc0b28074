"""Per-browser search state for the HTML pages.

Each browser gets its own orchestrator and presenter, keyed by a session
cookie, so one visitor's search never replaces what another visitor sees.
"""

from __future__ import annotations

import logging
import secrets
from collections import OrderedDict
from collections.abc import Callable

from .orchestrator import SearchOrchestrator

LOGGER = logging.getLogger(__name__)

SESSION_COOKIE = "weathercast_session"
MAX_SESSIONS = 256


class SessionRegistry:
    """Least-recently-used map of session id to that browser's orchestrator."""

    def __init__(
        self,
        factory: Callable[[], SearchOrchestrator],
        *,
        max_sessions: int = MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._factory = factory
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, SearchOrchestrator] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def get(self, session_id: str | None) -> tuple[str, SearchOrchestrator]:
        """Return the session for ``session_id``, starting a new one if it is unknown."""
        if session_id is not None and session_id in self._sessions:
            self._sessions.move_to_end(session_id)
            return session_id, self._sessions[session_id]

        new_id = secrets.token_urlsafe(16)
        self._sessions[new_id] = self._factory()
        while len(self._sessions) > self._max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            LOGGER.debug("Evicted idle session %s", evicted[:8])
        return new_id, self._sessions[new_id]
