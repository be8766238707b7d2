from __future__ import annotations

import logging
import threading
import time
import uuid
from collections import OrderedDict
from typing import Callable

from upify.application.exceptions import SessionNotFoundError
from upify.application.ports.session_store import SessionStorePort
from upify.application.use_cases.order_session import OrderSession
from upify.core.config import settings


class MemorySessionStore(SessionStorePort):
    """
    Process-local sessions, least recently used first.

    Sessions idle longer than `idle_ttl_seconds` expire, and adding beyond
    `max_sessions` evicts the least recently used one. Expired and evicted
    sessions are closed like removed ones.
    """

    def __init__(
        self,
        idle_ttl_seconds: float | None = None,
        max_sessions: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._idle_ttl = idle_ttl_seconds if idle_ttl_seconds is not None else settings.SESSION_IDLE_TTL_SECONDS
        self._max_sessions = max_sessions if max_sessions is not None else settings.MAX_SESSIONS
        self._clock = clock
        self._sessions: OrderedDict[str, tuple[OrderSession, float]] = OrderedDict()
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def add(self, session: OrderSession) -> str:
        session_id = uuid.uuid4().hex
        session.session_id = session_id
        with self._lock:
            dropped = self._expire_locked()
            while self._max_sessions > 0 and len(self._sessions) >= self._max_sessions:
                _, (oldest, _) = self._sessions.popitem(last=False)
                self._logger.info("Evicting session at capacity", extra={"session_id": oldest.session_id})
                dropped.append(oldest)
            self._sessions[session_id] = (session, self._clock())
        self._close_all(dropped)
        return session_id

    def get(self, session_id: str) -> OrderSession:
        with self._lock:
            dropped = self._expire_locked()
            entry = self._sessions.get(session_id)
            if entry is not None:
                self._sessions[session_id] = (entry[0], self._clock())
                self._sessions.move_to_end(session_id)
        self._close_all(dropped)
        if entry is None:
            raise SessionNotFoundError(session_id)
        return entry[0]

    def remove(self, session_id: str) -> OrderSession | None:
        """Drop the session and mark it closed so an in-flight catalog load is discarded."""
        with self._lock:
            entry = self._sessions.pop(session_id, None)
        if entry is None:
            return None
        entry[0].close()
        return entry[0]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _expire_locked(self) -> list[OrderSession]:
        if self._idle_ttl <= 0:
            return []
        cutoff = self._clock() - self._idle_ttl
        expired: list[OrderSession] = []
        # oldest first, so stop at the first fresh entry
        while self._sessions:
            session_id, (session, last_used) = next(iter(self._sessions.items()))
            if last_used > cutoff:
                break
            del self._sessions[session_id]
            expired.append(session)
        if expired:
            self._logger.info("Expired idle sessions", extra={"status": f"{len(expired)} expired"})
        return expired

    @staticmethod
    def _close_all(sessions: list[OrderSession]) -> None:
        for session in sessions:
            session.close()
