from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol

from upify.application.ports.notifier import NotifierPort
from upify.core.config import settings
from upify.domain.entities.notification import EMPTY_NOTIFICATION, Notification


class TimerHandle(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def _daemon_timer(interval: float, callback: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    return timer


class NotificationQueue(NotifierPort):
    """Single-slot notification that clears itself after a fixed delay."""

    def __init__(self, ttl_seconds: float | None = None, timer_factory: TimerFactory | None = None) -> None:
        self._ttl = settings.NOTIFICATION_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self._timer_factory = timer_factory or _daemon_timer
        self._current = EMPTY_NOTIFICATION
        self._timer: TimerHandle | None = None
        self._generation = 0
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def current(self) -> Notification:
        with self._lock:
            return self._current

    def show(self, kind: str, text: str) -> Notification:
        notification = Notification(kind=kind, text=text)
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            generation = self._generation
            self._current = notification
            self._timer = self._timer_factory(self._ttl, lambda: self._expire(generation))
            self._timer.start()
        self._logger.debug("Notification shown", extra={"status": kind, "reason": text})
        return notification

    def clear(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            self._current = EMPTY_NOTIFICATION

    def _expire(self, generation: int) -> None:
        with self._lock:
            # a newer show() or clear() owns the slot now
            if generation != self._generation:
                return
            self._timer = None
            self._current = EMPTY_NOTIFICATION

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
