from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from upify.application.use_cases.order_session import OrderSession


class SessionStorePort(ABC):
    @abstractmethod
    def add(self, session: "OrderSession") -> str:
        """Store a session and return its id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> "OrderSession":
        """Raises SessionNotFoundError for unknown ids."""
        raise NotImplementedError

    @abstractmethod
    def remove(self, session_id: str) -> "OrderSession | None":
        raise NotImplementedError
