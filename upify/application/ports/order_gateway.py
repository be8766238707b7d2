from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class OrderGatewayResponse:
    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def transport_ok(self) -> bool:
        return 200 <= self.status_code < 300


class OrderGatewayPort(ABC):
    @abstractmethod
    def place_order(self, api_base: str, token: str, payload: dict[str, Any]) -> OrderGatewayResponse:
        """
        POST one order. The body is decoded defensively: anything that is not
        a JSON object comes back as an empty dict. Transport errors propagate.
        """
        raise NotImplementedError
