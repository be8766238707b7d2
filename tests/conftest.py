from __future__ import annotations

from typing import Any, Callable

import pytest

from upify.application.ports.credential_provider import CredentialProviderPort
from upify.application.ports.order_gateway import OrderGatewayPort, OrderGatewayResponse
from upify.domain.entities.service_record import ServiceRecord
from upify.infrastructure.notifications.notification_queue import NotificationQueue


class FakeTimer:
    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class FakeTimerFactory:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer


class FakeGateway(OrderGatewayPort):
    def __init__(self, response: OrderGatewayResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or OrderGatewayResponse(status_code=200, body={"ok": True})
        self.error = error
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def place_order(self, api_base: str, token: str, payload: dict[str, Any]) -> OrderGatewayResponse:
        self.calls.append((api_base, token, payload))
        if self.error:
            raise self.error
        return self.response


class FakeCredentials(CredentialProviderPort):
    def __init__(self, token: str | None = "token-123") -> None:
        self.token = token
        self.calls = 0

    def get_access_token(self) -> str | None:
        self.calls += 1
        return self.token


@pytest.fixture
def timer_factory() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture
def notifier(timer_factory: FakeTimerFactory) -> NotificationQueue:
    return NotificationQueue(ttl_seconds=4.5, timer_factory=timer_factory)


@pytest.fixture
def catalog() -> list[ServiceRecord]:
    """Feed ordered by provider_service_id, as the catalog source delivers it."""
    return [
        ServiceRecord(provider_service_id=1, category="📸 Instagram Followers", name="IG Followers", min=10, max=1000),
        ServiceRecord(provider_service_id=2, category="  TikTok Views ", name="TT Views", min=100),
        ServiceRecord(provider_service_id=3, category="📸 Instagram Followers", name="IG Followers HQ"),
        ServiceRecord(provider_service_id=4, category="   ", name="No category"),
        ServiceRecord(provider_service_id=5, category="TikTok Views", name="TT Views Fast", max=50000),
        ServiceRecord(provider_service_id=6, category="YouTube", description="Real views", provider_rate_per_1000=1.25),
    ]
