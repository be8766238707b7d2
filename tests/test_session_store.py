"""
Tests for the in-memory session store: lookup, idle expiry and the capacity cap.
"""

from __future__ import annotations

import pytest

from conftest import FakeGateway
from upify.application.exceptions import SessionNotFoundError
from upify.application.use_cases.order_session import OrderSession
from upify.infrastructure.catalog.memory_catalog import InMemoryCatalogSource
from upify.infrastructure.pricing.unknown_pricing import UnknownPricing
from upify.infrastructure.store.memory_session_store import MemorySessionStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _session(notifier) -> OrderSession:
    return OrderSession(
        catalog_source=InMemoryCatalogSource(),
        notifier=notifier,
        gateway=FakeGateway(),
        pricing=UnknownPricing(),
        api_base=None,
    )


def test_add_get_remove(notifier):
    store = MemorySessionStore(idle_ttl_seconds=0, max_sessions=0)
    session = _session(notifier)
    session_id = store.add(session)

    assert session.session_id == session_id
    assert store.get(session_id) is session
    assert store.remove(session_id) is session
    assert session.closed is True
    assert store.remove(session_id) is None
    with pytest.raises(SessionNotFoundError):
        store.get(session_id)


def test_idle_sessions_expire(notifier):
    clock = FakeClock()
    store = MemorySessionStore(idle_ttl_seconds=60, max_sessions=0, clock=clock)
    stale = _session(notifier)
    active = _session(notifier)
    stale_id = store.add(stale)
    active_id = store.add(active)

    clock.now = 45
    store.get(active_id)
    clock.now = 90

    with pytest.raises(SessionNotFoundError):
        store.get(stale_id)
    assert stale.closed is True
    assert store.get(active_id) is active
    assert len(store) == 1


def test_capacity_evicts_least_recently_used(notifier):
    store = MemorySessionStore(idle_ttl_seconds=0, max_sessions=2)
    first, second, third = _session(notifier), _session(notifier), _session(notifier)
    first_id = store.add(first)
    second_id = store.add(second)
    store.get(first_id)

    third_id = store.add(third)

    assert len(store) == 2
    assert second.closed is True
    with pytest.raises(SessionNotFoundError):
        store.get(second_id)
    assert store.get(first_id) is first
    assert store.get(third_id) is third
