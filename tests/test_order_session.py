"""
Tests for the order workspace: catalog loading, abandonment and blocking load errors.
"""

from __future__ import annotations

import json

import pytest

from conftest import FakeCredentials, FakeGateway
from upify.application.exceptions import CatalogLoadError
from upify.application.ports.catalog_source import CatalogSourcePort
from upify.application.use_cases.order_session import OrderSession
from upify.domain.entities.service_record import ServiceRecord
from upify.domain.entities.submission import SubmissionStatus
from upify.infrastructure.catalog.json_catalog import JsonCatalogSource
from upify.infrastructure.catalog.memory_catalog import InMemoryCatalogSource
from upify.infrastructure.pricing.unknown_pricing import UnknownPricing


class FailingSource(CatalogSourcePort):
    def fetch_active_services(self) -> list[ServiceRecord]:
        raise CatalogLoadError("relation services does not exist")


class CallbackSource(CatalogSourcePort):
    """Runs a callback while the query is 'in flight'."""

    def __init__(self, records, during_fetch) -> None:
        self._records = records
        self._during_fetch = during_fetch

    def fetch_active_services(self) -> list[ServiceRecord]:
        self._during_fetch()
        return list(self._records)


def _session(source, notifier, gateway=None, api_base="https://api.upify.test") -> OrderSession:
    return OrderSession(
        catalog_source=source,
        notifier=notifier,
        gateway=gateway or FakeGateway(),
        pricing=UnknownPricing(),
        api_base=api_base,
    )


def test_load_builds_index(catalog, notifier):
    notifier.show("info", "stale message")
    session = _session(CallbackSource(catalog, lambda: None), notifier)

    assert session.load_catalog() is True
    assert session.loading is False
    assert session.load_error == ""
    assert [c.key for c in session.index.categories] == ["📸 Instagram Followers", "TikTok Views", "YouTube"]
    assert notifier.current.is_empty


def test_response_after_close_is_discarded(catalog, notifier):
    holder: list[OrderSession] = []
    session = _session(CallbackSource(catalog, lambda: holder[0].close()), notifier)
    holder.append(session)

    assert session.load_catalog() is False
    assert session.index.records == ()
    assert session.closed is True


def test_superseded_load_is_discarded(catalog, notifier):
    """A reload started while the first query is pending wins; the first response is dropped."""
    holder: list[OrderSession] = []
    calls: list[int] = []

    def during_fetch():
        calls.append(1)
        if len(calls) == 1:
            assert holder[0].load_catalog() is True

    session = _session(CallbackSource(catalog[:2], during_fetch), notifier)
    holder.append(session)

    assert session.load_catalog() is False
    assert len(session.index.records) == 2


def test_load_error_blocks_workspace(notifier):
    session = _session(FailingSource(), notifier)
    session.load_catalog()

    assert "relation services does not exist" in session.load_error
    assert session.index.categories == ()
    with pytest.raises(CatalogLoadError):
        session.pick_category("YouTube")
    with pytest.raises(CatalogLoadError):
        session.submit(FakeCredentials())


def test_full_order_flow(catalog, notifier):
    gateway = FakeGateway()
    session = _session(CallbackSource(catalog, lambda: None), notifier, gateway)
    session.load_catalog()

    session.pick_category("TikTok Views")
    assert [s.provider_service_id for s in session.services_in_selected_category()] == [2, 5]
    session.pick_service(5)
    session.set_link("https://tiktok.com/@me/video/1")
    session.set_quantity(2000)
    session.set_acknowledged(True)
    assert session.price() is None

    outcome = session.submit(FakeCredentials())

    assert outcome.status is SubmissionStatus.success
    assert gateway.calls[0][2]["provider_service_id"] == 5
    assert session.selection.category == "TikTok Views"
    assert session.selection.service_id == "5"
    assert session.selection.quantity == 0


def test_in_memory_source_filters_and_orders():
    source = InMemoryCatalogSource(
        [
            {"provider_service_id": "10", "category": "A"},
            {"provider_service_id": 2, "category": "B", "is_active": False},
            {"provider_service_id": 9, "category": "C"},
        ]
    )
    assert [r.provider_service_id for r in source.fetch_active_services()] == [9, "10"]


def test_json_source(tmp_path):
    path = tmp_path / "services.json"
    path.write_text(
        json.dumps(
            [
                {"provider_service_id": 5, "category": "B", "is_active": True},
                {"provider_service_id": 1, "category": "A", "is_active": True, "description": "d"},
            ]
        ),
        encoding="utf-8",
    )
    records = JsonCatalogSource(str(path)).fetch_active_services()
    assert [r.provider_service_id for r in records] == [1, 5]
    assert records[0].description == "d"


def test_json_source_missing_file(tmp_path):
    with pytest.raises(CatalogLoadError):
        JsonCatalogSource(str(tmp_path / "missing.json")).fetch_active_services()


def test_oversized_id_does_not_break_load(notifier):
    records = [
        ServiceRecord(provider_service_id=10**400, category="A"),
        ServiceRecord(provider_service_id=5, category="A"),
    ]
    session = _session(CallbackSource(records, lambda: None), notifier)

    assert session.load_catalog() is True
    assert session.loading is False
    assert session.load_error == ""
    assert [s.provider_service_id for s in session.index.services_for("A")] == [10**400, 5]


def test_unexpected_source_failure_sets_load_error(notifier):
    """Any failure while loading ends the load and blocks the workspace."""

    def explode():
        raise RuntimeError("socket closed")

    session = _session(CallbackSource([], explode), notifier)

    assert session.load_catalog() is True
    assert session.loading is False
    assert "socket closed" in session.load_error
    with pytest.raises(CatalogLoadError):
        session.pick_category("A")
