from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Iterable, Mapping

from upify.application.ports.catalog_source import CatalogSourcePort
from upify.application.use_cases.catalog_indexer import compare_service_ids
from upify.domain.entities.service_record import ServiceRecord
from upify.infrastructure.catalog.row_mapper import service_from_row


def active_rows_in_order(rows: Iterable[Mapping[str, Any]]) -> list[ServiceRecord]:
    """Keep active rows and order them by provider_service_id, as the database query does."""
    active = [service_from_row(row) for row in rows if row.get("is_active", True) is True]
    return sorted(
        active,
        key=cmp_to_key(lambda a, b: compare_service_ids(a.provider_service_id, b.provider_service_id)),
    )


class InMemoryCatalogSource(CatalogSourcePort):
    def __init__(self, rows: Iterable[Mapping[str, Any]] | None = None) -> None:
        self._records = active_rows_in_order(rows or [])

    def fetch_active_services(self) -> list[ServiceRecord]:
        return list(self._records)
