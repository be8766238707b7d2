from __future__ import annotations

from typing import Any, Mapping

from upify.domain.entities.service_record import ServiceRecord

SERVICE_COLUMNS = (
    "id",
    "provider_service_id",
    "category",
    "description",
    "provider_rate_per_1000",
    "min",
    "max",
    "name",
)


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _optional_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def service_from_row(row: Mapping[str, Any]) -> ServiceRecord:
    row_id = row.get("id")
    return ServiceRecord(
        id=None if row_id is None else str(row_id),
        provider_service_id=row.get("provider_service_id"),
        category=row.get("category") if isinstance(row.get("category"), str) else "",
        description=_optional_str(row.get("description")),
        provider_rate_per_1000=_optional_float(row.get("provider_rate_per_1000")),
        min=row.get("min"),
        max=row.get("max"),
        name=_optional_str(row.get("name")),
    )
