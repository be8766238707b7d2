from __future__ import annotations

import logging

import httpx

from upify.application.exceptions import CatalogLoadError
from upify.application.ports.catalog_source import CatalogSourcePort
from upify.core.config import settings
from upify.domain.entities.service_record import ServiceRecord
from upify.infrastructure.catalog.row_mapper import SERVICE_COLUMNS, service_from_row


class SupabaseCatalogSource(CatalogSourcePort):
    """Reads active services through the Supabase REST (PostgREST) endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        table: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.SUPABASE_URL or "").rstrip("/")
        self._api_key = api_key or settings.SUPABASE_ANON_KEY
        self._table = table or settings.SUPABASE_SERVICES_TABLE
        self._client = client or httpx.Client(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("SUPABASE_URL is required for the Supabase catalog")
        if not self._api_key:
            raise ValueError("SUPABASE_ANON_KEY is required for the Supabase catalog")

    def fetch_active_services(self) -> list[ServiceRecord]:
        url = f"{self._base_url}/rest/v1/{self._table}"
        params = {
            "select": ",".join(SERVICE_COLUMNS),
            "is_active": "eq.true",
            "order": "provider_service_id.asc",
        }
        headers = {"apikey": self._api_key, "Authorization": f"Bearer {self._api_key}"}

        try:
            response = self._client.get(url, params=params, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            detail = _error_message(e.response)
            self._logger.error(
                "Catalog query rejected",
                extra={"status": e.response.status_code, "reason": detail},
            )
            raise CatalogLoadError(detail) from e
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Catalog query failed", extra={"reason": str(e)})
            raise CatalogLoadError(str(e)) from e

        if not isinstance(data, list):
            return []
        return [service_from_row(row) for row in data if isinstance(row, dict)]


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return f"HTTP {response.status_code}"
