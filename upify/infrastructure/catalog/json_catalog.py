from __future__ import annotations

import json
import logging
from pathlib import Path

from upify.application.exceptions import CatalogLoadError
from upify.application.ports.catalog_source import CatalogSourcePort
from upify.domain.entities.service_record import ServiceRecord
from upify.infrastructure.catalog.memory_catalog import active_rows_in_order


class JsonCatalogSource(CatalogSourcePort):
    """Services table exported as a JSON array of rows, for dev/local runs."""

    def __init__(self, path: str) -> None:
        self._path = Path(path)
        self._logger = logging.getLogger(__name__)

    def fetch_active_services(self) -> list[ServiceRecord]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                rows = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            self._logger.error("Failed to read catalog file", extra={"reason": str(e)})
            raise CatalogLoadError(str(e)) from e

        if not isinstance(rows, list):
            return []
        return active_rows_in_order(row for row in rows if isinstance(row, dict))
