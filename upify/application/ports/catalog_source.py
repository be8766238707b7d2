from __future__ import annotations

from abc import ABC, abstractmethod

from upify.domain.entities.service_record import ServiceRecord


class CatalogSourcePort(ABC):
    @abstractmethod
    def fetch_active_services(self) -> list[ServiceRecord]:
        """
        Return the active services ordered ascending by provider_service_id.
        Raises CatalogLoadError when the store cannot be queried.
        """
        raise NotImplementedError
