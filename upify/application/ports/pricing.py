from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from upify.domain.entities.service_record import ServiceRecord


class PricingPort(ABC):
    @abstractmethod
    def quote(self, service: ServiceRecord | None, quantity: int) -> Decimal | None:
        """Customer total for the order, or None when the price is unknown."""
        raise NotImplementedError
