from __future__ import annotations

from decimal import Decimal

from upify.application.ports.pricing import PricingPort
from upify.domain.entities.service_record import ServiceRecord


class UnknownPricing(PricingPort):
    """Placeholder until customer markup rules exist: the total is never known."""

    def quote(self, service: ServiceRecord | None, quantity: int) -> Decimal | None:
        return None
