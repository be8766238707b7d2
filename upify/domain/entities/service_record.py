from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceRecord:
    provider_service_id: int | str
    category: str = ""  # free-form, may be blank
    description: str | None = None
    provider_rate_per_1000: float | None = None  # provider cost, never shown to customers
    min: float | int | str | None = None
    max: float | int | str | None = None
    name: str | None = None
    id: str | None = None  # storage row id

    @property
    def display_name(self) -> str:
        if isinstance(self.name, str) and self.name:
            return self.name
        return f"Service #{self.provider_service_id}"
