from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CategoryEntry:
    key: str  # trimmed label, used for equality
    label: str  # label as first seen in the catalog
    badge: str | None = None
