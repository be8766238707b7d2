from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Iterable

from upify.domain.entities.category_entry import CategoryEntry
from upify.domain.entities.service_record import ServiceRecord

BADGE_MAX_LENGTH = 4


def normalize_category(value: Any) -> str:
    """Grouping key for a category label: the label without surrounding whitespace."""
    if not isinstance(value, str):
        return ""
    return value.strip()


def badge_for(label: Any) -> str | None:
    """Short decorative token taken from the label's first word, if it is short enough."""
    text = normalize_category(label)
    if not text:
        return None
    first_token = text.split(" ")[0]
    if first_token and len(first_token) <= BADGE_MAX_LENGTH:
        return first_token
    return None


def as_finite_number(value: Any) -> float | None:
    """Numeric value of an id or bound, or None when it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def compare_service_ids(a: Any, b: Any) -> int:
    """Numeric comparison when both ids are numbers, string comparison otherwise."""
    a_num = as_finite_number(a)
    b_num = as_finite_number(b)
    if a_num is not None and b_num is not None:
        return (a_num > b_num) - (a_num < b_num)
    a_str, b_str = str(a), str(b)
    return (a_str > b_str) - (a_str < b_str)


_service_sort_key = cmp_to_key(
    lambda left, right: compare_service_ids(left.provider_service_id, right.provider_service_id)
)


def build_categories(records: Iterable[ServiceRecord]) -> list[CategoryEntry]:
    """
    Category list in order of first appearance in the feed.
    The feed is ordered by provider_service_id, so each category lands where
    its lowest-id service is.
    """
    seen: set[str] = set()
    categories: list[CategoryEntry] = []
    for record in records:
        key = normalize_category(record.category)
        if not key or key in seen:
            continue
        seen.add(key)
        categories.append(CategoryEntry(key=key, label=record.category, badge=badge_for(record.category)))
    return categories


def services_in_category(records: Iterable[ServiceRecord], category_key: str) -> list[ServiceRecord]:
    key = normalize_category(category_key)
    if not key:
        return []
    matching = [record for record in records if normalize_category(record.category) == key]
    return sorted(matching, key=_service_sort_key)


@dataclass(frozen=True)
class CatalogIndex:
    """Snapshot of one catalog load with its derived category index."""

    records: tuple[ServiceRecord, ...] = ()
    categories: tuple[CategoryEntry, ...] = ()
    services_by_category: dict[str, tuple[ServiceRecord, ...]] = field(default_factory=dict)

    @classmethod
    def build(cls, records: Iterable[ServiceRecord]) -> "CatalogIndex":
        snapshot = tuple(records)
        categories = tuple(build_categories(snapshot))
        return cls(
            records=snapshot,
            categories=categories,
            services_by_category={
                entry.key: tuple(services_in_category(snapshot, entry.key)) for entry in categories
            },
        )

    def services_for(self, category_key: str) -> tuple[ServiceRecord, ...]:
        return self.services_by_category.get(normalize_category(category_key), ())

    def count_for(self, category_key: str) -> int:
        return len(self.services_for(category_key))
