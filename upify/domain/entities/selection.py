from __future__ import annotations

from dataclasses import dataclass, replace

_UNCHANGED = object()


@dataclass(frozen=True)
class Selection:
    category: str = ""
    service_id: str | None = None  # provider_service_id as a string
    link: str = ""
    quantity: int = 0
    acknowledged: bool = False  # customer confirmed reading the description


def transition(
    selection: Selection,
    category: str | object = _UNCHANGED,
    service_id: str | None | object = _UNCHANGED,
) -> Selection:
    """
    Apply a category and/or service pick and return the new selection.
    A new category clears service, link, quantity and acknowledgement.
    A new service clears the acknowledgement only.
    Picking the value already selected changes nothing.
    """
    result = selection

    if category is not _UNCHANGED and category != result.category:
        result = Selection(category=category)

    if service_id is not _UNCHANGED and service_id != result.service_id:
        result = replace(result, service_id=service_id, acknowledged=False)

    return result


def clear_order_details(selection: Selection) -> Selection:
    """Clear link, quantity and acknowledgement, keeping category and service."""
    return replace(selection, link="", quantity=0, acknowledged=False)
