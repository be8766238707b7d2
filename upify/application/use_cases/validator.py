from __future__ import annotations

from typing import Callable

from upify.application import messages
from upify.application.use_cases.catalog_indexer import as_finite_number
from upify.domain.entities.selection import Selection
from upify.domain.entities.service_record import ServiceRecord

Rule = Callable[[Selection, "ServiceRecord | None"], str]


def _format_bound(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


def _require_category(selection: Selection, service: ServiceRecord | None) -> str:
    return "" if selection.category else messages.CATEGORY_REQUIRED


def _require_service(selection: Selection, service: ServiceRecord | None) -> str:
    return "" if service is not None else messages.SERVICE_REQUIRED


def _require_link(selection: Selection, service: ServiceRecord | None) -> str:
    link = selection.link if isinstance(selection.link, str) else ""
    return "" if link.strip() else messages.LINK_REQUIRED


def _require_acknowledgement(selection: Selection, service: ServiceRecord | None) -> str:
    return "" if selection.acknowledged is True else messages.ACKNOWLEDGEMENT_REQUIRED


def _require_whole_quantity(selection: Selection, service: ServiceRecord | None) -> str:
    quantity = selection.quantity
    if isinstance(quantity, int) and not isinstance(quantity, bool) and quantity >= 0:
        return ""
    return messages.QUANTITY_NOT_WHOLE


def _require_positive_quantity(selection: Selection, service: ServiceRecord | None) -> str:
    return "" if selection.quantity > 0 else messages.QUANTITY_NOT_POSITIVE


def _respect_min(selection: Selection, service: ServiceRecord | None) -> str:
    minimum = as_finite_number(service.min) if service else None
    if minimum is not None and selection.quantity < minimum:
        return messages.QUANTITY_BELOW_MIN.format(min=_format_bound(minimum))
    return ""


def _respect_max(selection: Selection, service: ServiceRecord | None) -> str:
    maximum = as_finite_number(service.max) if service else None
    if maximum is not None and selection.quantity > maximum:
        return messages.QUANTITY_ABOVE_MAX.format(max=_format_bound(maximum))
    return ""


# Order matters: only the first failing rule is reported.
RULES: tuple[Rule, ...] = (
    _require_category,
    _require_service,
    _require_link,
    _require_acknowledgement,
    _require_whole_quantity,
    _require_positive_quantity,
    _respect_min,
    _respect_max,
)


def validate_selection(selection: Selection, service: ServiceRecord | None) -> str:
    """Return the message of the first violated rule, or "" when the order may be submitted."""
    for rule in RULES:
        error = rule(selection, service)
        if error:
            return error
    return ""
