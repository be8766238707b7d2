from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, Iterable

from upify.application import messages
from upify.application.ports.notifier import NotifierPort
from upify.domain.entities.selection import Selection, clear_order_details, transition
from upify.domain.entities.service_record import ServiceRecord


def clamp_quantity(value: Any) -> int | None:
    """max(0, trunc(value)) for finite input, None when the input is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return max(0, math.trunc(value))


class SelectionState:
    """The customer's in-progress order: category, service, link, quantity, acknowledgement."""

    def __init__(self, notifier: NotifierPort | None = None) -> None:
        self._selection = Selection()
        self._notifier = notifier
        self._logger = logging.getLogger(__name__)

    @property
    def selection(self) -> Selection:
        return self._selection

    def pick_category(self, category_key: str) -> Selection:
        self._selection = transition(self._selection, category=category_key)
        self._logger.info("Category picked", extra={"category": category_key})
        if self._notifier:
            self._notifier.show("info", messages.CATEGORY_SELECTED.format(category=category_key))
        return self._selection

    def pick_service(self, service_id: Any) -> Selection:
        normalized = None if service_id is None else str(service_id)
        self._selection = transition(self._selection, service_id=normalized)
        self._logger.info("Service picked", extra={"service_id": normalized})
        if self._notifier:
            self._notifier.show("info", messages.SERVICE_SELECTED.format(service_id=normalized))
        return self._selection

    def set_link(self, text: str) -> Selection:
        self._selection = replace(self._selection, link=text if isinstance(text, str) else "")
        return self._selection

    def set_quantity(self, value: Any) -> Selection:
        quantity = clamp_quantity(value)
        if quantity is None:
            return self._selection
        self._selection = replace(self._selection, quantity=quantity)
        return self._selection

    def set_acknowledged(self, acknowledged: bool) -> Selection:
        self._selection = replace(self._selection, acknowledged=bool(acknowledged))
        return self._selection

    def reset_after_submission(self, expected: Selection | None = None) -> bool:
        """
        Clear link, quantity and acknowledgement. With `expected`, only when the
        selection is still exactly that one. Returns True when the reset happened.
        """
        if expected is not None and self._selection != expected:
            return False
        self._selection = clear_order_details(self._selection)
        return True

    def reset(self) -> Selection:
        self._selection = Selection()
        return self._selection

    def active_service(self, records: Iterable[ServiceRecord]) -> ServiceRecord | None:
        service_id = self._selection.service_id
        if not service_id:
            return None
        for record in records:
            if str(record.provider_service_id) == service_id:
                return record
        return None
