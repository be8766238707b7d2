"""
Tests for the ordered submission rule chain.
"""

from __future__ import annotations

from dataclasses import replace

from upify.application import messages
from upify.application.use_cases.validator import validate_selection
from upify.domain.entities.selection import Selection
from upify.domain.entities.service_record import ServiceRecord

SERVICE = ServiceRecord(provider_service_id=1, category="A")
VALID = Selection(category="A", service_id="1", link="https://x.y/z", quantity=100, acknowledged=True)


def _with(**changes) -> Selection:
    return replace(VALID, **changes)


def test_valid_selection_passes():
    assert validate_selection(VALID, SERVICE) == ""


def test_rules_in_order():
    assert validate_selection(Selection(), None) == messages.CATEGORY_REQUIRED
    assert validate_selection(_with(), None) == messages.SERVICE_REQUIRED
    assert validate_selection(_with(link="   "), SERVICE) == messages.LINK_REQUIRED
    assert validate_selection(_with(acknowledged=False), SERVICE) == messages.ACKNOWLEDGEMENT_REQUIRED
    assert validate_selection(_with(quantity=-1), SERVICE) == messages.QUANTITY_NOT_WHOLE
    assert validate_selection(_with(quantity=2.5), SERVICE) == messages.QUANTITY_NOT_WHOLE
    assert validate_selection(_with(quantity=0), SERVICE) == messages.QUANTITY_NOT_POSITIVE


def test_only_first_violation_is_reported():
    """Missing link and zero quantity together: the link message wins."""
    selection = _with(link="", quantity=0)
    assert validate_selection(selection, SERVICE) == messages.LINK_REQUIRED


def test_min_bound():
    service = ServiceRecord(provider_service_id=1, category="A", min=10, max=None)
    assert validate_selection(_with(quantity=5), service) == "Minimum quantity for this service is 10."
    assert validate_selection(_with(quantity=10), service) == ""


def test_max_bound():
    service = ServiceRecord(provider_service_id=1, category="A", max="500")
    assert validate_selection(_with(quantity=501), service) == "Maximum quantity for this service is 500."
    assert validate_selection(_with(quantity=500), service) == ""


def test_non_numeric_bounds_disable_rules():
    service = ServiceRecord(provider_service_id=1, category="A", min="n/a", max="")
    assert validate_selection(_with(quantity=1), service) == ""


def test_min_checked_before_max():
    service = ServiceRecord(provider_service_id=1, category="A", min=100, max=10)
    assert validate_selection(_with(quantity=50), service) == "Minimum quantity for this service is 100."


def test_fractional_bound_rendering():
    service = ServiceRecord(provider_service_id=1, category="A", min=10.5)
    assert validate_selection(_with(quantity=10), service) == "Minimum quantity for this service is 10.5."
