from __future__ import annotations

import logging
import threading
from typing import Any

from upify.application import messages
from upify.application.ports.credential_provider import CredentialProviderPort
from upify.application.ports.notifier import NotifierPort
from upify.application.ports.order_gateway import OrderGatewayPort
from upify.application.use_cases.catalog_indexer import as_finite_number
from upify.application.use_cases.selection_state import SelectionState
from upify.application.use_cases.validator import validate_selection
from upify.domain.entities.selection import Selection
from upify.domain.entities.service_record import ServiceRecord
from upify.domain.entities.submission import SubmissionOutcome, SubmissionStatus


def _json_number(value: Any) -> int | float | None:
    number = as_finite_number(value)
    if number is None:
        return None
    return int(number) if number.is_integer() else number


def build_order_payload(selection: Selection, service: ServiceRecord) -> dict[str, Any]:
    return {
        "provider_service_id": _json_number(service.provider_service_id),
        "link": selection.link.strip(),
        "quantity": int(selection.quantity),
    }


class SubmitOrderUseCase:
    """
    Validate the selection, place one order with the customer's credential and
    turn the result into a single notification.

    Faults after validation never raise: they end as a SubmissionOutcome with an
    error notification and the selection untouched. Only a successful order
    clears link, quantity and acknowledgement.
    """

    def __init__(
        self,
        gateway: OrderGatewayPort,
        notifier: NotifierPort,
        api_base: str | None,
    ) -> None:
        self._gateway = gateway
        self._notifier = notifier
        self._api_base = api_base
        self._in_flight = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        state: SelectionState,
        service: ServiceRecord | None,
        credentials: CredentialProviderPort,
    ) -> SubmissionOutcome:
        if not self._in_flight.acquire(blocking=False):
            self._logger.warning("Submission already in flight; ignoring re-entry")
            return self._finish(SubmissionStatus.rejected, "error", messages.ORDER_ALREADY_IN_FLIGHT)
        try:
            return self._submit(state, service, credentials)
        finally:
            self._in_flight.release()

    def _submit(
        self,
        state: SelectionState,
        service: ServiceRecord | None,
        credentials: CredentialProviderPort,
    ) -> SubmissionOutcome:
        selection = state.selection
        error = validate_selection(selection, service)
        if error:
            self._logger.info("Order rejected by validation", extra={"reason": error})
            return self._finish(SubmissionStatus.rejected, "error", error)

        payload = build_order_payload(selection, service)
        self._notifier.show("info", messages.ORDER_IN_PROGRESS)

        try:
            if not self._api_base:
                self._logger.error("Order API base is not configured")
                return self._finish(SubmissionStatus.config_error, "error", messages.API_BASE_MISSING)

            token = credentials.get_access_token()
            if not token:
                self._logger.info("No session credential; sign-in required")
                return self._finish(SubmissionStatus.auth_error, "error", messages.SIGN_IN_REQUIRED)

            response = self._gateway.place_order(self._api_base, token, payload)
        except Exception as e:
            self._logger.exception("Order placement failed", extra={"reason": str(e)})
            text = messages.NETWORK_ERROR.format(error=str(e) or messages.UNKNOWN_ERROR)
            return self._finish(SubmissionStatus.network_error, "error", text)

        body = response.body if isinstance(response.body, dict) else {}
        if not response.transport_ok or not body.get("ok"):
            message = body.get("message")
            self._logger.warning(
                "Order rejected by server",
                extra={"status": response.status_code, "service_id": selection.service_id},
            )
            text = str(message) if message else messages.ORDER_FAILED
            return self._finish(SubmissionStatus.server_rejected, "error", text)

        outcome = self._finish(SubmissionStatus.success, "success", messages.ORDER_CREATED)
        # the customer may have started the next order while this one was in flight
        if not state.reset_after_submission(expected=selection):
            self._logger.info(
                "Selection changed during submission; keeping it",
                extra={"service_id": state.selection.service_id},
            )
        self._logger.info(
            "Order placed",
            extra={"service_id": selection.service_id, "status": response.status_code},
        )
        return outcome

    def _finish(self, status: SubmissionStatus, kind: str, text: str) -> SubmissionOutcome:
        notification = self._notifier.show(kind, text)
        return SubmissionOutcome(status=status, notification=notification)
