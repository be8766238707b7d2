from __future__ import annotations

import logging
import threading
from decimal import Decimal
from typing import Any

from upify.application import messages
from upify.application.exceptions import CatalogLoadError
from upify.application.ports.catalog_source import CatalogSourcePort
from upify.application.ports.credential_provider import CredentialProviderPort
from upify.application.ports.notifier import NotifierPort
from upify.application.ports.order_gateway import OrderGatewayPort
from upify.application.ports.pricing import PricingPort
from upify.application.use_cases.catalog_indexer import CatalogIndex
from upify.application.use_cases.selection_state import SelectionState
from upify.application.use_cases.submit_order import SubmitOrderUseCase
from upify.domain.entities.selection import Selection
from upify.domain.entities.service_record import ServiceRecord
from upify.domain.entities.submission import SubmissionOutcome


class OrderSession:
    """
    One customer's order workspace.

    Owns the catalog snapshot, the selection and the notification slot. A failed
    catalog load blocks the workspace: every mutation then raises CatalogLoadError.
    """

    def __init__(
        self,
        catalog_source: CatalogSourcePort,
        notifier: NotifierPort,
        gateway: OrderGatewayPort,
        pricing: PricingPort,
        api_base: str | None,
    ) -> None:
        self._catalog_source = catalog_source
        self._notifier = notifier
        self._pricing = pricing
        self._state = SelectionState(notifier=notifier)
        self._submit = SubmitOrderUseCase(gateway=gateway, notifier=notifier, api_base=api_base)
        self._index = CatalogIndex()
        self._loading = False
        self._load_error = ""
        self._closed = False
        self._load_generation = 0
        self._lock = threading.Lock()
        self.session_id: str | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def index(self) -> CatalogIndex:
        return self._index

    @property
    def selection(self) -> Selection:
        return self._state.selection

    @property
    def notifier(self) -> NotifierPort:
        return self._notifier

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def load_error(self) -> str:
        return self._load_error

    @property
    def closed(self) -> bool:
        return self._closed

    def load_catalog(self) -> bool:
        """
        Fetch the catalog and apply it. Returns False when the response was
        dropped because the session closed or a newer load started meanwhile.
        """
        with self._lock:
            if self._closed:
                return False
            self._load_generation += 1
            generation = self._load_generation
            self._loading = True
            self._load_error = ""
        self._notifier.clear()

        error = ""
        index = CatalogIndex()
        try:
            index = CatalogIndex.build(self._catalog_source.fetch_active_services())
        except CatalogLoadError as e:
            error = messages.CATALOG_LOAD_FAILED.format(error=str(e))
        except Exception as e:
            self._logger.exception("Unexpected catalog failure", extra={"session_id": self.session_id})
            error = messages.CATALOG_LOAD_FAILED.format(error=str(e) or type(e).__name__)

        with self._lock:
            if self._closed or generation != self._load_generation:
                self._logger.info("Discarding stale catalog response", extra={"session_id": self.session_id})
                return False
            self._index = index
            self._load_error = error
            self._loading = False

        if error:
            self._logger.error("Catalog load failed", extra={"session_id": self.session_id, "reason": error})
        else:
            self._logger.info(
                "Catalog loaded",
                extra={"session_id": self.session_id, "status": f"{len(self._index.records)} services"},
            )
        return True

    def close(self) -> None:
        with self._lock:
            self._closed = True
        self._notifier.clear()

    def active_service(self) -> ServiceRecord | None:
        return self._state.active_service(self._index.records)

    def services_in_selected_category(self) -> tuple[ServiceRecord, ...]:
        return self._index.services_for(self._state.selection.category)

    def price(self) -> Decimal | None:
        return self._pricing.quote(self.active_service(), self._state.selection.quantity)

    def pick_category(self, category_key: str) -> Selection:
        self._ensure_ready()
        return self._state.pick_category(category_key)

    def pick_service(self, service_id: Any) -> Selection:
        self._ensure_ready()
        return self._state.pick_service(service_id)

    def set_link(self, text: str) -> Selection:
        self._ensure_ready()
        return self._state.set_link(text)

    def set_quantity(self, value: Any) -> Selection:
        self._ensure_ready()
        return self._state.set_quantity(value)

    def set_acknowledged(self, acknowledged: bool) -> Selection:
        self._ensure_ready()
        return self._state.set_acknowledged(acknowledged)

    def submit(self, credentials: CredentialProviderPort) -> SubmissionOutcome:
        self._ensure_ready()
        return self._submit.execute(self._state, self.active_service(), credentials)

    def _ensure_ready(self) -> None:
        if self._load_error:
            raise CatalogLoadError(self._load_error)
