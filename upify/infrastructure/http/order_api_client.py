from __future__ import annotations

import logging
from typing import Any

import httpx

from upify.application.ports.order_gateway import OrderGatewayPort, OrderGatewayResponse
from upify.core.config import settings


class OrderApiClient(OrderGatewayPort):
    def __init__(
        self,
        order_path: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._order_path = order_path or settings.ORDER_PLACE_PATH
        self._client = client or httpx.Client(timeout=timeout or settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

    def place_order(self, api_base: str, token: str, payload: dict[str, Any]) -> OrderGatewayResponse:
        url = f"{api_base.rstrip('/')}{self._order_path}"
        headers = {"Content-Type": "application/json", "Authorization": f"Bearer {token}"}
        resp = self._client.post(url, json=payload, headers=headers)

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if resp.status_code >= 400:
            self._logger.error(
                "Order API returned an error",
                extra={
                    "status": resp.status_code,
                    "service_id": payload.get("provider_service_id"),
                    "body_keys": sorted(body.keys()),
                },
            )
        return OrderGatewayResponse(status_code=resp.status_code, body=body)
