from __future__ import annotations

import logging
import threading
from typing import Any

import httpx

from upify.application.ports.credential_provider import CredentialProviderPort
from upify.core.config import settings


class SupabaseAuthSession(CredentialProviderPort):
    """Password sign-in against Supabase Auth, holding the current session in memory."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.SUPABASE_URL or "").rstrip("/")
        self._api_key = api_key or settings.SUPABASE_ANON_KEY
        self._client = client or httpx.Client(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self._session: dict[str, Any] | None = None
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("SUPABASE_URL is required for Supabase auth")
        if not self._api_key:
            raise ValueError("SUPABASE_ANON_KEY is required for Supabase auth")

    def sign_in_with_password(self, email: str, password: str) -> bool:
        """Returns True when a session with an access token was obtained."""
        url = f"{self._base_url}/auth/v1/token"
        try:
            response = self._client.post(
                url,
                params={"grant_type": "password"},
                json={"email": email, "password": password},
                headers={"apikey": self._api_key},
            )
        except httpx.HTTPError as e:
            self._logger.warning("Sign-in request failed", extra={"reason": str(e) or type(e).__name__})
            with self._lock:
                self._session = None
            return False

        if response.status_code >= 400:
            self._logger.warning("Sign-in rejected", extra={"status": response.status_code})
            with self._lock:
                self._session = None
            return False

        try:
            data = response.json()
        except ValueError:
            data = {}
        session = data if isinstance(data, dict) and data.get("access_token") else None
        with self._lock:
            self._session = session
        self._logger.info(
            "Sign-in finished",
            extra={"status": response.status_code, "reason": f"session={bool(session)}"},
        )
        return session is not None

    def sign_out(self) -> None:
        with self._lock:
            self._session = None

    def get_access_token(self) -> str | None:
        with self._lock:
            if not self._session:
                return None
            token = self._session.get("access_token")
        return token if isinstance(token, str) and token else None
