from __future__ import annotations

from upify.application.ports.credential_provider import CredentialProviderPort


class StaticCredentialProvider(CredentialProviderPort):
    """A token handed over by the caller, e.g. the request's bearer token."""

    def __init__(self, token: str | None) -> None:
        self._token = token.strip() if isinstance(token, str) else None

    def get_access_token(self) -> str | None:
        return self._token or None

    @classmethod
    def from_authorization_header(cls, header: str | None) -> "StaticCredentialProvider":
        if not header:
            return cls(None)
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer":
            return cls(None)
        return cls(token)
