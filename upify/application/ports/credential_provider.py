from abc import ABC, abstractmethod


class CredentialProviderPort(ABC):
    @abstractmethod
    def get_access_token(self) -> str | None:
        """Current session access token, or None when not signed in."""
        raise NotImplementedError
