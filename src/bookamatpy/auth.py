"""Authentication for the Bookamat API."""

from abc import ABC, abstractmethod


class BaseAuth(ABC):
    """Base authentication class."""

    @abstractmethod
    def get_headers(self) -> dict[str, str]:
        """Get authentication headers for requests."""
        pass


class ApiKeyAuth(BaseAuth):
    """Authentication using a Bookamat username and API key.

    Bookamat expects ``Authorization: ApiKey <username>:<api_key>`` on every
    request, together with JSON content negotiation headers.
    """

    def __init__(self, username: str, api_key: str) -> None:
        """Initialize API key authentication.

        Args:
            username: Bookamat username
            api_key: API key generated in the Bookamat user settings
        """
        self.username = username
        self._api_key = api_key

    def __repr__(self) -> str:
        return f"ApiKeyAuth(username={self.username!r})"

    @property
    def authorization(self) -> str:
        """Value of the Authorization header."""
        return f"ApiKey {self.username}:{self._api_key}"

    def get_headers(self) -> dict[str, str]:
        """Get authentication headers."""
        return {
            "Authorization": self.authorization,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
