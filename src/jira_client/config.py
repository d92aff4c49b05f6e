"""Configuration helpers for the Jira client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .exceptions import ConfigurationError

API_PATH = "rest/api/2"
DEFAULT_PORT = 80
DEFAULT_TIMEOUT = 30.0


@dataclass(slots=True, frozen=True)
class ClientConfig:
    """Typed session state for `JiraClient`.

    Instances are replaced wholesale on re-initialization, never mutated.
    """

    username: str
    password: str = field(repr=False)
    host: str
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool | str = True
    default_headers: Mapping[str, str] | None = None

    @property
    def base_url(self) -> str:
        return f"{self.host.rstrip('/')}:{self.port}/{API_PATH}"

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def resolved_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Accept": "application/json",
            "Content-type": "application/json",
        }
        if self.default_headers:
            headers.update(self.default_headers)
        return headers


def validate_credentials(username: object, password: object, host: object, port: object) -> None:
    """Raise `ConfigurationError` for the first missing or invalid value."""

    for name, value in (("username", username), ("password", password), ("host", host)):
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(f"Jira {name} must be a non-empty string.")
    if isinstance(port, bool) or not isinstance(port, int) or port <= 0:
        raise ConfigurationError(f"Jira port must be a positive integer, got {port!r}.")
