"""HTTP Basic authentication support."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field

from requests.auth import _basic_auth_str

from .base import AuthStrategy


@dataclass(slots=True)
class BasicAuth(AuthStrategy):
    """Apply HTTP Basic auth headers."""

    username: str
    password: str = field(repr=False)

    @classmethod
    def from_config(cls, config) -> BasicAuth:
        return cls(username=config.username, password=config.password)

    def apply(self, headers: MutableMapping[str, str]) -> None:
        # requests encodes str credentials as latin-1; Jira expects UTF-8.
        headers["Authorization"] = _basic_auth_str(
            self.username.encode("utf-8"), self.password.encode("utf-8")
        )
