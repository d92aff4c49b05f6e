"""Custom exception hierarchy for the Jira client."""
from __future__ import annotations

from typing import Any


class JiraClientError(RuntimeError):
    """Base error for Jira client failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class ConfigurationError(JiraClientError):
    """Raised when credentials, host or port are missing or invalid."""


class TransportError(JiraClientError):
    """Raised when the HTTP round trip itself cannot complete."""


class UnexpectedResponseError(JiraClientError):
    """Raised when Jira returns a body that is not valid JSON."""
