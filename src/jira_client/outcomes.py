"""Tagged outcomes of a single Jira request and the status classification table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

NOT_INITIALISED_MESSAGE = "Jira service not properly initialised"
UNDECODABLE_MESSAGE = "Jira returned a response that could not be decoded."
TRANSPORT_MESSAGE = "Unable to reach the Jira service"

BAD_REQUEST_MESSAGE = "Bad request sent to Jira."
UNAUTHORISED_MESSAGE = "Authentication or authorisation error with Jira."
NOT_PERMITTED_MESSAGE = "That action is not permitted on Jira."
NOT_FOUND_MESSAGE = "That action does not exist on Jira."
SERVER_ERROR_MESSAGE = "Jira encountered a server error."
UNAVAILABLE_MESSAGE = "Jira service is currently unavailable."
GENERIC_MESSAGE = "There was a problem with the Jira service."

STATUS_MESSAGES: dict[int, str] = {
    400: BAD_REQUEST_MESSAGE,
    401: UNAUTHORISED_MESSAGE,
    403: NOT_PERMITTED_MESSAGE,
    405: NOT_PERMITTED_MESSAGE,
    404: NOT_FOUND_MESSAGE,
    501: NOT_FOUND_MESSAGE,
    500: SERVER_ERROR_MESSAGE,
    502: UNAVAILABLE_MESSAGE,
    503: UNAVAILABLE_MESSAGE,
    504: UNAVAILABLE_MESSAGE,
}


def classify_status(status_code: int) -> str | None:
    """Return the envelope message for a status, or None for 2xx."""

    if 200 <= status_code < 300:
        return None
    return STATUS_MESSAGES.get(status_code, GENERIC_MESSAGE)


def error_envelope(*messages: str) -> dict[str, Any]:
    return {"errorMessages": list(messages), "errors": {}}


@dataclass(frozen=True, slots=True)
class Success:
    """2xx response whose decoded body is passed through unchanged."""

    payload: Any

    def payload_or_envelope(self) -> Any:
        return self.payload


@dataclass(frozen=True, slots=True)
class DomainError:
    """2xx response whose body is itself an error envelope."""

    envelope: dict[str, Any]

    def payload_or_envelope(self) -> Any:
        return self.envelope


@dataclass(frozen=True, slots=True)
class NotInitialized:
    """Operation invoked before the client was configured."""

    def payload_or_envelope(self) -> Any:
        return error_envelope(NOT_INITIALISED_MESSAGE)


@dataclass(frozen=True, slots=True)
class TransportFailure:
    """Connection, DNS, TLS or timeout failure; no status was received."""

    reason: str

    def payload_or_envelope(self) -> Any:
        return error_envelope(f"{TRANSPORT_MESSAGE}: {self.reason}")


@dataclass(frozen=True, slots=True)
class HttpStatus:
    """Non-2xx status mapped through `STATUS_MESSAGES`."""

    status_code: int

    @property
    def message(self) -> str:
        return classify_status(self.status_code) or GENERIC_MESSAGE

    def payload_or_envelope(self) -> Any:
        return error_envelope(self.message)


@dataclass(frozen=True, slots=True)
class UndecodableResponse:
    """2xx response whose body is not valid JSON."""

    status_code: int

    def payload_or_envelope(self) -> Any:
        return error_envelope(UNDECODABLE_MESSAGE)


Outcome = Union[Success, DomainError, NotInitialized, TransportFailure, HttpStatus, UndecodableResponse]


def is_success(outcome: Outcome) -> bool:
    return isinstance(outcome, Success)


__all__ = [
    "Outcome",
    "Success",
    "DomainError",
    "NotInitialized",
    "TransportFailure",
    "HttpStatus",
    "UndecodableResponse",
    "STATUS_MESSAGES",
    "classify_status",
    "error_envelope",
    "is_success",
]
