"""Structural views over decoded Jira payloads."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class IssueResult:
    """A payload carrying both `id` and `key`."""

    fields: Mapping[str, Any]

    @property
    def key(self) -> Any:
        return self.fields.get("key")

    @property
    def id(self) -> Any:
        return self.fields.get("id")


@dataclass(frozen=True, slots=True)
class ErrorEnvelope:
    """Anything that is not an issue, with whatever error details it carries.

    `present` is True when the payload was a mapping with a non-null
    `errorMessages` or `errors` key, even if neither had the expected shape.
    """

    error_messages: tuple[str, ...] = ()
    errors: Mapping[str, Any] = field(default_factory=dict)
    present: bool = False

    def collection(self) -> list[str]:
        if not self.present:
            return []
        return [*self.error_messages, *self.errors.values()]


ParsedResponse = Union[IssueResult, ErrorEnvelope]


def parse_response(payload: Any) -> ParsedResponse:
    """Classify a decoded payload as an issue or an error envelope."""

    if not isinstance(payload, Mapping):
        return ErrorEnvelope()
    if payload.get("id") is not None and payload.get("key") is not None:
        return IssueResult(fields=payload)
    return extract_envelope(payload)


def extract_envelope(payload: Any) -> ErrorEnvelope:
    """Pull `errorMessages` and `errors` out of any payload, issue-shaped or not."""

    if not isinstance(payload, Mapping):
        return ErrorEnvelope()
    raw_messages = payload.get("errorMessages")
    raw_errors = payload.get("errors")
    messages: tuple[str, ...] = ()
    if isinstance(raw_messages, list):
        messages = tuple(raw_messages)
    errors: Mapping[str, Any] = {}
    if isinstance(raw_errors, Mapping):
        errors = dict(raw_errors)
    return ErrorEnvelope(
        error_messages=messages,
        errors=errors,
        present=raw_messages is not None or raw_errors is not None,
    )


def looks_like_error_envelope(payload: Any) -> bool:
    """True for a mapping without issue identity that carries error keys."""

    parsed = parse_response(payload)
    return isinstance(parsed, ErrorEnvelope) and parsed.present
