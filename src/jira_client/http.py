"""HTTP utilities for Jira REST access."""

from __future__ import annotations

import json
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any

from requests import RequestException, Response, Session
from urllib3.exceptions import HTTPError as Urllib3Error

from .exceptions import TransportError, UnexpectedResponseError


@dataclass(slots=True)
class HttpResponse:
    """Raw response captured from a single round trip."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def parse_json(text: str) -> Any:
    """Decode a response body, returning None for an empty body."""

    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError as exc:
        raise UnexpectedResponseError(
            "Response did not contain valid JSON", details=text[:200]
        ) from exc


def request(
    session: Session,
    method: str,
    url: str,
    *,
    headers: MutableMapping[str, str] | None = None,
    data_payload: str | bytes | None = None,
    timeout: float | tuple[float, float] | None = None,
    verify: bool | str = True,
) -> HttpResponse:
    """Perform one blocking request and capture its status and body.

    Non-2xx statuses are returned, not raised. Transport failures, including
    URLs urllib3 rejects before any request is sent, raise `TransportError`.
    """

    try:
        response: Response = session.request(
            method=method,
            url=url,
            headers=headers,
            data=data_payload,
            timeout=timeout,
            verify=verify,
        )
    except (RequestException, Urllib3Error) as exc:
        reason = str(exc).strip() or exc.__class__.__name__
        raise TransportError(
            f"Failed to communicate with Jira API: {reason}", details=reason
        ) from exc

    return HttpResponse(
        status_code=response.status_code,
        text=response.text,
    )
