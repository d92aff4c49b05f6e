"""High-level Jira REST client."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .auth.basic import BasicAuth
from .config import DEFAULT_PORT, DEFAULT_TIMEOUT, ClientConfig, validate_credentials
from .exceptions import ConfigurationError, TransportError, UnexpectedResponseError
from .http import parse_json
from .http import request as http_request
from .outcomes import (
    DomainError,
    HttpStatus,
    NotInitialized,
    Outcome,
    Success,
    TransportFailure,
    UndecodableResponse,
)
from .responses import IssueResult, extract_envelope, looks_like_error_envelope, parse_response


logger = logging.getLogger(__name__)


class JiraClient:
    """Search, create and update Jira issues and inspect the last response.

    Operations never raise. Every failure is folded into the standard error
    envelope and stored as the last response, which the accessor methods
    (`is_error_response`, `get_error_collection`, ...) then inspect.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify_ssl: bool | str = True,
        default_headers: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._verify_ssl = verify_ssl
        self._default_headers = dict(default_headers) if default_headers else None
        self._session = session or requests.Session()
        self._config: ClientConfig | None = None
        self._auth: BasicAuth | None = None
        self._last_outcome: Outcome | None = None
        self._last_response: Any = None
        self._suppress_insecure_warning_if_needed()

    @classmethod
    def configured(
        cls,
        username: str,
        password: str,
        host: str,
        port: int = DEFAULT_PORT,
        **options: Any,
    ) -> JiraClient:
        """Build an initialized client or raise `ConfigurationError`."""

        validate_credentials(username, password, host, port)
        client = cls(**options)
        client.initialize(username, password, host, port)
        return client

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> JiraClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Session state ------------------------------------------------------------
    def initialize(self, username: str, password: str, host: str, port: int = DEFAULT_PORT) -> bool:
        try:
            validate_credentials(username, password, host, port)
        except ConfigurationError as exc:
            logger.warning("Jira client initialisation rejected: %s", exc)
            return False

        config = ClientConfig(
            username=username,
            password=password,
            host=host,
            port=port,
            timeout=self._timeout,
            verify_ssl=self._verify_ssl,
            default_headers=self._default_headers,
        )
        self._config = config
        self._auth = BasicAuth.from_config(config)
        logger.debug("Jira client initialised for %s as %s", config.base_url, username)
        return True

    @property
    def initialized(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> ClientConfig | None:
        return self._config

    # Public API --------------------------------------------------------------
    def search(self, jql: str | None = None) -> Any:
        body = json.dumps({"jql": jql})
        return self._execute("GET", "search", body)

    def create(self, fields: Mapping[str, Any]) -> Any:
        return self._execute("POST", "issue", self._fields_body(fields))

    def update(self, issue_key: str, fields: Mapping[str, Any]) -> Any:
        return self._execute("PUT", f"issue/{issue_key}", self._fields_body(fields))

    def close(self) -> None:
        self._session.close()

    # Response accessors ------------------------------------------------------
    @property
    def last_response(self) -> Any:
        return self._last_response

    @property
    def last_outcome(self) -> Outcome | None:
        return self._last_outcome

    def is_error_response(self) -> bool:
        return not isinstance(parse_response(self._last_response), IssueResult)

    def has_error_messages(self) -> bool:
        return extract_envelope(self._last_response).present

    def get_error_collection(self) -> list[str]:
        return extract_envelope(self._last_response).collection()

    def get_response_field(self, name: str = "", default: Any = None) -> Any:
        parsed = parse_response(self._last_response)
        if not isinstance(parsed, IssueResult):
            return default
        if not name:
            return dict(parsed.fields)
        return parsed.fields.get(name, default)

    # Internal helpers -------------------------------------------------------
    @staticmethod
    def _fields_body(fields: Mapping[str, Any]) -> str:
        # Collapse escaped backslashes so pre-escaped field values are not doubled.
        return json.dumps({"fields": dict(fields)}).replace("\\\\", "\\")

    def _execute(self, method: str, path: str, body: str) -> Any:
        outcome = self._perform(method, path, body)
        self._last_outcome = outcome
        self._last_response = outcome.payload_or_envelope()
        return self._last_response

    def _perform(self, method: str, path: str, body: str) -> Outcome:
        config = self._config
        if config is None or self._auth is None:
            logger.warning("Jira %s %s skipped: client not initialised", method, path)
            return NotInitialized()

        url = config.url_for(path)
        headers = config.resolved_headers()
        self._auth.apply(headers)
        self._log_request(method, url, body)

        try:
            response = http_request(
                self._session,
                method,
                url,
                headers=headers,
                data_payload=body.encode("utf-8"),
                timeout=config.timeout,
                verify=config.verify_ssl,
            )
        except TransportError as exc:
            logger.warning("Jira %s %s failed: %s", method, url, exc.details)
            return TransportFailure(reason=str(exc.details))

        if not response.ok:
            outcome = HttpStatus(status_code=response.status_code)
            logger.warning(
                "Jira %s %s returned %s: %s", method, url, response.status_code, outcome.message
            )
            return outcome

        try:
            payload = parse_json(response.text)
        except UnexpectedResponseError:
            logger.warning(
                "Jira %s %s returned %s with an undecodable body",
                method,
                url,
                response.status_code,
            )
            return UndecodableResponse(status_code=response.status_code)

        if looks_like_error_envelope(payload):
            return DomainError(envelope=payload)
        return Success(payload=payload)

    def _log_request(self, method: str, url: str, body: str) -> None:
        logger.info("Jira request %s %s", method.upper(), url)
        logger.debug("Jira request body: %s", body)

    def _suppress_insecure_warning_if_needed(self) -> None:
        if isinstance(self._verify_ssl, bool) and not self._verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)
