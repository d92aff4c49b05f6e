"""Minimal Jira REST client entrypoints."""
from .client import JiraClient
from .config import ClientConfig
from .exceptions import ConfigurationError, JiraClientError
from .responses import ErrorEnvelope, IssueResult, parse_response

__all__ = [
    "JiraClient",
    "ClientConfig",
    "JiraClientError",
    "ConfigurationError",
    "IssueResult",
    "ErrorEnvelope",
    "parse_response",
]
