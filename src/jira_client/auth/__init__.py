"""Authentication strategies for Jira."""
from .base import AuthStrategy
from .basic import BasicAuth

__all__ = ["AuthStrategy", "BasicAuth"]
