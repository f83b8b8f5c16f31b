"""Exceptions raised by the Claude OAuth flow"""

from typing import Optional


class OAuthError(Exception):
    """Base class for Claude OAuth failures"""


class ExchangeError(OAuthError):
    """The token endpoint rejected a request or returned an unusable response

    Attributes:
        status_code: HTTP status code, or None for transport/decode failures
        status_text: HTTP reason phrase reported by the endpoint
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text


class PersistenceError(OAuthError):
    """Credentials could not be written to disk"""
