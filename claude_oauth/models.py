"""Data models for Claude OAuth authentication"""

import math
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from settings import REFRESH_MARGIN_MS
from .errors import ExchangeError


def current_time_ms() -> int:
    """Milliseconds since the epoch"""
    return int(time.time() * 1000)


def _is_token(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _is_number(value: Any) -> bool:
    # bool is an int subclass; json also yields inf/nan for Infinity, NaN, 1e400
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass(frozen=True)
class Credential:
    """Persisted OAuth credential set

    Attributes:
        access_token: Bearer token sent on API calls
        refresh_token: Long-lived token used to mint new access tokens
        expires_at: Access token expiry in milliseconds since the epoch
    """
    access_token: str
    refresh_token: str
    expires_at: int

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Credential"]:
        """Build a Credential from stored JSON, or None if it is incomplete"""
        if not isinstance(data, dict):
            return None

        access_token = data.get("access_token")
        refresh_token = data.get("refresh_token")
        expires_at = data.get("expires_at")

        if not _is_token(access_token) or not _is_token(refresh_token):
            return None
        if not _is_number(expires_at):
            return None

        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=int(expires_at)
        )

    @classmethod
    def from_token_response(
        cls,
        payload: Any,
        received_at_ms: int,
        fallback_refresh_token: Optional[str] = None
    ) -> "Credential":
        """Map a token endpoint response onto a Credential

        The relative ``expires_in`` is anchored at ``received_at_ms``.

        Args:
            payload: Decoded JSON body from the token endpoint
            received_at_ms: Time the response was received
            fallback_refresh_token: Used when the response does not rotate the refresh token

        Returns:
            New Credential

        Raises:
            ExchangeError: If the response is missing required fields
        """
        if not isinstance(payload, dict):
            raise ExchangeError("Token response is not a JSON object")

        access_token = payload.get("access_token")
        refresh_token = payload.get("refresh_token") or fallback_refresh_token
        expires_in = payload.get("expires_in")

        if not _is_token(access_token):
            raise ExchangeError("Token response missing access_token")
        if not _is_token(refresh_token):
            raise ExchangeError("Token response missing refresh_token")
        if not _is_number(expires_in):
            raise ExchangeError("Token response missing or invalid expires_in")

        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=received_at_ms + int(expires_in * 1000)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
        }

    def is_fresh(self, now_ms: Optional[int] = None, margin_ms: int = REFRESH_MARGIN_MS) -> bool:
        """Check whether the access token outlives the safety margin"""
        if now_ms is None:
            now_ms = current_time_ms()
        return self.expires_at > now_ms + margin_ms


@dataclass(frozen=True)
class PKCEPair:
    """PKCE (Proof Key for Code Exchange) pair for one login attempt

    Attributes:
        verifier: High-entropy secret kept in memory, also sent back as state
        challenge: SHA256 of the verifier, sent in the authorization request
    """
    verifier: str
    challenge: str
