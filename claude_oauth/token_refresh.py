"""OAuth token refresh functionality"""

import logging
from typing import Optional

import httpx

from settings import CLIENT_ID
from .errors import ExchangeError
from .models import Credential, current_time_ms
from .token_exchange import post_token_request

logger = logging.getLogger(__name__)


async def refresh_access_token(
    refresh_token: str,
    client: Optional[httpx.AsyncClient] = None
) -> Credential:
    """Mint a new access token from a refresh token

    A rotated refresh token in the response replaces the old one.

    Args:
        refresh_token: Refresh token from the stored credential
        client: Optional shared HTTP client

    Returns:
        New Credential

    Raises:
        ExchangeError: If refresh fails
    """
    if not refresh_token:
        raise ExchangeError("No refresh token available for refresh")

    logger.info("Attempting to refresh OAuth tokens...")
    token_data = await post_token_request(
        {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": CLIENT_ID
        },
        client=client
    )

    credential = Credential.from_token_response(
        token_data,
        current_time_ms(),
        fallback_refresh_token=refresh_token
    )
    if credential.refresh_token != refresh_token:
        logger.debug("Refresh token was rotated")

    logger.info("Successfully refreshed OAuth tokens")
    return credential
