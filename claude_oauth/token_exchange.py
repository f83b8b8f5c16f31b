"""OAuth token exchange functionality"""

import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from settings import CLIENT_ID, REDIRECT_URI, TOKEN_REQUEST_TIMEOUT, TOKEN_URL
from .errors import ExchangeError
from .models import Credential, current_time_ms

logger = logging.getLogger(__name__)


def split_authorization_code(code: str) -> Tuple[str, Optional[str]]:
    """Split a pasted authorization code into code and state

    The callback page shows the code as "CODE#STATE".

    Args:
        code: Code as pasted by the user

    Returns:
        Tuple of (authorization_code, state); state is None if absent
    """
    actual_code, sep, state = code.strip().partition("#")
    return actual_code, (state if sep else None)


async def _post(client: httpx.AsyncClient, payload: Dict[str, Any]) -> Dict[str, Any]:
    grant_type = payload.get("grant_type")
    try:
        response = await client.post(
            TOKEN_URL,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=TOKEN_REQUEST_TIMEOUT
        )
    except httpx.RequestError as e:
        raise ExchangeError(f"Token request ({grant_type}) failed: {e}") from e

    if not response.is_success:
        logger.debug(f"Token endpoint error body: {response.text}")
        raise ExchangeError(
            f"Token request ({grant_type}) failed: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
            status_text=response.reason_phrase
        )

    try:
        return response.json()
    except ValueError as e:
        raise ExchangeError(f"Token response ({grant_type}) is not valid JSON: {e}") from e


async def post_token_request(
    payload: Dict[str, Any],
    client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Any]:
    """POST a grant to the token endpoint once, without retries

    Args:
        payload: JSON body for the grant
        client: Optional shared client; a short-lived one is created otherwise

    Returns:
        Decoded JSON response

    Raises:
        ExchangeError: On transport failure, non-success status or invalid JSON
    """
    if client is not None:
        return await _post(client, payload)

    async with httpx.AsyncClient() as owned_client:
        return await _post(owned_client, payload)


async def exchange_code(
    code: str,
    verifier: str,
    client: Optional[httpx.AsyncClient] = None
) -> Credential:
    """Exchange authorization code for tokens

    Args:
        code: Authorization code from the callback page ("CODE#STATE")
        verifier: PKCE verifier generated for this login attempt
        client: Optional shared HTTP client

    Returns:
        New Credential

    Raises:
        ExchangeError: If token exchange fails
    """
    actual_code, state = split_authorization_code(code)

    # The authorization URL sends the verifier as state
    if not state:
        state = verifier

    token_data = await post_token_request(
        {
            "code": actual_code,
            "state": state,
            "grant_type": "authorization_code",
            "client_id": CLIENT_ID,
            "redirect_uri": REDIRECT_URI,
            "code_verifier": verifier
        },
        client=client
    )

    credential = Credential.from_token_response(token_data, current_time_ms())
    logger.info("OAuth tokens obtained from authorization code")
    return credential
