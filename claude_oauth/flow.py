"""Interactive OAuth login flow"""

import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import httpx

from .authorization import build_authorization_url
from .browser import URLOpener, default_opener
from .errors import OAuthError
from .pkce import generate_pkce
from .storage import CredentialStore
from .token_exchange import exchange_code
from .token_manager import get_valid_token_async

logger = logging.getLogger(__name__)


@dataclass
class AuthFlowHooks:
    """Optional hooks for embedding the login flow in a UI

    Attributes:
        on_auth_url_ready: Called with the authorization URL
        prompt_for_code: Awaited to obtain the pasted "CODE#STATE" string
        on_success: Called after credentials are saved
        on_error: Called with the exception before it propagates
    """
    on_auth_url_ready: Optional[Callable[[str], None]] = None
    prompt_for_code: Optional[Callable[[], Awaitable[str]]] = None
    on_success: Optional[Callable[[], None]] = None
    on_error: Optional[Callable[[Exception], None]] = None


def _print_auth_url(url: str) -> None:
    print("\nTo authenticate, visit:")
    print(url)
    print("\nPaste the authorization code below:")


async def _read_code_from_stdin() -> str:
    line = await asyncio.to_thread(sys.stdin.readline)
    return line.strip()


async def authenticate(
    storage: CredentialStore,
    hooks: Optional[AuthFlowHooks] = None,
    opener: Optional[URLOpener] = None,
    client: Optional[httpx.AsyncClient] = None
) -> str:
    """Run the login flow and return a valid access token

    Returns the current token straight away when already authenticated.
    Waits for the code without a timeout; wrap in asyncio.wait_for to bound it.

    Args:
        storage: Credential storage instance
        hooks: Optional UI hooks (console defaults when unset)
        opener: Browser opener (default: chosen for this platform)
        client: Optional shared HTTP client

    Returns:
        Access token

    Raises:
        OAuthError: If the code is missing, the exchange fails or saving fails
    """
    existing = await get_valid_token_async(storage, client=client)
    if existing:
        logger.debug("Already authenticated, skipping login flow")
        return existing

    hooks = hooks or AuthFlowHooks()
    opener = opener or default_opener()

    pkce = generate_pkce()
    auth_url = build_authorization_url(pkce)

    if not await opener.open(auth_url):
        logger.info("Browser not opened; the authorization URL must be visited manually")

    if hooks.on_auth_url_ready:
        hooks.on_auth_url_ready(auth_url)
    else:
        _print_auth_url(auth_url)

    if hooks.prompt_for_code:
        code = await hooks.prompt_for_code()
    else:
        code = await _read_code_from_stdin()

    try:
        if not code or not code.strip():
            raise OAuthError("No authorization code provided")
        credential = await exchange_code(code, pkce.verifier, client=client)
        storage.save(credential)
    except OAuthError as e:
        logger.error(f"Authentication failed: {e}")
        if hooks.on_error:
            hooks.on_error(e)
        raise

    logger.info("Authentication complete with OAuth Bearer tokens")
    if hooks.on_success:
        hooks.on_success()

    return credential.access_token
