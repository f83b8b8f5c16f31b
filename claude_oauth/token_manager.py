"""OAuth token manager for retrieving valid tokens"""

import asyncio
import concurrent.futures
import logging
from typing import Optional

import httpx

from .errors import OAuthError
from .storage import CredentialStore
from .token_refresh import refresh_access_token

logger = logging.getLogger(__name__)


async def get_valid_token_async(
    storage: CredentialStore,
    client: Optional[httpx.AsyncClient] = None
) -> Optional[str]:
    """Get a valid OAuth token for API requests (async version)

    Returns the cached token while it outlives the refresh margin, otherwise
    refreshes and persists a new credential. Never raises: any refresh or
    save failure yields None and leaves the stale file in place.

    Args:
        storage: Credential storage instance
        client: Optional shared HTTP client

    Returns:
        Valid access token or None if not authenticated
    """
    credential = storage.load()
    if credential is None:
        logger.debug("No stored credentials")
        return None

    if credential.is_fresh():
        return credential.access_token

    logger.info("Access token expired or expiring, attempting automatic refresh...")
    try:
        refreshed = await refresh_access_token(credential.refresh_token, client=client)
        storage.save(refreshed)
    except OAuthError as e:
        logger.error(f"Failed to refresh token automatically: {e}")
        return None

    return refreshed.access_token


def get_valid_token(storage: CredentialStore) -> Optional[str]:
    """Get a valid OAuth token for API requests (sync version)

    Handles both sync and async contexts.

    Args:
        storage: Credential storage instance

    Returns:
        Valid access token or None if not authenticated
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        # No event loop running, safe to use asyncio.run
        return asyncio.run(get_valid_token_async(storage))

    # Blocking the running loop on itself would deadlock, so use a worker thread
    logger.debug("Detected running event loop, resolving token in worker thread")
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(asyncio.run, get_valid_token_async(storage))
        return future.result()
