"""OAuth authentication package for Claude Pro/Max subscriptions"""

import logging
from typing import Any, Dict, Optional

import httpx

from settings import ANTHROPIC_BETA
from .authorization import build_authorization_url
from .browser import URLOpener, NullOpener, default_opener
from .errors import ExchangeError, OAuthError, PersistenceError
from .flow import AuthFlowHooks, authenticate
from .models import Credential, PKCEPair
from .pkce import compute_challenge, generate_pkce
from .storage import CredentialStore
from .token_exchange import exchange_code
from .token_manager import get_valid_token, get_valid_token_async
from .token_refresh import refresh_access_token

logger = logging.getLogger(__name__)


def auth_headers(access_token: str) -> Dict[str, str]:
    """Headers for calling the Anthropic API with an OAuth Bearer token"""
    return {
        "Authorization": f"Bearer {access_token}",
        "anthropic-beta": ANTHROPIC_BETA,
    }


class ClaudeOAuthManager:
    """Public entry point for Claude OAuth credentials

    Ties together the credential store, silent refresh and the interactive
    login flow.
    """

    def __init__(
        self,
        storage: Optional[CredentialStore] = None,
        opener: Optional[URLOpener] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.storage = storage or CredentialStore()
        self.opener = opener
        self.http_client = http_client

    async def get_access_token(self) -> Optional[str]:
        """Get a valid access token, refreshing it if needed

        Returns:
            Access token, or None if not authenticated
        """
        return await get_valid_token_async(self.storage, client=self.http_client)

    def get_valid_token(self) -> Optional[str]:
        """Get a valid access token (sync version)

        Returns:
            Access token, or None if not authenticated
        """
        return get_valid_token(self.storage)

    async def is_authenticated(self) -> bool:
        return await self.get_access_token() is not None

    async def authenticate(self, hooks: Optional[AuthFlowHooks] = None) -> str:
        """Run the interactive login flow

        Args:
            hooks: Optional UI hooks

        Returns:
            Access token

        Raises:
            OAuthError: If authentication fails
        """
        return await authenticate(
            self.storage,
            hooks=hooks,
            opener=self.opener,
            client=self.http_client
        )

    async def refresh(self) -> bool:
        """Force a refresh regardless of the current expiry

        Returns:
            True if a new credential was obtained and saved
        """
        credential = self.storage.load()
        if credential is None:
            return False
        try:
            refreshed = await refresh_access_token(credential.refresh_token, client=self.http_client)
            self.storage.save(refreshed)
        except OAuthError as e:
            logger.error(f"Manual refresh failed: {e}")
            return False
        return True

    def clear_credentials(self) -> None:
        """Delete stored credentials (logout)"""
        self.storage.clear()

    def get_status(self) -> Dict[str, Any]:
        return self.storage.get_status()


__all__ = [
    "AuthFlowHooks",
    "ClaudeOAuthManager",
    "Credential",
    "CredentialStore",
    "ExchangeError",
    "NullOpener",
    "OAuthError",
    "PKCEPair",
    "PersistenceError",
    "URLOpener",
    "auth_headers",
    "authenticate",
    "build_authorization_url",
    "compute_challenge",
    "default_opener",
    "exchange_code",
    "generate_pkce",
    "get_valid_token",
    "get_valid_token_async",
    "refresh_access_token",
]
