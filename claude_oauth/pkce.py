"""PKCE (Proof Key for Code Exchange) generation"""

import base64
import hashlib
import secrets

from .models import PKCEPair

# 32 bytes = 256 bits of entropy, 43 chars once encoded
VERIFIER_BYTES = 32


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode('utf-8').rstrip('=')


def compute_challenge(verifier: str) -> str:
    """Derive the S256 code_challenge for a code_verifier

    Args:
        verifier: PKCE code verifier

    Returns:
        Unpadded base64url SHA-256 digest of the verifier
    """
    return _b64url(hashlib.sha256(verifier.encode('utf-8')).digest())


def generate_pkce() -> PKCEPair:
    """Generate a fresh PKCE code verifier and challenge

    Returns:
        New PKCEPair; nothing is cached between calls
    """
    verifier = _b64url(secrets.token_bytes(VERIFIER_BYTES))
    return PKCEPair(verifier=verifier, challenge=compute_challenge(verifier))
