"""OAuth authorization URL construction"""

from urllib.parse import urlencode

from settings import AUTHORIZE_URL, CLIENT_ID, CODE_CHALLENGE_METHOD, REDIRECT_URI, SCOPES
from .models import PKCEPair


def build_authorization_url(pkce: PKCEPair) -> str:
    """Construct the claude.ai consent URL for a PKCE pair

    The verifier doubles as ``state`` so it comes back with the pasted code.

    Args:
        pkce: PKCE pair for this login attempt

    Returns:
        Full authorization URL
    """
    params = {
        "code": "true",  # makes the callback page display the code for pasting
        "client_id": CLIENT_ID,
        "response_type": "code",
        "redirect_uri": REDIRECT_URI,
        "scope": SCOPES,
        "code_challenge": pkce.challenge,
        "code_challenge_method": CODE_CHALLENGE_METHOD,
        "state": pkce.verifier
    }

    return f"{AUTHORIZE_URL}?{urlencode(params)}"
