from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

LOG_LEVEL = config.get("LOG_LEVEL", "info")

# OAuth configuration (hardcoded - not user configurable)
# Max/Pro OAuth: claude.ai for authorization, console.anthropic.com for token exchange
AUTH_BASE_AUTHORIZE = "https://claude.ai"
AUTH_BASE_TOKEN = "https://console.anthropic.com"
AUTHORIZE_URL = f"{AUTH_BASE_AUTHORIZE}/oauth/authorize"
TOKEN_URL = f"{AUTH_BASE_TOKEN}/v1/oauth/token"
CLIENT_ID = "9d1c250a-e61b-44d9-88ed-5944d1962f5e"
REDIRECT_URI = "https://console.anthropic.com/oauth/code/callback"
SCOPES = "org:create_api_key user:profile user:inference"
CODE_CHALLENGE_METHOD = "S256"

# A cached access token must outlive this margin to be returned without a refresh
REFRESH_MARGIN_MS = 60 * 1000

# Required alongside Bearer tokens on Anthropic API requests
ANTHROPIC_BETA = "oauth-2025-04-20"

# Single attempt, no retries
TOKEN_REQUEST_TIMEOUT = config.get("TOKEN_REQUEST_TIMEOUT", 30.0)

# Credential storage
CREDENTIALS_FILE = config.get("CREDENTIALS_FILE", "~/.titan/credentials/claude.json")

DEBUG_LOG_FILE = config.get("DEBUG_LOG_FILE", "auth_debug.log")
