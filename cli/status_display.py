"""Status display functionality for CLI"""

from rich.table import Table
from claude_oauth import CredentialStore


def show_token_status(storage: CredentialStore, console):
    """
    Display detailed credential status

    Args:
        storage: CredentialStore instance
        console: Rich console for output
    """
    status = storage.get_status()

    table = Table(title="Credential Status")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Has Credentials", "Yes" if status["has_credentials"] else "No")
    table.add_row("Needs Refresh", "Yes" if status["is_expired"] else "No")

    if status["expires_at"]:
        table.add_row("Expires At", status["expires_at"])
        table.add_row("Time Until Expiry", status["time_until_expiry"])

    table.add_row("Credentials File", status["credentials_file"])

    console.print(table)


def get_auth_status(storage: CredentialStore) -> tuple[str, str]:
    """
    Get authentication status and expiry info

    Args:
        storage: CredentialStore instance

    Returns:
        Tuple of (status, detail_message)
    """
    status = storage.get_status()

    if not status["has_credentials"]:
        return "NO AUTH", "No credentials stored"

    if status["is_expired"]:
        return "EXPIRED", f"Needs refresh ({status['time_until_expiry']})"

    return "VALID", f"Expires in {status['time_until_expiry']}"
