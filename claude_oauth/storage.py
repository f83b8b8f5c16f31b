"""Credential storage for Claude OAuth"""

import datetime
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from settings import CREDENTIALS_FILE
from .errors import PersistenceError
from .models import Credential, current_time_ms


logger = logging.getLogger(__name__)


class CredentialStore:
    """Manages the persisted credential file with owner-only permissions

    No locking is done; two processes refreshing at once may both write,
    and the later write wins.
    """

    def __init__(self, credentials_file: Optional[Union[str, Path]] = None):
        """Initialize credential storage

        Args:
            credentials_file: Path to credential file (default: settings.CREDENTIALS_FILE)
        """
        self.credentials_file = Path(credentials_file or CREDENTIALS_FILE).expanduser()

    def load(self) -> Optional[Credential]:
        """Load the stored credential

        Returns:
            Credential, or None if the file is missing, unreadable or incomplete
        """
        try:
            data = json.loads(self.credentials_file.read_text())
        except FileNotFoundError:
            logger.debug("No credential file found")
            return None
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable credential file {self.credentials_file}: {e}")
            return None

        credential = Credential.from_dict(data)
        if credential is None:
            logger.warning(f"Ignoring incomplete credential file {self.credentials_file}")
        return credential

    def save(self, credential: Credential) -> None:
        """Write the credential, replacing any previous one

        Args:
            credential: Credential to persist

        Raises:
            PersistenceError: If the file cannot be written
        """
        try:
            self.credentials_file.parent.mkdir(parents=True, exist_ok=True)
            self.credentials_file.write_text(json.dumps(credential.to_dict(), indent=2))
        except OSError as e:
            raise PersistenceError(f"Failed to save credentials to {self.credentials_file}: {e}") from e

        try:
            self.credentials_file.chmod(0o600)
        except (OSError, NotImplementedError) as e:
            logger.debug(f"Could not restrict permissions on {self.credentials_file}: {e}")

        logger.debug(f"Saved credentials to {self.credentials_file}")

    def clear(self) -> None:
        """Delete stored credentials; a missing file is not an error"""
        try:
            self.credentials_file.unlink()
            logger.info("Cleared stored credentials")
        except FileNotFoundError:
            logger.debug("No credential file to clear")

    def get_status(self) -> Dict[str, Any]:
        """Get credential status without exposing secrets

        Returns:
            Dictionary with status information
        """
        credential = self.load()
        if credential is None:
            return {
                "has_credentials": False,
                "is_expired": True,
                "expires_at": None,
                "time_until_expiry": "No credentials",
                "credentials_file": str(self.credentials_file),
            }

        now_ms = current_time_ms()
        expires_dt = datetime.datetime.fromtimestamp(credential.expires_at / 1000)
        remaining = (credential.expires_at - now_ms) // 1000

        if remaining <= 0:
            since = -remaining
            hours, mins = since // 3600, (since % 3600) // 60
            time_str = f"{hours}h {mins}m ago" if hours > 0 else f"{mins}m ago"
        else:
            hours, mins = remaining // 3600, (remaining % 3600) // 60
            time_str = f"{hours}h {mins}m" if hours > 0 else f"{mins}m"

        return {
            "has_credentials": True,
            "is_expired": not credential.is_fresh(now_ms),
            "expires_at": expires_dt.isoformat(),
            "time_until_expiry": time_str,
            "credentials_file": str(self.credentials_file),
        }
