"""Environment-backed settings for Claude Max Auth

A process environment variable beats a value from `.env`, which beats the
default passed to `ConfigLoader.get`.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _parse_bool(raw: str) -> bool:
    return raw.lower() in ('true', '1', 'yes')


# bool first: it is an int subclass
_PARSERS: Dict[type, Callable[[str], Any]] = {
    bool: _parse_bool,
    int: int,
    float: float,
}


class ConfigLoader:
    """Reads typed settings from the environment, seeded from a .env file"""

    def __init__(self, env_path: Optional[str] = None):
        """
        Args:
            env_path: .env file to seed os.environ from (default: ./.env)
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        if self.env_path.exists():
            # existing environment variables are not overridden
            load_dotenv(dotenv_path=self.env_path)
            logger.debug(f"Loaded settings from {self.env_path}")
        else:
            logger.debug(f"No .env at {self.env_path}")

    def get(self, env_var: str, default: Any) -> Any:
        """Look up a setting, converted to the type of its default

        Args:
            env_var: Environment variable name
            default: Value used when the variable is unset or unparseable

        Returns:
            Parsed value; strings starting with ~/ are expanded
        """
        raw = os.getenv(env_var)
        if raw is None:
            return self._expand_path(default)

        for kind, parse in _PARSERS.items():
            if isinstance(default, kind):
                try:
                    return parse(raw)
                except ValueError:
                    logger.warning(f"{env_var}={raw!r} is not a valid {kind.__name__}, using {default!r}")
                    return default

        return self._expand_path(raw)

    @staticmethod
    def _expand_path(value: Any) -> Any:
        if isinstance(value, str) and value.startswith("~/"):
            return str(Path(value).expanduser())
        return value


_config_loader: Optional[ConfigLoader] = None


def get_config_loader() -> ConfigLoader:
    """Process-wide ConfigLoader, created on first use"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader
