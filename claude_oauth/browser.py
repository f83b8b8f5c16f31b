"""Opening URLs in the user's browser

Each platform gets its own opener; ``default_opener`` picks one once at
startup. Failures are logged and reported as False, never raised, since the
user can always copy the URL by hand.
"""

import asyncio
import logging
import os
import sys
import webbrowser
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)


class URLOpener(Protocol):
    """Something that can show a URL to the user"""

    async def open(self, url: str) -> bool:
        ...


class CommandOpener:
    """Opens URLs by launching a platform command"""

    command: List[str] = []

    async def open(self, url: str) -> bool:
        try:
            process = await asyncio.create_subprocess_exec(
                *self.command, url,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL
            )
            returncode = await process.wait()
        except OSError as e:
            logger.warning(f"Could not launch {self.command[0]}: {e}")
            return False

        if returncode != 0:
            logger.warning(f"{self.command[0]} exited with status {returncode}")
            return False
        return True


class MacOSOpener(CommandOpener):
    command = ["open"]


class LinuxOpener(CommandOpener):
    command = ["xdg-open"]


class WindowsOpener:
    """Hands the URL to the shell's registered handler"""

    async def open(self, url: str) -> bool:
        # os.startfile avoids cmd.exe treating '&' in the query as a separator
        try:
            await asyncio.to_thread(os.startfile, url)
        except OSError as e:
            logger.warning(f"Could not open browser: {e}")
            return False
        return True


class WebbrowserOpener:
    """Generic fallback through the webbrowser module"""

    async def open(self, url: str) -> bool:
        try:
            return await asyncio.to_thread(webbrowser.open, url)
        except webbrowser.Error as e:
            logger.warning(f"Could not open browser: {e}")
            return False


class NullOpener:
    """Never opens anything; for headless runs and tests"""

    async def open(self, url: str) -> bool:
        return False


def default_opener(platform: Optional[str] = None) -> URLOpener:
    """Select the opener for the current platform

    Args:
        platform: Platform string as in sys.platform (default: current)

    Returns:
        URLOpener implementation
    """
    platform = platform or sys.platform
    if platform == "darwin":
        return MacOSOpener()
    if platform == "win32":
        return WindowsOpener()
    if platform.startswith("linux"):
        return LinuxOpener()
    return WebbrowserOpener()
