"""Shared utilities package for claude-max-auth"""

from .debug_console import (
    DebugCapturingConsole,
    configure_logging,
    create_debug_console,
    setup_debug_logger,
)

__all__ = [
    "DebugCapturingConsole",
    "configure_logging",
    "create_debug_console",
    "setup_debug_logger",
]
