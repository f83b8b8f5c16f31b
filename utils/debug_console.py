"""Logging setup and a Rich console that mirrors its output into the debug log.

When debug mode is enabled, everything the CLI prints is also written as
plain text to the debug log file so a login session can be reconstructed.
"""

import io
import logging
import os
import re
from typing import Optional
from rich.console import Console as RichConsole

# ANSI escape sequence pattern
_ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')


class DebugCapturingConsole(RichConsole):
    """
    Rich Console that also logs a plain-text copy of everything it prints.
    """

    def __init__(self, debug_logger: Optional[logging.Logger] = None, *args, **kwargs):
        """
        Initialize the debug capturing console.

        Args:
            debug_logger: Logger instance to write captured output to
            *args, **kwargs: Arguments passed to Rich Console
        """
        super().__init__(*args, **kwargs)
        self.debug_logger = debug_logger
        self._log_prefix = "[CONSOLE] "

    def print(self, *objects, **kwargs):
        super().print(*objects, **kwargs)

        if self.debug_logger and self.debug_logger.isEnabledFor(logging.DEBUG):
            plain_text = self._render_to_plain_text(*objects, **kwargs)
            if plain_text.strip():
                self.debug_logger.debug(f"{self._log_prefix}{plain_text}")

    def _render_to_plain_text(self, *objects, **kwargs) -> str:
        string_buffer = io.StringIO()
        temp_console = RichConsole(
            file=string_buffer,
            force_terminal=False,
            width=self.width,
            legacy_windows=False
        )
        temp_console.print(*objects, **kwargs)
        return _ANSI_ESCAPE.sub('', string_buffer.getvalue()).rstrip()


def create_debug_console(debug_enabled: bool = False,
                         debug_logger: Optional[logging.Logger] = None) -> RichConsole:
    """
    Create appropriate console instance based on debug mode.

    Args:
        debug_enabled: Whether debug mode is enabled
        debug_logger: Logger instance for debug output

    Returns:
        DebugCapturingConsole if debug enabled, regular Console otherwise
    """
    if debug_enabled and debug_logger:
        return DebugCapturingConsole(debug_logger=debug_logger)
    return RichConsole()


def setup_debug_logger(log_file: str) -> logging.Logger:
    """
    Set up a dedicated logger for debug console output.

    Args:
        log_file: Path to debug log file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("debug_console")
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))
    logger.addHandler(file_handler)

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger


def configure_logging(level: str = "info", debug: bool = False,
                      log_file: str = "auth_debug.log") -> Optional[logging.Logger]:
    """
    Configure root logging for the CLI.

    Args:
        level: Log level name used when debug is off
        debug: Log everything at DEBUG and append to log_file
        log_file: Debug log path

    Returns:
        Console capture logger in debug mode, otherwise None
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if not debug:
        root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
        return None

    root_logger.setLevel(logging.DEBUG)
    log_file = os.path.abspath(log_file)
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    logging.getLogger(__name__).info(f"Debug logging enabled - appending to {log_file}")
    return setup_debug_logger(log_file)
