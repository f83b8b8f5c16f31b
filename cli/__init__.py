"""CLI package for Claude Max Auth

Command-line interface for logging in, inspecting and clearing the stored
Claude Pro/Max OAuth credentials.
"""

from cli.main import main

__all__ = [
    "main",
]
