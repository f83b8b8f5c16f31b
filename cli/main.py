"""CLI entry point and argument parsing"""

import argparse
import asyncio
import sys
from rich.console import Console

import settings
from auth_cli import CLIAuthFlow
from claude_oauth import ClaudeOAuthManager, CredentialStore, OAuthError
from cli.status_display import get_auth_status, show_token_status
from utils.debug_console import configure_logging, create_debug_console


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Claude Pro/Max OAuth credential manager")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--credentials-file",
        default=None,
        help="Override credential file path (default: from config)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("login", help="Authenticate in the browser (no-op if already authenticated)")
    subparsers.add_parser("status", help="Show stored credential status")
    subparsers.add_parser("token", help="Print a valid access token, refreshing if needed")
    subparsers.add_parser("refresh", help="Force a token refresh")
    subparsers.add_parser("logout", help="Delete stored credentials")
    return parser


async def run_command(args: argparse.Namespace, oauth: ClaudeOAuthManager, console: Console) -> int:
    """Dispatch a parsed command; returns the process exit code"""
    if args.command == "login":
        ok = await CLIAuthFlow(oauth, console).authenticate()
        return 0 if ok else 1

    if args.command == "status":
        show_token_status(oauth.storage, console)
        state, detail = get_auth_status(oauth.storage)
        console.print(f"\n[bold]{state}[/bold] - {detail}")
        return 0

    if args.command == "token":
        token = await oauth.get_access_token()
        if token is None:
            console.print("[red]Not authenticated.[/red] Run 'login' first.")
            return 1
        # Plain stdout so the token can be captured by scripts
        print(token)
        return 0

    if args.command == "refresh":
        ok = await CLIAuthFlow(oauth, console).refresh_token()
        return 0 if ok else 1

    if args.command == "logout":
        oauth.clear_credentials()
        console.print("[green][OK][/green] Stored credentials cleared")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None):
    """Entry point for the CLI"""
    args = build_parser().parse_args(argv)

    debug_logger = configure_logging(settings.LOG_LEVEL, args.debug, settings.DEBUG_LOG_FILE)
    console = create_debug_console(debug_enabled=args.debug, debug_logger=debug_logger)

    oauth = ClaudeOAuthManager(storage=CredentialStore(args.credentials_file))

    try:
        exit_code = asyncio.run(run_command(args, oauth, console))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        exit_code = 130
    except OAuthError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
