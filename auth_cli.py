import asyncio
from typing import Optional
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from claude_oauth import AuthFlowHooks, ClaudeOAuthManager, OAuthError


class CLIAuthFlow:
    """Handle OAuth authentication flow in CLI"""

    def __init__(self, oauth: ClaudeOAuthManager, console: Optional[Console] = None):
        self.oauth = oauth
        self.console = console or Console()
        self._login_started = False

    def _show_auth_url(self, auth_url: str):
        self._login_started = True
        self.console.print("\n[bold]Step 1:[/bold] Complete the login process in your browser")
        self.console.print("  1. Login to your Claude Pro/Max account if prompted")
        self.console.print("  2. Authorize the application")
        self.console.print("  3. You will see an authorization code on the Anthropic page")
        self.console.print("\nIf the browser did not open, visit this URL manually:")
        self.console.print(Panel(auth_url, border_style="cyan"), soft_wrap=True)

        self.console.print("\n[bold]Step 2:[/bold] Paste the authorization code below")
        self.console.print("[dim]The code should look like: CODE#STATE[/dim]\n")

    async def _prompt_for_code(self) -> str:
        # Prompt.ask blocks, keep it off the event loop
        code = await asyncio.to_thread(Prompt.ask, "Authorization code", console=self.console)
        return code.strip()

    def _on_success(self):
        self.console.print("[green][OK][/green] Authentication successful!")
        status = self.oauth.get_status()
        if status["expires_at"]:
            self.console.print(f"Token expires at: {status['expires_at']}")

    def _on_error(self, error: Exception):
        self.console.print(f"[red][ERROR][/red] Authentication failed: {error}")

    def hooks(self) -> AuthFlowHooks:
        return AuthFlowHooks(
            on_auth_url_ready=self._show_auth_url,
            prompt_for_code=self._prompt_for_code,
            on_success=self._on_success,
            on_error=self._on_error,
        )

    async def authenticate(self) -> bool:
        """
        Run the OAuth authentication flow
        Returns True if successful, False otherwise
        """
        # The flow returns the stored token without prompting when still valid
        self._login_started = False
        try:
            await self.oauth.authenticate(self.hooks())
        except OAuthError:
            # on_error already reported it
            retry = Prompt.ask("\nWould you like to try again?", choices=["y", "n"], default="n", console=self.console)
            if retry.lower() == "y":
                return await self.authenticate()
            return False

        if not self._login_started:
            self.console.print("[green][OK][/green] Already authenticated")
        return True

    async def refresh_token(self) -> bool:
        """
        Attempt to refresh the access token
        Returns True if successful, False otherwise
        """
        self.console.print("Refreshing access token...")

        if await self.oauth.refresh():
            self.console.print("[green][OK][/green] Token refreshed successfully")
            status = self.oauth.get_status()
            if status["expires_at"]:
                self.console.print(f"New expiry: {status['expires_at']}")
            return True

        self.console.print("[red][ERROR][/red] Token refresh failed")
        self.console.print("You may need to login again")
        return False
