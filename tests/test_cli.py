"""Tests for the command-line interface."""

import io
import json
import sys

import pytest
from rich.console import Console

from auth_cli import CLIAuthFlow
from claude_oauth import ClaudeOAuthManager, Credential, NullOpener
from cli.main import build_parser, main, run_command
from cli.status_display import get_auth_status

from conftest import make_credential


def _console() -> Console:
    return Console(file=io.StringIO(), width=200)


def _output(console: Console) -> str:
    return console.file.getvalue()


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


@pytest.mark.asyncio
async def test_token_command_prints_token(store, capsys):
    store.save(make_credential("A", "R"))
    args = build_parser().parse_args(["token"])
    code = await run_command(args, ClaudeOAuthManager(storage=store), _console())
    assert code == 0
    assert capsys.readouterr().out.strip() == "A"


@pytest.mark.asyncio
async def test_token_command_unauthenticated(store):
    console = _console()
    args = build_parser().parse_args(["token"])
    assert await run_command(args, ClaudeOAuthManager(storage=store), console) == 1
    assert "Not authenticated" in _output(console)


@pytest.mark.asyncio
async def test_logout_without_credentials(store):
    console = _console()
    args = build_parser().parse_args(["logout"])
    assert await run_command(args, ClaudeOAuthManager(storage=store), console) == 0
    assert store.load() is None


@pytest.mark.asyncio
async def test_status_command(store):
    store.save(make_credential())
    console = _console()
    args = build_parser().parse_args(["status"])
    assert await run_command(args, ClaudeOAuthManager(storage=store), console) == 0
    assert "VALID" in _output(console)


@pytest.mark.asyncio
async def test_login_when_already_authenticated(store):
    store.save(make_credential())
    console = _console()
    oauth = ClaudeOAuthManager(storage=store, opener=NullOpener())
    args = build_parser().parse_args(["login"])
    assert await run_command(args, oauth, console) == 0
    assert "Already authenticated" in _output(console)


@pytest.mark.asyncio
async def test_refresh_command(store, token_endpoint):
    store.save(make_credential("A", "R"))
    console = _console()
    args = build_parser().parse_args(["refresh"])
    async with token_endpoint.client() as client:
        oauth = ClaudeOAuthManager(storage=store, http_client=client)
        assert await run_command(args, oauth, console) == 0
    assert store.load().access_token == "new-access"


def test_auth_status_states(store):
    assert get_auth_status(store)[0] == "NO AUTH"
    store.save(Credential("A", "R", 1))
    assert get_auth_status(store)[0] == "EXPIRED"
    store.save(make_credential())
    assert get_auth_status(store)[0] == "VALID"


def test_main_logout_exits_zero(credentials_path, monkeypatch):
    monkeypatch.setattr(sys.modules["cli.main"], "configure_logging", lambda *args, **kwargs: None)
    with pytest.raises(SystemExit) as exc_info:
        main(["--credentials-file", str(credentials_path), "logout"])
    assert exc_info.value.code == 0


class ScriptedLogin(CLIAuthFlow):
    """Answers the code prompt with a fixed code after making the endpoint succeed."""

    def __init__(self, oauth, console, token_endpoint, code="abc123#xyzstate"):
        super().__init__(oauth, console)
        self.token_endpoint = token_endpoint
        self.code = code

    async def _prompt_for_code(self) -> str:
        self.token_endpoint.respond(
            200, {"access_token": "B", "refresh_token": "R2", "expires_in": 3600}
        )
        return self.code


@pytest.mark.asyncio
async def test_login_with_dead_refresh_token_refreshes_once(store, token_endpoint):
    store.save(make_credential("A", "R", expires_in_ms=-1_000))
    token_endpoint.respond(401, {"error": "invalid_grant"})
    console = _console()

    async with token_endpoint.client() as client:
        oauth = ClaudeOAuthManager(storage=store, opener=NullOpener(), http_client=client)
        assert await ScriptedLogin(oauth, console, token_endpoint).authenticate() is True

    grant_types = [json.loads(r.content)["grant_type"] for r in token_endpoint.requests]
    assert grant_types == ["refresh_token", "authorization_code"]
    assert store.load().access_token == "B"
    assert "Already authenticated" not in _output(console)
    assert "Authentication successful" in _output(console)
