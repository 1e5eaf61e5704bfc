"""Check that the server answers."""

import typer

from mini_resp.app_context import use_context
from mini_resp.command import cmd
from mini_resp.commands.common import run_and_print


def ping(ctx: typer.Context, message: str | None = typer.Argument(default=None, help="Optional message to echo")) -> None:
    """Send PING, optionally with a message to echo back."""
    app = use_context(ctx)
    command = cmd("PING")
    if message is not None:
        command = command.arg(message)
    run_and_print(app, command)
