"""Run an arbitrary command."""

from typing import Annotated

import typer

from mini_resp.app_context import use_context
from mini_resp.command import cmd
from mini_resp.commands.common import run_and_print


def exec_(ctx: typer.Context, args: Annotated[list[str], typer.Argument(help="Command name followed by its arguments")]) -> None:
    """Run a command, e.g. `mini-resp exec SET key value`."""
    app = use_context(ctx)
    command = cmd(args[0])
    for value in args[1:]:
        command = command.arg(value)
    run_and_print(app, command)
