"""Shared execution path for CLI commands."""

from mini_resp.app_context import AppContext
from mini_resp.command import Cmd
from mini_resp.connection import Connection
from mini_resp.errors import ClientError
from mini_resp.values import Error


def run_and_print(app: AppContext, command: Cmd) -> None:
    """Execute one command against the configured server and print the reply.

    A server error reply exits with code ``server_error``; client failures exit
    with their own code.
    """
    try:
        with Connection.open(app.cfg) as conn:
            value = command.execute(conn, bufsize=app.cfg.recv_bufsize, max_depth=app.cfg.max_depth)
    except ClientError as e:
        app.out.print_error_and_exit(e.code, str(e))
    if isinstance(value, Error):
        app.out.print_error_and_exit("server_error", value.text)
    app.out.print_value(value)
