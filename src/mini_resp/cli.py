"""CLI entry point for mini-resp."""

from pathlib import Path
from typing import Annotated

import typer
from mm_clikit import TyperPlus
from pydantic import ValidationError

from mini_resp.app_context import AppContext
from mini_resp.commands.exec_ import exec_
from mini_resp.commands.ping import ping
from mini_resp.config import Config
from mini_resp.log import setup_logging
from mini_resp.output import Output

app = TyperPlus(package_name="mini-resp")


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path.")] = None,
    host: Annotated[str | None, typer.Option("--host", help="Server host.")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Server port.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Also log to stderr.")] = False,
) -> None:
    """Minimal client for RESP key-value servers."""
    out = Output(json_mode=json_output)
    try:
        cfg = Config.build(data_dir, host=host, port=port)
    except ValidationError as e:
        out.print_error_and_exit("invalid_config", str(e))
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
    setup_logging(cfg.log_path, verbose=verbose)
    ctx.obj = AppContext(out=out, cfg=cfg)


# server arguments may start with "-"
app.command("exec", aliases=["x"], context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})(
    exec_
)
app.command()(ping)
