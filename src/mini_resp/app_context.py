"""Per-invocation state handed from the CLI callback to subcommands."""

from dataclasses import dataclass

import typer

from mini_resp.config import Config
from mini_resp.output import Output


@dataclass(frozen=True, slots=True)
class AppContext:
    """Resolved server settings and the output renderer for one CLI run."""

    out: Output
    cfg: Config


def use_context(ctx: typer.Context) -> AppContext:
    """Return the AppContext the root callback stored on ``ctx.obj``."""
    result: AppContext = ctx.obj
    return result
