"""CLI application for inspecting dependency-tagged cache invalidation."""

import typer

from depcache.cli.commands.inspect import classify, plan, resolve
from depcache.cli.common.logs import configure_logging
from depcache.cli.common.options import LogLevelOpt
from depcache.core.settings import CacheSettings

app = typer.Typer(
    help="depcache - dependency-tagged cache invalidation",
    no_args_is_help=True,
)


@app.callback()
def _init(ctx: typer.Context, log_level: str | None = LogLevelOpt):
    """Load settings and configure logging once per invocation."""
    settings = CacheSettings.from_env()
    configure_logging(log_level or settings.log_level)
    ctx.obj = settings


app.command("classify")(classify)
app.command("resolve")(resolve)
app.command("plan")(plan)


if __name__ == "__main__":
    app()
