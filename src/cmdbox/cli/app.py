"""Main CLI application for cmdbox."""

import typer
from rich.console import Console
from rich.markup import escape

from cmdbox import __version__
from cmdbox.actions import ActionContext, build_registry
from cmdbox.config import get_config
from cmdbox.exceptions import CmdBoxError
from cmdbox.utils.logging import setup_logging

app = typer.Typer(
    name="cmdbox",
    help="Personal command dispatcher.",
    add_completion=False,
)

err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        Console().print(f"cmdbox version {__version__}")
        raise typer.Exit()


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        # Everything after the first action word belongs to the action.
        "allow_interspersed_args": False,
    }
)
def run(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug output to stderr."
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level. Defaults to config setting."
    ),
    no_plugins: bool = typer.Option(
        False, "--no-plugins", help="Skip private action modules."
    ),
) -> None:
    """Run the action matching ARGS. Without arguments, list actions."""
    try:
        config = get_config()
    except CmdBoxError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None

    setup_logging(
        level="DEBUG" if verbose else (log_level or config.logging.level),
        log_file=config.logging.file,
        json_format=config.logging.json_format,
    )

    action_ctx = ActionContext.from_config(
        config, err_console=err_console, verbose=verbose
    )
    registry = build_registry(action_ctx, plugins=not no_plugins)
    raise typer.Exit(registry.dispatch(ctx.args))


def main() -> None:
    """Console script entry point."""
    app()
