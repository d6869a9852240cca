"""Typer application wiring for the tanglesmith CLI."""

from __future__ import annotations

import typer

from tanglesmith.version import get_version

from .commands import inspect, tangle
from .state import set_cli_state


app = typer.Typer(
    help="Extract source files from literate Markdown documents.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit(code=0)


@app.callback()
def _app_root(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Print the installed version and exit.",
    ),
) -> None:
    set_cli_state(ctx, verbosity=verbose, debug=debug)


app.command(name="tangle")(tangle)
app.command(name="inspect")(inspect)


def main() -> None:
    """Console script entry point."""
    app(prog_name="tanglesmith")


__all__ = ["app", "main"]
