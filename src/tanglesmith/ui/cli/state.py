"""Per-invocation CLI settings and stderr diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
import sys

import click
from rich.console import Console
from rich.text import Text


__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_info",
    "emit_warning",
    "get_cli_state",
    "set_cli_state",
]


@dataclass(slots=True)
class CLIState:
    """Verbosity and traceback settings shared by the commands of one invocation."""

    verbosity: int = 0
    show_tracebacks: bool = False
    _console: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        """Return the stderr console, rebuilt when ``sys.stderr`` was swapped."""
        if self._console is None or self._console.file is not sys.stderr:
            self._console = Console(file=sys.stderr, highlight=False)
        return self._console


def get_cli_state(ctx: click.Context | None = None) -> CLIState:
    """Return the state stored on the active Click context.

    Outside of a command invocation a default state is returned.
    """
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is None:
        return CLIState()
    return ctx.find_root().ensure_object(CLIState)


def set_cli_state(
    ctx: click.Context | None = None,
    *,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def debug_enabled() -> bool:
    return get_cli_state().show_tracebacks


def _causes(exc: BaseException) -> list[BaseException]:
    causes: list[BaseException] = []
    current = exc.__cause__
    while current is not None and current not in causes:
        causes.append(current)
        current = current.__cause__
    return causes


def _render(level: str, style: str, message: str, exception: BaseException | None) -> None:
    state = get_cli_state()
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None and state.verbosity >= 1:
        text.append(f"\n  ({type(exception).__name__})", style="dim")
        for cause in _causes(exception):
            text.append(f"\n  caused by {type(cause).__name__}: {cause}", style="dim")
    state.console.print(text)


def emit_info(message: str) -> None:
    """Print a progress line."""
    get_cli_state().console.print(message, markup=False, style="dim")


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    _render("warning", "yellow", message, exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    """Print an error; with ``-v`` the exception type and its causes follow."""
    _render("error", "red", message, exception)
