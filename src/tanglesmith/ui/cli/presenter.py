"""Rich-aware presenters for CLI output."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
import sys

from rich import box
from rich.console import Console
from rich.table import Table
import typer

from tanglesmith.api.service import TangleResult, summarise_segments
from tanglesmith.core.segments import SegmentStore


def _get_console() -> Console | None:
    """Return a stdout console when attached to a terminal."""
    console = Console(file=sys.stdout)
    if console.is_terminal:
        return console
    return None


def _format_path(path: Path) -> str:
    """Format a path relative to the current working directory for display."""
    resolved = path.resolve()
    try:
        return str(resolved.relative_to(Path.cwd()))
    except ValueError:
        return str(resolved)


def _format_size(size: int) -> str:
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.2f} MiB"
    if size >= 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size} B"


def _render_table(title: str, columns: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    console = _get_console()
    if console is not None:
        table = Table(title=title, box=box.SQUARE, header_style="bold cyan")
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*row)
        console.print(table)
        return

    typer.echo(title)
    for row in rows:
        typer.echo("  * " + "  ".join(row))


def present_tangle_summary(result: TangleResult) -> None:
    """Display the files produced by a tangle run."""
    if not result.files:
        typer.echo("No output files declared in the document.")
        return
    title = "Resolved Files (dry run)" if not result.written else "Tangled Files"
    rows = [
        (entry.key, _format_path(entry.path), str(entry.lines), _format_size(entry.size))
        for entry in result.files
    ]
    _render_table(title, ("File", "Location", "Lines", "Size"), rows)


def present_store_overview(store: SegmentStore) -> None:
    """Display every registered file and snippet without resolving them."""
    rows = [
        (kind, key, str(origin), str(lines), ", ".join(references) or "-")
        for kind, key, origin, lines, references in summarise_segments(store)
    ]
    if not rows:
        typer.echo("No annotated regions found.")
    else:
        _render_table(
            "Registered Regions", ("Kind", "Key", "Line", "Lines", "References"), rows
        )
    orphans = store.orphans()
    if orphans:
        origins = ", ".join(str(segment.origin) for segment in orphans)
        typer.echo(f"Unreachable regions at lines: {origins}")


__all__ = ["present_store_overview", "present_tangle_summary"]
