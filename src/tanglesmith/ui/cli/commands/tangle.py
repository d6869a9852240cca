"""Implementation of the `tanglesmith tangle` and `tanglesmith inspect` commands."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import typer

from tanglesmith.api.service import TangleRequest, TangleService
from tanglesmith.core.config import TangleConfig, load_config
from tanglesmith.core.exceptions import ConfigError, TangleError

from .._options import (
    ConfigOption,
    DocumentArgument,
    DryRunOption,
    EncodingOption,
    LenientOption,
    OutputDirOption,
)
from ..diagnostics import CliEmitter
from ..presenter import present_store_overview, present_tangle_summary
from ..state import debug_enabled, emit_error


_SERVICE = TangleService()


def _resolve_config(
    config_file: Path | None,
    *,
    output_dir: Path | None = None,
    dry_run: bool = False,
    lenient: bool = False,
    encoding: str | None = None,
) -> TangleConfig:
    try:
        config = load_config(config_file) if config_file is not None else TangleConfig()
        return config.merged(
            output_dir=output_dir,
            dry_run=True if dry_run else None,
            strict=False if lenient else None,
            encoding=encoding,
        )
    except ConfigError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _fail(exc: BaseException) -> typer.Exit:
    if debug_enabled():
        raise exc
    emit_error(str(exc), exception=exc)
    return typer.Exit(code=1)


def tangle(
    document: DocumentArgument,
    output_dir: OutputDirOption = None,
    config_file: ConfigOption = None,
    dry_run: DryRunOption = False,
    lenient: LenientOption = False,
    encoding: EncodingOption = None,
) -> None:
    """Extract every file declared in DOCUMENT and write it to disk."""
    config = _resolve_config(
        config_file,
        output_dir=output_dir,
        dry_run=dry_run,
        lenient=lenient,
        encoding=encoding,
    )
    request = TangleRequest(document=document, config=config, emitter=CliEmitter())
    try:
        result = _SERVICE.tangle(request)
    except (TangleError, OSError) as exc:
        raise _fail(exc) from exc
    present_tangle_summary(result)


def inspect(
    document: DocumentArgument,
    config_file: ConfigOption = None,
    lenient: LenientOption = False,
    encoding: EncodingOption = None,
) -> None:
    """List the files and snippets declared in DOCUMENT without writing anything."""
    config = _resolve_config(config_file, lenient=lenient, encoding=encoding)
    request = TangleRequest(document=document, config=config, emitter=CliEmitter())
    try:
        store = _SERVICE.scan(request)
    except (TangleError, OSError) as exc:
        raise _fail(exc) from exc
    present_store_overview(store)


__all__ = ["inspect", "tangle"]
