"""Render tangling diagnostics on the CLI console."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from tanglesmith.core.diagnostics import event_level, format_event_message

from .state import CLIState, emit_error, emit_info, emit_warning, get_cli_state


class CliEmitter:
    """Print progress events, hiding debug-level ones unless ``-v`` was given."""

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state or get_cli_state()
        self.debug_enabled = self._state.show_tracebacks

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        if event_level(name) < logging.INFO and self._state.verbosity < 1:
            return
        message = format_event_message(name, payload)
        if message:
            emit_info(message)


__all__ = ["CliEmitter"]
