"""Diagnostic abstractions shared across the tangling pipeline."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)

EVENT_LEVELS: dict[str, int] = {
    "segment_registered": logging.INFO,
    "file_written": logging.INFO,
    "region_untracked": logging.DEBUG,
}


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class LoggingEmitter:
    """Report scanner and materializer progress through ``logging``.

    Exception tracebacks are attached only when ``debug_enabled`` is set.
    """

    def __init__(
        self, logger_obj: logging.Logger | None = None, *, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.warning(message, exc_info=self._exc_info(exc))

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.error(message, exc_info=self._exc_info(exc))

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload) or f"{name}: {dict(payload)}"
        self._logger.log(event_level(name), message)

    def _exc_info(self, exc: BaseException | None) -> BaseException | None:
        return exc if self.debug_enabled else None


def ensure_emitter(emitter: DiagnosticEmitter | None) -> DiagnosticEmitter:
    """Return ``emitter``, or a :class:`LoggingEmitter` when none was given."""
    return emitter if emitter is not None else LoggingEmitter()


def event_level(name: str) -> int:
    """Return the logging level an event is reported at."""
    return EVENT_LEVELS.get(name, logging.DEBUG)


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "segment_registered":
        line = data.get("line")
        keys: list[str] = []
        if data.get("filename"):
            keys.append(f"file '{data['filename']}'")
        if data.get("name"):
            keys.append(f"snippet '{data['name']}'")
        target = " and ".join(keys) if keys else "no file or snippet (orphan)"
        return f"Found region at line {line}: {target}"

    if name == "file_written":
        path = data.get("path") or "<unknown>"
        lines = data.get("lines")
        suffix = f" ({lines} lines)" if lines is not None else ""
        if data.get("dry_run"):
            return f"Would write: {path}{suffix}"
        return f"Wrote: {path}{suffix}"

    if name == "region_untracked":
        return f"Skipping untracked region at line {data.get('line')}"

    return None


__all__ = [
    "EVENT_LEVELS",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "ensure_emitter",
    "event_level",
    "format_event_message",
]
