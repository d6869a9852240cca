"""Custom exception hierarchy for the tangling pipeline."""

from __future__ import annotations

from collections.abc import Sequence


class TangleError(RuntimeError):
    """Base exception for tangling failures caused by the input document."""


class ConfigError(TangleError):
    """Raised when a configuration file cannot be loaded or validated."""


class MalformedDocumentError(TangleError):
    """Raised when the document structure cannot be tangled."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class UnterminatedFenceError(MalformedDocumentError):
    """Raised when the document ends while a fenced region is still open."""

    def __init__(self, *, line: int, marker: str, state: str) -> None:
        super().__init__(
            f"fenced region opened with '{marker}' is never closed (scanner state: {state})",
            line=line,
        )
        self.marker = marker
        self.state = state


class ResolutionError(TangleError):
    """Base exception for snippet expansion failures."""

    def __init__(self, message: str, *, chain: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.chain = tuple(chain)


class UndefinedSnippetError(ResolutionError):
    """Raised when a snippet reference names a snippet that was never declared."""

    def __init__(
        self,
        name: str,
        *,
        origin: int | None = None,
        offset: int | None = None,
        chain: Sequence[str] = (),
    ) -> None:
        location = ""
        if origin is not None:
            location = f" in region opened at line {origin}"
            if offset is not None:
                location += f" (content line {offset})"
        super().__init__(f"undefined snippet '{name}' referenced{location}", chain=chain)
        self.name = name
        self.origin = origin
        self.offset = offset


class CyclicReferenceError(ResolutionError):
    """Raised when a snippet includes itself directly or transitively."""

    def __init__(self, name: str, *, chain: Sequence[str]) -> None:
        cycle = " -> ".join([*chain, name])
        super().__init__(f"cyclic snippet reference: {cycle}", chain=chain)
        self.name = name


class ScannerInvariantError(AssertionError):
    """Raised when the fence scanner reaches a state it has no transition for."""


__all__ = [
    "ConfigError",
    "CyclicReferenceError",
    "MalformedDocumentError",
    "ResolutionError",
    "ScannerInvariantError",
    "TangleError",
    "UndefinedSnippetError",
    "UnterminatedFenceError",
]
