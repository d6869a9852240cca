"""High-level API for embedding the tangler."""

from __future__ import annotations

from .service import (
    TangleRequest,
    TangleResult,
    TangleService,
    summarise_segments,
    tangle_document,
    tangle_text,
)


__all__ = [
    "TangleRequest",
    "TangleResult",
    "TangleService",
    "summarise_segments",
    "tangle_document",
    "tangle_text",
]
