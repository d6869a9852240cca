"""Primary public API for tanglesmith."""

from __future__ import annotations

from tanglesmith.api import (
    TangleRequest,
    TangleResult,
    TangleService,
    tangle_document,
    tangle_text,
)
from tanglesmith.core import (
    CyclicReferenceError,
    FenceScanner,
    FileMaterializer,
    MalformedDocumentError,
    Segment,
    SegmentKind,
    SegmentMetadata,
    SegmentStore,
    SnippetResolver,
    TangleConfig,
    TangleError,
    UndefinedSnippetError,
    UnterminatedFenceError,
    load_config,
    read_document,
    scan_document,
)
from tanglesmith.version import get_version


__version__ = get_version()

__all__ = [
    "CyclicReferenceError",
    "FenceScanner",
    "FileMaterializer",
    "MalformedDocumentError",
    "Segment",
    "SegmentKind",
    "SegmentMetadata",
    "SegmentStore",
    "SnippetResolver",
    "TangleConfig",
    "TangleError",
    "TangleRequest",
    "TangleResult",
    "TangleService",
    "UndefinedSnippetError",
    "UnterminatedFenceError",
    "__version__",
    "load_config",
    "read_document",
    "scan_document",
    "tangle_document",
    "tangle_text",
]
