"""Core tangling engine: scanning, indexing, resolution and materialization."""

from __future__ import annotations

from .config import TangleConfig, load_config
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .documents import read_document, split_document
from .exceptions import (
    ConfigError,
    CyclicReferenceError,
    MalformedDocumentError,
    ResolutionError,
    ScannerInvariantError,
    TangleError,
    UndefinedSnippetError,
    UnterminatedFenceError,
)
from .materializer import FileMaterializer, MaterializedFile
from .metadata import SegmentMetadata, parse_metadata_line
from .resolver import SnippetResolver, reference_name
from .scanner import FenceScanner, ScanState, scan_document, step
from .segments import Segment, SegmentKind, SegmentStore


__all__ = [
    "ConfigError",
    "CyclicReferenceError",
    "DiagnosticEmitter",
    "FenceScanner",
    "FileMaterializer",
    "LoggingEmitter",
    "MalformedDocumentError",
    "MaterializedFile",
    "ResolutionError",
    "ScanState",
    "ScannerInvariantError",
    "Segment",
    "SegmentKind",
    "SegmentMetadata",
    "SegmentStore",
    "SnippetResolver",
    "TangleConfig",
    "TangleError",
    "UndefinedSnippetError",
    "UnterminatedFenceError",
    "load_config",
    "parse_metadata_line",
    "read_document",
    "reference_name",
    "scan_document",
    "split_document",
    "step",
]
