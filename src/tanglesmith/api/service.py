"""Tangle orchestration utilities for CLI and embedding integrations."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tanglesmith.core.config import TangleConfig
from tanglesmith.core.diagnostics import DiagnosticEmitter, ensure_emitter
from tanglesmith.core.documents import read_document, split_document
from tanglesmith.core.materializer import FileMaterializer, MaterializedFile
from tanglesmith.core.resolver import SnippetResolver
from tanglesmith.core.scanner import scan_document
from tanglesmith.core.segments import SegmentKind, SegmentStore


__all__ = [
    "TangleRequest",
    "TangleResult",
    "TangleService",
    "summarise_segments",
    "tangle_document",
    "tangle_text",
]


@dataclass(slots=True)
class TangleRequest:
    """Description of a single tangle run."""

    document: Path | None = None
    text: str | None = None
    config: TangleConfig = field(default_factory=TangleConfig)
    emitter: DiagnosticEmitter | None = None

    def lines(self) -> list[str]:
        if self.text is not None:
            return split_document(self.text)
        if self.document is None:
            raise ValueError("A tangle request needs either a document path or text.")
        return read_document(self.document, encoding=self.config.encoding)


@dataclass(slots=True)
class TangleResult:
    """Outcome of a tangle run."""

    store: SegmentStore
    files: list[MaterializedFile] = field(default_factory=list)
    document: Path | None = None

    @property
    def snippets(self) -> list[str]:
        return self.store.keys(SegmentKind.SNIPPET)

    @property
    def written(self) -> list[Path]:
        return [entry.path for entry in self.files if entry.written]


class TangleService:
    """Run the scan and materialization stages for a request."""

    def scan(self, request: TangleRequest) -> SegmentStore:
        """Read and scan the requested document without writing anything."""
        emitter = ensure_emitter(request.emitter)
        return scan_document(request.lines(), emitter=emitter, strict=request.config.strict)

    def tangle(self, request: TangleRequest) -> TangleResult:
        store = self.scan(request)
        materializer = FileMaterializer(
            store,
            resolver=SnippetResolver(store),
            output_dir=request.config.output_dir,
            encoding=request.config.encoding,
            dry_run=request.config.dry_run,
            emitter=ensure_emitter(request.emitter),
        )
        files = materializer.materialize()
        return TangleResult(store=store, files=files, document=request.document)


def _build_request(
    *,
    document: Path | None = None,
    text: str | None = None,
    config: TangleConfig | None = None,
    emitter: DiagnosticEmitter | None = None,
    options: dict[str, Any],
) -> TangleRequest:
    base = config or TangleConfig()
    return TangleRequest(
        document=document, text=text, config=base.merged(**options), emitter=emitter
    )


def tangle_document(
    path: Path | str,
    *,
    config: TangleConfig | None = None,
    emitter: DiagnosticEmitter | None = None,
    **options: Any,
) -> TangleResult:
    """Tangle the document at ``path``; keyword options override ``config`` fields."""
    request = _build_request(
        document=Path(path), config=config, emitter=emitter, options=options
    )
    return TangleService().tangle(request)


def tangle_text(
    text: str,
    *,
    config: TangleConfig | None = None,
    emitter: DiagnosticEmitter | None = None,
    **options: Any,
) -> TangleResult:
    """Tangle an in-memory document."""
    request = _build_request(text=text, config=config, emitter=emitter, options=options)
    return TangleService().tangle(request)


def summarise_segments(store: SegmentStore) -> Sequence[tuple[str, str, int, int, tuple[str, ...]]]:
    """Return ``(kind, key, origin, lines, references)`` rows for every registered key.

    ``references`` lists the snippet names the segment includes directly.
    """
    resolver = SnippetResolver(store)
    rows: list[tuple[str, str, int, int, tuple[str, ...]]] = []
    for kind in SegmentKind:
        for key, segment in store.items(kind):
            references = tuple(resolver.references(segment))
            rows.append((kind.value, key, segment.origin, len(segment), references))
    return rows
