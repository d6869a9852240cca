"""Write resolved file segments to disk."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
import stat
import tempfile

from .diagnostics import DiagnosticEmitter, ensure_emitter
from .resolver import SnippetResolver
from .segments import SegmentKind, SegmentStore


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MaterializedFile:
    """Summary of one output file produced by a tangle run."""

    key: str
    path: Path
    lines: int
    size: int
    origin: int
    written: bool = True


def _file_mode(target: Path) -> int:
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_output_file(target: Path, payload: bytes) -> None:
    """Replace ``target`` with ``payload`` through a staged sibling file."""
    staged: Path | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            staged = Path(handle.name)
            handle.write(payload)
        staged.chmod(_file_mode(target))
        staged.replace(target)
    except OSError as exc:
        if staged is not None:
            staged.unlink(missing_ok=True)
        raise OSError(f"Failed to write tangled output to '{target}': {exc}") from exc


class FileMaterializer:
    """Resolve every registered filename and write its content.

    Files are processed in registration order. A failure leaves files written
    earlier in the run on disk. Each file is staged next to its target and
    moved into place, so a failed write leaves the previous content intact.
    """

    def __init__(
        self,
        store: SegmentStore,
        *,
        resolver: SnippetResolver | None = None,
        output_dir: Path | None = None,
        encoding: str = "utf-8",
        dry_run: bool = False,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.store = store
        self.resolver = resolver or SnippetResolver(store)
        self.output_dir = Path(output_dir) if output_dir is not None else Path()
        self.encoding = encoding
        self.dry_run = dry_run
        self.emitter = ensure_emitter(emitter)

    def target_for(self, filename: str) -> Path:
        return self.output_dir / filename

    def materialize(self) -> list[MaterializedFile]:
        results: list[MaterializedFile] = []
        for filename, segment in self.store.items(SegmentKind.FILE):
            lines = self.resolver.resolve(segment)
            payload = "".join(lines).encode(self.encoding)
            target = self.target_for(filename)
            if not self.dry_run:
                write_output_file(target, payload)
            logger.debug("Materialized %s from region at line %d", target, segment.origin)
            result = MaterializedFile(
                key=filename,
                path=target,
                lines=len(lines),
                size=len(payload),
                origin=segment.origin,
                written=not self.dry_run,
            )
            results.append(result)
            self.emitter.event(
                "file_written",
                {
                    "path": str(target),
                    "lines": result.lines,
                    "bytes": result.size,
                    "dry_run": self.dry_run,
                },
            )
        return results


__all__ = ["FileMaterializer", "MaterializedFile", "write_output_file"]
