"""Line-oriented scanner partitioning a document into annotated code regions.

A region opens on a line starting with three or four backticks or tildes. The
line right after it decides the region kind: a JSON metadata object makes the
region tracked, anything else leaves it untracked. A region closes on the first
line starting with the exact marker string that opened it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
import logging
import re

from .diagnostics import DiagnosticEmitter, ensure_emitter
from .exceptions import ScannerInvariantError, UnterminatedFenceError
from .metadata import SegmentMetadata, parse_metadata_line
from .segments import Segment, SegmentKind, SegmentStore


logger = logging.getLogger(__name__)

FENCE_OPEN = re.compile(r"`{3,4}|~{3,4}")


class ScanState(str, Enum):
    """Scanner positions relative to fenced regions."""

    OUTSIDE = "outside"
    OPENING = "opening"
    TRACKED = "tracked"
    UNTRACKED = "untracked"


class ScanAction(Enum):
    """Side effect requested by a transition."""

    SKIP = "skip"
    OPEN = "open"
    EMPTY = "empty"
    TRACK = "track"
    UNTRACK = "untrack"
    APPEND = "append"
    DISCARD = "discard"
    CLOSE = "close"


@dataclass(frozen=True, slots=True)
class Transition:
    """Outcome of feeding one line to the scanner."""

    state: ScanState
    action: ScanAction
    marker: str | None = None
    metadata: SegmentMetadata | None = None


def step(state: ScanState, marker: str | None, line: str) -> Transition:
    """Compute the transition for ``line`` without touching any store."""
    match state:
        case ScanState.OUTSIDE:
            opening = FENCE_OPEN.match(line)
            if opening is None:
                return Transition(ScanState.OUTSIDE, ScanAction.SKIP)
            return Transition(ScanState.OPENING, ScanAction.OPEN, opening.group(0))
        case ScanState.OPENING if marker:
            if line.startswith(marker):
                return Transition(ScanState.OUTSIDE, ScanAction.EMPTY)
            metadata = parse_metadata_line(line)
            if metadata is None:
                return Transition(ScanState.UNTRACKED, ScanAction.UNTRACK, marker)
            return Transition(ScanState.TRACKED, ScanAction.TRACK, marker, metadata)
        case ScanState.TRACKED if marker:
            if line.startswith(marker):
                return Transition(ScanState.OUTSIDE, ScanAction.CLOSE)
            return Transition(ScanState.TRACKED, ScanAction.APPEND, marker)
        case ScanState.UNTRACKED if marker:
            if line.startswith(marker):
                return Transition(ScanState.OUTSIDE, ScanAction.CLOSE)
            return Transition(ScanState.UNTRACKED, ScanAction.DISCARD, marker)
        case _:
            raise ScannerInvariantError(
                f"no transition from state {state!r} with marker {marker!r} for line {line!r}"
            )


class FenceScanner:
    """Feed document lines one at a time and collect annotated regions."""

    def __init__(
        self,
        store: SegmentStore | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
        strict: bool = True,
    ) -> None:
        self.store = store if store is not None else SegmentStore()
        self.emitter = ensure_emitter(emitter)
        self.strict = strict
        self.state = ScanState.OUTSIDE
        self.marker: str | None = None
        self.opened_at = 0
        self.lineno = 0
        self._current: Segment | None = None

    def feed(self, line: str) -> None:
        self.lineno += 1
        transition = step(self.state, self.marker, line)
        self._apply(transition, line)
        self.state = transition.state
        self.marker = transition.marker

    def finish(self) -> SegmentStore:
        """Check the document ended outside any region and return the store."""
        if self.state is not ScanState.OUTSIDE:
            error = UnterminatedFenceError(
                line=self.opened_at, marker=self.marker or "", state=self.state.value
            )
            if self.strict:
                raise error
            if self._current is not None:
                self.store.discard(self._current)
                self._current = None
            self.emitter.warning(f"Dropping unterminated region: {error}")
            self.state = ScanState.OUTSIDE
            self.marker = None
        return self.store

    def scan(self, lines: Iterable[str]) -> SegmentStore:
        for line in lines:
            self.feed(line)
        return self.finish()

    def _apply(self, transition: Transition, line: str) -> None:
        match transition.action:
            case ScanAction.SKIP | ScanAction.DISCARD:
                return
            case ScanAction.OPEN:
                self.opened_at = self.lineno
            case ScanAction.EMPTY:
                logger.debug("Empty region at line %d", self.opened_at)
            case ScanAction.TRACK:
                self._track(transition.metadata or SegmentMetadata())
            case ScanAction.UNTRACK:
                self.emitter.event("region_untracked", {"line": self.opened_at})
            case ScanAction.APPEND:
                if self._current is None:
                    raise ScannerInvariantError(
                        f"line {self.lineno}: tracked content without an open segment"
                    )
                self._current.append(line)
            case ScanAction.CLOSE:
                if self._current is not None:
                    self._current.close()
                    self._current = None

    def _track(self, metadata: SegmentMetadata) -> None:
        segment = Segment(metadata=metadata, origin=self.opened_at)
        self.store.add(segment)
        if metadata.filename is not None:
            self.store.register(SegmentKind.FILE, metadata.filename, segment)
        if metadata.name is not None:
            self.store.register(SegmentKind.SNIPPET, metadata.name, segment)
        if metadata.is_orphan:
            logger.debug("Region at line %d declares neither filename nor name", segment.origin)
        self._current = segment
        self.emitter.event(
            "segment_registered",
            {"line": segment.origin, "filename": metadata.filename, "name": metadata.name},
        )


def scan_document(
    lines: Iterable[str],
    *,
    emitter: DiagnosticEmitter | None = None,
    strict: bool = True,
) -> SegmentStore:
    """Scan every line of a document and return the populated store."""
    return FenceScanner(emitter=emitter, strict=strict).scan(lines)


__all__ = [
    "FENCE_OPEN",
    "FenceScanner",
    "ScanAction",
    "ScanState",
    "Transition",
    "scan_document",
    "step",
]
