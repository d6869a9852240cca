"""Captured code regions and the store indexing them."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from .metadata import SegmentMetadata


class SegmentKind(str, Enum):
    """Key spaces a segment can be registered under."""

    FILE = "file"
    SNIPPET = "snippet"


@dataclass(slots=True, eq=False)
class Segment:
    """Raw lines captured from one annotated region, terminators included."""

    metadata: SegmentMetadata
    origin: int
    _lines: list[str] = field(default_factory=list, repr=False)
    _closed: bool = field(default=False, repr=False)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def closed(self) -> bool:
        return self._closed

    def append(self, line: str) -> None:
        """Add a content line to an open segment."""
        if self._closed:
            raise ValueError(f"segment opened at line {self.origin} is already closed")
        self._lines.append(line)

    def close(self) -> None:
        self._closed = True

    def __len__(self) -> int:
        return len(self._lines)


@dataclass(slots=True)
class SegmentStore:
    """Owns every captured segment and indexes them by filename and snippet name.

    Registering a key that already exists replaces the previous entry. A single
    segment may be indexed under both kinds of key.
    """

    segments: list[Segment] = field(default_factory=list)
    _indexes: dict[SegmentKind, dict[str, int]] = field(
        default_factory=lambda: {kind: {} for kind in SegmentKind}
    )
    _shadowed: dict[tuple[SegmentKind, str], list[int]] = field(default_factory=dict)

    def add(self, segment: Segment) -> int:
        """Take ownership of a segment and return its arena slot."""
        self.segments.append(segment)
        return len(self.segments) - 1

    def register(self, kind: SegmentKind, key: str, segment: Segment) -> None:
        """Index ``segment`` under ``key``, overwriting any previous registration."""
        kind = SegmentKind(kind)
        slot = self._slot_of(segment)
        index = self._indexes[kind]
        previous = index.get(key)
        if previous is not None and previous != slot:
            self._shadowed.setdefault((kind, key), []).append(previous)
        index[key] = slot

    def lookup(self, kind: SegmentKind, key: str) -> Segment | None:
        """Return the segment registered under ``key`` or ``None``."""
        slot = self._indexes[SegmentKind(kind)].get(key)
        return None if slot is None else self.segments[slot]

    def discard(self, segment: Segment) -> list[tuple[SegmentKind, str]]:
        """Withdraw ``segment`` from both indexes and return the keys it held.

        A key ``segment`` had taken over from an earlier registration points
        back at that earlier segment; other keys are removed.
        """
        slot = self._slot_of(segment)
        released: list[tuple[SegmentKind, str]] = []
        for kind, index in self._indexes.items():
            for key in [key for key, value in index.items() if value == slot]:
                shadowed = self._shadowed.get((kind, key))
                if shadowed:
                    index[key] = shadowed.pop()
                else:
                    del index[key]
                released.append((kind, key))
        for shadowed in self._shadowed.values():
            shadowed[:] = [value for value in shadowed if value != slot]
        return released

    def keys(self, kind: SegmentKind) -> list[str]:
        return list(self._indexes[SegmentKind(kind)])

    def items(self, kind: SegmentKind) -> Iterator[tuple[str, Segment]]:
        for key, slot in self._indexes[SegmentKind(kind)].items():
            yield key, self.segments[slot]

    @property
    def files(self) -> dict[str, Segment]:
        return dict(self.items(SegmentKind.FILE))

    @property
    def snippets(self) -> dict[str, Segment]:
        return dict(self.items(SegmentKind.SNIPPET))

    def orphans(self) -> list[Segment]:
        """Return segments reachable from neither index."""
        indexed = {slot for index in self._indexes.values() for slot in index.values()}
        return [segment for slot, segment in enumerate(self.segments) if slot not in indexed]

    def _slot_of(self, segment: Segment) -> int:
        for slot in range(len(self.segments) - 1, -1, -1):
            if self.segments[slot] is segment:
                return slot
        return self.add(segment)


__all__ = ["Segment", "SegmentKind", "SegmentStore"]
