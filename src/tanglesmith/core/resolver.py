"""Recursive expansion of ``<<name>>`` snippet references."""

from __future__ import annotations

import re

from .exceptions import CyclicReferenceError, UndefinedSnippetError
from .segments import Segment, SegmentKind, SegmentStore


SNIPPET_REFERENCE = re.compile(r"<<(?P<name>[^\r\n]+)>>(?:\r\n|\n|\r)")


def reference_name(line: str) -> str | None:
    """Return the snippet name when ``line`` is exactly a reference, else ``None``."""
    match = SNIPPET_REFERENCE.fullmatch(line)
    return match.group("name") if match else None


class SnippetResolver:
    """Expand snippet references depth-first, in document order.

    A snippet that is already being expanded higher up the chain raises
    :class:`CyclicReferenceError` instead of recursing again.
    """

    def __init__(self, store: SegmentStore) -> None:
        self.store = store

    def resolve(self, segment: Segment) -> list[str]:
        output: list[str] = []
        chain: list[str] = []
        name = segment.metadata.name
        if name is not None and self.store.lookup(SegmentKind.SNIPPET, name) is segment:
            chain.append(name)
        self._expand(segment, chain, output)
        return output

    def render(self, segment: Segment) -> str:
        """Return the fully expanded text of ``segment``."""
        return "".join(self.resolve(segment))

    def references(self, segment: Segment) -> list[str]:
        """Return the snippet names referenced directly by ``segment``."""
        return [name for line in segment.lines if (name := reference_name(line)) is not None]

    def _expand(self, segment: Segment, chain: list[str], output: list[str]) -> None:
        for offset, line in enumerate(segment.lines, start=1):
            name = reference_name(line)
            if name is None:
                output.append(line)
                continue
            if name in chain:
                raise CyclicReferenceError(name, chain=chain)
            included = self.store.lookup(SegmentKind.SNIPPET, name)
            if included is None:
                raise UndefinedSnippetError(
                    name, origin=segment.origin, offset=offset, chain=chain
                )
            chain.append(name)
            try:
                self._expand(included, chain, output)
            finally:
                chain.pop()


__all__ = ["SNIPPET_REFERENCE", "SnippetResolver", "reference_name"]
