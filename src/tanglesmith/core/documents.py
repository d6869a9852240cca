"""Loading literate documents from disk."""

from __future__ import annotations

import io
from pathlib import Path


def split_document(text: str) -> list[str]:
    """Split ``text`` on ``\\n``, ``\\r\\n`` and ``\\r``, keeping each terminator."""
    return list(io.StringIO(text, newline=""))


def read_document(path: Path, *, encoding: str = "utf-8") -> list[str]:
    """Read a document in full, leaving line terminators untranslated."""
    with Path(path).open("r", encoding=encoding, newline="") as handle:
        return list(handle)


__all__ = ["read_document", "split_document"]
