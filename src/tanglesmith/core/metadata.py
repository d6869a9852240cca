"""Parsing of the metadata line that opens an annotated code region.

The first line inside a fenced region is read as a JSON object. Two keys are
meaningful:

`filename` (`str | None`)
: Output path, relative to the output directory. May contain ``/`` separators.

`name` (`str | None`)
: Snippet name other regions can include with ``<<name>>``.

Any other key is ignored. A line that is not a JSON object, or whose known keys
do not hold strings, leaves the region untracked.
"""

from __future__ import annotations

import json
import logging

from pydantic import BaseModel, ConfigDict, ValidationError


logger = logging.getLogger(__name__)


class SegmentMetadata(BaseModel):
    """Optional keys carried by a metadata line."""

    model_config = ConfigDict(extra="ignore", frozen=True, strict=True)

    filename: str | None = None
    name: str | None = None

    @property
    def is_orphan(self) -> bool:
        """Return True when the region declares neither a file nor a snippet."""
        return self.filename is None and self.name is None


def parse_metadata_line(line: str) -> SegmentMetadata | None:
    """Parse a metadata line, returning ``None`` when it is not a metadata object."""
    try:
        payload = json.loads(line)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    try:
        return SegmentMetadata.model_validate(payload)
    except ValidationError as exc:
        logger.debug("Ignoring metadata with invalid field types: %s", exc)
        return None


__all__ = ["SegmentMetadata", "parse_metadata_line"]
