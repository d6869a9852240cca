"""Configuration model for tangle runs.

TangleConfig

`output_dir` (`Path | None`)
: Base directory output filenames are resolved against. Defaults to the
  current working directory.

`encoding` (`str`)
: Encoding used to read the document and write every output file.

`strict` (`bool`)
: When `True` (default), a document ending inside a fenced region is rejected.
  When `False`, the dangling region is dropped with a warning.

`dry_run` (`bool`)
: Resolve every output file without writing anything to disk.

The configuration may be stored in a YAML file, either at the top level or
nested under a `tanglesmith` key.
"""

from __future__ import annotations

import codecs
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
import yaml

from .exceptions import ConfigError


CONFIG_SECTION = "tanglesmith"


class TangleConfig(BaseModel):
    """Options controlling how a document is tangled."""

    model_config = ConfigDict(extra="forbid")

    output_dir: Path | None = None
    encoding: str = "utf-8"
    strict: bool = True
    dry_run: bool = False

    @field_validator("encoding")
    @classmethod
    def check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown encoding '{value}'") from exc
        return value

    def merged(self, **overrides: Any) -> TangleConfig:
        """Return a copy where every non-``None`` override replaces the stored value."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        return TangleConfig.model_validate({**self.model_dump(), **updates})


def load_config(path: Path) -> TangleConfig:
    """Load a :class:`TangleConfig` from a YAML file."""
    try:
        payload = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file '{path}': {exc}") from exc

    if payload is None:
        payload = {}
    if isinstance(payload, dict) and isinstance(payload.get(CONFIG_SECTION), dict):
        payload = payload[CONFIG_SECTION]
    if not isinstance(payload, dict):
        raise ConfigError(f"Configuration file '{path}' must contain a mapping.")

    try:
        config = TangleConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in '{path}': {exc}") from exc

    if config.output_dir is not None and not config.output_dir.is_absolute():
        config = config.model_copy(update={"output_dir": Path(path).parent / config.output_dir})
    return config


__all__ = ["CONFIG_SECTION", "TangleConfig", "load_config"]
