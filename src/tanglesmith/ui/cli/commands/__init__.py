"""CLI command implementations."""

from __future__ import annotations

from .tangle import inspect, tangle


__all__ = ["inspect", "tangle"]
