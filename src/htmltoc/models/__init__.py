"""Pydantic models used across the project."""

from __future__ import annotations

from htmltoc.models.heading import HeadingRecord, IdFormat
from htmltoc.models.outline import OutlineNode

__all__ = [
    "HeadingRecord",
    "IdFormat",
    "OutlineNode",
]
