"""Heading id generation.

Ids are derived from heading text, formatted according to an :class:`IdFormat`, and made
unique against an :class:`IdRegistry` of everything already in use. Pre-existing ids on a
heading are trusted and passed through untouched.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, Iterator

from htmltoc.logging import get_logger
from htmltoc.models.heading import IdFormat

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

logger = get_logger(__name__)

PLACEHOLDER_ID = "?"

_WS_RE = re.compile(r"\s+")
# HTML5 ids may hold any non-space character; keep letters, digits, "_", "-" and spaces.
_INVALID_RE = re.compile(r"[^\w\- ]")


class IdRegistry:
    """Ids known to be in use. Only ever grows."""

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids: set[str] = set(ids)

    @classmethod
    def from_soup(cls, soup: BeautifulSoup) -> IdRegistry:
        """Seed a registry with every ``id`` attribute present in ``soup``."""

        return cls(tag["id"] for tag in soup.find_all(id=True) if tag.get("id"))

    def __contains__(self, value: object) -> bool:
        return value in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def add(self, value: str) -> None:
        self._ids.add(value)


def normalize_text(text: str) -> str:
    """Collapse whitespace and strip characters that are not valid in an id."""

    text = _WS_RE.sub(" ", text)
    return _INVALID_RE.sub("", text)


def base_id(text: str, id_format: IdFormat) -> str:
    """Derive the unsuffixed id for ``text``."""

    normalized = normalize_text(text)
    if not normalized.strip():
        return PLACEHOLDER_ID
    return id_format.format_base(normalized)


def unique_id(base: str, separator: str, registry: IdRegistry) -> str:
    """Return ``base`` or the first free ``base + separator + n`` for n = 1, 2, ..."""

    candidate = base
    count = 1
    while candidate in registry:
        candidate = f"{base}{separator}{count}"
        count += 1
    return candidate


def assign_id(
    text: str,
    existing_id: str | None,
    id_format: IdFormat,
    registry: IdRegistry,
) -> str:
    """Return the id a heading should carry.

    Args:
        text: Heading text content.
        existing_id: The heading's current id attribute, if any.
        id_format: Formatting mode for generated ids.
        registry: Ids already in use; the generated id is added to it.

    Returns:
        ``existing_id`` when it is non-empty, otherwise a fresh id unique within ``registry``.
    """

    if existing_id:
        logger.debug("Keeping existing id %r", existing_id)
        return existing_id

    base = base_id(text, id_format)
    candidate = unique_id(base, id_format.separator, registry)
    registry.add(candidate)
    logger.debug("Generated id %r for heading %r", candidate, text)
    return candidate
