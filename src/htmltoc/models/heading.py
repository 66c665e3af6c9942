"""Heading models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class IdFormat(str, Enum):
    """How generated ids replace spaces in heading text."""

    UNDERSCORE = "underscore"
    KEBAB = "kebab-case"
    CAMEL = "camelCase"

    @classmethod
    def parse(cls, value: str | IdFormat | None) -> IdFormat:
        """Parse a format name leniently.

        Empty and unknown values fall back to :attr:`UNDERSCORE`.
        """

        if isinstance(value, IdFormat):
            return value
        if not value:
            return cls.UNDERSCORE
        key = value.strip().lower()
        return _ALIASES.get(key, cls.UNDERSCORE)

    @property
    def separator(self) -> str:
        """Character used in place of spaces and before numeric suffixes."""

        if self is IdFormat.KEBAB:
            return "-"
        if self is IdFormat.CAMEL:
            return ""
        return "_"

    def format_base(self, text: str) -> str:
        """Turn normalized text (single spaces only) into a base id."""

        if self is IdFormat.KEBAB:
            return text.replace(" ", self.separator).lower()
        if self is IdFormat.CAMEL:
            return _camel_case(text)
        return text.replace(" ", self.separator)


def _camel_case(text: str) -> str:
    words = text.split(" ")
    head, rest = words[0], words[1:]
    return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in rest)


_ALIASES = {
    "underscore": IdFormat.UNDERSCORE,
    "kebab-case": IdFormat.KEBAB,
    "kebab": IdFormat.KEBAB,
    "camelcase": IdFormat.CAMEL,
    "camel": IdFormat.CAMEL,
}


class HeadingRecord(BaseModel):
    """A heading as seen by the outline builder.

    ``existing_id`` is the id the heading carried in the document; ``id`` is the one it ends
    up with once ids have been assigned.
    """

    text: str
    existing_id: str | None = None
    level: int = Field(ge=0)
    id: str | None = None

    @property
    def anchor(self) -> str:
        return self.id or self.existing_id or ""
