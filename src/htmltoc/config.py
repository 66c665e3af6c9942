"""Configuration.

Defaults are loaded from environment variables prefixed with ``HTMLTOC_``. For local
development, a `.env` file in the working directory is picked up, or set ``HTMLTOC_ENV_FILE``
to point at one.

Per invocation, options are layered: explicit call-time options override the target element's
``data-*`` attributes, which override these settings.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from htmltoc.errors import TocConfigError
from htmltoc.models.heading import IdFormat

# data-* attribute -> option name
DATA_ATTRIBUTES = {
    "data-toc": "content",
    "data-toc-headings": "headings",
    "data-id-format": "id_format",
}


class Settings(BaseSettings):
    """htmltoc settings.

    All fields are environment-configurable. Prefix is `HTMLTOC_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="HTMLTOC_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    content: str = "body"
    headings: str = "h1,h2,h3"
    id_format: IdFormat = IdFormat.UNDERSCORE

    log_level: str = "INFO"
    parser: str = "lxml"

    @field_validator("id_format", mode="before")
    @classmethod
    def _parse_id_format(cls, value: Any) -> IdFormat:
        return IdFormat.parse(value)


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.

    Raises:
        TocConfigError: If a value fails validation.
    """

    try:
        env_file_override = os.getenv("HTMLTOC_ENV_FILE")
        if env_file_override:
            return Settings(_env_file=Path(env_file_override))

        default_env = Path.cwd() / ".env"
        if default_env.exists():
            return Settings(_env_file=default_env)

        return Settings()
    except ValidationError as e:
        raise TocConfigError(f"invalid settings: {e}") from e


class TocOptions(BaseModel):
    """One layer of per-invocation options. ``None`` means "not supplied"."""

    content: str | None = None
    headings: str | None = None
    id_format: IdFormat | None = None

    @field_validator("content", "headings", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("id_format", mode="before")
    @classmethod
    def _parse_id_format(cls, value: Any) -> IdFormat | None:
        if value is None or value == "":
            return None
        return IdFormat.parse(value)

    @classmethod
    def from_data_attributes(cls, attrs: Mapping[str, Any]) -> TocOptions:
        """Build options from an element's ``data-*`` attributes."""

        values = {
            option: attrs[attr] for attr, option in DATA_ATTRIBUTES.items() if attr in attrs
        }
        return cls(**values)


class ResolvedOptions(BaseModel):
    """Options after layering, ready to use."""

    content: str
    headings: list[str]
    id_format: IdFormat

    @property
    def heading_selector(self) -> str:
        """All heading selectors joined into one selector group."""

        return ",".join(self.headings)


def parse_heading_selectors(headings: str) -> list[str]:
    """Split a comma-separated heading list into ordered selectors, shallowest first."""

    selectors = [s.strip() for s in headings.split(",")]
    selectors = [s for s in selectors if s]
    if not selectors:
        raise TocConfigError(f"no heading selectors in {headings!r}")
    return selectors


def resolve_options(
    settings: Settings,
    data: TocOptions | None = None,
    explicit: TocOptions | None = None,
) -> ResolvedOptions:
    """Merge option layers: ``explicit`` > ``data`` > ``settings``."""

    merged: dict[str, Any] = {
        "content": settings.content,
        "headings": settings.headings,
        "id_format": settings.id_format,
    }
    for layer in (data, explicit):
        if layer is None:
            continue
        merged.update(layer.model_dump(exclude_none=True))

    return ResolvedOptions(
        content=merged["content"],
        headings=parse_heading_selectors(merged["headings"]),
        id_format=merged["id_format"],
    )
