"""htmltoc: nested tables of contents and stable heading ids for HTML documents."""

from __future__ import annotations

from htmltoc.config import Settings, TocOptions, load_settings
from htmltoc.core.outline import OutlineBuilder, build_outline
from htmltoc.document import HtmlDocument
from htmltoc.errors import TocConfigError, TocError, TocSelectorError
from htmltoc.models import HeadingRecord, IdFormat, OutlineNode
from htmltoc.render import render_html, render_markdown
from htmltoc.toc import apply_data_api, build_toc, collect_headings, toc_html
from htmltoc.utils.ids import IdRegistry, assign_id

__all__ = [
    "HeadingRecord",
    "HtmlDocument",
    "IdFormat",
    "IdRegistry",
    "OutlineBuilder",
    "OutlineNode",
    "Settings",
    "TocConfigError",
    "TocError",
    "TocOptions",
    "TocSelectorError",
    "apply_data_api",
    "assign_id",
    "build_outline",
    "build_toc",
    "collect_headings",
    "load_settings",
    "render_html",
    "render_markdown",
    "toc_html",
]
