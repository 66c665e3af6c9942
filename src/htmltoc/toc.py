"""Table of contents generation for HTML documents.

``build_toc`` is a single invocation on one list element; ``apply_data_api`` runs it for every
element carrying a ``data-toc`` attribute. Invocations on the same document share its ids:
each one reads the ids already present, so ids assigned earlier are never reused.
"""

from __future__ import annotations

from bs4 import Tag

from htmltoc.config import ResolvedOptions, Settings, TocOptions, load_settings, resolve_options
from htmltoc.core.outline import OutlineBuilder
from htmltoc.document import HtmlDocument, describe
from htmltoc.errors import TocError
from htmltoc.logging import configure_logging, get_logger, log_exception, toc_context
from htmltoc.models.heading import HeadingRecord
from htmltoc.models.outline import OutlineNode
from htmltoc.render import existing_items, render_html, seed_root
from htmltoc.utils.ids import assign_id

logger = get_logger(__name__)


def collect_headings(document: HtmlDocument, options: ResolvedOptions) -> list[HeadingRecord]:
    """Give every heading in scope an id and return them in document order.

    Ids are written back to the document before the records are returned.
    """

    registry = document.registry()
    records: list[HeadingRecord] = []
    for tag in document.headings(options.content, options.headings):
        text = document.text_of(tag)
        existing_id = document.get_id(tag)
        heading_id = assign_id(text, existing_id, options.id_format, registry)
        document.set_id(tag, heading_id)

        level = document.level_of(tag, options.headings)
        if level is None:
            logger.warning("Heading %r matches no heading selector; skipped", heading_id)
            continue
        records.append(
            HeadingRecord(text=text, existing_id=existing_id, level=level, id=heading_id)
        )
    return records


def build_toc(
    document: HtmlDocument,
    target: Tag,
    options: TocOptions | None = None,
    settings: Settings | None = None,
) -> OutlineNode:
    """Build a table of contents into ``target``.

    Args:
        document: Document holding both the headings and ``target``.
        target: List element (``ul``/``ol``) to fill.
        options: Call-time options; they override ``target``'s ``data-*`` attributes.
        settings: Defaults for anything not set otherwise. Loaded from env when omitted.

    Returns:
        The outline root.

    Raises:
        TocConfigError: If the options are unusable (including bad selectors).
    """

    if settings is None:
        settings = load_settings()
    with toc_context(target=describe(target)):
        resolved = resolve_options(settings, TocOptions.from_data_attributes(target.attrs), options)

        items = existing_items(target)
        builder = OutlineBuilder(seed_root(items))
        records = collect_headings(document, resolved)
        for record in records:
            builder.add(record)

        render_html(builder.root, target, document, items)
        logger.info(
            "Built table of contents with %d headings (content=%r, headings=%r)",
            len(records),
            resolved.content,
            resolved.heading_selector,
        )
        return builder.root


def apply_data_api(document: HtmlDocument, settings: Settings | None = None) -> list[OutlineNode]:
    """Build a table of contents into every ``[data-toc]`` element, in document order.

    A target whose options are unusable is logged and skipped.
    """

    if settings is None:
        settings = load_settings()
    outlines: list[OutlineNode] = []
    for target in document.targets():
        try:
            outlines.append(build_toc(document, target, settings=settings))
        except TocError:
            log_exception(logger, "Failed to build table of contents", target=describe(target))
    return outlines


def toc_html(
    html: str,
    target_selector: str | None = None,
    options: TocOptions | None = None,
    settings: Settings | None = None,
) -> str:
    """Parse ``html``, build tables of contents, and return the resulting markup.

    With ``target_selector``, every matching element is filled using ``options``; without it,
    the ``data-toc`` elements are used. Logging is configured at ``settings.log_level``.
    """

    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)
    document = HtmlDocument.from_html(html, parser=settings.parser)
    if target_selector is None:
        apply_data_api(document, settings)
    else:
        for target in document.select(target_selector):
            build_toc(document, target, options, settings)
    return document.to_html()
