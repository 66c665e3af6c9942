"""Outline renderers."""

from __future__ import annotations

import re

from bs4 import Tag

from htmltoc.document import HtmlDocument
from htmltoc.models.outline import OutlineNode

_WS_RE = re.compile(r"\s+")
_MD_SPECIAL_RE = re.compile(r"([\\\[\]])")


def existing_items(target: Tag) -> list[Tag]:
    """List items already present directly inside ``target``."""

    return target.find_all("li", recursive=False)


def seed_root(items: list[Tag]) -> OutlineNode:
    """An outline root whose first children stand for ``items``.

    Headings deeper than the starting level nest under the last of these, as they would under
    any earlier heading.
    """

    root = OutlineNode()
    for item in items:
        link = item.find("a", href=True)
        href = link["href"] if link is not None else ""
        root.children.append(OutlineNode(text=item.get_text(), id=href.removeprefix("#")))
    return root


def render_html(
    tree: OutlineNode,
    target: Tag,
    document: HtmlDocument,
    items: list[Tag] | None = None,
) -> Tag:
    """Append ``tree``'s children to ``target`` as list items linking to each heading.

    Nested lists use the same tag as ``target`` (``ul``, ``ol``, ...). The first children of
    ``tree`` correspond to ``items``, the list items ``target`` already held; those are reused
    rather than rendered again, and only receive nested lists.
    """

    items = items or []
    list_tag = target.name
    for index, node in enumerate(tree.children):
        if index < len(items):
            item = items[index]
        else:
            item = document.new_tag("li")
            link = document.new_tag("a", href=f"#{node.id}")
            link.string = node.text
            item.append(link)
            target.append(item)
        if node.children:
            nested = document.new_tag(list_tag)
            item.append(nested)
            render_html(node, nested, document)
    return target


def markdown_text(text: str) -> str:
    """Heading text made safe for a single-line markdown link label."""

    text = _WS_RE.sub(" ", text).strip()
    return _MD_SPECIAL_RE.sub(r"\\\1", text)


def render_markdown(tree: OutlineNode, indent: str = "  ") -> str:
    """Format ``tree`` as a bulleted markdown list of links.

    Returns an empty string for an empty outline.
    """

    lines: list[str] = []

    def walk(node: OutlineNode, depth: int) -> None:
        for child in node.children:
            lines.append(f"{indent * depth}- [{markdown_text(child.text)}](#{child.id})")
            walk(child, depth + 1)

    walk(tree, 0)
    return "\n".join(lines)
