"""HTML document access.

A thin layer over BeautifulSoup: selecting headings, matching them against the heading
selectors, and reading and writing their ids. Selector semantics are soupsieve's.
"""

from __future__ import annotations

from typing import Iterator

import soupsieve
from bs4 import BeautifulSoup, Tag

from htmltoc.errors import TocSelectorError
from htmltoc.logging import get_logger
from htmltoc.utils.ids import IdRegistry

logger = get_logger(__name__)


def describe(tag: Tag) -> str:
    """Short label for logs, e.g. ``ul#toc``."""

    label = tag.name
    if tag.get("id"):
        label += f"#{tag['id']}"
    return label


class HtmlDocument:
    """A parsed HTML document that tables of contents are built into."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup

    @classmethod
    def from_html(cls, html: str, *, parser: str = "lxml") -> HtmlDocument:
        """Parse HTML into a document."""

        return cls(BeautifulSoup(html, parser))

    def to_html(self) -> str:
        return str(self.soup)

    def select(self, selector: str, scope: Tag | None = None) -> list[Tag]:
        """Select elements under ``scope`` (the whole document by default)."""

        node = self.soup if scope is None else scope
        try:
            return node.select(selector)
        except soupsieve.SelectorSyntaxError as e:
            raise TocSelectorError(selector, str(e)) from e

    def targets(self) -> list[Tag]:
        """Elements that opted in to automatic tables of contents via ``data-toc``."""

        return self.select("[data-toc]")

    def headings(self, content: str, selectors: list[str]) -> list[Tag]:
        """Headings inside every ``content`` element, in document order.

        A heading reached through more than one overlapping ``content`` element is listed once.
        """

        scopes = self.select(content)
        group = ",".join(selectors)
        if len(scopes) == 1:
            return self.select(group, scopes[0])

        seen: set[int] = set()
        found: list[Tag] = []
        for scope in scopes:
            for tag in self.select(group, scope):
                if id(tag) not in seen:
                    seen.add(id(tag))
                    found.append(tag)
        order = {id(tag): i for i, tag in enumerate(self._iter_tags())}
        found.sort(key=lambda t: order[id(t)])
        return found

    def level_of(self, tag: Tag, selectors: list[str]) -> int | None:
        """Index of the first selector ``tag`` matches, or ``None``."""

        for index, selector in enumerate(selectors):
            try:
                if soupsieve.match(selector, tag):
                    return index
            except soupsieve.SelectorSyntaxError as e:
                raise TocSelectorError(selector, str(e)) from e
        return None

    @staticmethod
    def text_of(tag: Tag) -> str:
        return tag.get_text()

    @staticmethod
    def get_id(tag: Tag) -> str | None:
        value = tag.get("id")
        return value or None

    @staticmethod
    def set_id(tag: Tag, value: str) -> None:
        tag["id"] = value

    def registry(self) -> IdRegistry:
        """Ids currently present anywhere in the document."""

        return IdRegistry.from_soup(self.soup)

    def new_tag(self, name: str, **attrs: str) -> Tag:
        return self.soup.new_tag(name, attrs=attrs)

    def _iter_tags(self) -> Iterator[Tag]:
        for node in self.soup.descendants:
            if isinstance(node, Tag):
                yield node
