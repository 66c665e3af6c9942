"""Tests for building tables of contents into HTML documents."""

from __future__ import annotations

import logging
from typing import Iterator

import pytest
from bs4 import BeautifulSoup

from htmltoc.config import Settings, TocOptions, resolve_options
from htmltoc.document import HtmlDocument
from htmltoc.errors import TocSelectorError
from htmltoc.models.heading import IdFormat
from htmltoc.toc import apply_data_api, build_toc, collect_headings, toc_html


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


PAGE = """
<html><body>
<ul id="toc"></ul>
<h1>Intro</h1>
<h2>Setup</h2>
<h2 id="custom">Install</h2>
<h1>Usage</h1>
</body></html>
"""


def links(list_tag) -> list[tuple[str, str]]:
    """``(href, text)`` for the direct items of a rendered list."""

    out = []
    for item in list_tag.find_all("li", recursive=False):
        a = item.find("a", recursive=False)
        out.append((a["href"], a.get_text()))
    return out


def test_build_toc_assigns_ids_and_nests() -> None:
    """It should write ids onto headings and render a nested list of links."""

    doc = HtmlDocument.from_html(PAGE)
    target = doc.select("#toc")[0]

    root = build_toc(doc, target, settings=Settings())

    assert [h.get("id") for h in doc.select("h1, h2")] == ["Intro", "Setup", "custom", "Usage"]
    assert [(n.text, n.id) for n in root.children] == [("Intro", "Intro"), ("Usage", "Usage")]

    assert links(target) == [("#Intro", "Intro"), ("#Usage", "Usage")]
    first_item = target.find("li", recursive=False)
    nested = first_item.find("ul", recursive=False)
    assert nested is not None
    assert links(nested) == [("#Setup", "Setup"), ("#custom", "Install")]


def test_generated_ids_avoid_existing_document_ids() -> None:
    """It should treat ids anywhere in the document as taken."""

    html = '<body><ul id="toc"></ul><div id="Intro"></div><h1>Intro</h1><h1>Intro</h1></body>'
    doc = HtmlDocument.from_html(html)
    build_toc(doc, doc.select("#toc")[0], settings=Settings())
    assert [h["id"] for h in doc.select("h1")] == ["Intro_1", "Intro_2"]


def test_nested_lists_follow_target_tag() -> None:
    """It should reuse the target's tag name for nested lists."""

    html = "<body><ol id='toc'></ol><h1>A</h1><h2>B</h2></body>"
    doc = HtmlDocument.from_html(html)
    target = doc.select("#toc")[0]
    build_toc(doc, target, settings=Settings())
    assert target.select_one("li > ol > li > a")["href"] == "#B"
    assert target.find("ul") is None


def test_call_options_override_data_attributes() -> None:
    """It should prefer explicit options over data-* attributes."""

    html = "<body><ul id='toc' data-toc-headings='h2'></ul><h1>A</h1><h2>B</h2></body>"
    doc = HtmlDocument.from_html(html)
    target = doc.select("#toc")[0]
    root = build_toc(doc, target, TocOptions(headings="h1"), settings=Settings())
    assert [n.text for n in root.iter_nodes()] == ["A"]


def test_data_attributes_override_settings() -> None:
    """It should prefer data-* attributes over settings defaults."""

    html = (
        "<body><ul id='toc' data-toc-headings='h2' data-id-format='kebab-case'></ul>"
        "<h1>A</h1><h2>Big Bang</h2></body>"
    )
    doc = HtmlDocument.from_html(html)
    root = build_toc(doc, doc.select("#toc")[0], settings=Settings(headings="h1"))
    assert [(n.text, n.id) for n in root.iter_nodes()] == [("Big Bang", "big-bang")]


def test_content_scope_limits_headings() -> None:
    """It should only collect headings inside the content elements."""

    html = (
        "<body><ul id='toc'></ul><h1>Outside</h1>"
        "<article><h1>Inside</h1></article></body>"
    )
    doc = HtmlDocument.from_html(html)
    root = build_toc(doc, doc.select("#toc")[0], TocOptions(content="article"), Settings())
    assert [n.text for n in root.iter_nodes()] == ["Inside"]
    assert doc.select("h1")[0].get("id") is None


def test_overlapping_content_scopes_keep_document_order() -> None:
    """It should list each heading once, in document order, across nested scopes."""

    html = (
        "<body><div class='outer'><h1>A</h1><div><h2>B</h2></div></div>"
        "<div><h1>C</h1></div></body>"
    )
    doc = HtmlDocument.from_html(html)
    headings = doc.headings("div", ["h1", "h2"])
    assert [h.get_text() for h in headings] == ["A", "B", "C"]


def test_data_api_shares_ids_between_targets() -> None:
    """It should respect ids assigned by an earlier target in the same document."""

    html = (
        "<body>"
        "<ul id='first' data-toc='#a'></ul>"
        "<ul id='second' data-toc='#b'></ul>"
        "<div id='a'><h1>Same Title</h1></div>"
        "<div id='b'><h2>Same Title</h2></div>"
        "</body>"
    )
    doc = HtmlDocument.from_html(html)
    outlines = apply_data_api(doc, Settings())

    assert [[n.id for n in o.iter_nodes()] for o in outlines] == [["Same_Title"], ["Same_Title_1"]]
    assert links(doc.select("#second")[0]) == [("#Same_Title_1", "Same Title")]


def test_data_api_skips_broken_target(caplog: pytest.LogCaptureFixture) -> None:
    """It should log a target with a bad selector and carry on with the rest."""

    html = (
        "<body>"
        "<ul id='bad' data-toc='' data-toc-headings='h1['></ul>"
        "<ul id='good' data-toc='body'></ul>"
        "<h1>Only</h1>"
        "</body>"
    )
    doc = HtmlDocument.from_html(html)
    with caplog.at_level(logging.ERROR):
        outlines = apply_data_api(doc, Settings())

    assert len(outlines) == 1
    assert links(doc.select("#good")[0]) == [("#Only", "Only")]
    assert doc.select("#bad")[0].find("li") is None
    assert "Failed to build table of contents" in caplog.text


def test_bad_selector_raises() -> None:
    """It should raise TocSelectorError naming the selector."""

    doc = HtmlDocument.from_html(PAGE)
    with pytest.raises(TocSelectorError) as exc_info:
        build_toc(doc, doc.select("#toc")[0], TocOptions(headings="h1["), Settings())
    assert exc_info.value.selector == "h1["


def test_collect_headings_records() -> None:
    """It should return records with levels, original ids and assigned ids."""

    doc = HtmlDocument.from_html(PAGE)
    options = resolve_options(Settings(), explicit=TocOptions(id_format=IdFormat.CAMEL))
    records = collect_headings(doc, options)

    assert [(r.text, r.existing_id, r.id, r.level) for r in records] == [
        ("Intro", None, "intro", 0),
        ("Setup", None, "setup", 1),
        ("Install", "custom", "custom", 1),
        ("Usage", None, "usage", 0),
    ]


def test_toc_html_round_trip() -> None:
    """It should fill the selected target and return serialized HTML."""

    out = toc_html(PAGE, "#toc", settings=Settings())
    soup = BeautifulSoup(out, "lxml")
    hrefs = [a["href"] for a in soup.select("#toc a")]
    assert hrefs == ["#Intro", "#Setup", "#custom", "#Usage"]


def test_toc_html_uses_data_api_without_selector() -> None:
    """It should fall back to data-toc targets when no selector is given."""

    html = "<body><ul data-toc=''></ul><h1>Hello World</h1></body>"
    out = toc_html(html, settings=Settings(id_format="kebab-case"))
    soup = BeautifulSoup(out, "lxml")
    assert soup.select_one("ul a")["href"] == "#hello-world"
    assert soup.select_one("h1")["id"] == "hello-world"


def test_first_deeper_heading_nests_under_existing_item() -> None:
    """It should treat list items already in the target as earlier siblings."""

    html = (
        "<body><ul id='toc'><li><a href='#top'>Home</a></li></ul>"
        "<h2>A</h2><h1>B</h1></body>"
    )
    doc = HtmlDocument.from_html(html)
    target = doc.select("#toc")[0]
    root = build_toc(doc, target, settings=Settings())

    assert links(target) == [("#top", "Home"), ("#B", "B")]
    home = target.find("li", recursive=False)
    assert links(home.find("ul", recursive=False)) == [("#A", "A")]
    assert [(n.text, n.id) for n in root.iter_nodes()] == [("Home", "top"), ("A", "A"), ("B", "B")]


def test_existing_items_without_deeper_heading_stay_untouched() -> None:
    """It should append after existing items and not duplicate them."""

    html = "<body><ol id='toc'><li>Home</li></ol><h1>A</h1></body>"
    doc = HtmlDocument.from_html(html)
    target = doc.select("#toc")[0]
    build_toc(doc, target, settings=Settings())

    items = target.find_all("li", recursive=False)
    assert [li.get_text() for li in items] == ["Home", "A"]
    assert items[0].find("ol") is None


def test_toc_html_applies_log_level() -> None:
    """It should configure logging at the settings' log level."""

    toc_html(PAGE, "#toc", settings=Settings(log_level="DEBUG"))
    assert logging.getLogger().level == logging.DEBUG

    toc_html(PAGE, "#toc", settings=Settings(log_level="WARNING"))
    assert logging.getLogger().level == logging.WARNING
