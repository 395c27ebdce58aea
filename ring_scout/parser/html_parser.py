# === FILE: ring_scout/parser/html_parser.py ===
"""Indexing facts extracted from one HTML page.

:func:`extract_records` is a pure function of the parsed document: it reads
meta tags, the title, a preview paragraph and the top three heading levels
and returns them as :class:`~ring_scout.crawler.models.Record` values tagged
with the page URL and its discovery depth.

Preview selection tries each configured CSS query in turn and looks at no
more than the first four matches of each; after that we are usually too far
into the page for a useful preview. The first candidate of a reasonable
length that is not known about-page boilerplate wins. Independently of
that, the first ``<p>`` of the page is always offered as ``para-just-p``.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable, List, Optional, Union

import soupsieve
from bs4 import BeautifulSoup
from bs4.element import Tag

from ring_scout.crawler.models import PageData, Record
from ring_scout.logger import logger
from ring_scout.utils import DEFAULT_PREVIEW_QUERIES, clean_text

__all__: Sequence[str] = ("parse_html", "extract_records", "find_preview")

MAX_TEXT_LEN = 1500
MIN_PREVIEW_LEN = 20
MAX_LANG_LEN = 100
MAX_HEADING_LEN = 500
PREVIEW_CANDIDATES = 4


def parse_html(page: Union[PageData, str]) -> BeautifulSoup:
    """Parse raw markup or the content of a :class:`PageData`."""
    html = page.content if isinstance(page, PageData) else str(page)
    return BeautifulSoup(html, "html.parser")


def _meta_contents(soup: BeautifulSoup, selector: str) -> Iterable[str]:
    for tag in soup.select(selector):
        content = tag.get("content")
        if isinstance(content, str):
            yield clean_text(content)


def find_preview(
    body: Tag, preview_queries: Sequence[str], heuristics: Iterable[str]
) -> Optional[str]:
    """First paragraph-shaped candidate that is not about-page boilerplate."""
    boilerplate = {h.lower() for h in heuristics}
    for query in preview_queries:
        try:
            elements = body.select(query, limit=PREVIEW_CANDIDATES)
        except soupsieve.SelectorSyntaxError as exc:
            logger.warning("Ignoring invalid preview query %r: %s", query, exc)
            continue
        for element in elements:
            paragraph = clean_text(element.get_text())
            if MIN_PREVIEW_LEN < len(paragraph) < MAX_TEXT_LEN:
                if paragraph.lower() not in boilerplate:
                    return paragraph
    return None


def extract_records(
    soup: BeautifulSoup,
    url: str,
    depth: int = 0,
    preview_queries: Sequence[str] = DEFAULT_PREVIEW_QUERIES,
    heuristics: Iterable[str] = (),
) -> List[Record]:
    records: List[Record] = []

    def emit(kind, payload: str) -> None:
        records.append(Record(kind, payload, url, depth))

    for keywords in _meta_contents(soup, 'meta[name="keywords"]'):
        if keywords:
            emit("keywords", keywords)

    for desc in _meta_contents(soup, 'meta[name="description"]'):
        if 0 < len(desc) < MAX_TEXT_LEN:
            emit("desc", desc)

    for og_desc in _meta_contents(soup, 'meta[property="og:description"]'):
        if 0 < len(og_desc) < MAX_TEXT_LEN:
            emit("og-desc", og_desc)

    for html in soup.select("html[lang]"):
        lang = clean_text(str(html.get("lang", "")))
        if 0 < len(lang) < MAX_LANG_LEN:
            emit("lang", lang)

    for title in soup.find_all("title"):
        text = clean_text(title.get_text())
        if text:
            emit("title", text)

    # html.parser only builds <body> when the markup has one
    body = soup.body or soup

    preview = find_preview(body, preview_queries, heuristics)
    if preview is not None:
        emit("para", preview)

    first_p = body.find("p")
    if first_p is not None:
        paragraph = clean_text(first_p.get_text())
        if 0 < len(paragraph) < MAX_TEXT_LEN:
            emit("para-just-p", paragraph)

    for level in ("h1", "h2", "h3"):
        for heading in body.find_all(level):
            text = heading.get_text()
            if len(text) < MAX_HEADING_LEN:
                emit(level, clean_text(text))

    return records
