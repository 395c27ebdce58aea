# ring_scout/crawler/link_extractor.py
"""
Link extraction and normalization utilities for RingScout.
"""
from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag

_SKIPPED_SCHEMES = ("mailto:", "javascript:", "tel:", "data:")


def extract_links(soup: BeautifulSoup) -> List[str]:
    """
    Return raw href values of ``a[href]`` elements in document order.

    Ignores mailto:, javascript:, tel: and data: links. Resolution against
    the page URL is left to the caller.
    """
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        if href_val.strip().lower().startswith(_SKIPPED_SCHEMES):
            continue
        links.append(href_val)
    return links


def normalize_link(raw: str) -> str:
    """
    Drop the fragment and the query, trim whitespace and strip one trailing slash.

    >>> normalize_link("https://x.com/a/#frag")
    'https://x.com/a'
    """
    link = raw.split("#", 1)[0]
    link = link.split("?", 1)[0]
    link = link.strip()
    return link.removesuffix("/")
