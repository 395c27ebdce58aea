# File: ring_scout/aggregator.py
"""ring_scout.aggregator: group the crawl's record stream into a report."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, TypedDict

from ring_scout.crawler.models import Record

_LINK_KINDS = ("webring-link", "non-webring-link")


class PageInfo(TypedDict):
    """Facts extracted from one page, keyed by record kind."""

    depth: int
    facts: Dict[str, List[str]]


class LinkInfo(TypedDict):
    """One outbound link: the page it was found on and its target."""

    source: str
    target: str
    depth: int


@dataclass(slots=True)
class CrawlReport:
    """Crawl results: per-page facts plus the ring's link graph."""

    pages: Dict[str, PageInfo] = field(default_factory=dict)
    webring_links: List[LinkInfo] = field(default_factory=list)
    non_webring_links: List[LinkInfo] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "pages": self.pages,
            "webring_links": self.webring_links,
            "non_webring_links": self.non_webring_links,
        }

    def json(self, *, pretty: bool = False) -> str:
        """JSON form of the report without the raw record list."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(records: Iterable[Record]) -> CrawlReport:
    report = CrawlReport(records=list(records))
    for record in report.records:
        if record.kind in _LINK_KINDS:
            link: LinkInfo = {"source": record.url, "target": record.payload, "depth": record.depth}
            if record.kind == "webring-link":
                report.webring_links.append(link)
            else:
                report.non_webring_links.append(link)
            continue
        page = report.pages.setdefault(record.url, {"depth": record.depth, "facts": {}})
        page["facts"].setdefault(record.kind, []).append(record.payload)
    return report
