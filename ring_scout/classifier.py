"""ring_scout.classifier: decide what an outbound link means and whether to follow it.

Two independent answers are produced for every ``<a href>`` on a page:

* a *record* for the indexer: ``non-webring-link`` when a member links out of
  the ring, ``webring-link`` when one member links to another (links to or
  from the root site are not counted);
* an *enqueue* decision: links on a path site's host are only followed below
  that site's path, everything else goes to the frontier, which applies its
  own domain rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urljoin, urlparse

from ring_scout.crawler.link_extractor import normalize_link
from ring_scout.crawler.models import Record
from ring_scout.logger import logger
from ring_scout.registry import find_path_site, lower_origin
from ring_scout.utils import has_banned_suffix

__all__ = ["LinkDecision", "LinkClassifier"]


@dataclass(slots=True)
class LinkDecision:
    link: str
    records: List[Record] = field(default_factory=list)
    enqueue: bool = False


class LinkClassifier:
    """Read-only policy applied to every link found during the crawl."""

    def __init__(
        self,
        ring_domains: Iterable[str],
        *,
        boring_domains: Iterable[str] = (),
        boring_words: Iterable[str] = (),
        banned_suffixes: Sequence[str] = (),
        root_domain: str = "",
        path_sites: Sequence[str] = (),
    ) -> None:
        self.ring_domains = frozenset(ring_domains)
        self.boring = frozenset(boring_domains) | frozenset(boring_words)
        self.banned_suffixes = tuple(s.lower() for s in banned_suffixes)
        self.root_domain = root_domain
        self.path_sites = list(path_sites)

    def classify(
        self, href: str, current_url: str, depth: int = 0, *, base_url: Optional[str] = None
    ) -> Optional[LinkDecision]:
        """
        Classify *href* found on *current_url*.

        Relative links resolve against *base_url* (the URL after redirects)
        when given, else against *current_url*.

        Returns None for links that are dropped outright: banned suffixes,
        unparsable URLs and non-http(s) targets.
        """
        link = normalize_link(href)
        if has_banned_suffix(self.banned_suffixes, link):
            return None

        try:
            link = urljoin(base_url or current_url, link)
            parsed = urlparse(link)
            outgoing = parsed.hostname or ""
        except ValueError:
            logger.debug("Skipping malformed link %r on %s", href, current_url)
            return None
        if parsed.scheme not in ("http", "https") or not outgoing:
            return None
        current = urlparse(current_url).hostname or ""

        decision = LinkDecision(link=link)
        if link not in self.boring:
            if outgoing not in self.ring_domains:
                decision.records.append(Record("non-webring-link", link, current_url, depth))
            elif (
                outgoing != current
                and outgoing != self.root_domain
                and current != self.root_domain
            ):
                decision.records.append(Record("webring-link", link, current_url, depth))

        path_site = find_path_site(self.path_sites, outgoing)
        if path_site is not None:
            decision.enqueue = lower_origin(link).startswith(lower_origin(path_site))
        else:
            decision.enqueue = True
        return decision
