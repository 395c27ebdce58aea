"""ring_scout.precrawl: expand one entry point into the list of sites to crawl.

Every response of the walk is a JSON *cluster*::

    {"location": "https://a", "hyphae": ["https://a/2"], "spores": ["https://b"]}

``hyphae`` are pages of the same site still to be visited (one level deeper),
``spores`` are neighbouring sites, recorded at the depth of the cluster that
mentioned them. Pages are visited breadth-first, one request at a time; any
failure aborts the whole walk since a partial graph cannot be trusted.
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Deque, Dict, Iterable, List, Set

from aiohttp import ClientError
from pydantic import ValidationError

from ring_scout.crawler.fetcher import Fetcher
from ring_scout.crawler.link_extractor import normalize_link
from ring_scout.crawler.models import Cluster, Hypha, Site
from ring_scout.logger import logger
from ring_scout.registry import with_scheme
from ring_scout.utils import hostname

__all__ = ["PrecrawlError", "precrawl", "PRECRAWL_TIMEOUT"]

PRECRAWL_TIMEOUT = 10.0


class PrecrawlError(RuntimeError):
    """The discovery walk failed; no result is usable."""


async def _fetch_cluster(fetcher: Fetcher, url: str, timeout: float) -> Cluster:
    try:
        page = await fetcher.fetch(url, timeout=timeout)
    except (ClientError, asyncio.TimeoutError) as exc:
        raise PrecrawlError(f"request to {url} failed: {exc!r}") from exc
    if page.status != 200:
        raise PrecrawlError(f"{url} answered HTTP {page.status}, expected 200")
    try:
        cluster = Cluster.model_validate_json(page.content)
    except ValidationError as exc:
        raise PrecrawlError(f"{url} did not return a valid cluster: {exc}") from exc
    if not cluster.location:
        cluster = cluster.model_copy(update={"location": url})
    return cluster


async def precrawl(
    fetcher: Fetcher,
    root_url: str,
    banned_domains: Iterable[str] = (),
    *,
    timeout: float = PRECRAWL_TIMEOUT,
) -> List[Site]:
    """Walk the cluster graph from *root_url*; return every non-banned site once."""
    checked: Set[str] = set()
    all_hyphae: Dict[str, Hypha] = {}
    all_sites: Dict[str, Site] = {}
    worklist: Deque[Hypha] = deque()

    current = Hypha(url=root_url, depth=0)
    all_hyphae[root_url] = current
    while True:
        logger.debug("Precrawl: fetching %s (depth %d)", current.url, current.depth)
        cluster = await _fetch_cluster(fetcher, current.url, timeout)
        depth = current.depth

        checked.add(current.url)
        checked.add(cluster.location)

        for url in cluster.hyphae:
            if url not in all_hyphae:
                hypha = Hypha(url=url, depth=depth + 1)
                all_hyphae[url] = hypha
                worklist.append(hypha)

        for url in cluster.spores:
            all_sites.setdefault(normalize_link(url), Site(url=url, depth=depth))

        while worklist and worklist[0].url in checked:
            worklist.popleft()
        if not worklist:
            break
        current = worklist.popleft()

    banned = set(banned_domains)
    sites: List[Site] = []
    for link, site in all_sites.items():
        # scheme-less spores are kept; the seed list reader adds https://
        domain = hostname(with_scheme(link))
        if domain is None:
            logger.debug("Precrawl: dropping unparsable site %r", site.url)
            continue
        if domain in banned:
            logger.debug("Precrawl: dropping banned site %s", link)
            continue
        sites.append(Site(url=link, depth=site.depth))

    logger.info(
        "Precrawl finished: %d locations checked, %d sites found, %d kept",
        len(checked),
        len(all_sites),
        len(sites),
    )
    return sites
