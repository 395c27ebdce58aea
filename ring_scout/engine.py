# File: ring_scout/engine.py
"""ring_scout.engine: orchestration of the precrawl and crawl runs."""

from __future__ import annotations

from typing import List, Optional

from ring_scout.config import PolicyLists, RingScoutConfig, load_policy_lists
from ring_scout.crawler.crawler import AsyncCrawler
from ring_scout.crawler.fetcher import Fetcher, Transport
from ring_scout.crawler.models import Record, Site
from ring_scout.logger import logger
from ring_scout.precrawl import precrawl
from ring_scout.registry import SiteRegistry, build_registry
from ring_scout.utils import read_list

__all__ = ["load_registry", "start_crawl", "start_precrawl"]


def load_registry(config: RingScoutConfig) -> SiteRegistry:
    """Build the site registry from the configured webring seed list."""
    entries = read_list(config.crawler.webring)
    if not entries:
        logger.warning("Webring seed list is empty: %s", config.crawler.webring)
    return build_registry(entries)


async def start_precrawl(config: RingScoutConfig) -> List[Site]:
    """Run the discovery walk from the root URL; raises PrecrawlError on failure."""
    transport = Transport(user_agent=config.crawler.user_agent, proxy=config.general.proxy)
    banned = read_list(config.crawler.banned_domains)
    logger.info("Precrawl from %s", config.general.url)
    async with transport.session() as session:
        fetcher = Fetcher(session, transport)
        return await precrawl(
            fetcher,
            str(config.general.url),
            banned,
            timeout=config.crawler.precrawl_timeout,
        )


async def start_crawl(
    config: RingScoutConfig,
    registry: Optional[SiteRegistry] = None,
    lists: Optional[PolicyLists] = None,
) -> List[Record]:
    """Crawl every seed of the ring and return the extracted records."""
    registry = registry if registry is not None else load_registry(config)
    lists = lists if lists is not None else load_policy_lists(config)
    async with AsyncCrawler(config, registry, lists) as crawler:
        return await crawler.crawl()
