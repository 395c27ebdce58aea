from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional, Tuple

from aiohttp import ClientError

from ring_scout.classifier import LinkClassifier
from ring_scout.config import PolicyLists, RingScoutConfig
from ring_scout.crawler.fetcher import Fetcher, Transport
from ring_scout.crawler.link_extractor import extract_links
from ring_scout.crawler.models import PageData, Record
from ring_scout.frontier import Frontier
from ring_scout.logger import LOGGER_NAME
from ring_scout.parser.html_parser import extract_records, parse_html
from ring_scout.registry import SiteRegistry
from ring_scout.utils import DEFAULT_PREVIEW_QUERIES, hostname

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Webring crawler: a fixed pool of workers sharing one frontier.

    Each worker takes a URL, fetches it inside the per-domain rate limit,
    turns the page into records and feeds accepted links back to the
    frontier. Failed fetches are logged and dropped, never retried.
    """

    def __init__(
        self,
        config: RingScoutConfig,
        registry: SiteRegistry,
        lists: Optional[PolicyLists] = None,
    ) -> None:
        self.config = config
        self.registry = registry
        self.lists = lists or PolicyLists()
        settings = config.crawler
        self.concurrency: int = settings.parallelism
        self.transport = Transport(user_agent=settings.user_agent, proxy=config.general.proxy)
        self.frontier = Frontier(
            allowed_domains=registry.domains,
            disallowed_domains=self.lists.banned_domains,
            banned_suffixes=self.lists.banned_suffixes,
            max_depth=settings.max_depth,
            max_size=settings.queue_size,
            delay=settings.delay,
            parallelism=settings.parallelism,
        )
        self.classifier = LinkClassifier(
            registry.domains,
            boring_domains=self.lists.boring_domains,
            boring_words=self.lists.boring_words,
            banned_suffixes=self.lists.banned_suffixes,
            root_domain=hostname(str(config.general.url)) or "",
            path_sites=registry.path_sites,
        )
        self.fetcher: Optional[Fetcher] = None
        self.pages_fetched = 0
        self.failed: List[str] = []
        self.logger = logging.getLogger(LOGGER_NAME)

    async def __aenter__(self) -> AsyncCrawler:
        session = self.transport.session()
        self.fetcher = Fetcher(session, self.transport)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.fetcher and not self.fetcher.session.closed:
            await self.fetcher.session.close()

    async def crawl(self) -> List[Record]:
        self.logger.info("Crawl start: %d seeds", len(self.registry.sites))
        start = time.monotonic()
        for site in self.registry.sites:
            self.frontier.add_seed(site.url, site.depth)
        results: List[Record] = []
        workers = [asyncio.create_task(self._worker(results)) for _ in range(self.concurrency)]
        try:
            await self.frontier.queue.join()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            self.frontier.clear()
        duration = time.monotonic() - start
        self.logger.info(
            "Done: %d pages, %d records, %d failures in %.2f s",
            self.pages_fetched,
            len(results),
            len(self.failed),
            duration,
        )
        return results

    async def _worker(self, results: List[Record]) -> None:
        queue: asyncio.Queue[Tuple[str, int]] = self.frontier.queue
        while True:
            try:
                url, hops = await queue.get()
            except asyncio.CancelledError:
                break
            try:
                page = await self._fetch(url)
                if page is not None:
                    self.pages_fetched += 1
                    results.extend(self.process(page, hops))
            except asyncio.CancelledError:
                queue.task_done()
                break
            except Exception:
                self.logger.exception("Unexpected error while handling %s", url)
            queue.task_done()

    async def _fetch(self, url: str) -> Optional[PageData]:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        try:
            async with self.frontier.limiter.slot(hostname(url) or ""):
                page = await self.fetcher.fetch(url)
        except (ClientError, asyncio.TimeoutError) as e:
            self.on_error(url, None, e)
            return None
        if page.status >= 400:
            self.on_error(url, page, None)
            return None
        if not page.is_html:
            self.logger.debug("Skipping %s: content type %s", url, page.content_type or "unknown")
            return None
        return page

    def on_error(self, url: str, page: Optional[PageData], error: Optional[BaseException]) -> None:
        """Recoverable fetch failure: log it and abandon the URL."""
        self.failed.append(url)
        detail = f"HTTP {page.status}" if page is not None else "no response"
        self.logger.warning("Request URL: %s failed with response: %s Error: %r", url, detail, error)

    def process(self, page: PageData, hops: int) -> List[Record]:
        """Records for one page; accepted links are pushed to the frontier."""
        soup = parse_html(page)
        depth = self.frontier.depth_of(page.url)
        records = extract_records(
            soup,
            page.url,
            depth,
            preview_queries=self.lists.preview_queries or DEFAULT_PREVIEW_QUERIES,
            heuristics=self.lists.heuristics,
        )
        for href in extract_links(soup):
            decision = self.classifier.classify(href, page.url, depth, base_url=page.base_url)
            if decision is None:
                continue
            records.extend(decision.records)
            if decision.enqueue:
                self.frontier.add_url(decision.link, hops + 1)
        return records
