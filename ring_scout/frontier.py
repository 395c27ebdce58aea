"""ring_scout.frontier: the shared crawl queue and the rules for entering it."""

from __future__ import annotations

import asyncio
import time
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Iterable, Sequence, Set, Tuple

from ring_scout.crawler.link_extractor import normalize_link
from ring_scout.logger import logger
from ring_scout.utils import has_banned_suffix, hostname

__all__ = ["Frontier", "DomainLimiter"]


class DomainLimiter:
    """Per-host concurrency cap plus a minimum delay between request starts."""

    def __init__(self, delay: float = 1.0, parallelism: int = 3) -> None:
        if parallelism < 1:
            raise ValueError("parallelism must be >= 1")
        self.delay = delay
        self.parallelism = parallelism
        self._slots: Dict[str, asyncio.Semaphore] = {}
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._last_start: Dict[str, float] = {}

    @asynccontextmanager
    async def slot(self, host: str) -> AsyncIterator[None]:
        if host not in self._slots:
            self._slots[host] = asyncio.Semaphore(self.parallelism)
        semaphore = self._slots[host]
        async with semaphore:
            async with self._locks[host]:
                last = self._last_start.get(host)
                if last is not None:
                    wait = self.delay - (time.monotonic() - last)
                    if wait > 0:
                        await asyncio.sleep(wait)
                self._last_start[host] = time.monotonic()
            yield


class Frontier:
    """
    Bounded queue of ``(url, hops)`` with enqueue rules.

    A URL passes when its hop count is within ``max_depth``, its host is not
    disallowed and (if an allow-list is given) is allowed, it has no banned
    suffix and it was never queued before in this run. The discovery depth
    of seeds is kept in a side map keyed by normalized URL.
    """

    def __init__(
        self,
        *,
        allowed_domains: Iterable[str] = (),
        disallowed_domains: Iterable[str] = (),
        banned_suffixes: Sequence[str] = (),
        max_depth: int = 3,
        max_size: int = 100_000,
        delay: float = 1.0,
        parallelism: int = 3,
    ) -> None:
        self.allowed_domains = frozenset(allowed_domains)
        self.disallowed_domains = frozenset(disallowed_domains)
        self.banned_suffixes = tuple(s.lower() for s in banned_suffixes)
        self.max_depth = max_depth
        self.queue: asyncio.Queue[Tuple[str, int]] = asyncio.Queue(maxsize=max_size)
        self.visited: Set[str] = set()
        self.depths: Dict[str, int] = {}
        self.limiter = DomainLimiter(delay=delay, parallelism=parallelism)

    def add_seed(self, url: str, depth: int) -> bool:
        key = normalize_link(url)
        self.depths.setdefault(key, depth)
        return self.add_url(key, 0)

    def add_url(self, url: str, hops: int) -> bool:
        """Queue *url* reached after *hops* links; False when a rule rejects it."""
        if hops > self.max_depth:
            return False
        host = hostname(url)
        if not host:
            return False
        if host in self.disallowed_domains:
            logger.debug("Disallowed domain, skipping %s", url)
            return False
        if self.allowed_domains and host not in self.allowed_domains:
            return False
        if has_banned_suffix(self.banned_suffixes, url):
            return False
        if url in self.visited:
            return False
        try:
            self.queue.put_nowait((url, hops))
        except asyncio.QueueFull:
            logger.warning("Frontier full (%d entries), dropping %s", self.queue.maxsize, url)
            return False
        self.visited.add(url)
        return True

    def depth_of(self, url: str) -> int:
        return self.depths.get(normalize_link(url), 0)

    def clear(self) -> None:
        """Forget the per-run state (revisit set and depth map)."""
        self.visited.clear()
        self.depths.clear()
        while not self.queue.empty():
            self.queue.get_nowait()
            self.queue.task_done()
