# ring_scout/crawler/fetcher.py
"""
Fetcher module: explicit transport settings and single-shot HTTP GETs.

Proxy, user agent and timeout live on a :class:`Transport` value handed to
the :class:`Fetcher` at construction; nothing is configured process-wide.
Errors are not retried, callers decide whether a failure is fatal
(precrawl) or just logged (crawl).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from aiohttp import ClientSession, ClientTimeout

from ring_scout.crawler.models import PageData


@dataclass(frozen=True, slots=True)
class Transport:
    """How requests leave the process."""

    user_agent: str
    proxy: Optional[str] = None
    timeout: Optional[float] = None

    def session(self) -> ClientSession:
        """New session carrying the user agent (and the default timeout, if any)."""
        kwargs = {}
        if self.timeout is not None:
            kwargs["timeout"] = ClientTimeout(total=self.timeout)
        return ClientSession(
            headers={"User-Agent": self.user_agent},
            raise_for_status=False,
            **kwargs,
        )


class Fetcher:
    """GET a URL through the configured transport."""

    def __init__(self, session: ClientSession, transport: Transport) -> None:
        self.session = session
        self.transport = transport

    async def fetch(self, url: str, timeout: Optional[float] = None) -> PageData:
        """
        Fetch *url* and return PageData whatever the status.

        Raises aiohttp.ClientError or asyncio.TimeoutError on transport failure.
        """
        kwargs = {}
        if timeout is not None:
            kwargs["timeout"] = ClientTimeout(total=timeout)
        async with self.session.get(url, proxy=self.transport.proxy, **kwargs) as resp:
            mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
            text = await resp.text(errors="replace")
            return PageData(
                url=url,
                content=text,
                status=resp.status,
                content_type=mime,
                final_url=str(resp.url),
            )
