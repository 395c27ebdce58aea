# File: tests/conftest.py
from pathlib import Path
from typing import Awaitable, Callable, Dict

import pytest
import pytest_asyncio
from aiohttp import web

from ring_scout.config import RingScoutConfig
from ring_scout.crawler.models import PageData


@pytest.fixture()
def list_files(tmp_path) -> Dict[str, Path]:
    """
    Create temporary policy list files for tests.
    Returns dict with config keys to file paths.
    """
    files = {
        "webring": "https://ring.example 0\nhttps://shared.example/~alice 1\n",
        "banned_domains": "banned.example\n",
        "banned_suffixes": ".pdf\n.ZIP\n",
        "boring_domains": "https://boring.example\n",
        "boring_words": "https://ring.example/boring\n",
        "preview_queries": "main p\np\n",
        "heuristics": "Welcome to my little corner of the web!\n",
    }
    paths = {}
    for key, content in files.items():
        path = tmp_path / f"{key}.txt"
        path.write_text(content, encoding="utf-8")
        paths[key] = path
    return paths


@pytest.fixture()
def basic_config(list_files) -> RingScoutConfig:
    """
    Return a valid RingScoutConfig pointing at the temporary lists.
    """
    return RingScoutConfig(
        general={"url": "https://ring.example"},
        crawler={
            "webring": str(list_files["webring"]),
            "banned_domains": str(list_files["banned_domains"]),
            "banned_suffixes": str(list_files["banned_suffixes"]),
            "boring_domains": str(list_files["boring_domains"]),
            "boring_words": str(list_files["boring_words"]),
            "preview_queries": str(list_files["preview_queries"]),
            "user_agent": "TestAgent/1.0",
            "delay": 0,
        },
        data={"heuristics": str(list_files["heuristics"])},
    )


@pytest.fixture()
def mock_page_data() -> PageData:
    """
    Provide a simple PageData instance with HTML content.
    """
    html = (
        '<html lang="en"><head><title>Ring member</title></head><body>'
        '<a href="/post">Post</a><a href="https://outside.example/x">X</a>'
        "</body></html>"
    )
    return PageData(url="https://ring.example", content=html)


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> Callable[[web.Application], Awaitable[str]]:
    """Start aiohttp apps on free ports, yield their base URL, clean up afterwards."""
    runners = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    yield _serve
    for runner in runners:
        await runner.cleanup()
