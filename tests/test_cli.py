"""Tests for the CLI using click.testing.CliRunner.
They cover `crawl`, `precrawl`, `config`, `--version` and error handling.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner

cli_module = importlib.import_module("ring_scout.cli")
from ring_scout.cli import cli
from ring_scout.crawler.models import Record, Site
from ring_scout.logger import init_logging
from ring_scout.precrawl import PrecrawlError
from ring_scout.registry import SeedListError

RECORDS = [
    Record("title", "Home", "https://ring.example", 0),
    Record("non-webring-link", "https://outside.example/x", "https://ring.example", 0),
]


@pytest.fixture(autouse=True)
def patch_engine(monkeypatch):
    """Replace the engine entry points with canned results."""

    async def fake_crawl(cfg):
        return RECORDS

    async def fake_precrawl(cfg):
        return [Site("https://b.example", 0), Site("https://c.example", 1)]

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    monkeypatch.setattr(cli_module, "start_precrawl", fake_precrawl)
    yield
    # the CLI bound the log handler to the runner's stderr
    init_logging()


@pytest.fixture()
def cfg_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "general": {"url": "https://ring.example"},
                "crawler": {"user_agent": "Agent/1.0"},
            }
        ),
        encoding="utf-8",
    )
    return path


def invoke(cfg_file, *args):
    runner = CliRunner()
    return runner.invoke(cli, ["--config", str(cfg_file), "--log-level", "ERROR", *args])


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "RingScout" in result.output


def test_show_config(cfg_file):
    result = invoke(cfg_file, "config")
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["general"]["url"].rstrip("/") == "https://ring.example"
    assert data["crawler"]["max_depth"] == 3


def test_missing_config_fails(tmp_path):
    result = invoke(tmp_path / "missing.yaml", "config")
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_crawl_prints_record_lines(cfg_file):
    result = invoke(cfg_file, "crawl")
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "title Home https://ring.example 0",
        "non-webring-link https://outside.example/x https://ring.example 0",
    ]


def test_crawl_json_report(cfg_file, tmp_path):
    out = tmp_path / "out.json"
    result = invoke(cfg_file, "crawl", "--json", str(out), "--pretty")
    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["pages"]["https://ring.example"]["facts"] == {"title": ["Home"]}
    assert data["non_webring_links"] == [
        {"source": "https://ring.example", "target": "https://outside.example/x", "depth": 0}
    ]


def test_crawl_seed_list_error(monkeypatch, cfg_file):
    async def broken(cfg):
        raise SeedListError("seed entry 1 has a malformed depth")

    monkeypatch.setattr(cli_module, "start_crawl", broken)
    result = invoke(cfg_file, "crawl")
    assert result.exit_code == 1
    assert "malformed depth" in result.output


def test_crawl_timeout(monkeypatch, cfg_file):
    async def slow(cfg):
        await asyncio.sleep(2)
        return []

    monkeypatch.setattr(cli_module, "start_crawl", slow)
    result = invoke(cfg_file, "crawl", "--crawl-timeout", "0.2")
    assert result.exit_code != 0
    assert "did not finish" in result.output


def test_precrawl_stdout(cfg_file):
    result = invoke(cfg_file, "precrawl")
    assert result.exit_code == 0
    assert result.output.splitlines() == ["https://b.example 0", "https://c.example 1"]


def test_precrawl_output_file(cfg_file, tmp_path):
    out = tmp_path / "webring.txt"
    result = invoke(cfg_file, "precrawl", "--output", str(out))
    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8") == "https://b.example 0\nhttps://c.example 1\n"


def test_precrawl_failure_is_fatal(monkeypatch, cfg_file):
    async def broken(cfg):
        raise PrecrawlError("https://ring.example answered HTTP 500, expected 200")

    monkeypatch.setattr(cli_module, "start_precrawl", broken)
    result = invoke(cfg_file, "precrawl")
    assert result.exit_code == 1
    assert "Precrawl aborted" in result.output
