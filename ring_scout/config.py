"""
Loading and validation of the RingScout configuration.

The file is YAML or JSON with three sections (``general``, ``crawler``,
``data``); the schema is described with Pydantic models. Policy list files
referenced by the config are read by :func:`load_policy_lists`.
"""
from __future__ import annotations

import errno
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union
from urllib.parse import urlparse

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)

from ring_scout.utils import read_list, read_preview_queries


class GeneralConfig(BaseModel):
    """Root URL and transport settings."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: HttpUrl = Field(..., description="Root crawl URL, also the precrawl entry point.")
    proxy: Optional[str] = Field(None, description="HTTP proxy applied to every request.")

    @field_validator("proxy", mode="before")
    def _check_proxy(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        if not isinstance(v, str):
            raise ValueError("proxy must be a string")
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"malformed proxy URL: {v!r}")
        return v.strip()


class CrawlerSettings(BaseModel):
    """Policy list locations and the fixed crawl limits."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    webring: Optional[str] = Field(None, description="Seed list: '<url> <depth>' per line.")
    banned_domains: Optional[str] = None
    banned_suffixes: Optional[str] = None
    boring_domains: Optional[str] = None
    boring_words: Optional[str] = None
    preview_queries: Optional[str] = None

    max_depth: int = Field(3, ge=0, description="Maximum number of hops from a seed.")
    user_agent: str = Field("RingScout/0.1", min_length=1)
    delay: float = Field(1.0, ge=0, description="Per-domain delay between requests (seconds).")
    parallelism: int = Field(3, ge=1, description="Worker count and per-domain concurrency.")
    queue_size: int = Field(100_000, ge=1, description="Frontier queue capacity.")
    precrawl_timeout: float = Field(10.0, gt=0, description="Timeout of every precrawl request.")


class DataConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    heuristics: Optional[str] = Field(None, description="About-page boilerplate paragraphs.")


class RingScoutConfig(BaseModel):
    """Configuration of one crawl or precrawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    general: GeneralConfig
    crawler: CrawlerSettings = Field(default_factory=CrawlerSettings)
    data: DataConfig = Field(default_factory=DataConfig)


@dataclass(slots=True)
class PolicyLists:
    """Read-only policy data shared by the classifier, frontier and extractor."""

    banned_domains: List[str] = field(default_factory=list)
    banned_suffixes: List[str] = field(default_factory=list)
    boring_domains: List[str] = field(default_factory=list)
    boring_words: List[str] = field(default_factory=list)
    heuristics: List[str] = field(default_factory=list)
    preview_queries: List[str] = field(default_factory=list)


def load_policy_lists(config: RingScoutConfig) -> PolicyLists:
    """Read every policy list referenced by *config*; missing files give empty lists."""
    crawler = config.crawler
    return PolicyLists(
        banned_domains=read_list(crawler.banned_domains),
        banned_suffixes=[s.lower() for s in read_list(crawler.banned_suffixes)],
        boring_domains=read_list(crawler.boring_domains),
        boring_words=read_list(crawler.boring_words),
        heuristics=[h.lower() for h in read_list(config.data.heuristics)],
        preview_queries=read_preview_queries(crawler.preview_queries),
    )


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of the YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of the JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> RingScoutConfig:
    """
    Read YAML or JSON and return a validated RingScoutConfig.

    Relative list paths inside the file are resolved against the config's
    directory. A missing config file raises FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG.resolve()
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    _resolve_list_paths(data, path_obj.parent)
    return RingScoutConfig(**data)


_LIST_KEYS = {
    "crawler": (
        "webring",
        "banned_domains",
        "banned_suffixes",
        "boring_domains",
        "boring_words",
        "preview_queries",
    ),
    "data": ("heuristics",),
}


def _resolve_list_paths(data: dict[str, Any], base: Path) -> None:
    for section, keys in _LIST_KEYS.items():
        values = data.get(section)
        if not isinstance(values, dict):
            continue
        for key in keys:
            value = values.get(key)
            if isinstance(value, str) and value and not Path(value).expanduser().is_absolute():
                values[key] = str(base / value)
