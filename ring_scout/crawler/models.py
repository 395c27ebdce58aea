# ring_scout/crawler/models.py
"""
Data models for the RingScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

RecordKind = Literal[
    "keywords",
    "desc",
    "og-desc",
    "lang",
    "title",
    "para",
    "para-just-p",
    "h1",
    "h2",
    "h3",
    "non-webring-link",
    "webring-link",
]


@dataclass(slots=True)
class PageData:
    """A fetched response: requested URL, decoded body and response metadata."""

    url: str
    content: str
    status: int = 200
    content_type: str = "text/html"
    final_url: Optional[str] = None

    @property
    def base_url(self) -> str:
        """URL relative links are resolved against (after redirects)."""
        return self.final_url or self.url

    @property
    def is_html(self) -> bool:
        return self.content_type in ("text/html", "application/xhtml+xml")


@dataclass(frozen=True, slots=True)
class Site:
    """A ring member or a discovered neighbour; depth is fixed at creation."""

    url: str
    depth: int


@dataclass(frozen=True, slots=True)
class Hypha:
    """A page of one site's self-described link graph, seen during precrawl."""

    url: str
    depth: int


class Cluster(BaseModel):
    """Body of one precrawl response."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    location: str = ""
    hyphae: List[str] = Field(default_factory=list)
    spores: List[str] = Field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Record:
    """One extracted fact handed to the indexer."""

    kind: RecordKind
    payload: str
    url: str
    depth: int = 0

    def line(self) -> str:
        return f"{self.kind} {self.payload} {self.url} {self.depth}"

    def as_dict(self) -> dict:
        return {"kind": self.kind, "payload": self.payload, "url": self.url, "depth": self.depth}
