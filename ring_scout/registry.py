"""ring_scout.registry: webring seed list parsing.

The seed list holds one ``<url> <depth>`` entry per line. From it the
registry derives the ring's domains (the crawl allow-list), the *path sites*
(members living under a path of a shared host, e.g. tilde sites, which may
only be crawled below that path) and the discovery depth of every seed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional
from urllib.parse import urlparse, urlsplit, urlunsplit

from ring_scout.crawler.link_extractor import normalize_link
from ring_scout.crawler.models import Site
from ring_scout.logger import logger

__all__ = [
    "SeedListError",
    "SiteRegistry",
    "parse_seed_entries",
    "build_registry",
    "is_path_site",
    "lower_origin",
    "with_scheme",
]


class SeedListError(ValueError):
    """A seed entry without a usable depth; the crawl cannot start."""


@dataclass(frozen=True, slots=True)
class SiteRegistry:
    sites: List[Site] = field(default_factory=list)
    domains: FrozenSet[str] = frozenset()
    path_sites: List[str] = field(default_factory=list)
    depths: Dict[str, int] = field(default_factory=dict)

    def path_site_for(self, domain: str) -> Optional[str]:
        """First path site whose URL mentions *domain*, if any."""
        return find_path_site(self.path_sites, domain)


def find_path_site(path_sites: Iterable[str], domain: str) -> Optional[str]:
    if not domain:
        return None
    domain = domain.lower()
    for site in path_sites:
        if domain in lower_origin(site):
            return site
    return None


def lower_origin(url: str) -> str:
    """*url* with scheme and host lowercased; the path keeps its case."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    return urlunsplit(parts._replace(scheme=parts.scheme.lower(), netloc=parts.netloc.lower()))


def with_scheme(raw: str) -> str:
    return raw if "://" in raw else f"https://{raw.lstrip('/')}"


def parse_seed_entries(lines: Iterable[str]) -> List[Site]:
    """Parse ``<url> <depth>`` lines; a missing or non-integer depth is fatal."""
    sites: List[Site] = []
    for lineno, line in enumerate(lines, start=1):
        parts = line.split()
        if not parts:
            continue
        if len(parts) < 2:
            raise SeedListError(f"seed entry {lineno} has no depth: {line!r}")
        try:
            depth = int(parts[1])
        except ValueError as exc:
            raise SeedListError(f"seed entry {lineno} has a malformed depth: {line!r}") from exc
        if depth < 0:
            raise SeedListError(f"seed entry {lineno} has a negative depth: {line!r}")

        url = with_scheme(parts[0])
        try:
            parsed = urlparse(url)
        except ValueError as exc:
            logger.warning("Skipping unparsable seed %r: %s", parts[0], exc)
            continue
        if not parsed.hostname:
            logger.warning("Skipping seed without a host: %r", parts[0])
            continue
        sites.append(Site(url=url, depth=depth))
    return sites


def is_path_site(url: str) -> bool:
    """A seed restricted to its own path: the path is present and is not just ``/``."""
    path = urlparse(url).path
    return bool(path) and path != "/"


def build_registry(seed_entries: Iterable[str]) -> SiteRegistry:
    sites = parse_seed_entries(seed_entries)
    domains = set()
    path_sites: List[str] = []
    depths: Dict[str, int] = {}
    for site in sites:
        domains.add(urlparse(site.url).hostname)
        if is_path_site(site.url):
            path_sites.append(lower_origin(site.url))
        depths.setdefault(normalize_link(site.url), site.depth)

    logger.info(
        "Registry: %d seeds, %d domains, %d path sites", len(sites), len(domains), len(path_sites)
    )
    return SiteRegistry(
        sites=sites,
        domains=frozenset(domains),
        path_sites=path_sites,
        depths=depths,
    )
