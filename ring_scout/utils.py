# File: ring_scout/utils.py
"""ring_scout.utils: policy list reading and text cleanup helpers."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Sequence, Union
from urllib.parse import urlparse

from ring_scout.logger import logger

__all__: Sequence[str] = (
    "DEFAULT_PREVIEW_QUERIES",
    "read_list",
    "read_preview_queries",
    "clean_text",
    "has_banned_suffix",
    "hostname",
)

DEFAULT_PREVIEW_QUERIES: Sequence[str] = ("main p", "article p", "section p", "p")

# Unicode "separator" categories (Zs, Zl, Zp)
_SEPARATORS = re.compile(r"[\u0020\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+")


def read_list(path: Union[str, Path, None]) -> List[str]:
    """Read a newline-delimited list; a missing or unreadable file gives an empty list."""
    if not path:
        return []
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("List file not found, using empty list: %s", p)
        return []
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read list %s, using empty list: %s", p, exc)
        return []
    entries = [line.strip() for line in text.splitlines() if line.strip()]
    logger.debug("Loaded %d entries from list %s", len(entries), p)
    return entries


def read_preview_queries(path: Union[str, Path, None]) -> List[str]:
    """CSS selectors tried in order when picking a preview paragraph."""
    return read_list(path) or list(DEFAULT_PREVIEW_QUERIES)


def clean_text(s: str) -> str:
    """Trim, turn newlines into spaces and collapse runs of space separators."""
    s = s.strip()
    s = s.replace("\n", " ")
    return _SEPARATORS.sub(" ", s)


def has_banned_suffix(suffixes: Sequence[str], link: str) -> bool:
    lowered = link.lower()
    return any(lowered.endswith(suffix) for suffix in suffixes)


def hostname(url: str) -> Optional[str]:
    """Hostname of *url*, or None when it cannot be parsed."""
    try:
        return urlparse(url).hostname
    except ValueError:
        return None
