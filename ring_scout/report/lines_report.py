# ring_scout/report/lines_report.py

"""Plain line output: indexer records or the precrawl site list."""
from pathlib import Path
from typing import Iterable

from ring_scout.crawler.models import Record, Site


def record_lines(records: Iterable[Record]) -> list[str]:
    return [record.line() for record in records]


def site_lines(sites: Iterable[Site]) -> list[str]:
    """``<url> <depth>`` per site, the same format as the webring seed list."""
    return [f"{site.url} {site.depth}" for site in sites]


def render_lines(lines: Iterable[str], output_path: Path | str) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return output
