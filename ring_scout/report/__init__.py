# File: ring_scout/report/__init__.py
"""ring_scout.report: JSON and line output used by the CLI and tests."""

from ring_scout.report.json_report import render_json
from ring_scout.report.lines_report import record_lines, render_lines, site_lines

__all__ = ["render_json", "render_lines", "record_lines", "site_lines"]
