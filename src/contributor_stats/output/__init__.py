"""Output handlers for contributor-stats."""

from contributor_stats.output.console import Console
from contributor_stats.output.html_report import render_html, write_html_report
from contributor_stats.output.json_writer import build_report, write_json_report

__all__ = [
    "build_report",
    "render_html",
    "write_html_report",
    "write_json_report",
    "Console",
]
