"""HTML report rendering with Jinja2."""

import os
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")
DEFAULT_FILENAME = "statistics.html"


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )


def render_html(report: dict[str, Any]) -> str:
    """Render a report built by ``build_report`` as an HTML page."""
    template = _environment().get_template("report.html.j2")
    return template.render(report=report, has_commits="commit_stats" in report)


def write_html_report(report: dict[str, Any], output_path: Optional[Path] = None) -> Path:
    """Render ``report`` and write it to ``output_path`` (statistics.html by default)."""
    if output_path is None:
        output_path = Path(DEFAULT_FILENAME)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_html(report), encoding="utf-8")
    return output_path
