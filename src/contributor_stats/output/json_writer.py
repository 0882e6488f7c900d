"""JSON output writer for statistics reports."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from contributor_stats.models.activity import StatisticsRecord
from contributor_stats.models.window import DateWindow


def build_report(
    repository: str,
    contributor: str,
    window: DateWindow,
    statistics: StatisticsRecord,
) -> dict[str, Any]:
    """Build a complete statistics report.

    Args:
        repository: Repository full name (owner/repo)
        contributor: GitHub login the statistics belong to
        window: Date range the statistics cover
        statistics: Aggregated activity

    Returns:
        Dictionary ready for JSON serialization or template rendering
    """
    return {
        "repository": repository,
        "contributor": contributor,
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "period": {
            "from": window.start_date,
            "to": window.end_date,
        },
        **statistics.as_report(),
    }


def write_json_report(
    report: dict[str, Any],
    output_path: Optional[Path] = None,
) -> Path:
    """Write a statistics report to a JSON file.

    Args:
        report: Report dictionary
        output_path: Output file path (defaults to output/<contributor>_<timestamp>.json)

    Returns:
        Path to written file
    """
    if output_path is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        contributor = report.get("contributor", "unknown")
        output_path = Path("output") / f"{contributor}_{timestamp}.json"

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False, default=str)

    return output_path
