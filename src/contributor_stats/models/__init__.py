"""Data models for contributor-stats."""

from contributor_stats.models.activity import ActivityItem, StatisticsRecord
from contributor_stats.models.window import DateWindow

__all__ = [
    "ActivityItem",
    "StatisticsRecord",
    "DateWindow",
]
