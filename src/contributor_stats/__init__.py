"""contributor-stats - Report a contributor's activity in a GitHub repository.

Collects, for one contributor and one repository over a date range:
- Pull requests opened
- Issues opened
- Commits authored (optional)

Example usage:
    ```python
    from contributor_stats import ContributorStats, DateWindow

    window = DateWindow.from_strings("2024-01-01", "2024-01-31")
    async with ContributorStats(token="ghp_xxx") as client:
        stats = await client.get_statistics("psf", "requests", "alice", window)
        print(f"Pull requests: {stats.prs_count}")
    ```
"""

__version__ = "0.1.0"

from contributor_stats.config import Config
from contributor_stats.exceptions import (
    ContributorStatsError,
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    InvalidDateRangeError,
    ResponseDecodeError,
)
from contributor_stats.models import ActivityItem, DateWindow, StatisticsRecord
from contributor_stats.sdk import ContributorStats

__all__ = [
    # Main SDK class
    "ContributorStats",
    # Configuration
    "Config",
    # Exceptions
    "ContributorStatsError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubNotFoundError",
    "ResponseDecodeError",
    "InvalidDateRangeError",
    # Models
    "ActivityItem",
    "StatisticsRecord",
    "DateWindow",
]
