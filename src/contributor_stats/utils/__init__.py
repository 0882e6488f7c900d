"""Utility modules for contributor-stats."""

from contributor_stats.utils.dates import is_within_date_range, parse_datetime
from contributor_stats.utils.pagination import (
    get_next_page_url,
    get_total_pages,
    parse_link_header,
)
from contributor_stats.utils.rate_limiter import RateLimitState

__all__ = [
    "RateLimitState",
    "is_within_date_range",
    "parse_datetime",
    "parse_link_header",
    "get_next_page_url",
    "get_total_pages",
]
