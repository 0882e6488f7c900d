"""Services for GitHub data collection."""

from contributor_stats.services.contribution_aggregator import ContributionAggregator
from contributor_stats.services.item_source import (
    ItemSource,
    ListingItemSource,
    SearchItemSource,
)
from contributor_stats.services.paginator import Paginator
from contributor_stats.services.query_builder import Query, QueryBuilder

__all__ = [
    "ContributionAggregator",
    "ItemSource",
    "ListingItemSource",
    "SearchItemSource",
    "Paginator",
    "Query",
    "QueryBuilder",
]
