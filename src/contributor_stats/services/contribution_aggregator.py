"""Contributor statistics aggregation."""

import logging
import time

from contributor_stats.models.activity import ActivityItem, StatisticsRecord
from contributor_stats.models.window import DateWindow
from contributor_stats.services.paginator import ItemFactory, Paginator
from contributor_stats.services.query_builder import Query, QueryBuilder
from contributor_stats.utils.dates import is_within_date_range

logger = logging.getLogger(__name__)


class ContributionAggregator:
    """Collects pull requests, issues and optionally commits into one record.

    Categories are fetched one after another. The first failing request
    aborts the whole run and its exception propagates unchanged.
    """

    def __init__(self, paginator: Paginator, query_builder: QueryBuilder):
        self.paginator = paginator
        self.query_builder = query_builder

    async def _drain(
        self,
        label: str,
        query: Query,
        factory: ItemFactory = ActivityItem.from_api,
    ) -> list[ActivityItem]:
        started = time.perf_counter()
        items = await self.paginator.fetch_all(query.url, query.source, factory)
        logger.info(
            "%s request took %.2fs (%d items)",
            label,
            time.perf_counter() - started,
            len(items),
        )
        return items

    def _filter_listing(
        self,
        items: list[ActivityItem],
        contributor: str,
        window: DateWindow,
    ) -> list[ActivityItem]:
        """Keep items created by ``contributor`` strictly inside ``window``."""
        start = window.start_timestamp
        end = window.end_timestamp
        return [
            item
            for item in items
            if item.author == contributor
            and is_within_date_range(item.created_at, start, end)
        ]

    async def collect_commits(self, contributor: str, window: DateWindow) -> list[ActivityItem]:
        """Collect commits by ``contributor``.

        The commits endpoint scopes by author and date on the server, so the
        results are kept as returned.
        """
        query = self.query_builder.commits(contributor, window)
        return await self._drain("Commits", query, ActivityItem.from_commit_api)

    async def collect_pull_requests(
        self, contributor: str, window: DateWindow
    ) -> list[ActivityItem]:
        """Collect pull requests opened by ``contributor`` inside ``window``."""
        query = self.query_builder.pull_requests(contributor, window)
        items = await self._drain("PRs", query)
        if query.is_search:
            return items
        return self._filter_listing(items, contributor, window)

    async def collect_issues(self, contributor: str, window: DateWindow) -> list[ActivityItem]:
        """Collect issues opened by ``contributor`` inside ``window``."""
        query = self.query_builder.issues(contributor, window)
        items = await self._drain("Issues", query)
        if query.is_search:
            return items
        # The issues listing includes pull requests
        issues = [item for item in items if not item.is_pull_request]
        return self._filter_listing(issues, contributor, window)

    async def collect_statistics(
        self,
        contributor: str,
        window: DateWindow,
        include_commits: bool = False,
    ) -> StatisticsRecord:
        """Collect all categories for ``contributor``.

        Args:
            contributor: GitHub login whose activity is counted
            window: Date range to scope activity to
            include_commits: Whether to collect commits as well

        Returns:
            StatisticsRecord; ``commits`` is None unless requested
        """
        logger.info(
            "Collecting activity of %s in %s from %s to %s",
            contributor,
            self.query_builder.full_name,
            window.start_date,
            window.end_date,
        )

        commits = None
        if include_commits:
            commits = await self.collect_commits(contributor, window)

        pull_requests = await self.collect_pull_requests(contributor, window)
        issues = await self.collect_issues(contributor, window)

        return StatisticsRecord(
            pull_requests=pull_requests,
            issues=issues,
            commits=commits,
        )
