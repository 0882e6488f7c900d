"""contributor-stats SDK - High-level API for one contributor in one repository."""

import logging

import httpx

from contributor_stats.config import Config
from contributor_stats.exceptions import ContributorStatsError
from contributor_stats.models.activity import StatisticsRecord
from contributor_stats.models.window import DateWindow
from contributor_stats.services.contribution_aggregator import ContributionAggregator
from contributor_stats.services.paginator import Paginator
from contributor_stats.services.query_builder import QueryBuilder

logger = logging.getLogger(__name__)


class ContributorStats:
    """Async entry point for collecting a contributor's repository activity.

    Example usage:
        ```python
        from contributor_stats import ContributorStats, DateWindow

        window = DateWindow.from_strings("2024-01-01", "2024-01-31")
        async with ContributorStats(token="ghp_xxx") as client:
            stats = await client.get_statistics("psf", "requests", "alice", window)
            print(stats.prs_count, stats.issues_count)
        ```

    Args:
        token: GitHub personal access token (optional but recommended).
            Without a token, rate limits are 60 requests/hour.
        api_url: GitHub API base URL
        use_search: Query the Search API instead of per-repository listings
        debug: Log every request URL
        config: Full configuration; overrides the other arguments
        transport: Custom httpx transport (e.g. ``httpx.MockTransport``)
    """

    def __init__(
        self,
        token: str | None = None,
        api_url: str = "https://api.github.com",
        use_search: bool = False,
        debug: bool = False,
        config: Config | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config or Config(
            github_token=token,
            github_api_url=api_url,
            use_search=use_search,
        )
        self.debug = debug
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._paginator: Paginator | None = None
        self._initialized = False

    @property
    def is_authenticated(self) -> bool:
        """Check if a token is configured."""
        return self._config.is_authenticated

    async def __aenter__(self) -> "ContributorStats":
        """Async context manager entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Create the HTTP client and paginator."""
        if self._initialized:
            return

        self._client = httpx.AsyncClient(
            headers={
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "contributor-stats/0.1.0",
            },
            timeout=self._config.request_timeout,
            follow_redirects=True,
            transport=self._transport,
        )
        self._paginator = Paginator(
            self._client,
            token=self._config.github_token,
            page_delay=self._config.page_delay,
            debug=self.debug,
        )
        self._initialized = True
        logger.debug(
            "ContributorStats initialized (authenticated=%s, search=%s)",
            self.is_authenticated,
            self._config.use_search,
        )

    async def close(self) -> None:
        """Close the HTTP connection pool."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._initialized = False
        logger.debug("ContributorStats closed")

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise ContributorStatsError(
                "Client not initialized. Use 'async with ContributorStats(...) as client:'"
            )

    async def get_statistics(
        self,
        owner: str,
        repo: str,
        contributor: str,
        window: DateWindow,
        include_commits: bool = False,
    ) -> StatisticsRecord:
        """Collect the contributor's pull requests, issues and optionally commits.

        Args:
            owner: Repository owner
            repo: Repository name
            contributor: GitHub login to count activity for
            window: Date range to scope activity to
            include_commits: Whether to collect commits as well

        Returns:
            StatisticsRecord for the window

        Raises:
            GitHubAPIError: If any request returns a non-2xx status
            ResponseDecodeError: If a response body is not the expected JSON
            httpx.TransportError: If a request cannot be completed
        """
        self._ensure_initialized()

        query_builder = QueryBuilder(
            owner,
            repo,
            api_url=self._config.github_api_url,
            per_page=self._config.default_per_page,
            use_search=self._config.use_search,
        )
        aggregator = ContributionAggregator(self._paginator, query_builder)
        return await aggregator.collect_statistics(
            contributor, window, include_commits=include_commits
        )
