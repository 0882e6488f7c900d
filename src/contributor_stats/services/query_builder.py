"""Request URLs for pull requests, issues and commits of one repository."""

from dataclasses import dataclass
from urllib.parse import urlencode

from contributor_stats.models.window import DateWindow
from contributor_stats.services.item_source import LISTING, SEARCH, ItemSource


@dataclass(frozen=True)
class Query:
    """A first page URL plus the page shape its endpoint returns."""

    url: str
    source: ItemSource

    @property
    def is_search(self) -> bool:
        return self.source is SEARCH


class QueryBuilder:
    """Builds category queries against one endpoint family.

    The listing family (``/repos/{owner}/{repo}/...``) returns broad results
    that must be filtered locally by author and date. The search family
    encodes repository, author and dates in the ``q`` parameter.
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        api_url: str = "https://api.github.com",
        per_page: int = 100,
        use_search: bool = False,
    ):
        self.owner = owner
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self.per_page = per_page
        self.use_search = use_search

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def repo_url(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}"

    def _url(self, base: str, params: dict[str, str | int]) -> str:
        return f"{base}?{urlencode(params)}"

    def _search_terms(self, kind: str, author: str, window: DateWindow) -> str:
        return (
            f"repo:{self.full_name} type:{kind} author:{author} "
            f"created:{window.start_date}..{window.end_date}"
        )

    def pull_requests(self, author: str, window: DateWindow) -> Query:
        """Query for pull requests opened by ``author``."""
        if self.use_search:
            return Query(
                self._url(
                    f"{self.api_url}/search/issues",
                    {"q": self._search_terms("pr", author, window), "per_page": self.per_page},
                ),
                SEARCH,
            )
        # The pulls listing cannot filter by author or date
        return Query(
            self._url(f"{self.repo_url}/pulls", {"state": "all", "per_page": self.per_page}),
            LISTING,
        )

    def issues(self, author: str, window: DateWindow) -> Query:
        """Query for issues opened by ``author``."""
        if self.use_search:
            return Query(
                self._url(
                    f"{self.api_url}/search/issues",
                    {"q": self._search_terms("issue", author, window), "per_page": self.per_page},
                ),
                SEARCH,
            )
        # ``since`` filters on update time, so creation dates are checked locally
        return Query(
            self._url(
                f"{self.repo_url}/issues",
                {
                    "state": "all",
                    "creator": author,
                    "since": window.start_timestamp,
                    "per_page": self.per_page,
                },
            ),
            LISTING,
        )

    def commits(self, author: str, window: DateWindow) -> Query:
        """Query for commits authored by ``author``."""
        if self.use_search:
            query = (
                f"repo:{self.full_name} author:{author} "
                f"author-date:{window.start_date}..{window.end_date}"
            )
            return Query(
                self._url(
                    f"{self.api_url}/search/commits",
                    {"q": query, "per_page": self.per_page},
                ),
                SEARCH,
            )
        return Query(
            self._url(
                f"{self.repo_url}/commits",
                {
                    "author": author,
                    "since": window.start_timestamp,
                    "until": window.end_timestamp,
                    "per_page": self.per_page,
                },
            ),
            LISTING,
        )
