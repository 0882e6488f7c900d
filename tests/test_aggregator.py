"""Tests for ContributionAggregator."""

import httpx
import pytest

from conftest import commit, no_sleep, pr
from contributor_stats.exceptions import GitHubAPIError
from contributor_stats.models.window import DateWindow
from contributor_stats.services.contribution_aggregator import ContributionAggregator
from contributor_stats.services.paginator import Paginator
from contributor_stats.services.query_builder import QueryBuilder

PULLS = "/repos/octo/repo/pulls"
ISSUES = "/repos/octo/repo/issues"
COMMITS = "/repos/octo/repo/commits"
SEARCH_ISSUES = "/search/issues"
SEARCH_COMMITS = "/search/commits"

WINDOW = DateWindow.from_strings("2022-01-01", "2022-01-31")


def make_aggregator(client, use_search: bool = False) -> ContributionAggregator:
    return ContributionAggregator(
        Paginator(client, sleep=no_sleep),
        QueryBuilder("octo", "repo", use_search=use_search),
    )


class TestListingFamily:
    """Tests for aggregation over per-repository listings."""

    @pytest.mark.asyncio
    async def test_pull_request_scenario(self, fake_github):
        """Test author and exclusive end filtering across two PR pages."""
        pages = [
            [
                pr("alice 1", "alice", "2022-01-05T10:00:00Z", 1),
                pr("bob", "bob", "2022-01-06T10:00:00Z", 2),
                pr("alice 2", "alice", "2022-01-07T10:00:00Z", 3),
            ],
            [pr("alice at end", "alice", "2022-01-31T23:59:59Z", 4)],
        ]
        fake, client = fake_github({PULLS: pages, ISSUES: [[]]})

        record = await make_aggregator(client).collect_statistics("alice", WINDOW)

        assert record.prs_count == 2
        assert [i.title for i in record.pull_requests] == ["alice 1", "alice 2"]
        assert fake.paths.count(PULLS) == 2

    @pytest.mark.asyncio
    async def test_issues_filtered_by_author_and_window(self, fake_github):
        """Test that issues outside the window or by others are dropped."""
        issues = [
            pr("inside", "alice", "2022-01-15T00:00:00Z", 1),
            pr("before", "alice", "2021-12-31T12:00:00Z", 2),
            pr("other author", "carol", "2022-01-15T00:00:00Z", 3),
            pr("bad date", "alice", "yesterday", 4),
        ]
        _, client = fake_github({PULLS: [[]], ISSUES: [issues]})

        record = await make_aggregator(client).collect_statistics("alice", WINDOW)

        assert [i.title for i in record.issues] == ["inside"]
        assert record.issues_count == 1

    @pytest.mark.asyncio
    async def test_issue_listing_excludes_pull_requests(self, fake_github):
        """Test that PRs returned by the issues endpoint are not counted as issues."""
        as_issue = pr("a pr", "alice", "2022-01-15T00:00:00Z", 1)
        as_issue["pull_request"] = {"url": "https://api.github.com/repos/octo/repo/pulls/1"}
        _, client = fake_github(
            {PULLS: [[]], ISSUES: [[as_issue, pr("an issue", "alice", "2022-01-16T00:00:00Z", 2)]]}
        )

        record = await make_aggregator(client).collect_statistics("alice", WINDOW)

        assert [i.title for i in record.issues] == ["an issue"]

    @pytest.mark.asyncio
    async def test_commits_absent_when_not_requested(self, fake_github):
        """Test that the commits endpoint is not queried and fields are absent."""
        fake, client = fake_github({PULLS: [[]], ISSUES: [[]]})

        record = await make_aggregator(client).collect_statistics("alice", WINDOW)

        assert record.commits is None
        assert "commits_count" not in record.as_report()
        assert COMMITS not in fake.paths

    @pytest.mark.asyncio
    async def test_commits_kept_as_returned(self, fake_github):
        """Test that listing commits are not post-filtered."""
        commits = [
            commit("inside", "alice", "2022-01-10T00:00:00Z", "a1"),
            # The endpoint already scopes by author and date, nothing is dropped
            commit("on boundary", "alice", "2022-01-31T23:59:59Z", "a2"),
        ]
        fake, client = fake_github({COMMITS: [commits], PULLS: [[]], ISSUES: [[]]})

        record = await make_aggregator(client).collect_statistics(
            "alice", WINDOW, include_commits=True
        )

        assert record.commits_count == 2
        assert [c.title for c in record.commits] == ["inside", "on boundary"]
        assert fake.paths == [COMMITS, PULLS, ISSUES]

    @pytest.mark.asyncio
    async def test_commits_present_but_empty(self, fake_github):
        _, client = fake_github({COMMITS: [[]], PULLS: [[]], ISSUES: [[]]})

        record = await make_aggregator(client).collect_statistics(
            "alice", WINDOW, include_commits=True
        )

        report = record.as_report()
        assert report["commits_count"] == 0
        assert report["commit_stats"] == []


class TestSearchFamily:
    """Tests for aggregation over the Search API."""

    @pytest.mark.asyncio
    async def test_search_results_not_filtered_locally(self, fake_github):
        """Test that search results are trusted as returned."""

        def search_issues(request: httpx.Request) -> httpx.Response:
            query = request.url.params["q"]
            title = "pr" if "type:pr" in query else "issue"
            # Author and date are ignored locally, the query already encodes them
            items = [pr(f"{title} 1", "someone-else", "not a date")]
            return httpx.Response(200, json={"total_count": 1, "items": items})

        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path == SEARCH_ISSUES:
                return search_issues(request)
            return httpx.Response(200, json={"total_count": 0, "items": []})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        record = await make_aggregator(client, use_search=True).collect_statistics(
            "alice", WINDOW, include_commits=True
        )

        assert [i.title for i in record.pull_requests] == ["pr 1"]
        assert [i.title for i in record.issues] == ["issue 1"]
        assert record.commits == []
        assert [r.url.path for r in requests] == [SEARCH_COMMITS, SEARCH_ISSUES, SEARCH_ISSUES]


class TestFailures:
    """Tests for error propagation."""

    @pytest.mark.asyncio
    async def test_forbidden_issues_aborts(self, fake_github):
        """Test that a 403 on the first issues request surfaces its status."""
        forbidden = httpx.Response(403, json={"message": "API rate limit exceeded"})
        fake, client = fake_github(
            {
                COMMITS: [[commit("c", "alice", "2022-01-10T00:00:00Z")]],
                PULLS: [[pr("p", "alice", "2022-01-10T00:00:00Z")]],
                ISSUES: [forbidden],
            }
        )

        with pytest.raises(GitHubAPIError) as exc_info:
            await make_aggregator(client).collect_statistics(
                "alice", WINDOW, include_commits=True
            )

        assert exc_info.value.status_code == 403
        # One request per category, nothing retried
        assert fake.paths == [COMMITS, PULLS, ISSUES]

    @pytest.mark.asyncio
    async def test_commit_failure_stops_before_pull_requests(self, fake_github):
        fake, client = fake_github(
            {COMMITS: [httpx.Response(502)], PULLS: [[]], ISSUES: [[]]}
        )

        with pytest.raises(GitHubAPIError) as exc_info:
            await make_aggregator(client).collect_statistics(
                "alice", WINDOW, include_commits=True
            )

        assert exc_info.value.status_code == 502
        assert fake.paths == [COMMITS]
