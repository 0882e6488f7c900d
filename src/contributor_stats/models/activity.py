"""Activity item and statistics record models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActivityItem(BaseModel):
    """One contributed artifact: a pull request, an issue or a commit."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    url: str = ""
    created_at: str = ""  # RFC 3339 text as returned by the API
    author: str = ""
    is_pull_request: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ActivityItem":
        """Create from a Pulls, Issues or issue Search API entry."""
        user = data.get("user") or {}
        return cls(
            title=data.get("title") or "",
            url=data.get("html_url") or "",
            created_at=data.get("created_at") or "",
            author=user.get("login") or "",
            # The issues listing returns pull requests too, tagged with this key
            is_pull_request="pull_request" in data,
        )

    @classmethod
    def from_commit_api(cls, data: dict[str, Any]) -> "ActivityItem":
        """Create from a Commits API or commit Search API entry."""
        commit_data = data.get("commit") or {}
        author_data = commit_data.get("author") or {}
        account = data.get("author") or {}
        return cls(
            title=(commit_data.get("message") or "").split("\n")[0],  # First line only
            url=data.get("html_url") or "",
            created_at=author_data.get("date") or "",
            author=account.get("login") or author_data.get("name") or "",
        )

    def to_report(self) -> dict[str, str]:
        """Fields handed to report writers."""
        return {
            "title": self.title,
            "url": self.url,
            "created_at": self.created_at,
        }


class StatisticsRecord(BaseModel):
    """Aggregated activity for one contributor in one repository.

    Counts are derived from the item lists. ``commits`` is None when commit
    collection was not requested.
    """

    pull_requests: list[ActivityItem] = Field(default_factory=list)
    issues: list[ActivityItem] = Field(default_factory=list)
    commits: list[ActivityItem] | None = None

    @property
    def prs_count(self) -> int:
        return len(self.pull_requests)

    @property
    def issues_count(self) -> int:
        return len(self.issues)

    @property
    def commits_count(self) -> int | None:
        if self.commits is None:
            return None
        return len(self.commits)

    @property
    def has_commits(self) -> bool:
        return self.commits is not None

    def as_report(self) -> dict[str, Any]:
        """Build the structure consumed by the report writers.

        The commit keys are left out entirely when commits were not collected.
        """
        report: dict[str, Any] = {
            "prs_count": self.prs_count,
            "pr_stats": [item.to_report() for item in self.pull_requests],
            "issues_count": self.issues_count,
            "issue_stats": [item.to_report() for item in self.issues],
        }
        if self.commits is not None:
            report["commits_count"] = len(self.commits)
            report["commit_stats"] = [item.to_report() for item in self.commits]
        return report
