"""Exceptions for contributor-stats.

Exception Hierarchy:
    ContributorStatsError (base)
    ├── GitHubAPIError (non-2xx HTTP responses, carries the status code)
    │   ├── GitHubRateLimitError (403/429 rate limit rejection)
    │   └── GitHubNotFoundError (404 not found)
    ├── ResponseDecodeError (body is not JSON or not the expected shape)
    └── InvalidDateRangeError (bad date format or end before start)

Transport failures (connection errors, timeouts) are raised by httpx as
``httpx.TransportError`` and are not wrapped.
"""

__all__ = [
    "ContributorStatsError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubNotFoundError",
    "ResponseDecodeError",
    "InvalidDateRangeError",
]


class ContributorStatsError(Exception):
    """Base exception for all contributor-stats errors."""

    pass


class GitHubAPIError(ContributorStatsError):
    """Raised when the GitHub API answers with a non-2xx status code."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: dict | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class GitHubRateLimitError(GitHubAPIError):
    """Raised when GitHub rejects a request because the rate limit is spent.

    Requests are never retried; supplying a token raises the limit from
    60 to 5,000 requests per hour.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = 403,
        response_body: dict | None = None,
        reset_time: float | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)
        self.reset_time = reset_time


class GitHubNotFoundError(GitHubAPIError):
    """Raised when a GitHub resource is not found (HTTP 404)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = 404,
        response_body: dict | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)


class ResponseDecodeError(ContributorStatsError):
    """Raised when a response body does not match the expected JSON shape."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class InvalidDateRangeError(ContributorStatsError):
    """Raised when the requested dates are malformed or out of order."""

    pass
