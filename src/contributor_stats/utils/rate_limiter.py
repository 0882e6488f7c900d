"""Rate limit tracking and reporting for GitHub API requests."""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional

import httpx
from rich.console import Console

logger = logging.getLogger(__name__)

console = Console(stderr=True)

# Warn once fewer than this many requests remain
LOW_REMAINING_THRESHOLD = 10


def format_time_remaining(seconds: float) -> str:
    """Format seconds into a human-friendly string."""
    if seconds <= 0:
        return "now"

    seconds = int(seconds)

    if seconds < 60:
        return f"{seconds} second{'s' if seconds != 1 else ''}"
    elif seconds < 3600:
        minutes = seconds // 60
        secs = seconds % 60
        if secs > 0:
            return f"{minutes} min {secs} sec"
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        if minutes > 0:
            return f"{hours} hr {minutes} min"
        return f"{hours} hour{'s' if hours != 1 else ''}"


def format_reset_time(reset_timestamp: float) -> str:
    """Format reset timestamp to a human-readable local time."""
    reset_dt = datetime.fromtimestamp(reset_timestamp)
    return reset_dt.strftime("%H:%M:%S")


@dataclass
class RateLimitState:
    """Rate limit state as last reported by the API.

    Nothing here throttles requests; the state is only read back for
    logging and for rate limit error messages.
    """

    limit: Optional[int] = None
    remaining: Optional[int] = None
    reset_time: Optional[float] = None  # Unix timestamp

    @property
    def is_exhausted(self) -> bool:
        """Check if the last response reported zero remaining requests."""
        return self.remaining is not None and self.remaining <= 0

    @property
    def seconds_until_reset(self) -> float:
        """Get seconds until rate limit resets."""
        if self.reset_time is None:
            return 0.0
        return max(0.0, self.reset_time - time.time())

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Update state from GitHub API response headers."""
        try:
            if "x-ratelimit-limit" in headers:
                self.limit = int(headers["x-ratelimit-limit"])
            if "x-ratelimit-remaining" in headers:
                self.remaining = int(headers["x-ratelimit-remaining"])
            if "x-ratelimit-reset" in headers:
                self.reset_time = float(headers["x-ratelimit-reset"])
        except ValueError:
            logger.debug("Ignoring malformed rate limit headers: %s", dict(headers))

    def describe(self) -> str:
        """Short text for logs and error messages."""
        if self.remaining is None:
            return "rate limit unknown"
        text = f"{self.remaining}/{self.limit} requests remaining"
        if self.reset_time is not None:
            text += (
                f", resets in {format_time_remaining(self.seconds_until_reset)}"
                f" (at {format_reset_time(self.reset_time)})"
            )
        return text


async def check_rate_limit_from_api(
    api_url: str = "https://api.github.com",
    token: Optional[str] = None,
    timeout: float = 30.0,
) -> dict:
    """Check current rate limit status from GitHub API.

    Args:
        api_url: GitHub API base URL
        token: Optional GitHub token for authentication
        timeout: Request timeout in seconds

    Returns:
        Dict with the core and search limits, remaining counts and reset times
    """
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": "contributor-stats/0.1.0",
    }
    if token:
        headers["Authorization"] = f"token {token}"

    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.get(f"{api_url}/rate_limit", headers=headers)
        response.raise_for_status()
        data = response.json()

    resources = data.get("resources", {})
    core = resources.get("core", {})
    search = resources.get("search", {})
    return {
        "core": {
            "limit": core.get("limit", 60),
            "remaining": core.get("remaining", 0),
            "reset": core.get("reset", time.time() + 3600),
        },
        "search": {
            "limit": search.get("limit", 10),
            "remaining": search.get("remaining", 0),
            "reset": search.get("reset", time.time() + 60),
        },
    }


def check_and_report_rate_limit(rate_info: dict, is_authenticated: bool) -> bool:
    """Check rate limit and report status to user.

    Args:
        rate_info: Rate limit info from check_rate_limit_from_api()
        is_authenticated: Whether using authenticated access

    Returns:
        True if OK to proceed, False if rate limit exhausted
    """
    core = rate_info["core"]
    remaining = core["remaining"]
    limit = core["limit"]
    reset_time = core["reset"]

    if remaining == 0:
        human_time = format_time_remaining(reset_time - time.time())
        reset_at = format_reset_time(reset_time)

        console.print(f"\n[red]Rate limit exhausted[/red] (0/{limit} requests remaining)")
        console.print(f"[yellow]  Resets in: {human_time} (at {reset_at})[/yellow]")

        if not is_authenticated:
            console.print(
                "[dim]  Tip: Set CONTRIBUTOR_STATS_TOKEN for 5,000 requests/hour instead of 60[/dim]"
            )

        console.print()
        return False

    if remaining < LOW_REMAINING_THRESHOLD:
        console.print(
            f"[yellow]Warning: Only {remaining}/{limit} API requests remaining[/yellow]"
        )

    return True
