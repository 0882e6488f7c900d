"""Paginated GitHub REST/Search fetching."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx
from pydantic import ValidationError

from contributor_stats.exceptions import (
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    ResponseDecodeError,
)
from contributor_stats.models.activity import ActivityItem
from contributor_stats.services.item_source import ItemSource
from contributor_stats.utils.pagination import get_next_page_url, get_total_pages
from contributor_stats.utils.rate_limiter import RateLimitState

logger = logging.getLogger(__name__)

ItemFactory = Callable[[dict[str, Any]], ActivityItem]

DEFAULT_PAGE_DELAY = 0.01


class Paginator:
    """Drains a paginated endpoint by following ``rel="next"`` links.

    Pages are fetched one at a time with a fixed pause between requests.
    Any failure aborts the whole drain: there are no retries and no partial
    results.

    Args:
        client: HTTP client used for every request. Tests pass one built
            on ``httpx.MockTransport``.
        token: Optional GitHub token sent as ``Authorization: token ...``
        page_delay: Seconds to wait between page requests
        debug: Log each request URL
        sleep: Coroutine used for the pause between pages
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: Optional[str] = None,
        page_delay: float = DEFAULT_PAGE_DELAY,
        debug: bool = False,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.client = client
        self.token = token
        self.page_delay = page_delay
        self.debug = debug
        self._sleep = sleep
        self.rate_limit = RateLimitState()

    def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        headers = {}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    async def _request(self, url: str) -> httpx.Response:
        """Issue one GET and raise on any non-2xx status."""
        if self.debug:
            logger.info("HTTP request URL: %s", url)

        response = await self.client.get(url, headers=self._get_headers())
        self.rate_limit.update_from_headers(response.headers)

        if response.is_success:
            return response

        body = _error_body(response)
        message = body.get("message", "Unknown error")
        status = response.status_code

        if status in (403, 429) and (
            "rate limit" in message.lower() or self.rate_limit.is_exhausted
        ):
            raise GitHubRateLimitError(
                f"Rate limit exceeded (status {status}): {self.rate_limit.describe()}. "
                "Supply a GitHub token to raise the limit",
                status_code=status,
                response_body=body,
                reset_time=self.rate_limit.reset_time,
            )
        if status == 404:
            raise GitHubNotFoundError(
                f"Resource not found (status 404): {url}",
                response_body=body,
            )
        raise GitHubAPIError(
            f"Response returned status {status}: {message}",
            status_code=status,
            response_body=body,
        )

    async def fetch_all(
        self,
        url: str,
        source: ItemSource,
        factory: ItemFactory = ActivityItem.from_api,
    ) -> list[ActivityItem]:
        """Fetch every page starting at ``url``.

        Args:
            url: First page URL
            source: Shape of each page body (listing array or search object)
            factory: Converts one raw item dict into an ActivityItem

        Returns:
            Items of all pages, in server order
        """
        all_items: list[ActivityItem] = []
        page = 1
        next_url: Optional[str] = url

        while next_url:
            response = await self._request(next_url)

            try:
                payload = response.json()
            except ValueError as e:
                raise ResponseDecodeError(
                    f"Malformed JSON from {next_url}: {e}", url=next_url
                ) from e

            raw_items = source.extract(payload, next_url)
            try:
                all_items.extend(factory(item) for item in raw_items)
            except (ValidationError, AttributeError, TypeError) as e:
                # Nested fields that are not objects fail in the factory
                raise ResponseDecodeError(
                    f"Unexpected item shape from {next_url}: {e}", url=next_url
                ) from e

            link_header = response.headers.get("Link")
            logger.debug(
                "Page %d of %s: %d items from %s",
                page,
                get_total_pages(link_header) or "?",
                len(raw_items),
                next_url,
            )

            next_url = get_next_page_url(link_header)
            page += 1

            if next_url:
                if self.debug:
                    logger.info("Next HTTP request URL: %s", next_url)
                await self._sleep(self.page_delay)

        logger.debug(
            "Fetched %d items in %d pages (%s)",
            len(all_items),
            page - 1,
            self.rate_limit.describe(),
        )
        return all_items


def _error_body(response: httpx.Response) -> dict[str, Any]:
    """Decode an error response body, which may be empty or not JSON."""
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {"message": response.text[:200]}
    return body if isinstance(body, dict) else {"message": str(body)}
