"""Page shapes returned by the listing and search endpoint families."""

from typing import Any, Protocol

from contributor_stats.exceptions import ResponseDecodeError


class ItemSource(Protocol):
    """Extracts the raw item dicts from one decoded page body."""

    name: str

    def extract(self, payload: Any, url: str) -> list[dict[str, Any]]:
        ...


def _check_items(items: Any, url: str) -> list[dict[str, Any]]:
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise ResponseDecodeError(f"Expected a list of JSON objects from {url}", url=url)
    return items


class ListingItemSource:
    """Per-repository listing endpoints: the page body is a JSON array."""

    name = "listing"

    def extract(self, payload: Any, url: str) -> list[dict[str, Any]]:
        return _check_items(payload, url)


class SearchItemSource:
    """Search endpoints: the page body is an object with an ``items`` array."""

    name = "search"

    def extract(self, payload: Any, url: str) -> list[dict[str, Any]]:
        if not isinstance(payload, dict) or "items" not in payload:
            raise ResponseDecodeError(
                f"Expected a search result object with 'items' from {url}", url=url
            )
        return _check_items(payload["items"], url)


LISTING = ListingItemSource()
SEARCH = SearchItemSource()
