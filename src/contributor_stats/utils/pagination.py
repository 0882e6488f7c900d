"""Link header helpers for GitHub pagination."""

import re
from typing import Optional
from urllib.parse import parse_qs, urlparse

_LINK_PATTERN = re.compile(r'<([^>]+)>;\s*rel="([^"]+)"')


def parse_link_header(link_header: Optional[str]) -> dict[str, str]:
    """Parse GitHub's Link header into a dictionary of rel -> url.

    Example Link header:
    <https://api.github.com/repos/o/r/pulls?page=2>; rel="next",
    <https://api.github.com/repos/o/r/pulls?page=5>; rel="last"

    Entries that do not look like ``<url>; rel="name"`` are ignored.

    Returns:
        dict: {"next": "url", "last": "url", "prev": "url", "first": "url"}
    """
    if not link_header:
        return {}

    links = {}
    for entry in link_header.split(","):
        match = _LINK_PATTERN.fullmatch(entry.strip())
        if match:
            url, rel = match.groups()
            links[rel] = url

    return links


def get_next_page_url(link_header: Optional[str]) -> Optional[str]:
    """Extract the 'next' page URL from a Link header."""
    return parse_link_header(link_header).get("next")


def get_total_pages(link_header: Optional[str]) -> Optional[int]:
    """Extract total pages from the 'last' link in a Link header."""
    last_url = parse_link_header(link_header).get("last")
    if not last_url:
        return None

    page_values = parse_qs(urlparse(last_url).query).get("page", [])
    if page_values:
        try:
            return int(page_values[0])
        except ValueError:
            return None

    return None
