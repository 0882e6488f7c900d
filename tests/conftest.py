"""Pytest configuration and fixtures."""

from typing import Any
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from contributor_stats.config import set_config

API = "https://api.github.com"


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch):
    """Reset global state before each test."""
    monkeypatch.delenv("CONTRIBUTOR_STATS_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("CONTRIBUTOR_STATS_SEARCH", raising=False)
    set_config(None)
    yield
    set_config(None)


async def no_sleep(_seconds: float) -> None:
    """Stand-in for asyncio.sleep between pages."""
    return None


def link(url: str, rel: str = "next") -> str:
    return f'<{url}>; rel="{rel}"'


def pr(title: str, author: str, created_at: str, number: int = 1) -> dict[str, Any]:
    """A minimal pulls/issues API entry."""
    return {
        "number": number,
        "title": title,
        "html_url": f"https://github.com/octo/repo/pull/{number}",
        "created_at": created_at,
        "user": {"login": author},
    }


def commit(message: str, author: str, date: str, sha: str = "abc123") -> dict[str, Any]:
    """A minimal commits API entry."""
    return {
        "sha": sha,
        "html_url": f"https://github.com/octo/repo/commit/{sha}",
        "commit": {"message": message, "author": {"name": author, "date": date}},
        "author": {"login": author},
    }


class FakeGitHub:
    """Routes requests by path to canned pages and records every request.

    ``routes`` maps a URL path to a list of responses, one per page. A
    response is either an ``httpx.Response`` or a JSON body; JSON bodies get
    a ``Link`` header pointing at ``?page=N+1`` when more pages follow.
    """

    def __init__(self, routes: dict[str, list[Any]]):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        pages = self.routes.get(request.url.path)
        if pages is None:
            return httpx.Response(404, json={"message": "Not Found"})

        page = int(parse_qs(urlparse(str(request.url)).query).get("page", ["1"])[0])
        entry = pages[page - 1]
        if isinstance(entry, httpx.Response):
            return entry

        headers = {}
        if page < len(pages):
            headers["Link"] = link(f"{API}{request.url.path}?page={page + 1}")
        return httpx.Response(200, json=entry, headers=headers)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def fake_github():
    """Build a FakeGitHub and an AsyncClient bound to it."""

    def factory(routes: dict[str, list[Any]]) -> tuple[FakeGitHub, httpx.AsyncClient]:
        fake = FakeGitHub(routes)
        return fake, httpx.AsyncClient(transport=httpx.MockTransport(fake))

    return factory
