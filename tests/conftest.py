"""Shared fixtures for orgposts tests."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from orgposts.fetcher import QiitaFetcher
from orgposts.models import SearchResultItem


def make_payload(title: str, author: str, created_at: str, slug: str | None = None) -> dict:
    slug = slug or title.lower().replace(" ", "-")
    return {
        "title": title,
        "url": f"https://qiita.com/{author}/items/{slug}",
        "created_at": created_at,
        "likes_count": 3,
        "user": {"id": author, "name": author.title()},
    }


@pytest.fixture
def january_payload() -> list[dict]:
    """Three posts in response order: alice1, bob1, alice2."""
    return [
        make_payload("alice1", "alice", "2024-01-05T10:00:00+09:00"),
        make_payload("bob1", "bob", "2024-01-12T08:30:00+09:00"),
        make_payload("alice2", "alice", "2024-01-28T21:15:00+09:00"),
    ]


@pytest.fixture
def january_items(january_payload: list[dict]) -> list[SearchResultItem]:
    return [SearchResultItem.from_payload(entry) for entry in january_payload]


@pytest.fixture
def fetcher_factory() -> Callable[..., QiitaFetcher]:
    """Build a fetcher whose requests are answered by ``handler``."""

    def build(handler: Callable[[httpx.Request], httpx.Response]) -> QiitaFetcher:
        return QiitaFetcher(transport=httpx.MockTransport(handler))

    return build


@pytest.fixture
def payload_factory() -> Callable[..., dict]:
    return make_payload
