"""
Core data structures used throughout orgposts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from .errors import ParseError


@dataclass(frozen=True)
class SearchTarget:
    """
    The organization and endpoint every search is scoped to.
    """

    organization: str = "craftsman_software"
    endpoint: str = "https://qiita.com/api/v2/items"
    per_page: int = 100


DEFAULT_TARGET = SearchTarget()


@dataclass(frozen=True)
class DateRange:
    """
    A validated pair of ``YYYY-MM-DD`` strings.
    """

    start: str
    end: str


@dataclass(frozen=True)
class SearchResultItem:
    """
    One post as returned by the Qiita items endpoint.
    """

    title: str
    url: str
    created_at: str
    author_id: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SearchResultItem":
        try:
            fields = {
                "title": payload["title"],
                "url": payload["url"],
                "created_at": payload["created_at"],
                "author_id": payload["user"]["id"],
            }
        except (KeyError, TypeError) as error:
            raise ParseError(f"unexpected item payload: missing {error}") from error

        for name, value in fields.items():
            if not isinstance(value, str):
                raise ParseError(
                    f"unexpected item payload: {name} must be a string, got {type(value).__name__}"
                )
        return cls(**fields)


GroupedResults = Dict[str, List[SearchResultItem]]
