"""
Translate a date range into a Qiita search request.
"""

from __future__ import annotations

from urllib.parse import quote

from .models import DateRange, SearchTarget


# Characters encodeURIComponent leaves untouched besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_query(organization: str, date_range: DateRange) -> str:
    return f"org:{organization} created:>={date_range.start} created:<={date_range.end}"


def build_search_url(target: SearchTarget, date_range: DateRange) -> str:
    """
    Build the items endpoint URL for one page of results within ``date_range``.
    """

    query = quote(build_query(target.organization, date_range), safe=_URI_COMPONENT_SAFE)
    return f"{target.endpoint}?per_page={target.per_page}&query={query}"
