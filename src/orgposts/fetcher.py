"""
Download an organization's posts from the Qiita items API.
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional

import httpx

from .errors import ApiError, ParseError, TransportError
from .models import SearchResultItem


logger = logging.getLogger(__name__)

USER_AGENT = "orgposts/0.1 (+https://qiita.com/organizations/craftsman_software)"


def _parse_items(response: httpx.Response) -> List[SearchResultItem]:
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise ParseError(f"レスポンスの解析に失敗しました: {error}") from error

    if not isinstance(payload, list):
        raise ParseError(
            f"レスポンスの解析に失敗しました: expected a JSON array, got {type(payload).__name__}"
        )
    return [SearchResultItem.from_payload(item) for item in payload]


class QiitaFetcher:
    """
    Issue a single search request and parse the returned items.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    @property
    def timeout(self) -> float:
        return self._timeout

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )

    async def fetch_items(
        self,
        url: str,
        client: Optional[httpx.AsyncClient] = None,
    ) -> List[SearchResultItem]:
        if client is None:
            async with self.client() as owned:
                return await self.fetch_items(url, owned)

        logger.debug("GET %s", url)
        try:
            response = await client.get(url)
        except httpx.RequestError as error:
            logger.warning("Request to %s failed: %s", url, error)
            raise TransportError(str(error) or type(error).__name__) from error

        if not response.is_success:
            logger.warning("Qiita API answered %s for %s", response.status_code, url)
            raise ApiError(response.status_code)

        items = _parse_items(response)
        logger.debug("Received %d item(s)", len(items))
        return items
