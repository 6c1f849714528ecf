"""
Run searches against Qiita and feed the outcomes through the reducer.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Protocol, Sequence

from .errors import SearchError
from .fetcher import QiitaFetcher
from .models import DEFAULT_TARGET, SearchResultItem, SearchTarget
from .query import build_search_url
from .reporting import render_output
from .state import (
    Event,
    FetchFailed,
    FetchSucceeded,
    Phase,
    RangeChanged,
    Submitted,
    ViewState,
    initial_state,
    reduce,
)


logger = logging.getLogger(__name__)


class ItemFetcher(Protocol):
    async def fetch_items(self, url: str) -> Sequence[SearchResultItem]:
        ...


class SearchController:
    """
    Own the view state of one search session and perform the network call.
    """

    def __init__(
        self,
        fetcher: Optional[ItemFetcher] = None,
        target: SearchTarget = DEFAULT_TARGET,
        now: Optional[datetime] = None,
    ) -> None:
        self._fetcher = fetcher or QiitaFetcher()
        self._target = target
        self._state = initial_state(now or datetime.now().astimezone())

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def target(self) -> SearchTarget:
        return self._target

    def dispatch(self, event: Event) -> ViewState:
        self._state = reduce(self._state, event)
        return self._state

    def set_range(self, start: str, end: str) -> ViewState:
        return self.dispatch(RangeChanged(start=start, end=end))

    async def submit(self) -> ViewState:
        state = self.dispatch(Submitted())
        if state.phase is not Phase.LOADING:
            logger.info("Search rejected: %s", state.error)
            return state

        token = state.request_token
        assert state.date_range is not None
        url = build_search_url(self._target, state.date_range)
        logger.info("Searching %s from %s to %s", self._target.organization, state.start, state.end)

        try:
            items = tuple(await self._fetcher.fetch_items(url))
            text = render_output(items)
        except SearchError as error:
            outcome: Event = FetchFailed(token=token, error=error)
        except Exception as error:
            logger.exception("Unexpected failure while searching")
            wrapped = SearchError(f"{type(error).__name__}: {error}")
            outcome = FetchFailed(token=token, error=wrapped)
        else:
            outcome = FetchSucceeded(token=token, items=items, text=text)

        if token != self._state.request_token:
            logger.debug("Discarding response for superseded request %d", token)
            return self._state

        result = self.dispatch(outcome)
        if result.phase is Phase.FAILED:
            logger.info("Search failed: %s", result.error)
        else:
            logger.info("Search finished with %d item(s)", len(result.items))
        return result
