"""
View state of a search session and the pure reducer that advances it.

Every submit stamps the state with a new request token. A fetch outcome
only lands when it carries the current token, so when submissions overlap
the most recent one wins and earlier responses are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Union

from .dates import default_date_range, parse_iso_date
from .errors import ErrorKind, SearchError, ValidationError
from .models import DateRange, SearchResultItem


MISSING_DATES_MESSAGE = "開始日と終了日を指定してください。"
REVERSED_RANGE_MESSAGE = "開始日には終了日以前の日付を指定してください。"
ERROR_LABEL = "エラーが発生しました: "


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ViewState:
    start: str
    end: str
    phase: Phase = Phase.IDLE
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    output_text: str = ""
    items: Tuple[SearchResultItem, ...] = ()
    request_token: int = 0
    date_range: Optional[DateRange] = None

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.LOADING


@dataclass(frozen=True)
class RangeChanged:
    start: str
    end: str


@dataclass(frozen=True)
class Submitted:
    pass


@dataclass(frozen=True)
class FetchSucceeded:
    token: int
    items: Tuple[SearchResultItem, ...]
    text: str


@dataclass(frozen=True)
class FetchFailed:
    token: int
    error: SearchError


Event = Union[RangeChanged, Submitted, FetchSucceeded, FetchFailed]


def validate_range(start: str, end: str) -> DateRange:
    """
    Check the raw field values and return them as a :class:`DateRange`.
    """

    start, end = (start or "").strip(), (end or "").strip()
    if not start or not end:
        raise ValidationError(MISSING_DATES_MESSAGE)
    if parse_iso_date(start) > parse_iso_date(end):
        raise ValidationError(REVERSED_RANGE_MESSAGE)
    return DateRange(start=start, end=end)


def initial_state(now: datetime) -> ViewState:
    start, end = default_date_range(now)
    return ViewState(start=start, end=end)


def _failed(state: ViewState, message: str, kind: ErrorKind) -> ViewState:
    return replace(
        state,
        phase=Phase.FAILED,
        error=message,
        error_kind=kind,
        output_text="",
        items=(),
    )


def reduce(state: ViewState, event: Event) -> ViewState:
    if isinstance(event, RangeChanged):
        return replace(state, start=event.start, end=event.end)

    if isinstance(event, Submitted):
        token = state.request_token + 1
        try:
            date_range = validate_range(state.start, state.end)
        except ValidationError as error:
            return _failed(
                replace(state, request_token=token, date_range=None), str(error), error.kind
            )
        return replace(
            state,
            phase=Phase.LOADING,
            date_range=date_range,
            error=None,
            error_kind=None,
            output_text="",
            items=(),
            request_token=token,
        )

    if isinstance(event, (FetchSucceeded, FetchFailed)):
        if event.token != state.request_token or state.phase is not Phase.LOADING:
            return state
        if isinstance(event, FetchFailed):
            return _failed(state, f"{ERROR_LABEL}{event.error}", event.error.kind)
        return replace(
            state,
            phase=Phase.SUCCESS,
            output_text=event.text,
            items=event.items,
        )

    raise TypeError(f"Unknown event: {event!r}")
