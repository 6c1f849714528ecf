"""
Error kinds raised while searching and surfaced in the view state.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    API = "api"
    TRANSPORT = "transport"
    PARSE = "parse"
    UNEXPECTED = "unexpected"


class SearchError(Exception):
    """
    Base class for every failure a search can end in.
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED


class ValidationError(SearchError):
    """Raised when the date range cannot be submitted."""

    kind = ErrorKind.VALIDATION


class ApiError(SearchError):
    """Raised for a non-2xx response from the search endpoint."""

    kind = ErrorKind.API

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"API エラー: {status_code}")


class TransportError(SearchError):
    """Raised when the request never produced a response."""

    kind = ErrorKind.TRANSPORT


class ParseError(SearchError):
    """Raised when the response body is not the expected JSON array."""

    kind = ErrorKind.PARSE


class DateFormatError(ParseError):
    """Raised when a timestamp cannot be rendered as a calendar date."""
