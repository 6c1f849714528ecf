"""
Date helpers for the input fields and the rendered output.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime
from typing import Tuple

from .errors import DateFormatError, ValidationError


ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def to_iso_date(value: date | datetime) -> str:
    """
    Render the calendar fields of ``value`` as ``YYYY-MM-DD``.
    """

    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_iso_date(value: str) -> date:
    if not ISO_DATE_PATTERN.match(value):
        raise ValidationError(f"日付は YYYY-MM-DD 形式で指定してください: {value}")
    try:
        return date.fromisoformat(value)
    except ValueError as error:
        raise ValidationError(f"存在しない日付です: {value}") from error


def to_localized_date(value: str) -> str:
    """
    Render an ISO-8601 timestamp as ``{year}年{month}月{day}日``.

    The calendar fields are taken as written in the timestamp, so
    ``2024-03-05T23:30:00+09:00`` stays on the 5th whatever the local zone.
    """

    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError) as error:
        raise DateFormatError(f"日付を解釈できません: {value!r}") from error
    return f"{parsed.year}年{parsed.month}月{parsed.day}日"


def one_month_before(day: date) -> date:
    year, month = (day.year, day.month - 1) if day.month > 1 else (day.year - 1, 12)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def default_date_range(now: datetime) -> Tuple[str, str]:
    """
    Return the default (start, end) field values: one month ago until today.
    """

    today = now.date()
    return to_iso_date(one_month_before(today)), to_iso_date(today)
