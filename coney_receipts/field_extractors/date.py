"""Date and time extraction helpers."""
from __future__ import annotations

import datetime as dt
import logging
import re
from typing import Callable, Optional, Sequence, Tuple

from ..models import FieldResult

LOGGER = logging.getLogger(__name__)

DATE_CONFIDENCE = 0.8
TIME_CONFIDENCE = 0.7

Normaliser = Callable[[re.Match[str]], Optional[str]]


def _expand_year(raw: str) -> Optional[int]:
    if len(raw) == 2:
        return 2000 + int(raw)
    if len(raw) == 4:
        return int(raw)
    return None


def _assemble(year: Optional[int], month: str, day: str) -> Optional[str]:
    if year is None:
        return None
    candidate = f"{year:04d}-{month.zfill(2)}-{day.zfill(2)}"
    try:
        dt.date.fromisoformat(candidate)
    except ValueError:
        return None
    return candidate


def _from_month_day_year(match: re.Match[str]) -> Optional[str]:
    month, day, year = match.groups()
    return _assemble(_expand_year(year), month, day)


def _from_year_month_day(match: re.Match[str]) -> Optional[str]:
    year, month, day = match.groups()
    return _assemble(int(year), month, day)


DATE_PATTERNS: Sequence[Tuple[re.Pattern[str], Normaliser, float]] = (
    # 3/14/2024, 03-14-24
    (re.compile(r"(?<!\d)(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})(?!\d)"), _from_month_day_year, DATE_CONFIDENCE),
    # 2024-03-14, 2024/3/14
    (re.compile(r"(?<!\d)(\d{4})[/-](\d{1,2})[/-](\d{1,2})(?!\d)"), _from_year_month_day, DATE_CONFIDENCE),
)

# Matched text is returned verbatim; "MM/DD" covers receipts that omit the year.
SIMPLE_DATE_PATTERNS: Sequence[re.Pattern[str]] = (
    re.compile(r"(?<!\d)(\d{1,2}/\d{1,2}/\d{2,4})(?!\d)"),
    re.compile(r"(?<!\d)(\d{1,2}-\d{1,2}-\d{2,4})(?!\d)"),
    re.compile(r"(?<!\d)(\d{4}-\d{1,2}-\d{1,2})(?!\d)"),
    re.compile(r"(?<!\d)(\d{1,2}/\d{1,2})(?!\d)"),
)

TIME_PATTERNS: Sequence[re.Pattern[str]] = (
    re.compile(r"(?<!\d)(\d{1,2}):(\d{2}):(\d{2})\s*(am|pm)?", re.IGNORECASE),
    re.compile(r"(?<!\d)(\d{1,2}):(\d{2})()\s*(am|pm)\b", re.IGNORECASE),
    re.compile(r"(?<!\d)(\d{1,2}):(\d{2})()(?![\d:])()"),
)


def extract_date(text: str) -> FieldResult[str]:
    """Return the first calendar-valid date as ``YYYY-MM-DD``.

    Matches that do not form a real date (``13/40/2024``) are skipped and the
    search carries on with the remaining matches and patterns.
    """

    for pattern, normalise, confidence in DATE_PATTERNS:
        for match in pattern.finditer(text or ""):
            value = normalise(match)
            if value is None:
                LOGGER.debug("date_rejected raw=%r", match.group(0))
                continue
            return FieldResult(value=value, confidence=confidence)
    return FieldResult.absent()


def extract_date_simple(text: str) -> FieldResult[str]:
    """Return the first date-looking text without calendar validation."""

    for pattern in SIMPLE_DATE_PATTERNS:
        match = pattern.search(text or "")
        if match:
            return FieldResult(value=match.group(1), confidence=DATE_CONFIDENCE)
    return FieldResult.absent()


def extract_time(text: str) -> FieldResult[str]:
    for pattern in TIME_PATTERNS:
        match = pattern.search(text or "")
        if not match:
            continue
        hour, minute, second, meridiem = match.groups()
        value = f"{hour.zfill(2)}:{minute}"
        if second:
            value += f":{second}"
        if meridiem:
            value += f" {meridiem.upper()}"
        return FieldResult(value=value, confidence=TIME_CONFIDENCE)
    return FieldResult.absent()


__all__ = [
    "DATE_CONFIDENCE",
    "TIME_CONFIDENCE",
    "extract_date",
    "extract_date_simple",
    "extract_time",
]
