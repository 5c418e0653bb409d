"""Calendar date parsing for loosely formatted trade exports."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

import pandas as pd

_MDY_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2,4})$")
_ISO_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_date(raw: Any) -> Optional[date]:
    """Parse ``raw`` into a local calendar date.

    Accepted shapes, in order of precedence:

    * ``M/D/YYYY`` or ``MM/DD/YY`` (two digit years are read as 2000+year)
    * ``YYYY-MM-DD``, taken as a local calendar date rather than UTC midnight
    * anything :func:`pandas.to_datetime` understands, truncated to the local day

    Returns ``None`` when the value cannot be parsed.
    """

    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw

    text = str(raw).strip()
    if not text:
        return None

    match = _MDY_PATTERN.match(text)
    if match:
        month, day, year = (int(group) for group in match.groups())
        if year < 100:
            year += 2000
        return _safe_date(year, month, day)

    match = _ISO_PATTERN.match(text)
    if match:
        year, month, day = (int(group) for group in match.groups())
        return _safe_date(year, month, day)

    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    moment = parsed.to_pydatetime()
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


__all__ = ["parse_date"]
