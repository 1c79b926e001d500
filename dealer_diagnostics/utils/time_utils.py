"""
Time and date helpers.

Due dates are plain calendar dates derived from the assessment completion
date; ``today_utc()`` supplies that date when the caller does not.
"""

from __future__ import annotations

from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def today_utc() -> date:
    """Today's calendar date in UTC."""
    return utcnow().date()


def parse_iso_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``; raises ``ValueError`` on any other shape."""
    return date.fromisoformat(value.strip())
