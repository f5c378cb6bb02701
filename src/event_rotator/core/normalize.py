from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

import dateparser

log = logging.getLogger(__name__)

TBA_MARKERS = {"tba", "tbd", "tbc", "to be announced", "to be confirmed", "to be determined"}

# The feed only publishes a start date; events run three days (start + 2).
EVENT_DURATION_DAYS = 2

PERIOD_DIVIDER = "–"

HTTP_RE = re.compile(r"^http://", re.I)


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def event_location(record: Any) -> str:
    """
    Returns the location in the order of City, State, and Country.
    """
    try:
        parts = []
        city = record.get("city")
        if city is not None and city != "":
            if not isinstance(city, (str, int, float)) or isinstance(city, bool):
                raise TypeError(f"unexpected city type {type(city).__name__}")
            parts.append(str(city))
        state = record.get("state")
        if _non_empty_str(state):
            parts.append(state)
        country = record.get("country")
        if _non_empty_str(country):
            parts.append(country)
        return ", ".join(parts)
    except Exception as e:
        log.debug("location failed: %r", e)
        return ""


def has_website(record: Any) -> bool:
    try:
        return _non_empty_str(record.get("website"))
    except Exception:
        return False


def website_url(record: Any) -> str:
    """
    Returns the website with "http://" prepended when it lacks it.
    """
    try:
        website = record.get("website")
        if not isinstance(website, str):
            raise TypeError(f"website is {type(website).__name__}")
        if not HTTP_RE.match(website):
            website = "http://" + website
        return website
    except Exception as e:
        log.debug("website failed: %r", e)
        return ""


def _parse_iso(raw: str) -> Optional[date]:
    # "2024-03-01", "2024-03-01T23:30:00Z", "2024-03-01T22:00:00-05:00"
    try:
        dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.date()


def parse_start_date(raw: Any) -> Optional[date]:
    """
    Interpret a feed start_date as a UTC calendar date.
    Numbers are epoch milliseconds; ISO strings are read directly and
    anything else goes through dateparser, month first (03/01/2024 is
    March 1). Relative or partial dates ("tomorrow", "March", "2024-03")
    give None so the result never depends on today's date.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return datetime.fromtimestamp(raw / 1000, tz=timezone.utc).date()
    if not isinstance(raw, str):
        return None

    raw_clean = " ".join(raw.split()).strip()
    if not raw_clean:
        return None
    if any(m in raw_clean.lower() for m in TBA_MARKERS):
        return None

    iso = _parse_iso(raw_clean)
    if iso is not None:
        return iso

    dt = dateparser.parse(
        raw_clean,
        settings={
            "DATE_ORDER": "MDY",
            "PARSERS": ["timestamp", "absolute-time"],
            "STRICT_PARSING": True,
            "REQUIRE_PARTS": ["day", "month", "year"],
            "TIMEZONE": "UTC",
            "TO_TIMEZONE": "UTC",
            "RETURN_AS_TIMEZONE_AWARE": False,
        },
        languages=["en"],
    )
    if not dt:
        return None
    return dt.date()


def _month_day(d: date) -> str:
    return f"{d:%B} {d.day}"


def event_period(record: Any) -> str:
    """
    Returns the start and end date as a humanized string,
    e.g. "March 1 – 3" or "January 30 – February 1".
    """
    try:
        start = parse_start_date(record.get("start_date"))
        if start is None:
            return ""
        end = start + timedelta(days=EVENT_DURATION_DAYS)

        if (start.year, start.month) == (end.year, end.month):
            end_text = str(end.day)
        else:
            end_text = _month_day(end)

        return " ".join([_month_day(start), PERIOD_DIVIDER, end_text])
    except Exception as e:
        log.debug("period failed: %r", e)
        return ""
