from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .filters import PREDICATES, Predicate
from .query import build_query_url

log = logging.getLogger(__name__)

DEFAULT_FEED_URL = "http://swoop.up.co/events"

OPTION_KEYS = ("url", "query", "filter_fn")


def _add_month(d: date) -> date:
    year, month = (d.year + 1, 1) if d.month == 12 else (d.year, d.month + 1)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def default_query(today: Optional[date] = None) -> Dict[str, str]:
    """Events from today (UTC) up to one month out."""
    today = today or datetime.now(timezone.utc).date()
    return {
        "since": today.isoformat(),
        "until": _add_month(today).isoformat(),
    }


def resolve_predicate(value: Union[str, Predicate, None]) -> Optional[Predicate]:
    if value is None or callable(value):
        return value
    if isinstance(value, str) and value in PREDICATES:
        return PREDICATES[value]
    raise ValueError(f"Unknown filter {value!r}; expected one of {sorted(PREDICATES)} or a callable")


@dataclass(frozen=True)
class RotatorConfig:
    url: str = DEFAULT_FEED_URL
    query: Mapping[str, str] = field(default_factory=default_query)
    # None -> pipeline default (status + location)
    filter_fn: Optional[Predicate] = None

    def __post_init__(self) -> None:
        # own a read-only copy so the config can't change under a caller
        object.__setattr__(self, "query", MappingProxyType(dict(self.query)))

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None, today: Optional[date] = None) -> "RotatorConfig":
        """
        Shallow merge of user options over the defaults: a supplied
        query replaces the default query as a whole.
        """
        opts = dict(options or {})
        if "filter" in opts:
            opts.setdefault("filter_fn", opts.pop("filter"))

        unknown = sorted(k for k in opts if k not in OPTION_KEYS)
        if unknown:
            log.warning("Ignoring unknown config options: %s", unknown)

        url = opts.get("url", DEFAULT_FEED_URL)
        if url is None:
            url = DEFAULT_FEED_URL
        if not isinstance(url, str) or not url:
            raise ValueError(f"url must be a non-empty string, got {url!r}")

        query = opts.get("query")
        if query is None:
            query = default_query(today)
        elif not isinstance(query, Mapping):
            raise ValueError(f"query must be a mapping, got {type(query).__name__}")

        return cls(
            url=url,
            query={str(k): str(v) for k, v in query.items()},
            filter_fn=resolve_predicate(opts.get("filter_fn")),
        )

    def request_url(self) -> str:
        return build_query_url(self.url, self.query)


def load_config(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data
