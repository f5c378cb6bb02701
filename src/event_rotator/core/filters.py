from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

log = logging.getLogger(__name__)

# G = Good, W = Working
HEALTHY_STATUSES = frozenset({"G", "W"})

Predicate = Callable[[Any], bool]


def has_healthy_status(record: Any) -> bool:
    """Status-only check, for callers that don't need a mappable location."""
    try:
        status = record.get("event_status")
        return bool(status) and status in HEALTHY_STATUSES
    except Exception:
        return False


def is_usable_event(record: Any) -> bool:
    """
    Usable events are in a Good or Working state and carry
    lat/lng so they can be placed on the map.
    """
    if not has_healthy_status(record):
        return False
    try:
        location = record.get("location")
        return bool(location and location.get("lat") and location.get("lng"))
    except Exception:
        return False


PREDICATES: Dict[str, Predicate] = {
    "usable": is_usable_event,
    "status": has_healthy_status,
}


def _safe_check(predicate: Predicate, record: Any) -> bool:
    try:
        return bool(predicate(record))
    except Exception as e:
        log.debug("predicate %r failed on record, treating as ineligible: %r", predicate, e)
        return False


def filter_events(records: Iterable[Any], predicate: Optional[Predicate] = None) -> List[Any]:
    if predicate is None:
        predicate = is_usable_event
    return [r for r in records if _safe_check(predicate, r)]
