from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from .filters import Predicate, filter_events
from .models import EventView

log = logging.getLogger(__name__)


def run(raw_batch: Sequence[Any], predicate: Optional[Predicate] = None) -> List[EventView]:
    """
    Filter a fetched batch and map the survivors to view models,
    keeping feed order. The batch itself is left untouched.
    """
    if not isinstance(raw_batch, (list, tuple)):
        raise TypeError(f"event batch must be a list, got {type(raw_batch).__name__}")

    eligible = filter_events(raw_batch, predicate)
    log.info("Eligible events: %s of %s", len(eligible), len(raw_batch))

    return [EventView.from_record(r) for r in eligible]
