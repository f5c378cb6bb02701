from __future__ import annotations

import csv
import json
import os
from typing import List

from .models import EventView

def write_csv(path: str, views: List[EventView]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(
            f,
            fieldnames=["location", "period", "website"],
        )
        writer.writeheader()
        for v in views:
            writer.writerow(v.to_row())

def write_json(path: str, views: List[EventView]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([v.to_json() for v in views], f, ensure_ascii=False, indent=2)
