from dataclasses import dataclass, asdict
from typing import Any, Dict

from .normalize import event_location, event_period, has_website, website_url

@dataclass(frozen=True)
class EventView:
    location: str
    period: str
    has_website: bool
    website_url: str

    @classmethod
    def from_record(cls, record: Any) -> "EventView":
        # each field falls back to its own blank default
        with_site = has_website(record)
        return cls(
            location=event_location(record),
            period=event_period(record),
            has_website=with_site,
            website_url=website_url(record) if with_site else "",
        )

    def to_row(self) -> Dict[str, Any]:
        # CSV-friendly
        return {
            "location": self.location,
            "period": self.period,
            "website": self.website_url,
        }

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)
