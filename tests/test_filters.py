"""Tests for event eligibility filtering"""

import copy

from event_rotator.core.filters import (
    PREDICATES,
    filter_events,
    has_healthy_status,
    is_usable_event,
)


def _event(status="G", lat=1, lng=2, **extra):
    e = {"event_status": status, "location": {"lat": lat, "lng": lng}}
    e.update(extra)
    return e


class TestUsableEvent:

    def test_good_status_with_coordinates_is_kept(self):
        assert is_usable_event({"event_status": "G", "location": {"lat": 1, "lng": 2}})

    def test_working_status_is_healthy(self):
        assert is_usable_event(_event(status="W"))

    def test_unknown_status_is_dropped(self):
        assert not is_usable_event(_event(status="X"))

    def test_missing_status_is_dropped(self):
        assert not is_usable_event({"location": {"lat": 1, "lng": 2}})

    def test_missing_location_is_dropped(self):
        assert not is_usable_event({"event_status": "G"})
        assert not is_usable_event({"event_status": "G", "location": None})

    def test_missing_or_zero_coordinates_are_dropped(self):
        assert not is_usable_event({"event_status": "G", "location": {"lat": 1}})
        assert not is_usable_event(_event(lat=0))
        assert not is_usable_event(_event(lng=None))

    def test_malformed_records_never_raise(self):
        assert not is_usable_event(None)
        assert not is_usable_event("G")
        assert not is_usable_event(["G"])
        assert not is_usable_event({"event_status": "G", "location": "47.6,-122.3"})
        assert not is_usable_event({"event_status": ["G"], "location": {"lat": 1, "lng": 2}})


class TestHealthyStatus:

    def test_status_only_ignores_location(self):
        assert has_healthy_status({"event_status": "G"})
        assert has_healthy_status({"event_status": "W", "location": None})

    def test_status_only_rejects_other_codes(self):
        assert not has_healthy_status({"event_status": "X"})
        assert not has_healthy_status({"event_status": ""})
        assert not has_healthy_status({})
        assert not has_healthy_status(42)

    def test_named_predicates(self):
        assert PREDICATES["usable"] is is_usable_event
        assert PREDICATES["status"] is has_healthy_status


class TestFilterEvents:

    def test_default_predicate_preserves_order(self):
        records = [
            _event(city="A"),
            _event(status="X", city="B"),
            _event(city="C"),
            {"event_status": "W", "city": "D"},
        ]
        kept = filter_events(records)
        assert [r["city"] for r in kept] == ["A", "C"]

    def test_custom_predicate(self):
        records = [_event(city="A"), {"event_status": "W", "city": "D"}]
        kept = filter_events(records, has_healthy_status)
        assert [r["city"] for r in kept] == ["A", "D"]

    def test_does_not_mutate_input(self):
        records = [_event(), _event(status="X")]
        before = copy.deepcopy(records)
        filter_events(records)
        assert records == before

    def test_raising_predicate_counts_as_ineligible(self):
        def picky(record):
            return record["city"] == "A"

        records = [{"city": "A"}, {}, {"city": "B"}]
        assert filter_events(records, picky) == [{"city": "A"}]
