from datetime import datetime, timezone

import dataclasses

import pytest

from quakeviz.model.event import Event, FeedError, sort_newest_first, summarize_events


def _feature(**props):
    geometry = props.pop("geometry", {"type": "Point", "coordinates": [-122.5, 37.8, 8.2]})
    base = {"mag": 3.2, "place": "10km N of Somewhere", "time": 1714564800000,
            "type": "earthquake", "status": "reviewed", "tsunami": 0, "sig": 158}
    base.update(props)
    return {"type": "Feature", "id": "x1", "properties": base, "geometry": geometry}


def test_from_feature_full():
    e = Event.from_feature(_feature())
    assert e.magnitude == pytest.approx(3.2)
    assert e.location == "10km N of Somewhere"
    assert e.time == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert e.longitude == pytest.approx(-122.5)
    assert e.latitude == pytest.approx(37.8)
    assert e.depth == pytest.approx(8.2)
    assert e.category == "earthquake"
    assert e.tsunami is False
    assert e.significance == 158


def test_from_feature_defaults_missing_values():
    e = Event.from_feature(_feature(mag=None, place=None, sig=None,
                                    geometry={"coordinates": [10.0, 20.0]}))
    assert e.magnitude == 0.0
    assert e.location == "Unknown"
    assert e.depth == 0.0
    assert e.significance is None
    assert len(e.coordinates) == 2


def test_from_feature_null_depth_defaults_to_zero():
    e = Event.from_feature(_feature(geometry={"coordinates": [10.0, 20.0, None]}))
    assert e.depth == 0.0


def test_from_feature_requires_two_coordinates():
    with pytest.raises(FeedError):
        Event.from_feature(_feature(geometry={"coordinates": [10.0]}))


def test_from_feature_rejects_unrepresentable_time():
    with pytest.raises(FeedError):
        Event.from_feature(_feature(time=10**20))


def test_event_is_immutable(event_factory):
    e = event_factory()
    with pytest.raises(dataclasses.FrozenInstanceError):
        e.magnitude = 9.0


def test_sort_newest_first(event_factory):
    events = [event_factory(hour=1), event_factory(hour=5), event_factory(hour=3)]
    ordered = sort_newest_first(events)
    assert [e.time.hour for e in ordered] == [5, 3, 1]


def test_summarize_events(event_factory):
    events = [
        event_factory(magnitude=2.0, hour=1, location="Old"),
        event_factory(magnitude=6.1, hour=2, location="Big"),
        event_factory(magnitude=3.0, hour=9, location="Newest"),
    ]
    summary = summarize_events(events)
    assert summary.total == 3
    assert summary.strongest == pytest.approx(6.1)
    assert summary.latest_location == "Newest"


def test_summarize_empty():
    summary = summarize_events(())
    assert summary.total == 0
    assert summary.strongest is None
    assert summary.latest_location == "Unknown"
