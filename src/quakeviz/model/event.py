"""
Earthquake Event (Data Model)
=============================
Immutable snapshot of a single earthquake as consumed by the render modes.

Classes:
    Event: One earthquake record.
    FeedSummary: Aggregate numbers shown in the statistics panel.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Any, Iterable, Optional, Sequence

logger = logging.getLogger(__name__)


class FeedError(Exception):
    """Raised when a feed payload (or one of its features) cannot be used."""


@dataclass(frozen=True)
class Event:
    """
    One earthquake record.

    `coordinates` follows GeoJSON order: (longitude, latitude[, depth]).
    """
    magnitude: float
    location: str
    time: datetime
    coordinates: tuple[float, ...]
    depth: float = 0.0
    category: Optional[str] = None
    status: Optional[str] = None
    tsunami: bool = False
    significance: Optional[int] = None

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]

    @classmethod
    def from_feature(cls, feature: dict[str, Any]) -> Event:
        """
        Build an Event from one USGS GeoJSON feature.

        Args:
            feature: A GeoJSON feature with 'properties' and 'geometry'.

        Returns:
            The parsed Event. Missing magnitude and depth default to 0,
            a missing place to "Unknown".

        Raises:
            FeedError: If the geometry carries fewer than two coordinates or
                the time cannot be represented.
        """
        props = feature.get("properties") or {}
        geometry = feature.get("geometry") or {}
        raw_coords = geometry.get("coordinates") or []

        if len(raw_coords) < 2:
            raise FeedError(f"Feature {feature.get('id')!r} has no usable coordinates.")

        coords = tuple(float(c) if c is not None else 0.0 for c in raw_coords)
        depth = coords[2] if len(coords) > 2 else 0.0

        epoch_ms = props.get("time") or 0
        try:
            time = datetime.fromtimestamp(epoch_ms / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise FeedError(f"Feature {feature.get('id')!r} has an out-of-range time: {e}") from e

        sig = props.get("sig")

        return cls(
            magnitude=float(props.get("mag") or 0.0),
            location=props.get("place") or "Unknown",
            time=time,
            coordinates=coords,
            depth=depth,
            category=props.get("type"),
            status=props.get("status"),
            tsunami=bool(props.get("tsunami")),
            significance=int(sig) if sig is not None else None,
        )


def sort_newest_first(events: Iterable[Event]) -> tuple[Event, ...]:
    """Return the events ordered by descending occurrence time."""
    return tuple(sorted(events, key=lambda e: e.time, reverse=True))


@dataclass(frozen=True)
class FeedSummary:
    total: int = 0
    strongest: Optional[float] = None
    latest_location: str = "Unknown"
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def summarize_events(events: Sequence[Event]) -> FeedSummary:
    """Compute the statistics panel numbers for the current sequence."""
    if not events:
        return FeedSummary()

    strongest = max(e.magnitude for e in events)
    latest = max(events, key=lambda e: e.time)
    return FeedSummary(
        total=len(events),
        strongest=strongest,
        latest_location=latest.location,
    )
