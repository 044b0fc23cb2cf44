"""
Earthquake Feed (Data Provider)
===============================
Fetches the USGS GeoJSON summary feed and keeps the current event sequence.

The feed tries the full-day feed first, then the significant (M4.5+) feed,
and finally falls back to generated demo data so the views always have
something to show. The current sequence is replaced wholesale on every
successful refresh; readers just call `get_current_events()`.

Classes:
    FeedSource: Which source produced a result.
    FeedResult: Events plus provenance of one fetch.
    EarthquakeFeed: The provider.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import StrEnum
import logging
from typing import Any, Optional

import numpy as np
import requests

from quakeviz import config
from quakeviz.model.event import Event, FeedError, sort_newest_first

logger = logging.getLogger(__name__)


class FeedSource(StrEnum):
    LIVE = "live"
    SIGNIFICANT = "significant"
    DEMO = "demo"


@dataclass(frozen=True)
class FeedResult:
    events: tuple[Event, ...]
    source: FeedSource
    error: Optional[str] = None

    @property
    def is_demo(self) -> bool:
        return self.source == FeedSource.DEMO


def parse_payload(payload: Any) -> tuple[Event, ...]:
    """
    Convert a GeoJSON FeatureCollection into events, newest first.

    Malformed features are skipped with a warning.

    Raises:
        FeedError: If the payload has no features at all.
    """
    if not isinstance(payload, dict):
        raise FeedError("Feed payload is not a JSON object.")
    features = payload.get("features") or []
    if not features:
        raise FeedError("No earthquake data available.")

    events: list[Event] = []
    for feature in features:
        try:
            events.append(Event.from_feature(feature))
        except (FeedError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping malformed feature: {e}")

    if not events:
        raise FeedError("Feed contained no usable features.")
    return sort_newest_first(events)


class EarthquakeFeed:
    """
    Data provider for the render loop.

    Args:
        session: HTTP session; a new `requests.Session` by default.
        timeout: Per-request timeout in seconds.
        rng: Random generator used for demo data.
        urls: Endpoints tried in order, paired with the source they represent.
    """
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = config.REQUEST_TIMEOUT_S,
        rng: Optional[np.random.Generator] = None,
        urls: Optional[list[tuple[str, FeedSource]]] = None,
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.rng = rng if rng is not None else np.random.default_rng()
        self.urls = urls if urls is not None else [
            (config.PRIMARY_FEED_URL, FeedSource.LIVE),
            (config.FALLBACK_FEED_URL, FeedSource.SIGNIFICANT),
        ]
        self._events: tuple[Event, ...] = ()

    # ------------------------------------------------------------------------------
    # Consumed by the render loop
    # ------------------------------------------------------------------------------

    def get_current_events(self) -> tuple[Event, ...]:
        return self._events

    def apply(self, result: FeedResult) -> None:
        """Swap in the events of `result` (single reference replacement)."""
        self._events = result.events

    # ------------------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------------------

    def refresh(self) -> FeedResult:
        result = self.fetch()
        self.apply(result)
        return result

    def fetch(self) -> FeedResult:
        """Try every endpoint in order, then fall back to demo data. Never raises."""
        last_error: Optional[str] = None
        for url, source in self.urls:
            try:
                events = self._fetch_url(url)
            except (requests.RequestException, FeedError, ValueError) as e:
                logger.warning(f"Fetching {url} failed: {e}")
                last_error = str(e)
                continue
            logger.info(f"Loaded {len(events)} earthquakes from {source} feed")
            return FeedResult(events=events, source=source)

        logger.warning("All live feeds failed, using demo data")
        return FeedResult(
            events=self.generate_demo_events(),
            source=FeedSource.DEMO,
            error=last_error,
        )

    def _fetch_url(self, url: str) -> tuple[Event, ...]:
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return parse_payload(response.json())

    def generate_demo_events(self, count: int = config.DEMO_EVENT_COUNT) -> tuple[Event, ...]:
        """
        Random plausible events for when no live source is reachable.

        Magnitudes lie in [2, 7), times within the last 24 hours.
        """
        now = datetime.now(timezone.utc)
        rng = self.rng
        events = []
        for _ in range(count):
            depth = float(rng.random() * 100.0)
            events.append(Event(
                magnitude=float(rng.random() * 5.0 + 2.0),
                location=str(rng.choice(config.DEMO_LOCATIONS)),
                time=now - timedelta(milliseconds=float(rng.random() * 86_400_000)),
                coordinates=(
                    float((rng.random() - 0.5) * 360.0),
                    float((rng.random() - 0.5) * 180.0),
                    depth,
                ),
                depth=depth,
                category="earthquake",
                status="demo",
                tsunami=False,
                significance=int(rng.random() * 1000),
            ))
        return sort_newest_first(events)
