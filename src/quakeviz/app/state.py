from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Signal

from quakeviz.controller.feed import EarthquakeFeed, FeedResult, FeedSource
from quakeviz.model.event import Event, FeedSummary, summarize_events


class AppState(QObject):
    """
    Central application state: the feed (and thus the current event sequence)
    plus what the statistics panel shows about it.
    """
    events_changed = Signal(object)  # FeedResult

    def __init__(self, feed: EarthquakeFeed) -> None:
        super().__init__()
        self.feed = feed
        self.summary = FeedSummary()
        self.source: Optional[FeedSource] = None
        self.load_count = 0

    @property
    def has_data(self) -> bool:
        return self.load_count > 0

    def get_current_events(self) -> tuple[Event, ...]:
        return self.feed.get_current_events()

    def apply_result(self, result: FeedResult) -> None:
        """Replace the event sequence with the one in `result` and notify listeners."""
        self.feed.apply(result)
        self.summary = summarize_events(result.events)
        self.source = result.source
        self.load_count += 1
        self.events_changed.emit(result)
