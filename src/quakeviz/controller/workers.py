"""
Background Workers (Threading)
==============================
QThread subclasses for blocking I/O that must not stall the frame loop.

Only the network wait runs in the worker; the result is handed back through
a signal and applied on the GUI thread, so the render loop never sees a
half-updated sequence.

Classes:
    FeedWorker: Runs one EarthquakeFeed.fetch().
"""
import logging

from PySide6.QtCore import QThread, Signal

from quakeviz.controller.feed import EarthquakeFeed, FeedResult

logger = logging.getLogger(__name__)


class FeedWorker(QThread):
    result_ready = Signal(object)  # FeedResult
    error_occurred = Signal(str)

    def __init__(self, feed: EarthquakeFeed, parent=None):
        super().__init__(parent)
        self.feed = feed

    def run(self):
        try:
            logger.debug("Fetching earthquake feed in background thread...")
            result: FeedResult = self.feed.fetch()
            self.result_ready.emit(result)
        except Exception as e:
            logger.exception("Unexpected error in FeedWorker")
            self.error_occurred.emit(str(e))
