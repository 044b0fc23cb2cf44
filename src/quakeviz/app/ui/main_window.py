"""
Main Application Window
=======================
Holds the visualisation canvas, the mode buttons and the statistics panel.

It also owns the refresh timer: every few minutes a FeedWorker fetches the
feed in the background and the result is applied to the AppState on the GUI
thread. The animation starts with the first load.
"""
from __future__ import annotations

from datetime import datetime
import logging
from typing import Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QButtonGroup, QFormLayout, QFrame, QHBoxLayout, QLabel, QMainWindow,
    QPushButton, QVBoxLayout, QWidget
)

from quakeviz import config
from quakeviz.app.application import VISIBLE_APP_NAME
from quakeviz.app.state import AppState
from quakeviz.app.ui.canvas import VisualizationCanvas
from quakeviz.controller.driver import AnimationDriver, DriverState
from quakeviz.controller.feed import FeedResult
from quakeviz.controller.workers import FeedWorker

logger = logging.getLogger(__name__)

MODE_LABELS = {
    config.MODE_ARTISTIC: "Artistic",
    config.MODE_GEOGRAPHIC: "Geographic",
}

DEMO_WARNING = "Using demo data - Live API unavailable"
NOTIFICATION_MS = 5000


class MainWindow(QMainWindow):
    def __init__(
        self,
        state: AppState,
        driver: AnimationDriver,
        refresh_interval_ms: int = config.REFRESH_INTERVAL_MS,
    ) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1280, 800)

        self.state = state
        self.driver = driver
        self._worker: Optional[FeedWorker] = None

        # ---- central: mode bar on top, canvas below ----
        central = QWidget(self)
        v = QVBoxLayout(central)
        v.setContentsMargins(0, 0, 0, 0)
        v.setSpacing(0)

        bar = QFrame(central)
        bar.setStyleSheet("""
            QFrame { background-color: #141414; }
            QPushButton { color: #ddd; background: transparent; border: 1px solid #444; border-radius: 4px; padding: 4px 12px; }
            QPushButton:checked { background-color: rgba(0, 120, 215, 90); border: 1px solid #0078D7; }
            QLabel { color: #ddd; }
        """)
        h = QHBoxLayout(bar)
        h.setContentsMargins(8, 6, 8, 6)

        self.mode_buttons = QButtonGroup(self)
        self.mode_buttons.setExclusive(True)
        self._buttons: dict[str, QPushButton] = {}
        for key in self.driver.modes:
            btn = QPushButton(MODE_LABELS.get(key, key.title()), bar)
            btn.setCheckable(True)
            btn.setChecked(key == self.driver.current_mode)
            btn.clicked.connect(lambda _=False, k=key: self.driver.set_mode(k))
            self.mode_buttons.addButton(btn)
            self._buttons[key] = btn
            h.addWidget(btn)
        h.addStretch(1)

        # ---- statistics ----
        stats = QWidget(bar)
        form = QFormLayout(stats)
        form.setContentsMargins(0, 0, 0, 0)
        self.lbl_total = QLabel("-", stats)
        self.lbl_strongest = QLabel("-", stats)
        self.lbl_latest = QLabel("-", stats)
        self.lbl_updated = QLabel("-", stats)
        row = QHBoxLayout()
        for caption, label in (
            ("Earthquakes:", self.lbl_total),
            ("Strongest:", self.lbl_strongest),
            ("Latest:", self.lbl_latest),
            ("Updated:", self.lbl_updated),
        ):
            row.addWidget(QLabel(caption, stats))
            row.addWidget(label)
            row.addSpacing(12)
        form.addRow(row)
        h.addWidget(stats)

        v.addWidget(bar, 0)

        self.canvas = VisualizationCanvas(self.driver, central)
        v.addWidget(self.canvas, 1)
        self.setCentralWidget(central)

        self.statusBar().showMessage("Loading earthquake data...")

        # ---- wiring ----
        self.driver.mode_changed.connect(self._on_mode_changed)
        self.state.events_changed.connect(self._on_events_changed)

        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(refresh_interval_ms)
        self.refresh_timer.timeout.connect(self.refresh)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def begin(self) -> None:
        """Kick off the first load and the periodic refresh."""
        self.refresh()
        self.refresh_timer.start()

    def refresh(self) -> None:
        """Fetch the feed in the background; overlapping refreshes are skipped."""
        if self._worker is not None and self._worker.isRunning():
            logger.debug("Refresh already in progress, skipping")
            return
        worker = FeedWorker(self.state.feed, parent=self)
        worker.result_ready.connect(self.state.apply_result)
        worker.error_occurred.connect(self._on_feed_error)
        worker.finished.connect(worker.deleteLater)
        worker.finished.connect(self._on_worker_finished)
        self._worker = worker
        worker.start()

    # ------------------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------------------

    def _on_events_changed(self, result: FeedResult) -> None:
        self.update_statistics()

        if result.is_demo:
            self.statusBar().showMessage(DEMO_WARNING, NOTIFICATION_MS)
        else:
            self.statusBar().showMessage(f"Loaded {len(result.events)} earthquakes ({result.source})", NOTIFICATION_MS)

        if self.driver.state != DriverState.RUNNING:
            self.driver.start()

    def _on_worker_finished(self) -> None:
        # runs before the deferred delete of the finished worker
        if self._worker is not None and not self._worker.isRunning():
            self._worker = None

    def _on_feed_error(self, message: str) -> None:
        self.statusBar().showMessage(f"Data refresh failed: {message}", NOTIFICATION_MS)

    def _on_mode_changed(self, key: str) -> None:
        btn = self._buttons.get(key)
        if btn is not None and not btn.isChecked():
            btn.setChecked(True)

    def update_statistics(self) -> None:
        summary = self.state.summary
        self.lbl_total.setText(str(summary.total))
        self.lbl_strongest.setText(f"{summary.strongest:.1f}" if summary.strongest is not None else "-")
        self.lbl_latest.setText(summary.latest_location)
        self.lbl_updated.setText(datetime.now().strftime("%H:%M:%S"))

    def closeEvent(self, event: QCloseEvent) -> None:
        self.refresh_timer.stop()
        self.driver.stop()
        if self._worker is not None and self._worker.isRunning():
            self._worker.wait(int(config.REQUEST_TIMEOUT_S * 1000) * 2)
        super().closeEvent(event)
