"""
Animation Driver
================
Owns the frame loop, the pointer snapshot and the active render mode.

Each tick reads the latest pointer position and event sequence, lets the
active mode paint a full frame into an off-screen image and re-arms a
single-shot timer for the next tick. Only one shot is ever pending.

Classes:
    DriverState: Idle / Running.
    AnimationDriver: The loop itself.
"""
from __future__ import annotations

from enum import StrEnum
import logging
from typing import Callable, Mapping, Optional, Sequence

from PySide6.QtCore import QObject, QSize, QTimer, Signal
from PySide6.QtGui import QImage, QPainter

from quakeviz import config
from quakeviz.model.event import Event
from quakeviz.render.base import Placement, RenderMode

logger = logging.getLogger(__name__)


class DriverState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"


class AnimationDriver(QObject):
    """
    Frame loop dispatching to one of several render modes.

    Args:
        get_events: Returns the current event sequence (read at tick start).
        modes: Render modes by identifier.
        initial_mode: Identifier of the mode shown first.
        interval_ms: Delay between the end of a tick and the next one.
    """
    frame_ready = Signal()
    hover_changed = Signal(bool)
    mode_changed = Signal(str)

    def __init__(
        self,
        get_events: Callable[[], Sequence[Event]],
        modes: Mapping[str, RenderMode],
        initial_mode: str = config.DEFAULT_MODE,
        interval_ms: int = config.FRAME_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        if initial_mode not in modes:
            raise KeyError(f"Unknown initial mode '{initial_mode}'")

        self._get_events = get_events
        self.modes: dict[str, RenderMode] = dict(modes)
        self._current_mode = initial_mode

        self.pointer_x: float = 0.0
        self.pointer_y: float = 0.0
        self._hovering = False

        self._width = 0.0
        self._height = 0.0
        self._device_pixel_ratio = 1.0
        self.frame: Optional[QImage] = None

        self._state = DriverState.IDLE
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def current_mode(self) -> str:
        return self._current_mode

    @property
    def active_mode(self) -> RenderMode:
        return self.modes[self._current_mode]

    @property
    def hovered(self) -> Optional[Placement]:
        return self.active_mode.hovered

    def is_scheduled(self) -> bool:
        return self._timer.isActive()

    def set_pointer(self, x: float, y: float) -> None:
        """Latest pointer position in logical pixels (last value wins)."""
        self.pointer_x = float(x)
        self.pointer_y = float(y)

    def set_viewport(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> None:
        """Resize the back-buffer and hand the new logical size to every mode."""
        self._width = max(0.0, float(width))
        self._height = max(0.0, float(height))
        self._device_pixel_ratio = max(1.0, float(device_pixel_ratio))

        pixels = QSize(
            max(1, round(self._width * self._device_pixel_ratio)),
            max(1, round(self._height * self._device_pixel_ratio)),
        )
        self.frame = QImage(pixels, QImage.Format.Format_ARGB32_Premultiplied)
        self.frame.setDevicePixelRatio(self._device_pixel_ratio)

        for mode in self.modes.values():
            mode.set_viewport(self._width, self._height)

    def set_mode(self, identifier: str) -> bool:
        """
        Switch the active mode.

        Unknown identifiers and the already active one are ignored. A real
        switch resets the transient state of every mode.

        Returns:
            True if the mode changed.
        """
        if identifier not in self.modes:
            logger.warning(f"Ignoring unknown visualisation mode '{identifier}'")
            return False
        if identifier == self._current_mode:
            return False

        self._current_mode = identifier
        for mode in self.modes.values():
            mode.reset()
        self._set_hovering(False)
        logger.info(f"Visualisation mode set to '{identifier}'")

        if self._state == DriverState.RUNNING:
            self._schedule()
        self.mode_changed.emit(identifier)
        return True

    def start(self) -> None:
        """Enter the running state; any pending tick is replaced, never doubled."""
        if self._state != DriverState.RUNNING:
            logger.info("Animation started")
        self._state = DriverState.RUNNING
        self._schedule()

    def stop(self) -> None:
        """Stop rescheduling; an in-flight tick still finishes."""
        self._timer.stop()
        self._state = DriverState.IDLE

    def tick(self) -> Optional[Placement]:
        """
        Render one frame with the active mode.

        A failure inside the mode is logged and contained to this frame.

        Returns:
            The hovered placement of this frame, or None.
        """
        if self.frame is None:
            return None

        events = self._get_events()
        mode = self.active_mode
        hovered: Optional[Placement] = None

        painter = QPainter(self.frame)
        try:
            hovered = mode.draw(painter, events, self.pointer_x, self.pointer_y)
        except Exception:
            logger.exception(f"Frame failed in {mode.KEY} mode")
        finally:
            painter.end()

        self._set_hovering(mode.wants_pointer_cursor)
        self.frame_ready.emit()
        return hovered

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _schedule(self) -> None:
        # QTimer.start() on an active single-shot timer restarts it, so at most one tick is pending
        self._timer.start()

    def _on_timeout(self) -> None:
        self.tick()
        if self._state == DriverState.RUNNING:
            self._schedule()

    def _set_hovering(self, hovering: bool) -> None:
        if hovering != self._hovering:
            self._hovering = hovering
            self.hover_changed.emit(hovering)
