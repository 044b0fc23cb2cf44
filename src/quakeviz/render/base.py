"""
Render Mode Contract
====================
Shared frame pipeline of the artistic and geographic views.

Every frame is rebuilt from scratch: clear, background, per-event placement,
hover pick, links, event markers, overlay effects and finally the tooltip on top.
Each marker and the tooltip are drawn in isolation: a malformed event only
loses its own marker (or tooltip), never the rest of the frame.
Only the tick counter (and the particles of the artistic mode) survive
between frames.

Classes:
    Placement: Where one event landed on screen this frame.
    RenderMode: Abstract base class of the two views.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
import math
from typing import Optional, Sequence

from PySide6.QtCore import QRectF
from PySide6.QtGui import QPainter

from quakeviz import config
from quakeviz.model.event import Event
from quakeviz.render.painting import qcolor
from quakeviz.render.tooltip import TooltipStyle, draw_tooltip

logger = logging.getLogger(__name__)

# Errors a single malformed event may raise while being placed
EVENT_ERRORS = (TypeError, ValueError, IndexError, AttributeError)


@dataclass(frozen=True)
class Placement:
    """Screen position of one event for the current frame."""
    event: Event
    index: int
    x: float
    y: float
    size: float
    hit_radius: float


def pick_hovered(placements: Sequence[Placement], pointer_x: float, pointer_y: float) -> Optional[Placement]:
    """
    Return the placement nearest to the pointer among those whose hit radius
    contains it. On equal distance the later placement wins.
    """
    hovered: Optional[Placement] = None
    best = math.inf
    for placement in placements:
        distance = math.hypot(pointer_x - placement.x, pointer_y - placement.y)
        if distance < placement.hit_radius and distance <= best:
            hovered = placement
            best = distance
    return hovered


class RenderMode(ABC):
    """
    Base class of a visualisation mode.

    Subclasses define KEY, TOOLTIP, `place()`, `_draw_event()` and the optional hooks; `draw()`
    runs the common frame pipeline.
    """
    KEY: str = "base"  # Override in subclass
    TOOLTIP: TooltipStyle = TooltipStyle(width=180.0, height=90.0, label_limit=20)

    def __init__(self, width: float = 0.0, height: float = 0.0) -> None:
        self.width = float(width)
        self.height = float(height)
        self.tick: int = 0
        self.hovered: Optional[Placement] = None
        self.wants_pointer_cursor: bool = False

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_viewport(self, width: float, height: float) -> None:
        """Hand the mode the logical (device independent) drawable size."""
        self.width = float(width)
        self.height = float(height)

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2.0, self.height / 2.0

    def reset(self) -> None:
        """Return to the initial rendering state."""
        self.tick = 0
        self.hovered = None
        self.wants_pointer_cursor = False

    def draw(
        self,
        painter: QPainter,
        events: Sequence[Event],
        pointer_x: float,
        pointer_y: float,
    ) -> Optional[Placement]:
        """
        Render one complete frame.

        Args:
            painter: Active painter on the target surface, in logical pixels.
            events: Current event sequence (may be empty).
            pointer_x: Latest pointer x in logical pixels.
            pointer_y: Latest pointer y in logical pixels.

        Returns:
            The hovered placement, or None.
        """
        self.tick += 1
        self.hovered = None

        painter.save()
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.setOpacity(1.0)
            painter.fillRect(QRectF(0.0, 0.0, self.width, self.height), qcolor(config.BACKGROUND_COLOR))

            self._draw_background(painter)

            placements = self.layout(events)
            self.hovered = pick_hovered(placements, pointer_x, pointer_y)

            self._draw_links(painter, placements)
            for placement in placements:
                self._draw_event_isolated(painter, placement)
            self._draw_overlay(painter)

            if self.hovered is not None:
                self._draw_tooltip_isolated(painter, self.hovered)
        finally:
            painter.restore()

        self.wants_pointer_cursor = self.hovered is not None
        return self.hovered

    def layout(self, events: Sequence[Event]) -> list[Placement]:
        """Place every event; events that fail or fall off the view are left out."""
        placements: list[Placement] = []
        for index, event in enumerate(events):
            try:
                placement = self.place(event, index)
            except EVENT_ERRORS as e:
                logger.debug(f"Skipping event #{index} in {self.KEY} mode: {e}")
                continue
            if placement is not None:
                placements.append(placement)
        return placements

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _draw_event_isolated(self, painter: QPainter, placement: Placement) -> None:
        # one save/restore pair per event, balanced even when drawing fails
        painter.save()
        try:
            self._draw_event(painter, placement, placement is self.hovered)
        except EVENT_ERRORS as e:
            logger.debug(f"Skipping marker of event #{placement.index} in {self.KEY} mode: {e}")
        finally:
            painter.restore()

    def _draw_tooltip_isolated(self, painter: QPainter, placement: Placement) -> None:
        painter.save()
        try:
            draw_tooltip(
                painter, placement.event, placement.x, placement.y,
                self.width, self.height, self.TOOLTIP,
            )
        except EVENT_ERRORS as e:
            logger.debug(f"Skipping tooltip of event #{placement.index} in {self.KEY} mode: {e}")
        finally:
            painter.restore()

    # ------------------------------------------------------------------------------
    # Abstract API for subclasses
    # ------------------------------------------------------------------------------

    @abstractmethod
    def place(self, event: Event, index: int) -> Optional[Placement]:
        """Compute the on-screen placement of `event` for the current tick, or None to skip it."""

    @abstractmethod
    def _draw_background(self, painter: QPainter) -> None:
        """Draw everything behind the event markers."""

    @abstractmethod
    def _draw_event(self, painter: QPainter, placement: Placement, hovered: bool) -> None:
        """Draw one event marker. Errors from EVENT_ERRORS skip only this event."""

    def _draw_links(self, painter: QPainter, placements: list[Placement]) -> None:
        """Draw anything connecting the placed events, below the markers."""

    def _draw_overlay(self, painter: QPainter) -> None:
        """Draw effects above the markers and below the tooltip."""
