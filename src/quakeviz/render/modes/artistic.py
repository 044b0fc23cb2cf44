"""
Artistic Mode
=============
Events orbit the viewport centre on a ring whose radius grows with magnitude.

The angle of event `i` at tick `t` is `(t * ANGULAR_SPEED + i * INDEX_OFFSET) mod 2pi`,
so the whole ring drifts without keeping per-event angles. Consecutive events
are joined by a faint path, and markers shed particles now and then.
"""
from __future__ import annotations

import math
from typing import Optional

import numpy as np
from PySide6.QtCore import QLineF, QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QPainter, QPainterPath, QPen, QRadialGradient

from quakeviz import config
from quakeviz.model.event import Event
from quakeviz.model.particle import ParticleSystem
from quakeviz.render.base import Placement, RenderMode
from quakeviz.render.painting import circle_rect, magnitude_color, qcolor
from quakeviz.render.registry import register_mode
from quakeviz.render.tooltip import TooltipStyle

ANGULAR_SPEED: float = 0.0008  # rad per tick
INDEX_OFFSET: float = 0.2  # rad between consecutive events
BASE_RADIUS_FACTOR: float = 0.25  # of min(width, height)
RADIUS_PER_MAGNITUDE: float = 8.0  # px
GRID_SIZE: float = 50.0  # px
TWO_PI: float = 2.0 * math.pi


def orbit_angle(tick: int, index: int) -> float:
    """Angle of the `index`-th event at `tick`, in [0, 2pi)."""
    return (tick * ANGULAR_SPEED + index * INDEX_OFFSET) % TWO_PI


def orbit_radius(magnitude: float, base_radius: float) -> float:
    return base_radius + magnitude * RADIUS_PER_MAGNITUDE


def marker_size(magnitude: float) -> float:
    return magnitude * 2.0 + 3.0


@register_mode
class ArtisticMode(RenderMode):
    KEY = config.MODE_ARTISTIC
    TOOLTIP = TooltipStyle(
        width=180.0,
        height=90.0,
        label_limit=20,
        background_alpha=0.8,
        connector_width=1.0,
        connector_offset=3.0,
        date_format="%Y-%m-%d %H:%M UTC",
        baselines=(20.0, 40.0, 60.0, 75.0),
    )

    def __init__(
        self,
        width: float = 0.0,
        height: float = 0.0,
        particles: Optional[ParticleSystem] = None,
    ) -> None:
        super().__init__(width, height)
        self.particles = particles if particles is not None else ParticleSystem()

    def reset(self) -> None:
        super().reset()
        self.particles.clear()

    @property
    def base_radius(self) -> float:
        return min(self.width, self.height) * BASE_RADIUS_FACTOR

    def place(self, event: Event, index: int) -> Optional[Placement]:
        magnitude = float(event.magnitude)
        angle = orbit_angle(self.tick, index)
        radius = orbit_radius(magnitude, self.base_radius)
        cx, cy = self.center
        size = marker_size(magnitude)
        return Placement(
            event=event,
            index=index,
            x=cx + math.cos(angle) * radius,
            y=cy + math.sin(angle) * radius,
            size=size,
            hit_radius=2.0 * size,
        )

    # ---- background ----

    def _draw_background(self, painter: QPainter) -> None:
        self._draw_grid(painter)
        self._draw_central_glow(painter)

    def _draw_grid(self, painter: QPainter) -> None:
        painter.setPen(QPen(qcolor("#324664", 0.15), 0.5))
        for x in np.arange(0.0, self.width, GRID_SIZE):
            painter.drawLine(QLineF(x, 0.0, x, self.height))
        for y in np.arange(0.0, self.height, GRID_SIZE):
            painter.drawLine(QLineF(0.0, y, self.width, y))

    def _draw_central_glow(self, painter: QPainter) -> None:
        cx, cy = self.center
        radius = min(self.width, self.height) * 0.4
        if radius <= 0:
            return
        gradient = QRadialGradient(QPointF(cx, cy), radius)
        gradient.setColorAt(0.0, qcolor("#1e3c64", 0.2))
        gradient.setColorAt(1.0, qcolor("#1e3c64", 0.0))
        painter.fillRect(QRectF(0.0, 0.0, self.width, self.height), QBrush(gradient))

    # ---- events ----

    def _draw_links(self, painter: QPainter, placements: list[Placement]) -> None:
        """Join each event to the next one in sequence order (decorative only)."""
        if len(placements) < 2:
            return
        path = QPainterPath(QPointF(placements[0].x, placements[0].y))
        for placement in placements[1:]:
            path.lineTo(placement.x, placement.y)
        painter.strokePath(path, QPen(qcolor("#64b4dc", 0.2), 1.0))

    def _draw_event(self, painter: QPainter, placement: Placement, hovered: bool) -> None:
        color = magnitude_color(placement.event.magnitude)
        size = placement.size
        painter.setPen(Qt.PenStyle.NoPen)

        # outer glow
        painter.setOpacity(0.3)
        painter.setBrush(qcolor(color))
        painter.drawEllipse(circle_rect(placement.x, placement.y, size * 2.0))

        # core
        painter.setOpacity(1.0 if hovered else 0.9)
        painter.drawEllipse(circle_rect(placement.x, placement.y, size * 1.3 if hovered else size))

        # highlight
        painter.setOpacity(0.5)
        painter.setBrush(qcolor("#ffffff"))
        painter.drawEllipse(circle_rect(placement.x, placement.y, size * 0.3))

        self.particles.maybe_spawn(placement.x, placement.y, placement.event.magnitude)

    # ---- particles ----

    def _draw_overlay(self, painter: QPainter) -> None:
        self.particles.step()
        self.particles.draw(painter)
        self.particles.trim()
