"""
Geographic Mode
===============
Events on a flat world map (linear equirectangular approximation).

    x = centre_x + longitude * map_width / 360
    y = centre_y - latitude * map_height / 180

Events landing outside the map rectangle are skipped, not clipped or wrapped.
"""
from __future__ import annotations

import math
from typing import Optional

import numpy as np
from PySide6.QtCore import QLineF, QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QFont, QPainter, QPen, QRadialGradient

from quakeviz import config
from quakeviz.model.event import Event
from quakeviz.render.base import Placement, RenderMode
from quakeviz.render.painting import circle_rect, draw_text_aligned, magnitude_color, qcolor
from quakeviz.render.registry import register_mode
from quakeviz.render.tooltip import TooltipStyle

MAP_WIDTH_FACTOR: float = 0.8  # of viewport width
MAP_MAX_WIDTH: float = 800.0  # px
MAP_ASPECT: float = 0.5  # height / width
PULSE_SPEED: float = 0.02  # rad per tick
GRATICULE_STEP: int = 30  # degrees
LABEL_FONT: str = "Arial"


def map_rect(width: float, height: float) -> tuple[float, float, float, float]:
    """
    Map geometry for a viewport.

    Returns:
        (centre_x, centre_y, map_width, map_height)
    """
    map_width = min(width * MAP_WIDTH_FACTOR, MAP_MAX_WIDTH)
    return width / 2.0, height / 2.0, map_width, map_width * MAP_ASPECT


def project(
    longitude: float,
    latitude: float,
    center_x: float,
    center_y: float,
    map_width: float,
    map_height: float,
) -> tuple[float, float]:
    """Linear lon/lat -> screen mapping; screen y grows downwards."""
    return (
        center_x + longitude * map_width / 360.0,
        center_y - latitude * map_height / 180.0,
    )


def in_map(x: float, y: float, center_x: float, center_y: float, map_width: float, map_height: float) -> bool:
    return (
        center_x - map_width / 2.0 <= x <= center_x + map_width / 2.0
        and center_y - map_height / 2.0 <= y <= center_y + map_height / 2.0
    )


def pulse(tick: int, magnitude: float) -> float:
    """Opacity multiplier in [0.4, 1.0]; the magnitude sets each event's phase."""
    return math.sin(tick * PULSE_SPEED + magnitude) * 0.3 + 0.7


def marker_size(magnitude: float) -> float:
    return magnitude * 2.5 + 2.0


def _label_font(pixel_size: int) -> QFont:
    font = QFont(LABEL_FONT)
    font.setPixelSize(pixel_size)
    font.setBold(True)
    return font


@register_mode
class GeographicMode(RenderMode):
    KEY = config.MODE_GEOGRAPHIC
    TOOLTIP = TooltipStyle(
        width=200.0,
        height=100.0,
        label_limit=25,
        background_alpha=0.9,
        connector_width=1.5,
        connector_offset=5.0,
        date_format="%Y-%m-%d",
        date_prefix="Date: ",
        baselines=(22.0, 45.0, 65.0, 85.0),
    )

    @property
    def map_geometry(self) -> tuple[float, float, float, float]:
        return map_rect(self.width, self.height)

    def place(self, event: Event, index: int) -> Optional[Placement]:
        cx, cy, mw, mh = self.map_geometry
        x, y = project(float(event.longitude), float(event.latitude), cx, cy, mw, mh)
        if not in_map(x, y, cx, cy, mw, mh):
            return None
        size = marker_size(float(event.magnitude))
        return Placement(event=event, index=index, x=x, y=y, size=size, hit_radius=2.0 * size)

    # ---- background ----

    def _draw_background(self, painter: QPainter) -> None:
        cx, cy, mw, mh = self.map_geometry
        rect = QRectF(cx - mw / 2.0, cy - mh / 2.0, mw, mh)

        painter.fillRect(rect, qcolor("#142850", 0.1))
        painter.setPen(QPen(qcolor("#8ca0c8", 0.6), 2.0))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(rect)

        self._draw_graticule(painter, cx, cy, mw, mh)
        self._draw_equator_and_meridian(painter, cx, cy, mw, mh)

    def _draw_graticule(self, painter: QPainter, cx: float, cy: float, mw: float, mh: float) -> None:
        grid_pen = QPen(qcolor("#6478b4", 0.3), 0.8)
        label_color = qcolor("#c8c8ff", 0.8)
        painter.setFont(_label_font(10))
        left, right = cx - mw / 2.0, cx + mw / 2.0
        top, bottom = cy - mh / 2.0, cy + mh / 2.0

        for lon in np.arange(-180, 181, GRATICULE_STEP):
            x, _ = project(lon, 0.0, cx, cy, mw, mh)
            painter.setPen(grid_pen)
            painter.drawLine(QLineF(x, top, x, bottom))
            if lon != 0:
                painter.setPen(label_color)
                draw_text_aligned(painter, x, bottom + 15.0, f"{abs(lon)}°{'W' if lon < 0 else 'E'}", "center")

        for lat in np.arange(-60, 61, GRATICULE_STEP):
            _, y = project(0.0, lat, cx, cy, mw, mh)
            painter.setPen(grid_pen)
            painter.drawLine(QLineF(left, y, right, y))
            if lat != 0:
                painter.setPen(label_color)
                draw_text_aligned(painter, left - 5.0, y + 4.0, f"{abs(lat)}°{'S' if lat < 0 else 'N'}", "right")

    def _draw_equator_and_meridian(self, painter: QPainter, cx: float, cy: float, mw: float, mh: float) -> None:
        painter.setPen(QPen(qcolor("#78b4ff", 0.8), 1.5))
        painter.drawLine(QLineF(cx - mw / 2.0, cy, cx + mw / 2.0, cy))
        painter.drawLine(QLineF(cx, cy - mh / 2.0, cx, cy + mh / 2.0))

        painter.setFont(_label_font(12))
        painter.setPen(qcolor("#b4dcff", 0.9))
        draw_text_aligned(painter, cx + mw / 2.0 + 40.0, cy + 4.0, "Equator", "center")
        draw_text_aligned(painter, cx, cy - mh / 2.0 - 10.0, "Prime Meridian", "center")

    # ---- events ----

    def _draw_event(self, painter: QPainter, placement: Placement, hovered: bool) -> None:
        color = magnitude_color(placement.event.magnitude)
        strength = pulse(self.tick, placement.event.magnitude)
        size = placement.size
        center = QPointF(placement.x, placement.y)
        glow_radius = size * (3.0 if hovered else 2.0)

        painter.setPen(Qt.PenStyle.NoPen)

        gradient = QRadialGradient(center, glow_radius)
        gradient.setColorAt(0.0, qcolor(color))
        gradient.setColorAt(1.0, qcolor(color, 0.0))
        painter.setOpacity((0.6 if hovered else 0.4) * strength)
        painter.setBrush(QBrush(gradient))
        painter.drawEllipse(circle_rect(placement.x, placement.y, glow_radius))

        painter.setOpacity(0.9 * strength)
        painter.setBrush(qcolor(color))
        painter.drawEllipse(circle_rect(placement.x, placement.y, size * (1.5 if hovered else 1.0)))

        painter.setOpacity(0.7)
        painter.setBrush(qcolor("#ffffff"))
        painter.drawEllipse(circle_rect(placement.x, placement.y, size * 0.3))
