"""
Tooltip placement and drawing, shared by both render modes.

The placement is a pure function of the anchor point, the box size and the
viewport, so it can be checked without painting anything.
"""
from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QLineF, QPointF, Qt
from PySide6.QtGui import QBrush, QFont, QPainter, QPen

from quakeviz.model.event import Event
from quakeviz.render.painting import magnitude_color, qcolor, rounded_rect_path, truncate_label


@dataclass(frozen=True)
class TooltipStyle:
    """Per-mode tooltip look. Baselines are measured from the box top."""
    width: float
    height: float
    label_limit: int
    background_alpha: float = 0.8
    connector_width: float = 1.0
    connector_offset: float = 3.0
    date_format: str = "%Y-%m-%d %H:%M UTC"
    date_prefix: str = ""
    baselines: tuple[float, float, float, float] = (20.0, 40.0, 60.0, 75.0)
    margin: float = 10.0
    gap: float = 10.0
    padding: float = 10.0
    corner_radius: float = 6.0
    font_family: str = "Arial"


@dataclass(frozen=True)
class TooltipPlacement:
    x: float
    y: float
    width: float
    height: float
    below: bool
    connector: tuple[float, float, float, float]  # (x0, y0, x1, y1)


def place_tooltip(
    anchor_x: float,
    anchor_y: float,
    width: float,
    height: float,
    viewport_width: float,
    viewport_height: float,
    *,
    margin: float = 10.0,
    gap: float = 10.0,
    connector_offset: float = 3.0,
) -> TooltipPlacement:
    """
    Position a tooltip box relative to its anchor point.

    The box is centred above the anchor, `gap` pixels away. If that would cross
    the top margin it flips below the anchor. It is then clamped so every edge
    stays within [margin, viewport - margin] on both axes.

    Args:
        anchor_x: Anchor point x (the hovered marker).
        anchor_y: Anchor point y.
        width: Tooltip box width.
        height: Tooltip box height.
        viewport_width: Drawable width in logical pixels.
        viewport_height: Drawable height in logical pixels.
        margin: Minimal distance between the box and the viewport edges.
        gap: Distance between the anchor and the nearest box edge.
        connector_offset: Distance between the anchor and the connector start.

    Returns:
        The box position, whether it sits below the anchor, and the connector
        segment from the anchor to the nearest box edge.
    """
    x = anchor_x - width / 2.0
    y = anchor_y - height - gap

    if y < margin:
        y = anchor_y + gap

    if x < margin:
        x = margin
    if x + width > viewport_width - margin:
        x = viewport_width - width - margin

    if y + height > viewport_height - margin:
        y = viewport_height - height - margin
    if y < margin:
        y = margin

    below = y > anchor_y
    if below:
        connector = (anchor_x, anchor_y + connector_offset, anchor_x, y)
    else:
        connector = (anchor_x, anchor_y - connector_offset, anchor_x, y + height)

    return TooltipPlacement(x=x, y=y, width=width, height=height, below=below, connector=connector)


def tooltip_lines(event: Event, style: TooltipStyle) -> list[str]:
    """Text rows of the tooltip: magnitude, location, depth, date."""
    return [
        f"Magnitude: {event.magnitude:.1f}",
        f"Location: {truncate_label(event.location, style.label_limit)}",
        f"Depth: {event.depth:.1f} km",
        f"{style.date_prefix}{event.time.strftime(style.date_format)}",
    ]


def draw_tooltip(
    painter: QPainter,
    event: Event,
    anchor_x: float,
    anchor_y: float,
    viewport_width: float,
    viewport_height: float,
    style: TooltipStyle,
) -> TooltipPlacement:
    """Paint the tooltip for `event` anchored at (anchor_x, anchor_y) and return its placement."""
    placement = place_tooltip(
        anchor_x, anchor_y, style.width, style.height, viewport_width, viewport_height,
        margin=style.margin, gap=style.gap, connector_offset=style.connector_offset,
    )
    accent = magnitude_color(event.magnitude)
    box = rounded_rect_path(placement.x, placement.y, placement.width, placement.height, style.corner_radius)
    # everything that reads event fields happens before the painter state is saved
    title, *rows = tooltip_lines(event, style)

    painter.save()
    painter.setOpacity(1.0)

    painter.fillPath(box, QBrush(qcolor("#000000", style.background_alpha)))
    painter.strokePath(box, QPen(qcolor(accent), 2.0))

    left = placement.x + style.padding

    font = QFont(style.font_family)
    font.setPixelSize(14)
    font.setBold(True)
    painter.setFont(font)
    painter.setPen(qcolor(accent))
    painter.drawText(QPointF(left, placement.y + style.baselines[0]), title)

    font.setPixelSize(12)
    font.setBold(False)
    painter.setFont(font)
    painter.setPen(qcolor("#ffffff"))
    for baseline, row in zip(style.baselines[1:], rows):
        painter.drawText(QPointF(left, placement.y + baseline), row)

    pen = QPen(qcolor(accent), style.connector_width)
    pen.setCapStyle(Qt.PenCapStyle.FlatCap)
    painter.setPen(pen)
    painter.drawLine(QLineF(*placement.connector))

    painter.restore()
    return placement
