"""
Painting helpers shared by both render modes.

Free functions working on plain values or on a `QPainterPath`, so they can be
used with any `QPainter` target (widget, back-buffer image, test image).
"""
from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF
from PySide6.QtGui import QColor, QPainterPath

from quakeviz import config

ELLIPSIS = "..."


def magnitude_color(magnitude: float) -> str:
    """
    Map a magnitude to its colour band.

    Args:
        magnitude: Earthquake magnitude.

    Returns:
        A '#RRGGBB' colour string.
    """
    for upper, color in config.MAGNITUDE_COLOR_BANDS:
        if magnitude < upper:
            return color
    return config.MAGNITUDE_COLOR_MAX


def qcolor(color: str, alpha: float = 1.0) -> QColor:
    """Build a QColor from a colour string with a 0..1 alpha."""
    c = QColor(color)
    c.setAlphaF(max(0.0, min(1.0, alpha)))
    return c


def truncate_label(text: str, limit: int) -> str:
    """
    Shorten `text` to at most `limit` characters, ending with an ellipsis.

    Examples:
        >>> truncate_label("Ring of Fire, Pacific Ocean", 20)
        'Ring of Fire, Pac...'
    """
    if len(text) <= limit:
        return text
    return text[:max(0, limit - len(ELLIPSIS))] + ELLIPSIS


def rounded_rect_path(x: float, y: float, width: float, height: float, radius: float) -> QPainterPath:
    """
    Closed path of a rectangle with quadratic-curve corners.

    Args:
        x: Left edge.
        y: Top edge.
        width: Box width.
        height: Box height.
        radius: Corner radius, limited to half of the shorter side.

    Returns:
        The outline as a QPainterPath, ready for fillPath/strokePath.
    """
    r = max(0.0, min(radius, width / 2.0, height / 2.0))
    path = QPainterPath()
    path.moveTo(x + r, y)
    path.lineTo(x + width - r, y)
    path.quadTo(x + width, y, x + width, y + r)
    path.lineTo(x + width, y + height - r)
    path.quadTo(x + width, y + height, x + width - r, y + height)
    path.lineTo(x + r, y + height)
    path.quadTo(x, y + height, x, y + height - r)
    path.lineTo(x, y + r)
    path.quadTo(x, y, x + r, y)
    path.closeSubpath()
    return path


def circle_rect(x: float, y: float, radius: float) -> QRectF:
    """Bounding rectangle of a circle, for QPainter.drawEllipse."""
    return QRectF(x - radius, y - radius, 2.0 * radius, 2.0 * radius)


def draw_text_aligned(painter, x: float, baseline: float, text: str, align: str = "left") -> None:
    """
    Draw `text` on `baseline`, anchored at `x` on its left edge, centre or right edge.

    Args:
        painter: Active QPainter with the desired font and pen set.
        x: Anchor x coordinate.
        baseline: Text baseline y coordinate.
        text: The string to draw.
        align: One of "left", "center", "right".
    """
    advance = painter.fontMetrics().horizontalAdvance(text)
    if align == "center":
        x -= advance / 2.0
    elif align == "right":
        x -= advance
    painter.drawText(QPointF(x, baseline), text)
