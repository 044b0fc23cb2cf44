from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QMouseEvent, QPainter, QPaintEvent, QResizeEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from quakeviz.controller.driver import AnimationDriver


class VisualizationCanvas(QWidget):
    """
    Widget showing the driver's back-buffer.

    Forwards pointer moves and (device-pixel-ratio aware) resizes to the
    driver and switches to a pointing-hand cursor while an event is hovered.
    """
    def __init__(self, driver: AnimationDriver, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.driver = driver
        self.setMouseTracking(True)
        self.setMinimumSize(480, 320)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent, True)

        driver.frame_ready.connect(self.update)
        driver.hover_changed.connect(self._on_hover_changed)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        self.driver.set_pointer(pos.x(), pos.y())
        super().mouseMoveEvent(event)

    def resizeEvent(self, event: QResizeEvent) -> None:
        size = event.size()
        self.driver.set_viewport(size.width(), size.height(), self.devicePixelRatioF())
        super().resizeEvent(event)

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        frame = self.driver.frame
        if frame is None:
            painter.fillRect(self.rect(), Qt.GlobalColor.black)
        else:
            painter.drawImage(0, 0, frame)
        painter.end()

    def _on_hover_changed(self, hovering: bool) -> None:
        if hovering:
            self.setCursor(Qt.CursorShape.PointingHandCursor)
        else:
            self.unsetCursor()
