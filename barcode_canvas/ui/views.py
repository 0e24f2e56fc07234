from __future__ import annotations

import math

from PySide6 import QtCore, QtGui, QtWidgets

from ..core.snap import GridSettings

# Below this on-screen spacing the grid dots turn into noise
MIN_DOT_SPACING_PX = 5.0


class CanvasView(QtWidgets.QGraphicsView):
    def __init__(self, grid: GridSettings, parent=None):
        super().__init__(parent)
        self.grid = grid

        self.setRenderHints(
            QtGui.QPainter.Antialiasing
            | QtGui.QPainter.TextAntialiasing
        )
        self.setViewportUpdateMode(QtWidgets.QGraphicsView.FullViewportUpdate)

        # Zoom behavior
        self.setTransformationAnchor(QtWidgets.QGraphicsView.AnchorUnderMouse)
        self.setResizeAnchor(QtWidgets.QGraphicsView.AnchorViewCenter)

        self._show_grid = True

    # ------------ public toggles used by MainWindow ------------
    def setShowGrid(self, show: bool):
        self._show_grid = bool(show)
        self.viewport().update()

    def grid_changed(self) -> None:
        self.viewport().update()

    # ------------ background: workspace ------------
    def drawBackground(self, painter: QtGui.QPainter, rect: QtCore.QRectF) -> None:
        painter.fillRect(rect, QtGui.QColor("#e5e7eb"))

    # ------------ foreground: snap grid over the surface ------------
    def drawForeground(self, painter: QtGui.QPainter, rect: QtCore.QRectF) -> None:
        super().drawForeground(painter, rect)

        scene = self.scene()
        if scene is None or not self._show_grid:
            return

        surface_rect = getattr(scene, "surface_rect", None)
        if surface_rect is None:
            return
        page = surface_rect()
        area = rect.intersected(page)
        if area.isEmpty():
            return

        cell = float(self.grid.cell_size)
        # skip dots that would be denser than MIN_DOT_SPACING_PX on screen
        zoom = self.transform().m11() or 1.0
        step = cell * max(1, math.ceil(MIN_DOT_SPACING_PX / (cell * zoom)))

        pen = QtGui.QPen(QtGui.QColor("#c0c4cc"))
        pen.setWidth(0)  # cosmetic
        painter.setPen(pen)

        first_x = page.left() + math.ceil((area.left() - page.left()) / step) * step
        first_y = page.top() + math.ceil((area.top() - page.top()) / step) * step

        points = []
        y = first_y
        while y <= area.bottom():
            x = first_x
            while x <= area.right():
                points.append(QtCore.QPointF(x, y))
                x += step
            y += step
        if points:
            painter.drawPoints(QtGui.QPolygonF(points))

    # ------------ zoom ------------
    def wheelEvent(self, event: QtGui.QWheelEvent) -> None:
        """
        Ctrl + wheel = zoom around cursor.
        Plain wheel = normal scroll (default behavior).
        """
        if event.modifiers() & QtCore.Qt.ControlModifier:
            angle = event.angleDelta().y()
            if angle == 0:
                return

            zoom_factor = 1.2 if angle > 0 else 1 / 1.2
            self.scale(zoom_factor, zoom_factor)
        else:
            super().wheelEvent(event)
