# barcode_canvas/ui/canvas/scene.py
"""
Canvas scene: the drawing surface, its element items, and pointer routing.

Pointer-down arrives through the element items; pointer-move and
pointer-up are handled here at scene level, so they apply wherever the
pointer is once a drag has started (the view keeps the mouse grab until
release). Scene coordinates are the page coordinates of the snap math:
scrolling is already accounted for by the view's mapping.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from PySide6 import QtCore, QtGui, QtWidgets

from ...core.drag import DragController
from ...core.models import DrawingElement, Point
from ..items import ElementItem, make_item

DEFAULT_SURFACE_SIZE = (800, 1000)
WORKSPACE_MARGIN = 40


class SurfaceItem(QtWidgets.QGraphicsRectItem):
    """White drawing surface; element items are its children."""

    def __init__(self, width: float, height: float):
        super().__init__(0, 0, width, height)
        self.setPen(QtGui.QPen(QtGui.QColor("#999999")))
        self.setBrush(QtGui.QBrush(QtCore.Qt.white))
        self.setZValue(-1)


class CanvasScene(QtWidgets.QGraphicsScene):
    element_moved = QtCore.Signal(str, int, int)   # key, x, y (surface-relative)

    def __init__(
        self,
        drag_controller: DragController,
        parent: QtCore.QObject | None = None,
        surface_size: tuple[int, int] = DEFAULT_SURFACE_SIZE,
    ):
        super().__init__(parent)
        self.drag_controller = drag_controller
        self._items: Dict[str, ElementItem] = {}

        w, h = surface_size
        self.surface = SurfaceItem(w, h)
        self.addItem(self.surface)
        self.setSceneRect(
            -WORKSPACE_MARGIN,
            -WORKSPACE_MARGIN,
            w + 2 * WORKSPACE_MARGIN,
            h + 2 * WORKSPACE_MARGIN,
        )

    # ------------------------------------------------------------------
    # Surface / items
    # ------------------------------------------------------------------

    def surface_origin(self) -> Point:
        """Top-left of the drawing surface in page coordinates."""
        sp = self.surface.scenePos()
        return Point.from_float(sp.x(), sp.y())

    def surface_rect(self) -> QtCore.QRectF:
        return self.surface.sceneBoundingRect()

    def add_element(self, element: DrawingElement, qr_error_correction: str = "M") -> ElementItem:
        item = make_item(element, qr_error_correction=qr_error_correction)
        item.setParentItem(self.surface)
        item.setPos(0, 0)
        self._items[element.key] = item
        return item

    def remove_element(self, key: str) -> bool:
        item = self._items.pop(key, None)
        if item is None:
            return False
        self.removeItem(item)
        return True

    def item_for_key(self, key: str) -> Optional[ElementItem]:
        return self._items.get(key)

    def element_items(self) -> List[ElementItem]:
        return list(self._items.values())

    # ------------------------------------------------------------------
    # Pointer routing
    # ------------------------------------------------------------------

    def begin_drag(self, item: ElementItem, scene_pos: QtCore.QPointF) -> None:
        """Called by an element item on left press."""
        self.drag_controller.pointer_down(
            item,
            Point.from_float(scene_pos.x(), scene_pos.y()),
            item.top_left_in_page(),
        )

    def mouseMoveEvent(self, event: QtWidgets.QGraphicsSceneMouseEvent) -> None:
        session = self.drag_controller.session
        if session is None:
            return super().mouseMoveEvent(event)

        sp = event.scenePos()
        pos = self.drag_controller.pointer_move(
            Point.from_float(sp.x(), sp.y()),
            self.surface_origin(),
        )
        target = session.target
        if pos is not None and target is not None:
            self.element_moved.emit(target.key, pos.x, pos.y)
        event.accept()

    def mouseReleaseEvent(self, event: QtWidgets.QGraphicsSceneMouseEvent) -> None:
        self.drag_controller.pointer_up()
        super().mouseReleaseEvent(event)
