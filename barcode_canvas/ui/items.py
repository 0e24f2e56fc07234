from __future__ import annotations
from PySide6 import QtCore, QtGui, QtWidgets

from ..core.errors import RenderError, friendly_message
from ..core.models import BarcodeElement, DrawingElement, Point, QrElement, TextElement
from ..core.render import pil_to_qimage
from ..core.renderers import has_checksum, render_barcode, render_qr


class ElementItem(QtWidgets.QGraphicsItem):
    """
    Canvas item for one registered element.

    Items are children of the drawing surface, so pos() is the element's
    surface-relative top-left. Dragging is not Qt's ItemIsMovable: a left
    press hands the item to the scene's DragController and the scene moves
    it from there.
    """

    ERROR_COLOR = QtGui.QColor("#c62828")

    def __init__(self, element: DrawingElement, parent: QtWidgets.QGraphicsItem | None = None):
        super().__init__(parent)
        self.element = element
        self._size = QtCore.QSizeF(0, 0)
        self._error: str | None = None

        self.setAcceptedMouseButtons(QtCore.Qt.LeftButton)
        self.setCursor(QtCore.Qt.SizeAllCursor)
        self.setToolTip(f"{element.type}: {element.data}")

        self.refresh()

    @property
    def key(self) -> str:
        return self.element.key

    @property
    def error(self) -> str | None:
        """Renderer error shown in place of the symbol, if any."""
        return self._error

    # ---------- content (overridden per kind) ----------
    def _layout(self) -> QtCore.QSizeF:
        raise NotImplementedError

    def _paint_content(self, painter: QtGui.QPainter) -> None:
        raise NotImplementedError

    def refresh(self) -> None:
        """Re-render the content; renderer failures become inline error text."""
        self.prepareGeometryChange()
        self._error = None
        try:
            self._size = self._layout()
        except RenderError as exc:
            self._error = friendly_message(exc)
            print(f"[Render] {self.element.type} {self.element.key}: {self._error}")
            fm = QtGui.QFontMetricsF(QtGui.QFont())
            self._size = QtCore.QSizeF(fm.horizontalAdvance(self._error) + 4, fm.height() + 4)
        self.update()

    # ---------- QGraphicsItem ----------
    def boundingRect(self) -> QtCore.QRectF:
        return QtCore.QRectF(0, 0, self._size.width(), self._size.height())

    def paint(self, painter: QtGui.QPainter, option, widget=None) -> None:
        if self._error is not None:
            painter.setPen(self.ERROR_COLOR)
            painter.setFont(QtGui.QFont())
            painter.drawText(self.boundingRect(), int(QtCore.Qt.AlignLeft | QtCore.Qt.AlignVCenter), self._error)
            return
        self._paint_content(painter)

    # ---------- drag target ----------
    def is_drag_target_alive(self) -> bool:
        try:
            return self.scene() is not None
        except RuntimeError:
            # Underlying C++ item is gone
            return False

    def move_to(self, pos: Point) -> None:
        self.setPos(pos.x, pos.y)

    def top_left_in_page(self) -> Point:
        sp = self.scenePos()
        return Point.from_float(sp.x(), sp.y())

    def surface_position(self) -> Point:
        p = self.pos()
        return Point.from_float(p.x(), p.y())

    def mousePressEvent(self, event: QtWidgets.QGraphicsSceneMouseEvent) -> None:
        scene = self.scene()
        begin_drag = getattr(scene, "begin_drag", None)
        if event.button() != QtCore.Qt.LeftButton or begin_drag is None:
            return super().mousePressEvent(event)

        begin_drag(self, event.scenePos())
        event.accept()


class TextElementItem(ElementItem):
    def _font(self) -> QtGui.QFont:
        font = QtGui.QFont()
        font.setPixelSize(max(1, self.element.height))
        return font

    def _layout(self) -> QtCore.QSizeF:
        fm = QtGui.QFontMetricsF(self._font())
        return QtCore.QSizeF(fm.horizontalAdvance(self.element.data), fm.height())

    def _paint_content(self, painter: QtGui.QPainter) -> None:
        painter.setFont(self._font())
        painter.setPen(QtCore.Qt.black)
        painter.drawText(
            self.boundingRect(),
            int(QtCore.Qt.AlignLeft | QtCore.Qt.AlignVCenter),
            self.element.data,
        )


class _ImageElementItem(ElementItem):
    """Shared painting for kinds rendered to an image (barcodes, QR codes)."""

    _qimage: QtGui.QImage | None = None

    def _render(self):
        raise NotImplementedError

    def _layout(self) -> QtCore.QSizeF:
        self._qimage = None
        self._qimage = pil_to_qimage(self._render())
        return QtCore.QSizeF(self._qimage.width(), self._qimage.height())

    def _paint_content(self, painter: QtGui.QPainter) -> None:
        if self._qimage is None or self._qimage.isNull():
            return
        # Bars must stay crisp
        painter.setRenderHint(QtGui.QPainter.Antialiasing, False)
        painter.setRenderHint(QtGui.QPainter.SmoothPixmapTransform, False)
        painter.drawImage(QtCore.QPointF(0, 0), self._qimage)


class BarcodeElementItem(_ImageElementItem):
    def _render(self):
        el: BarcodeElement = self.element
        return render_barcode(
            el.data,
            el.height,
            el.module_width,
            has_checksum(el.barcode_format, el.data),
            el.barcode_format,
        )


class QrElementItem(_ImageElementItem):
    error_correction = "M"

    def __init__(self, element: QrElement, error_correction: str = "M", parent=None):
        super().__init__(element, parent)
        if error_correction != self.error_correction:
            self.error_correction = error_correction
            self.refresh()

    def _render(self):
        el: QrElement = self.element
        return render_qr(el.data, el.scale, margin=0, error_correction=self.error_correction)


def make_item(element: DrawingElement, qr_error_correction: str = "M") -> ElementItem:
    """Pick the canvas item class for *element*'s kind."""
    if isinstance(element, TextElement):
        return TextElementItem(element)
    if isinstance(element, QrElement):
        return QrElementItem(element, error_correction=qr_error_correction)
    if isinstance(element, BarcodeElement):
        return BarcodeElementItem(element)
    raise TypeError(f"Unknown element kind: {element!r}")
