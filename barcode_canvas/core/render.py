from __future__ import annotations
from PySide6 import QtCore, QtGui, QtWidgets

def surface_to_image(
    scene: QtWidgets.QGraphicsScene,
    source: QtCore.QRectF | None = None,
    scale: float = 1.0,
) -> QtGui.QImage:
    """Render *source* (default: the whole scene rect) onto a white image."""
    rect = QtCore.QRectF(source) if source is not None else scene.sceneRect()
    img = QtGui.QImage(
        max(1, int(rect.width() * scale)),
        max(1, int(rect.height() * scale)),
        QtGui.QImage.Format_ARGB32_Premultiplied,
    )
    img.fill(QtCore.Qt.white)
    painter = QtGui.QPainter(img)
    try:
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        scene.render(painter, QtCore.QRectF(img.rect()), rect)
    finally:
        painter.end()
    return img


def pil_to_qimage(img) -> QtGui.QImage:
    """
    Convert a Pillow Image to a QtGui.QImage.
    """
    img = img.convert("RGBA")
    w, h = img.size
    data = img.tobytes("raw", "RGBA")
    qimg = QtGui.QImage(data, w, h, QtGui.QImage.Format.Format_RGBA8888)
    return qimg.copy()  # detach from original buffer
