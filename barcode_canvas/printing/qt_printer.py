# barcode_canvas/printing/qt_printer.py
"""
Print and export the rendered canvas through Qt's print support.

The caller renders the drawing surface to a QImage first
(core.render.surface_to_image); everything here works on that image.
"""
from __future__ import annotations

from PySide6 import QtCore, QtGui, QtWidgets
from PySide6.QtPrintSupport import QPrintDialog, QPrinter, QPrinterInfo

from .exceptions import ExportError, PrinterUnavailableError, PrintJobError

SCREEN_DPI = 96


def paint_image_on_printer(image: QtGui.QImage, printer: QPrinter) -> None:
    """
    Paint *image* at the top-left of the printable area.

    Canvas pixels are treated as SCREEN_DPI pixels, so the print matches the
    on-screen size; oversized layouts are scaled down to fit the page.
    """
    if image.isNull():
        raise PrintJobError("Nothing to print: the rendered layout is empty.")

    painter = QtGui.QPainter()
    if not painter.begin(printer):
        raise PrinterUnavailableError("Could not start printing on the selected printer.")
    try:
        page = painter.viewport()
        factor = printer.resolution() / SCREEN_DPI
        size = QtCore.QSize(round(image.width() * factor), round(image.height() * factor))
        if size.width() > page.width() or size.height() > page.height():
            size.scale(page.size(), QtCore.Qt.KeepAspectRatio)
        painter.drawImage(QtCore.QRect(QtCore.QPoint(0, 0), size), image)
    finally:
        painter.end()


def print_image(image: QtGui.QImage, parent: QtWidgets.QWidget | None = None) -> bool:
    """
    Ask the user for a printer and print *image*.

    Returns False when the dialog was cancelled.
    """
    if not QPrinterInfo.availablePrinterNames():
        raise PrinterUnavailableError("No printers are installed.")

    printer = QPrinter(QPrinter.HighResolution)
    dialog = QPrintDialog(printer, parent)
    dialog.setWindowTitle("Print layout")
    if dialog.exec() != QtWidgets.QDialog.Accepted:
        return False

    paint_image_on_printer(image, printer)
    return True


def export_png(image: QtGui.QImage, path: str) -> None:
    if image.isNull():
        raise PrintJobError("Nothing to export: the rendered layout is empty.")
    if not image.save(path, "PNG"):
        raise ExportError(f"Failed to save PNG image: {path}")
