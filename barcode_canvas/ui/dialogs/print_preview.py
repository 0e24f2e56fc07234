# barcode_canvas/ui/dialogs/print_preview.py
"""Print preview dialog for the rendered drawing surface."""
from __future__ import annotations

from PySide6 import QtCore, QtGui, QtWidgets

MIN_ZOOM = 0.25
MAX_ZOOM = 4.0
ZOOM_STEP = 1.25


class PrintPreviewDialog(QtWidgets.QDialog):
    """
    Modal preview of the rendered layout with zoom controls.

    Accepting the dialog means "print it"; the caller does the printing.
    """

    def __init__(self, image: QtGui.QImage, element_count: int = 0, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Print Preview")
        self.image = image
        self.element_count = element_count
        self._zoom = 1.0

        self._build_ui()
        self.resize(700, 900)

    @property
    def zoom(self) -> float:
        return self._zoom

    def _build_ui(self):
        layout = QtWidgets.QVBoxLayout(self)

        # Info bar with zoom controls
        info_layout = QtWidgets.QHBoxLayout()
        noun = "element" if self.element_count == 1 else "elements"
        self.lbl_info = QtWidgets.QLabel(
            f"{self.element_count} {noun} · {self.image.width()}×{self.image.height()} px"
        )
        info_layout.addWidget(self.lbl_info)
        info_layout.addStretch()

        for label, slot in (("−", self.zoom_out), ("+", self.zoom_in)):
            btn = QtWidgets.QPushButton(label)
            btn.setMaximumWidth(30)
            btn.clicked.connect(slot)
            info_layout.addWidget(btn)

        btn_fit = QtWidgets.QPushButton("Fit")
        btn_fit.clicked.connect(self.zoom_fit)
        info_layout.addWidget(btn_fit)

        self.lbl_zoom = QtWidgets.QLabel()
        self.lbl_zoom.setMinimumWidth(50)
        info_layout.addWidget(self.lbl_zoom)

        layout.addLayout(info_layout)

        # Scrollable image display
        self.lbl_image = QtWidgets.QLabel()
        self.lbl_image.setAlignment(QtCore.Qt.AlignCenter)

        self.scroll = QtWidgets.QScrollArea()
        self.scroll.setWidget(self.lbl_image)
        self.scroll.setWidgetResizable(False)
        self.scroll.setBackgroundRole(QtGui.QPalette.Dark)
        layout.addWidget(self.scroll)

        btn_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel
        )
        btn_box.button(QtWidgets.QDialogButtonBox.Ok).setText("Print")
        btn_box.accepted.connect(self.accept)
        btn_box.rejected.connect(self.reject)
        layout.addWidget(btn_box)

        self._update_preview()

    def _update_preview(self):
        if self.image.isNull():
            self.lbl_image.setText("Nothing to preview")
            self.lbl_zoom.setText("")
            return
        # no smoothing: barcodes must stay sharp in the preview too
        scaled = self.image.scaled(
            max(1, int(self.image.width() * self._zoom)),
            max(1, int(self.image.height() * self._zoom)),
            QtCore.Qt.KeepAspectRatio,
            QtCore.Qt.FastTransformation,
        )
        self.lbl_image.setPixmap(QtGui.QPixmap.fromImage(scaled))
        self.lbl_image.resize(scaled.size())
        self.lbl_zoom.setText(f"{int(round(self._zoom * 100))}%")

    def set_zoom(self, zoom: float) -> None:
        self._zoom = max(MIN_ZOOM, min(MAX_ZOOM, zoom))
        self._update_preview()

    def zoom_in(self):
        self.set_zoom(self._zoom * ZOOM_STEP)

    def zoom_out(self):
        self.set_zoom(self._zoom / ZOOM_STEP)

    def zoom_fit(self):
        if self.image.isNull():
            return
        viewport_size = self.scroll.viewport().size()
        w_ratio = viewport_size.width() / self.image.width()
        h_ratio = viewport_size.height() / self.image.height()
        self.set_zoom(min(w_ratio, h_ratio) * 0.95)
