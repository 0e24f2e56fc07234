from __future__ import annotations

from typing import Iterable

from PySide6 import QtCore, QtWidgets

from ..core.models import DrawingElement, describe_element


class ElementList(QtWidgets.QListWidget):
    """
    Sidebar listing of the registered elements, in insertion order.

    Each row shows "type: data" and a delete button; deleting emits
    remove_requested(key) and leaves the actual removal to the window.
    """

    remove_requested = QtCore.Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setSelectionMode(QtWidgets.QAbstractItemView.NoSelection)
        self.setSizePolicy(
            QtWidgets.QSizePolicy.Preferred,
            QtWidgets.QSizePolicy.Expanding,
        )

    def refresh(self, elements: Iterable[DrawingElement]) -> None:
        """Rebuild rows from *elements*."""
        self.clear()
        for el in elements:
            self._add_row(el)

    def keys(self) -> list[str]:
        return [self.item(i).data(QtCore.Qt.UserRole) for i in range(self.count())]

    def _add_row(self, element: DrawingElement) -> None:
        row = QtWidgets.QListWidgetItem()
        row.setData(QtCore.Qt.UserRole, element.key)
        self.addItem(row)

        w = QtWidgets.QWidget()
        lay = QtWidgets.QHBoxLayout(w)
        lay.setContentsMargins(4, 0, 4, 0)

        text = describe_element(element)
        lbl = QtWidgets.QLabel(text)
        lbl.setToolTip(text)
        lbl.setTextInteractionFlags(QtCore.Qt.NoTextInteraction)
        lbl.setSizePolicy(QtWidgets.QSizePolicy.Ignored, QtWidgets.QSizePolicy.Preferred)
        lay.addWidget(lbl, 1)

        btn = QtWidgets.QToolButton()
        btn.setIcon(self.style().standardIcon(QtWidgets.QStyle.SP_TrashIcon))
        btn.setToolTip("Delete")
        btn.setAutoRaise(True)
        btn.clicked.connect(lambda _checked=False, key=element.key: self.remove_requested.emit(key))
        lay.addWidget(btn)

        row.setSizeHint(w.sizeHint())
        self.setItemWidget(row, w)
