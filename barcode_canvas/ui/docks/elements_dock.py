# barcode_canvas/ui/docks/elements_dock.py
"""Builder for the Elements (placed element list) dock widget."""
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6 import QtCore, QtWidgets

from ..element_list import ElementList

if TYPE_CHECKING:
    from ..host_protocols import DocksHost


def build_elements_dock(mw: DocksHost) -> QtWidgets.QDockWidget:
    """
    Create the Elements dock and attach it to *mw*.

    Sets ``mw.element_list`` and ``mw.dock_elements``.
    """
    mw.element_list = ElementList(mw)
    mw.element_list.refresh(mw.registry.list())

    dock = QtWidgets.QDockWidget("Elements", mw)
    dock.setObjectName("ElementsDock")
    dock.setWidget(mw.element_list)
    mw.addDockWidget(QtCore.Qt.LeftDockWidgetArea, dock)
    mw.dock_elements = dock
    return dock
