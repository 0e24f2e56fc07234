# barcode_canvas/ui/docks/form_dock.py
"""Builder for the element form dock widget."""
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6 import QtCore, QtWidgets

from ..element_form import ElementForm

if TYPE_CHECKING:
    from ..host_protocols import DocksHost


def build_form_dock(mw: DocksHost) -> QtWidgets.QDockWidget:
    """
    Create the element form dock and attach it to *mw*.

    Sets ``mw.element_form`` and ``mw.dock_form``; the form starts from the
    saved canvas settings.
    """
    mw.element_form = ElementForm(mw)
    cfg = mw.canvas_settings
    mw.element_form.set_defaults(cfg.element_type, cfg.height, cfg.module_width, cfg.cell_size)

    dock = QtWidgets.QDockWidget("Element", mw)
    dock.setObjectName("ElementFormDock")
    dock.setWidget(mw.element_form)
    mw.addDockWidget(QtCore.Qt.LeftDockWidgetArea, dock)
    mw.dock_form = dock
    return dock
