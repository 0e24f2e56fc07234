# barcode_canvas/ui/canvas/controller.py
"""
Canvas controller: scene/view creation and element item sync.

All builders receive the MainWindow instance to avoid circular imports —
this module must NOT import main_window_impl.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6 import QtCore, QtWidgets

from ..views import CanvasView
from .scene import CanvasScene

if TYPE_CHECKING:
    from ..host_protocols import CanvasHost


def build_scene_view(mw: CanvasHost) -> None:
    """
    Create the CanvasScene + CanvasView, wrap in a central widget,
    and attach to *mw*.

    Sets attributes on *mw*: scene, view.
    """
    mw.scene = CanvasScene(mw.drag_controller, mw)
    mw.view = CanvasView(mw.grid, mw)
    mw.view.setScene(mw.scene)

    # Elements are moved by the drag controller, not by rubberband/Qt moves
    mw.view.setDragMode(QtWidgets.QGraphicsView.NoDrag)
    mw.view.setFocusPolicy(QtCore.Qt.StrongFocus)
    mw.view.centerOn(mw.scene.surface)

    central = QtWidgets.QWidget(mw)
    lay = QtWidgets.QVBoxLayout(central)
    lay.setContentsMargins(0, 0, 0, 0)
    lay.addWidget(mw.view)
    mw.setCentralWidget(central)

    mw.scene.element_moved.connect(mw._on_element_moved)


def sync_items(mw: CanvasHost) -> None:
    """
    Make the scene's element items match *mw*.registry.

    New elements are placed at the surface origin; items whose element is
    gone are removed. Existing items keep their positions.
    """
    wanted = {el.key: el for el in mw.registry.list()}

    for item in mw.scene.element_items():
        if item.key not in wanted:
            mw.scene.remove_element(item.key)

    for key, el in wanted.items():
        if mw.scene.item_for_key(key) is None:
            mw.scene.add_element(el, qr_error_correction=mw.canvas_settings.qr_error_correction)

    mw.view.viewport().update()
