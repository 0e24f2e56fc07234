# barcode_canvas/ui/actions.py
"""
Builder functions for QActions, menus and toolbars.

All builders receive the MainWindow instance to avoid circular imports —
this module must NOT import main_window_impl.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6 import QtCore, QtGui, QtWidgets

if TYPE_CHECKING:
    from .host_protocols import ActionsHost


def build_toolbars_and_menus(mw: ActionsHost) -> None:
    """
    Create the main toolbar and the File / Edit / View menus on *mw*.

    Sets ``mw.action_grid`` (the show-grid toggle).
    """
    act_print = QtGui.QAction("Print...", mw)
    act_print.setShortcut(QtGui.QKeySequence.Print)
    act_print.setToolTip("Print the layout (Ctrl+P)")
    act_print.triggered.connect(mw.print_layout)

    act_preview = QtGui.QAction("Print Preview...", mw)
    act_preview.setShortcut(QtGui.QKeySequence("Ctrl+Shift+P"))
    act_preview.setToolTip("Preview how the layout will print (Ctrl+Shift+P)")
    act_preview.triggered.connect(mw.preview_print)

    act_export = QtGui.QAction("Export PNG...", mw)
    act_export.setShortcut(QtGui.QKeySequence("Ctrl+E"))
    act_export.triggered.connect(mw.export_png)

    act_quit = QtGui.QAction("Quit", mw)
    act_quit.setShortcut(QtGui.QKeySequence.Quit)
    act_quit.triggered.connect(mw.close)

    act_clear = QtGui.QAction("Remove All Elements", mw)
    act_clear.triggered.connect(mw.clear_elements)

    mw.action_grid = QtGui.QAction("Show Grid", mw)
    mw.action_grid.setCheckable(True)
    mw.action_grid.setChecked(True)
    mw.action_grid.toggled.connect(mw.view.setShowGrid)

    act_zoom_reset = QtGui.QAction("Actual Size", mw)
    act_zoom_reset.setShortcut(QtGui.QKeySequence("Ctrl+0"))
    act_zoom_reset.triggered.connect(mw.view.resetTransform)

    # =============================
    # Main toolbar
    # =============================
    tb_main = QtWidgets.QToolBar("Main")
    tb_main.setObjectName("MainToolbar")
    tb_main.setIconSize(QtCore.QSize(16, 16))
    tb_main.addAction(act_print)
    tb_main.addAction(act_preview)
    tb_main.addSeparator()
    tb_main.addAction(mw.action_grid)
    mw.addToolBar(tb_main)

    # =============================
    # Menus
    # =============================
    mb = mw.menuBar()

    m_file = mb.addMenu("&File")
    m_file.addAction(act_print)
    m_file.addAction(act_preview)
    m_file.addAction(act_export)
    m_file.addSeparator()
    m_file.addAction(act_quit)

    m_edit = mb.addMenu("&Edit")
    m_edit.addAction(act_clear)

    m_view = mb.addMenu("&View")
    m_view.addAction(mw.action_grid)
    m_view.addAction(act_zoom_reset)
