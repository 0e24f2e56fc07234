# barcode_canvas/ui/docks/__init__.py
"""
Dock widget orchestration.

Individual dock builders live in sibling modules; this file calls them
in the right order and wires up cross-dock signals.

This module must NOT import main_window_impl to avoid circular imports.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from .elements_dock import build_elements_dock
from .form_dock import build_form_dock

if TYPE_CHECKING:
    from ..host_protocols import DocksHost


def build_docks(mw: DocksHost) -> None:
    """
    Create the element form and element list docks and attach them to *mw*.

    Sets attributes on *mw*: element_form, element_list.
    """
    build_form_dock(mw)
    build_elements_dock(mw)

    mw.element_form.add_requested.connect(mw.add_element)
    mw.element_form.cell_size_changed.connect(mw.set_cell_size)
    mw.element_form.print_requested.connect(mw.print_layout)
    mw.element_list.remove_requested.connect(mw.remove_element)


def update_view_menu(mw: DocksHost) -> None:
    """Add dock toggle actions to View menu (called after docks are built)."""
    for action in mw.menuBar().actions():
        if action.text() == "&View":
            view_menu = action.menu()
            if view_menu:
                view_menu.addSeparator()
                for dock in (mw.dock_form, mw.dock_elements):
                    view_menu.addAction(dock.toggleViewAction())
            break
