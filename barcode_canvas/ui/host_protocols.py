# barcode_canvas/ui/host_protocols.py
"""
Typing-only Protocol definitions for MainWindow attribute coupling.

Each Protocol describes the *minimal* subset of MainWindow that a given
extracted module actually reads, writes, or calls.  These are **static
guardrails only** — they are never checked at runtime.

Rules
-----
- Protocols live here; extracted modules import them under TYPE_CHECKING.
- Qt types are forward-referenced (strings) or imported under
  TYPE_CHECKING to avoid import-time cost.
- This module must NOT import ``main_window_impl``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from PySide6 import QtWidgets

    from ..core.drag import DragController
    from ..core.models import ElementRegistry
    from ..core.snap import GridSettings
    from .canvas.scene import CanvasScene
    from .element_form import ElementForm
    from .element_list import ElementList
    from .settings import CanvasSettings
    from .views import CanvasView


# ── helpers ──────────────────────────────────────────────────────────────────

class _HasCanvas(Protocol):
    """Common: exposes the canvas scene and view."""

    scene: "CanvasScene"
    view: "CanvasView"


class _HasModel(Protocol):
    """Common: exposes the element registry and canvas settings."""

    registry: "ElementRegistry"
    canvas_settings: "CanvasSettings"


# ── Per-module Protocols ─────────────────────────────────────────────────────

class CanvasHost(
    _HasCanvas,
    _HasModel,
    Protocol,
):
    """Attributes used by ``canvas/controller.py``."""

    drag_controller: "DragController"
    grid: "GridSettings"

    # Methods called by canvas/controller
    def _on_element_moved(self, key: str, x: int, y: int) -> None: ...
    def setCentralWidget(self, widget: "QtWidgets.QWidget") -> None: ...


class DocksHost(
    _HasModel,
    Protocol,
):
    """Attributes used by ``docks/`` package."""

    element_form: "ElementForm"
    element_list: "ElementList"
    dock_form: "QtWidgets.QDockWidget"
    dock_elements: "QtWidgets.QDockWidget"

    # Slots wired by build_docks
    def add_element(self, type_name: str, data: str, height: int, module_width: float) -> None: ...
    def remove_element(self, key: str) -> None: ...
    def set_cell_size(self, value: int) -> None: ...
    def print_layout(self) -> None: ...

    # Qt surface
    def addDockWidget(self, area: object, dock: "QtWidgets.QDockWidget") -> None: ...
    def menuBar(self) -> "QtWidgets.QMenuBar": ...


class ActionsHost(
    _HasCanvas,
    Protocol,
):
    """Attributes used by ``actions.py``."""

    action_grid: object

    def print_layout(self) -> None: ...
    def preview_print(self) -> None: ...
    def export_png(self) -> None: ...
    def clear_elements(self) -> None: ...
    def close(self) -> bool: ...
    def addToolBar(self, toolbar: "QtWidgets.QToolBar") -> None: ...
    def menuBar(self) -> "QtWidgets.QMenuBar": ...
