from __future__ import annotations
from PySide6 import QtCore, QtGui, QtWidgets

from ..core.drag import DragController
from ..core.models import ElementRegistry, KeyGenerator, make_element
from ..core.render import surface_to_image
from ..core.snap import GridSettings
from ..printing import PrintError, export_png, friendly_message, print_image
from .actions import build_toolbars_and_menus
from .canvas.controller import build_scene_view, sync_items
from .dialogs import PrintPreviewDialog
from .docks import build_docks, update_view_menu
from .settings import APP_NAME, load_canvas_settings, save_canvas_settings

APP_VERSION = "1.0.0"


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, settings: QtCore.QSettings | None = None):
        super().__init__()

        self.setWindowTitle(f"{APP_NAME} — {APP_VERSION}")
        self.resize(1300, 900)
        self.settings = settings
        self.canvas_settings = load_canvas_settings(settings)

        # Session state: owned here, handed to the canvas explicitly
        self.grid = GridSettings(self.canvas_settings.cell_size)
        self.registry = ElementRegistry()
        self.keys = KeyGenerator()
        self.drag_controller = DragController(self.grid)

        build_scene_view(self)
        build_toolbars_and_menus(self)
        build_docks(self)
        update_view_menu(self)

        self.statusBar().showMessage("Ready. Add an element to get started.")

    # -------------------------
    # Elements
    # -------------------------
    def add_element(self, type_name: str, data: str, height: int, module_width: float) -> None:
        """Create an element from the form values and place it at the surface origin."""
        if not data:
            self.statusBar().showMessage("Enter some contents first.", 3000)
            return

        try:
            element = make_element(type_name, self.keys.next_key(), data, height, module_width)
        except ValueError as e:
            QtWidgets.QMessageBox.warning(self, "Add element", str(e))
            return

        self.registry.append(element)
        self._refresh_elements()

        item = self.scene.item_for_key(element.key)
        if item is not None and item.error:
            self.statusBar().showMessage(f"Added {element.type} with a render error: {item.error}", 5000)
        else:
            self.statusBar().showMessage(f"Added {element.type}: {element.data}", 3000)

    def remove_element(self, key: str) -> None:
        removed = self.registry.remove_by_key(key)
        if removed is None:
            return
        self._refresh_elements()
        self.statusBar().showMessage(f"Removed {removed.type}: {removed.data}", 3000)

    def clear_elements(self) -> None:
        for key in self.registry.keys():
            self.registry.remove_by_key(key)
        self._refresh_elements()

    def _refresh_elements(self) -> None:
        sync_items(self)
        self.element_list.refresh(self.registry.list())

    # -------------------------
    # Grid
    # -------------------------
    def set_cell_size(self, value: int) -> None:
        size = self.grid.set_cell_size(value)
        self.canvas_settings.cell_size = size
        self.view.grid_changed()
        self.statusBar().showMessage(f"Snap grid: {size}px", 2000)

    def _on_element_moved(self, key: str, x: int, y: int) -> None:
        self.statusBar().showMessage(f"{key} at ({x}, {y})")

    # -------------------------
    # Printing & export
    # -------------------------
    def _render_surface(self) -> QtGui.QImage:
        return surface_to_image(self.scene, self.scene.surface_rect())

    def print_layout(self) -> None:
        self._print_image(self._render_surface())

    def _print_image(self, img: QtGui.QImage) -> None:
        try:
            printed = print_image(img, self)
        except PrintError as err:
            print("[Print] error:", err)
            self.statusBar().showMessage(f"Print error: {err}", 5000)
            QtWidgets.QMessageBox.warning(self, "Print error", friendly_message(err))
            return
        if printed:
            self.statusBar().showMessage("Print job sent", 3000)

    def preview_print(self) -> None:
        img = self._render_surface()
        dlg = PrintPreviewDialog(img, element_count=len(self.registry), parent=self)
        if dlg.exec() == QtWidgets.QDialog.Accepted:
            self._print_image(img)

    def export_png(self) -> None:
        path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self, "Export as PNG", "", "PNG Images (*.png)"
        )
        if not path:
            return
        try:
            export_png(self._render_surface(), path)
        except PrintError as err:
            print("[Print] export error:", err)
            QtWidgets.QMessageBox.warning(self, "Export error", friendly_message(err))
            return
        self.statusBar().showMessage(f"Exported PNG: {path}", 3000)

    # -------------------------
    # Lifecycle
    # -------------------------
    def closeEvent(self, e: QtGui.QCloseEvent):
        cfg = self.canvas_settings
        cfg.cell_size = self.grid.cell_size
        cfg.element_type = self.element_form.element_type()
        cfg.height = int(self.element_form.sb_height.value())
        cfg.module_width = float(self.element_form.sb_module_width.value())
        save_canvas_settings(cfg, self.settings)
        super().closeEvent(e)
