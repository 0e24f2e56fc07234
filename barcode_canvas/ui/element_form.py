# barcode_canvas/ui/element_form.py

from __future__ import annotations
from PySide6 import QtCore, QtWidgets

from ..core.checksums import GENERATORS
from ..core.models import ALL_ELEMENT_TYPES, QR_CODE, TEXT, element_fields
from ..core.snap import DEFAULT_CELL_SIZE, MAX_CELL_SIZE, MIN_CELL_SIZE


class ElementForm(QtWidgets.QWidget):
    """
    Sidebar form: element type, contents (with generators), sizing,
    snap grid and print.
    """

    add_requested = QtCore.Signal(str, str, int, float)   # type, data, height, module width
    cell_size_changed = QtCore.Signal(int)
    print_requested = QtCore.Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._build_ui()
        self._on_type_changed()

    def _make_button(self, label: str) -> QtWidgets.QPushButton:
        btn = QtWidgets.QPushButton(label)
        btn.setMinimumHeight(28)
        btn.setSizePolicy(
            QtWidgets.QSizePolicy.Expanding,
            QtWidgets.QSizePolicy.Fixed,
        )
        return btn

    def _build_ui(self):
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(10)

        hint = QtWidgets.QLabel(
            "Add text or barcode elements to the canvas and then move them "
            "around by clicking and dragging. You can also auto-generate "
            "some common formats."
        )
        hint.setWordWrap(True)
        layout.addWidget(hint)

        # --- Type ---
        self.cb_type = QtWidgets.QComboBox()
        self.cb_type.addItems(ALL_ELEMENT_TYPES)
        self.cb_type.currentTextChanged.connect(self._on_type_changed)
        layout.addWidget(QtWidgets.QLabel("Barcode format"))
        layout.addWidget(self.cb_type)

        # --- Contents + generators ---
        self.lbl_data = QtWidgets.QLabel()
        self.le_data = QtWidgets.QLineEdit()
        self.le_data.textChanged.connect(self._on_data_changed)
        layout.addWidget(self.lbl_data)
        layout.addWidget(self.le_data)

        gen_row = QtWidgets.QHBoxLayout()
        gen_row.setSpacing(4)
        self.generator_buttons: dict[str, QtWidgets.QPushButton] = {}
        for label, fn in GENERATORS.items():
            btn = self._make_button(label)
            btn.clicked.connect(lambda _checked=False, fn=fn: self.le_data.setText(fn()))
            gen_row.addWidget(btn)
            self.generator_buttons[label] = btn
        layout.addLayout(gen_row)

        # --- Sizing ---
        self.lbl_height = QtWidgets.QLabel()
        self.sb_height = QtWidgets.QSpinBox()
        self.sb_height.setRange(1, 1000)
        self.sb_height.setValue(20)
        self.sb_height.setSuffix(" px")
        layout.addWidget(self.lbl_height)
        layout.addWidget(self.sb_height)

        self.lbl_module_width = QtWidgets.QLabel()
        self.sb_module_width = QtWidgets.QDoubleSpinBox()
        self.sb_module_width.setRange(0.1, 50.0)
        self.sb_module_width.setSingleStep(0.5)
        self.sb_module_width.setDecimals(1)
        self.sb_module_width.setValue(2.0)
        self.sb_module_width.setSuffix(" px")
        layout.addWidget(self.lbl_module_width)
        layout.addWidget(self.sb_module_width)

        self.btn_add = self._make_button("Add")
        self.btn_add.clicked.connect(self._emit_add)
        layout.addWidget(self.btn_add)

        layout.addStretch(1)

        # --- Snap grid ---
        self.lbl_grid = QtWidgets.QLabel()
        self.sl_grid = QtWidgets.QSlider(QtCore.Qt.Horizontal)
        self.sl_grid.setRange(MIN_CELL_SIZE, MAX_CELL_SIZE)
        self.sl_grid.valueChanged.connect(self._on_grid_changed)
        self.sl_grid.setValue(DEFAULT_CELL_SIZE)
        layout.addWidget(self.lbl_grid)
        layout.addWidget(self.sl_grid)

        btn_print = self._make_button("Print")
        btn_print.clicked.connect(self.print_requested.emit)
        layout.addWidget(btn_print)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def element_type(self) -> str:
        return self.cb_type.currentText()

    def set_defaults(self, element_type: str, height: int, module_width: float, cell_size: int) -> None:
        if element_type in ALL_ELEMENT_TYPES:
            self.cb_type.setCurrentText(element_type)
        self.sb_height.setValue(int(height))
        self.sb_module_width.setValue(float(module_width))
        self.sl_grid.setValue(int(cell_size))

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def _on_type_changed(self, *_):
        type_name = self.element_type()
        fields = element_fields(type_name)
        noun = "Text" if type_name == TEXT else "Barcode"

        self.lbl_height.setText(f"{noun} height (px)")
        show_height = "height" in fields
        self.lbl_height.setVisible(show_height)
        self.sb_height.setVisible(show_height)

        if "scale" in fields:
            self.lbl_module_width.setText("QR scale (px per module)")
        else:
            self.lbl_module_width.setText("Barcode module width (px)")
        show_width = "module_width" in fields or "scale" in fields
        self.lbl_module_width.setVisible(show_width)
        self.sb_module_width.setVisible(show_width)

        if type_name == TEXT:
            self.btn_add.setText("Add text")
        elif type_name == QR_CODE:
            self.btn_add.setText("Add QR code")
        else:
            self.btn_add.setText("Add barcode")

        self._on_data_changed(self.le_data.text())

    def _on_data_changed(self, text: str):
        noun = "Text" if self.element_type() == TEXT else "Barcode"
        self.lbl_data.setText(f"{noun} contents ({len(text)} chars)")
        self.btn_add.setEnabled(bool(text))

    def _on_grid_changed(self, value: int):
        self.lbl_grid.setText(f"Snap grid ({value}px)")
        self.cell_size_changed.emit(int(value))

    def _emit_add(self):
        data = self.le_data.text()
        if not data:
            return
        self.add_requested.emit(
            self.element_type(),
            data,
            int(self.sb_height.value()),
            float(self.sb_module_width.value()),
        )
