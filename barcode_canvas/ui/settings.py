from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from PySide6.QtCore import QSettings

from ..core.models import ALL_ELEMENT_TYPES
from ..core.renderers import QR_ERROR_CORRECTION
from ..core.snap import DEFAULT_CELL_SIZE, clamp_cell_size

ORG_NAME = "ByteSized Labs"
APP_NAME = "Barcode Canvas"


@dataclass
class CanvasSettings:
    """
    Canvas preferences remembered between sessions.

    Only form defaults and the snap grid; placed elements are never stored.
    """
    cell_size: int = DEFAULT_CELL_SIZE
    element_type: str = ALL_ELEMENT_TYPES[0]
    height: int = 20
    module_width: float = 2.0
    qr_error_correction: str = "M"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CanvasSettings":
        """Build from raw values, falling back to defaults for anything invalid."""
        d = cls()

        try:
            cell_size = clamp_cell_size(int(data.get("cell_size", d.cell_size)))
        except (TypeError, ValueError):
            cell_size = d.cell_size

        element_type = str(data.get("element_type", d.element_type))
        if element_type not in ALL_ELEMENT_TYPES:
            element_type = d.element_type

        try:
            height = max(1, int(data.get("height", d.height)))
        except (TypeError, ValueError):
            height = d.height

        try:
            module_width = float(data.get("module_width", d.module_width))
        except (TypeError, ValueError):
            module_width = d.module_width
        if module_width <= 0:
            module_width = d.module_width

        level = str(data.get("qr_error_correction", d.qr_error_correction)).upper()
        if level not in QR_ERROR_CORRECTION:
            level = d.qr_error_correction

        return cls(
            cell_size=cell_size,
            element_type=element_type,
            height=height,
            module_width=module_width,
            qr_error_correction=level,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cell_size": self.cell_size,
            "element_type": self.element_type,
            "height": self.height,
            "module_width": self.module_width,
            "qr_error_correction": self.qr_error_correction,
        }


def _settings() -> QSettings:
    return QSettings(ORG_NAME, APP_NAME)


def load_canvas_settings(settings: QSettings | None = None) -> CanvasSettings:
    s = settings if settings is not None else _settings()
    s.beginGroup("canvas")
    try:
        raw = {key: s.value(key) for key in s.childKeys()}
    finally:
        s.endGroup()
    return CanvasSettings.from_dict(raw)


def save_canvas_settings(cfg: CanvasSettings, settings: QSettings | None = None) -> None:
    s = settings if settings is not None else _settings()
    s.beginGroup("canvas")
    try:
        for key, value in cfg.to_dict().items():
            s.setValue(key, value)
    finally:
        s.endGroup()
