# barcode_canvas/ui/dialogs/__init__.py
"""
Dialog classes.

Re-exports only — implementations live in sibling modules.
This module must NOT import main_window_impl to avoid circular imports.
"""
from .print_preview import PrintPreviewDialog

__all__ = [
    "PrintPreviewDialog",
]
