from __future__ import annotations

"""
Thin, stable wrapper around the real MainWindow implementation.

Why this exists:
- Keeps imports short: `from barcode_canvas.ui.main_window import MainWindow`
- Provides clearer errors if `.main_window_impl` can’t be imported
- Exposes a small factory you can use from app.py, tests, etc.
"""

# Re-export + clearer error if impl fails to import
try:
    from .main_window_impl import MainWindow as _ImplMainWindow  # noqa: F401
except ImportError as exc:
    raise ImportError(
        "Failed to import barcode_canvas.ui.main_window_impl.MainWindow. "
        "Make sure PySide6, Pillow, python-barcode and qrcode are installed."
    ) from exc


class MainWindow(_ImplMainWindow):
    """Direct alias-subclass so type checkers and runtime both see MainWindow here."""
    pass


__all__ = ["MainWindow", "create_window"]


def create_window(settings=None) -> MainWindow:
    """Convenience factory used by launchers/tests."""
    return MainWindow(settings)
