# barcode_canvas/printing/exceptions.py
"""
Error types for printing and exporting the canvas.

No Qt dependencies — this module is pure Python so it can be used
in non-GUI contexts (tests, scripts).
"""
from __future__ import annotations


class PrintError(Exception):
    """Base exception for all printing errors."""


class PrinterUnavailableError(PrintError):
    """No printer is installed or the selected one cannot be opened."""


class PrintJobError(PrintError):
    """Error while rendering or painting a print job."""


class ExportError(PrintError):
    """Writing the rendered layout to a file failed."""


def _chain(new: PrintError, cause: BaseException) -> PrintError:
    """Attach *cause* as ``__cause__`` (mimics ``raise new from cause``)."""
    new.__cause__ = cause
    return new


def map_exception(exc: BaseException) -> PrintError:
    """
    Wrap a low-level exception into the appropriate ``PrintError`` subclass
    while preserving the original as ``__cause__``.

    If *exc* is already a ``PrintError`` it is returned unchanged.
    """
    if isinstance(exc, PrintError):
        return exc
    if isinstance(exc, (PermissionError, FileNotFoundError, IsADirectoryError)):
        return _chain(ExportError(f"Cannot write file: {exc}"), exc)
    return _chain(PrintJobError(str(exc) or type(exc).__name__), exc)


def friendly_message(exc: BaseException) -> str:
    """Return a short, UI-safe description for *exc*."""
    return str(map_exception(exc))
