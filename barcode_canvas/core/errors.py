# barcode_canvas/core/errors.py
"""
Error types shared by the checksum library, the renderers and the drag
controller.

No Qt dependencies — this module is pure Python so it can be used
in non-GUI contexts (tests, scripts, generators).
"""
from __future__ import annotations


class CanvasError(Exception):
    """Base exception for all barcode canvas errors."""


class InvalidInputError(CanvasError, ValueError):
    """A checksum function received an empty or non-digit string."""


class RenderError(CanvasError):
    """A renderer rejected the current data or parameters."""


class StaleDragReferenceError(CanvasError):
    """The element captured by a drag session is gone or detached."""


# ---------------------------------------------------------------------------
# Error-mapping helpers
# ---------------------------------------------------------------------------

def _chain(new: CanvasError, cause: BaseException) -> CanvasError:
    """Attach *cause* as ``__cause__`` (mimics ``raise new from cause``)."""
    new.__cause__ = cause
    return new


def as_render_error(exc: BaseException, symbology: str = "") -> RenderError:
    """
    Wrap a renderer library exception into a ``RenderError`` while keeping
    the original as ``__cause__``.

    If *exc* is already a ``RenderError`` it is returned unchanged.
    """
    if isinstance(exc, RenderError):
        return exc

    text = str(exc).strip() or type(exc).__name__
    if symbology:
        text = f"{symbology}: {text}"
    return _chain(RenderError(text), exc)


def friendly_message(exc: BaseException) -> str:
    """Return a short, UI-safe description for *exc*."""
    if isinstance(exc, CanvasError):
        return str(exc) or type(exc).__name__
    return str(exc) or "unknown error"
