from __future__ import annotations

"""
Symbology rendering helpers.

Dependencies:
- Pillow                  → pip install pillow
- python-barcode          → pip install python-barcode
- qrcode (for QR Code)    → pip install qrcode[pil]

Everything here returns Pillow images and raises RenderError; turning
those into Qt images and inline error text is the canvas items' job.

1D bars are painted from python-barcode's module pattern rather than
through its ImageWriter: the writer works in millimetres, truncates
sub-millimetre modules and adds its own margins, while the canvas wants
exact pixel widths and heights.
"""

from functools import lru_cache
from typing import Dict, List, Optional, Tuple

import barcode
import qrcode
from PIL import Image, ImageDraw

from .checksums import ean_check_digit
from .errors import RenderError, as_render_error
from .models import BarcodeFormat
from .snap import round_half_away

# Rendered images are cached per parameter set; least recently used drop out
BARCODE_CACHE_SIZE = 256
QR_CACHE_SIZE = 128

# Module pattern characters that paint a bar ("G" = EAN guard bar)
_BAR_MODULES = frozenset("1G")

# Fixed-length symbologies: total length when the data carries its check digit
_CHECKSUM_LENGTHS = {
    BarcodeFormat.UPC_A: 12,
    BarcodeFormat.EAN_13: 13,
    BarcodeFormat.EAN_8: 8,
}

# python-barcode class name + extra constructor kwargs
_PYBARCODE_CLASSES: Dict[BarcodeFormat, Tuple[str, dict]] = {
    BarcodeFormat.CODE_128: ("code128", {}),
    BarcodeFormat.GS1_128: ("gs1_128", {}),
    BarcodeFormat.CODABAR: ("codabar", {}),
    BarcodeFormat.CODE_39: ("code39", {"add_checksum": False}),
    BarcodeFormat.EAN_8: ("ean8", {}),
    BarcodeFormat.EAN_13: ("ean13", {}),
    BarcodeFormat.ITF: ("itf", {}),
    BarcodeFormat.UPC_A: ("upca", {}),
}

# Every barcode symbology, in display order
BARCODE_FORMATS: Tuple[BarcodeFormat, ...] = tuple(BarcodeFormat)

QR_ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


def has_checksum(symbology: BarcodeFormat, data: str) -> bool:
    """True when *data* already ends with its check digit for *symbology*."""
    expected = _CHECKSUM_LENGTHS.get(BarcodeFormat(symbology))
    return expected is not None and len(data) == expected


# --- Validation helpers ---------------------------------------------------


def _validate_ascii(data: str, name: str) -> str:
    if not data:
        raise RenderError(f"{name} data cannot be empty.")
    for ch in data:
        if ord(ch) < 32 or ord(ch) > 126:
            raise RenderError(
                f"{name} only supports printable ASCII (32–126). Offending char: {ch!r}"
            )
    return data


def _validate_code39(data: str) -> str:
    data = data.strip().upper()
    if not data:
        raise RenderError("Code 39 data cannot be empty.")
    if "*" in data:
        raise RenderError(
            "Do not include '*' in Code 39 data (it's reserved for start/stop)."
        )
    allowed = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ -.$/+%"
    for ch in data:
        if ch not in allowed:
            raise RenderError(
                f"Code 39 does not allow {ch!r}. Allowed: A–Z, 0–9, space, - . $ / + %"
            )
    return data


def _validate_codabar(data: str) -> str:
    data = data.strip().upper()
    if not data:
        raise RenderError("Codabar data cannot be empty.")
    allowed = "0123456789-:$/.+ABCD"
    for ch in data:
        if ch not in allowed:
            raise RenderError(
                f"Codabar does not allow {ch!r}. Allowed: 0–9, - : $ / . + and A–D."
            )
    if len(data) < 2 or data[0] not in "ABCD" or data[-1] not in "ABCD":
        raise RenderError(
            "Codabar should start and end with A, B, C, or D (e.g. A123456A)."
        )
    return data


def _validate_itf(data: str) -> str:
    data = data.strip()
    if not data:
        raise RenderError("ITF data cannot be empty.")
    if not data.isdigit():
        raise RenderError("ITF (Interleaved 2 of 5) supports digits only.")
    if len(data) % 2 != 0:
        raise RenderError("ITF requires an even number of digits.")
    return data


def _validate_ean_like(symbology: BarcodeFormat, data: str, with_checksum: bool) -> str:
    """
    EAN-8 / EAN-13 / UPC-A.

    Returns the payload without check digit; python-barcode appends it.
    """
    name = symbology.value
    total = _CHECKSUM_LENGTHS[symbology]
    if not data:
        raise RenderError(f"{name} data cannot be empty.")
    if not data.isdigit():
        raise RenderError(f"{name} supports digits only.")

    if with_checksum:
        body, cd = data[:-1], data[-1]
        expected = ean_check_digit(body)
        if cd != expected:
            raise RenderError(
                f"Invalid {name} check digit: got {cd}, expected {expected}."
            )
        return body

    if len(data) != total - 1:
        raise RenderError(
            f"{name} must be {total - 1} digits (or {total} with check digit), got {len(data)}."
        )
    return data


def validate_barcode_data(symbology: BarcodeFormat, data: str, with_checksum: bool = False) -> str:
    """
    Check *data* against *symbology* before handing it to the renderer.

    Returns the string python-barcode should receive, or raises RenderError.
    """
    symbology = BarcodeFormat(symbology)
    data = data or ""

    if symbology in _CHECKSUM_LENGTHS:
        return _validate_ean_like(symbology, data, with_checksum)
    if symbology is BarcodeFormat.CODE_128:
        return _validate_ascii(data, "Code 128")
    if symbology is BarcodeFormat.GS1_128:
        return _validate_ascii(data, "GS1 128")
    if symbology is BarcodeFormat.CODE_39:
        return _validate_code39(data)
    if symbology is BarcodeFormat.CODABAR:
        return _validate_codabar(data)
    if symbology is BarcodeFormat.ITF:
        return _validate_itf(data)
    if symbology is BarcodeFormat.FIM:
        raise RenderError("FIM is not supported by the barcode renderer.")
    raise RenderError(f"Unknown symbology {symbology!r}")


# --- 1D (python-barcode) --------------------------------------------------


def _bar_runs(pattern: str) -> List[Tuple[int, int]]:
    """(first_module, module_count) for every run of bar modules in *pattern*."""
    runs: List[Tuple[int, int]] = []
    start = None
    for i, ch in enumerate(pattern):
        if ch in _BAR_MODULES:
            if start is None:
                start = i
        elif start is not None:
            runs.append((start, i - start))
            start = None
    if start is not None:
        runs.append((start, len(pattern) - start))
    return runs


def _paint_bars(pattern: str, height: int, module_width: float) -> Image.Image:
    """
    Paint a module pattern ("1" bar, "0" space) as black bars on white.

    Bar edges are placed at round(module_index * module_width), so
    fractional widths keep the overall length; a bar that rounds to zero
    pixels is dropped.
    """
    width = max(1, round_half_away(len(pattern) * module_width))
    img = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(img)
    for first, count in _bar_runs(pattern):
        x0 = round_half_away(first * module_width)
        x1 = round_half_away((first + count) * module_width)
        if x1 > x0:
            draw.rectangle([x0, 0, x1 - 1, height - 1], fill="black")
    return img


@lru_cache(maxsize=BARCODE_CACHE_SIZE)
def _render_barcode_cached(
    symbology: BarcodeFormat,
    data: str,
    height: int,
    module_width: float,
    with_checksum: bool,
) -> Image.Image:
    payload = validate_barcode_data(symbology, data, with_checksum)
    cls_name, extra = _PYBARCODE_CLASSES[symbology]

    try:
        bc_class = barcode.get_barcode_class(cls_name)
        pattern = "".join(bc_class(payload, **extra).build())
    except Exception as exc:
        raise as_render_error(exc, symbology.value) from exc

    if not pattern:
        raise RenderError(f"{symbology.value}: nothing to draw for {data!r}.")
    return _paint_bars(pattern, height, module_width)


def render_barcode(
    data: str,
    height: int,
    module_width: float,
    with_checksum: bool,
    symbology: BarcodeFormat,
) -> Image.Image:
    """
    Render a 1D barcode to a Pillow image.

    *height* and *module_width* are pixels. No quiet zone and no
    human-readable line: the image is *height* pixels tall and
    round(modules * module_width) wide.
    """
    symbology = BarcodeFormat(symbology)
    if height < 1:
        raise RenderError(f"Barcode height must be >= 1 px, got {height}.")
    if module_width <= 0:
        raise RenderError(f"Module width must be > 0, got {module_width}.")

    return _render_barcode_cached(
        symbology, data or "", int(height), float(module_width), bool(with_checksum)
    )


# --- QR (qrcode) ----------------------------------------------------------


@lru_cache(maxsize=QR_CACHE_SIZE)
def _render_qr_cached(
    data: str,
    scale: int,
    margin: int,
    level: str,
    version: Optional[int],
) -> Image.Image:
    try:
        qr = qrcode.QRCode(
            version=version,
            error_correction=QR_ERROR_CORRECTION[level],
            box_size=scale,
            border=margin,
        )
        qr.add_data(data)
        qr.make(fit=version is None)
        return qr.make_image(fill_color="black", back_color="white").convert("RGBA")
    except Exception as exc:
        raise as_render_error(exc, "QR Code") from exc


def render_qr(
    data: str,
    scale: int,
    margin: int = 0,
    error_correction: str = "M",
    version: Optional[int] = None,
) -> Image.Image:
    """
    Render a QR Code to a Pillow image; *scale* is pixels per module.

    *version* None picks the smallest version that fits the data.
    """
    if not data:
        raise RenderError("QR Code data cannot be empty.")
    if scale < 1:
        raise RenderError(f"QR scale must be >= 1, got {scale}.")
    level = (error_correction or "M").upper()
    if level not in QR_ERROR_CORRECTION:
        raise RenderError(f"Unknown QR error correction level {error_correction!r} (use L, M, Q or H).")
    if version is not None and not 1 <= version <= 40:
        raise RenderError(f"QR version must be between 1 and 40, got {version}.")

    return _render_qr_cached(data, int(scale), int(margin), level, version)


def render_cache_info() -> Dict[str, object]:
    """lru_cache statistics for both renderers (hits, misses, currsize...)."""
    return {
        "barcode": _render_barcode_cached.cache_info(),
        "qr": _render_qr_cached.cache_info(),
    }


def clear_render_caches() -> None:
    _render_barcode_cached.cache_clear()
    _render_qr_cached.cache_clear()
