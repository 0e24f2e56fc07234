"""
core/snap.py - Grid snap transform.

One place for the pointer -> element position math so every element kind
(text, barcode, QR) snaps the same way:

    raw     = pointer - surface_origin - grab_offset
    snapped = round(raw / cell) * cell        (half away from zero)

All inputs are page coordinates. Scroll offsets are already folded into
page coordinates by the view, so no sign juggling happens here.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from .models import Point

MIN_CELL_SIZE = 1
MAX_CELL_SIZE = 50
DEFAULT_CELL_SIZE = 10


def round_half_away(v: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    a = abs(v)
    whole = math.floor(a)
    # compare the fraction; floor(a + 0.5) misrounds just below .5
    n = int(whole) + (1 if a - whole >= 0.5 else 0)
    return n if v >= 0 else -n


def snap_value(v: int, cell_size: int) -> int:
    """Quantize one coordinate to the nearest multiple of *cell_size*."""
    # integer arithmetic, so no float drift on large coordinates
    q, r = divmod(abs(v), cell_size)
    if 2 * r >= cell_size:
        q += 1
    return q * cell_size if v >= 0 else -q * cell_size


def snap(pointer: Point, grab_offset: Point, origin: Point, cell_size: int) -> Point:
    """Map a pointer position to the snapped top-left of the dragged element."""
    if cell_size < MIN_CELL_SIZE:
        raise ValueError(f"Cell size must be >= {MIN_CELL_SIZE}, got {cell_size}")
    raw = pointer - origin - grab_offset
    return Point(snap_value(raw.x, cell_size), snap_value(raw.y, cell_size))


def clamp_cell_size(value: int) -> int:
    return max(MIN_CELL_SIZE, min(MAX_CELL_SIZE, int(value)))


@dataclass
class GridSettings:
    """Shared snap grid configuration; applies to every drag started after a change."""
    cell_size: int = DEFAULT_CELL_SIZE

    def __post_init__(self) -> None:
        self.cell_size = clamp_cell_size(self.cell_size)

    def set_cell_size(self, value: int) -> int:
        self.cell_size = clamp_cell_size(value)
        return self.cell_size
