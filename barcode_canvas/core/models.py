from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from itertools import count
from typing import ClassVar, FrozenSet, Iterator, List, Optional, Tuple, Union


# ---------- Geometry ----------

@dataclass(frozen=True)
class Point:
    """Integer pixel offset in page coordinates."""
    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    @staticmethod
    def from_float(x: float, y: float) -> "Point":
        """Round float coordinates (e.g. Qt scene positions) to the pixel grid."""
        from .snap import round_half_away

        return Point(round_half_away(x), round_half_away(y))


ORIGIN = Point(0, 0)


# ---------- Element kinds ----------

class BarcodeFormat(str, Enum):
    CODE_128 = "Code 128"
    GS1_128 = "GS1 128"
    CODABAR = "Codabar"
    CODE_39 = "Code 39"
    EAN_8 = "EAN-8"
    EAN_13 = "EAN-13"
    FIM = "FIM"
    ITF = "ITF"
    UPC_A = "UPC-A"


QR_CODE = "QR Code"
TEXT = "Text"

# Order used by the type selector: barcodes first, then QR, then text
ALL_ELEMENT_TYPES: List[str] = [f.value for f in BarcodeFormat] + [QR_CODE, TEXT]


# ---------- Core element model ----------

@dataclass(frozen=True)
class TextElement:
    data: str
    key: str
    height: int = 20                # font pixel size

    type: ClassVar[str] = TEXT


@dataclass(frozen=True)
class QrElement:
    data: str
    key: str
    scale: int = 2                  # pixels per module

    type: ClassVar[str] = QR_CODE


@dataclass(frozen=True)
class BarcodeElement:
    data: str
    key: str
    barcode_format: BarcodeFormat = BarcodeFormat.CODE_128
    module_width: float = 2.0
    height: int = 20

    @property
    def type(self) -> str:
        return self.barcode_format.value


DrawingElement = Union[TextElement, QrElement, BarcodeElement]


def element_fields(type_name: str) -> FrozenSet[str]:
    """
    Which sizing fields apply to an element type.

    Used by the form to decide what to show, and by make_element.
    """
    if type_name == TEXT:
        return frozenset({"height"})
    if type_name == QR_CODE:
        return frozenset({"scale"})
    BarcodeFormat(type_name)  # ValueError for unknown types
    return frozenset({"height", "module_width"})


def make_element(
    type_name: str,
    key: str,
    data: str,
    height: int = 20,
    module_width: float = 2.0,
) -> DrawingElement:
    """
    Build the element variant for *type_name* from the form values.

    QR codes take their scale from the module width field.
    """
    if type_name == TEXT:
        return TextElement(data=data, key=key, height=max(1, int(height)))
    if type_name == QR_CODE:
        return QrElement(data=data, key=key, scale=max(1, int(round(module_width))))

    fmt = BarcodeFormat(type_name)
    if module_width <= 0:
        raise ValueError(f"Module width must be > 0, got {module_width}")
    return BarcodeElement(
        data=data,
        key=key,
        barcode_format=fmt,
        module_width=float(module_width),
        height=max(1, int(height)),
    )


def describe_element(element: DrawingElement) -> str:
    """One-line label for lists: "EAN-13: 4006381333931"."""
    return f"{element.type}: {element.data}"


# ---------- Keys ----------

class KeyGenerator:
    """Monotonic key source: id1, id2, ... Keys are never reused."""

    def __init__(self, prefix: str = "id"):
        self._prefix = prefix
        self._counter = count(1)

    def next_key(self) -> str:
        return f"{self._prefix}{next(self._counter)}"


# ---------- Registry ----------

class ElementRegistry:
    """
    Ordered collection of placed elements.

    Insertion order is display order. Key uniqueness is the caller's
    responsibility (use KeyGenerator).
    """

    def __init__(self) -> None:
        self._elements: List[DrawingElement] = []

    def append(self, element: DrawingElement) -> None:
        self._elements.append(element)

    def remove_by_key(self, key: str) -> Optional[DrawingElement]:
        """Remove the element with *key*; returns it, or None if absent."""
        for i, el in enumerate(self._elements):
            if el.key == key:
                return self._elements.pop(i)
        return None

    def get(self, key: str) -> Optional[DrawingElement]:
        for el in self._elements:
            if el.key == key:
                return el
        return None

    def list(self) -> Tuple[DrawingElement, ...]:
        """Read-only snapshot in insertion order."""
        return tuple(self._elements)

    def keys(self) -> List[str]:
        return [el.key for el in self._elements]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[DrawingElement]:
        return iter(self.list())

    def __contains__(self, key: object) -> bool:
        return any(el.key == key for el in self._elements)
