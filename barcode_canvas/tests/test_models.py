"""
Tests for the element model, key generation and the element registry.
"""

import pytest

from barcode_canvas.core.models import (
    ALL_ELEMENT_TYPES,
    QR_CODE,
    TEXT,
    BarcodeElement,
    BarcodeFormat,
    ElementRegistry,
    KeyGenerator,
    Point,
    QrElement,
    TextElement,
    describe_element,
    element_fields,
    make_element,
)


class TestPoint:
    def test_arithmetic(self):
        assert Point(5, 7) - Point(2, 10) == Point(3, -3)
        assert Point(1, 2) + Point(3, 4) == Point(4, 6)

    def test_immutable(self):
        p = Point(1, 2)
        with pytest.raises(AttributeError):
            p.x = 5

    def test_from_float_rounds_half_away(self):
        assert Point.from_float(10.5, -10.5) == Point(11, -11)
        assert Point.from_float(3.49, 0.0) == Point(3, 0)


class TestElementKinds:
    def test_type_order(self):
        """Barcode formats first, then QR Code, then Text."""
        assert ALL_ELEMENT_TYPES[:9] == [
            "Code 128", "GS1 128", "Codabar", "Code 39",
            "EAN-8", "EAN-13", "FIM", "ITF", "UPC-A",
        ]
        assert ALL_ELEMENT_TYPES[9:] == [QR_CODE, TEXT]

    def test_fields_per_kind(self):
        assert element_fields(TEXT) == {"height"}
        assert element_fields(QR_CODE) == {"scale"}
        for fmt in BarcodeFormat:
            assert element_fields(fmt.value) == {"height", "module_width"}

    def test_fields_unknown_type(self):
        with pytest.raises(ValueError):
            element_fields("Hologram")


class TestMakeElement:
    def test_text(self):
        el = make_element(TEXT, "id1", "Hello", height=32, module_width=3)
        assert isinstance(el, TextElement)
        assert el.type == TEXT
        assert el.height == 32

    def test_qr_takes_scale_from_module_width(self):
        el = make_element(QR_CODE, "id2", "https://example.com", height=99, module_width=4.4)
        assert isinstance(el, QrElement)
        assert el.scale == 4

    def test_qr_scale_at_least_one(self):
        assert make_element(QR_CODE, "id3", "x", module_width=0.2).scale == 1

    def test_barcode(self):
        el = make_element("EAN-13", "id4", "4006381333931", height=40, module_width=1.5)
        assert isinstance(el, BarcodeElement)
        assert el.barcode_format is BarcodeFormat.EAN_13
        assert el.type == "EAN-13"
        assert el.module_width == 1.5
        assert el.height == 40

    def test_barcode_rejects_non_positive_module_width(self):
        with pytest.raises(ValueError):
            make_element("Code 128", "id5", "ABC", module_width=0)

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            make_element("Hologram", "id6", "x")

    def test_describe(self):
        el = make_element("UPC-A", "id7", "036000291452")
        assert describe_element(el) == "UPC-A: 036000291452"

    def test_elements_are_frozen(self):
        el = make_element(TEXT, "id8", "x")
        with pytest.raises(AttributeError):
            el.data = "y"


class TestKeyGenerator:
    def test_sequence(self):
        keys = KeyGenerator()
        assert [keys.next_key() for _ in range(3)] == ["id1", "id2", "id3"]

    def test_keys_never_reused_after_removal(self):
        keys = KeyGenerator()
        reg = ElementRegistry()
        seen = set()
        for _ in range(5):
            k = keys.next_key()
            reg.append(TextElement(data="t", key=k))
            reg.remove_by_key(k)
            assert k not in seen
            seen.add(k)


def _registry(*keys):
    reg = ElementRegistry()
    for k in keys:
        reg.append(TextElement(data=f"text {k}", key=k))
    return reg


class TestRegistry:
    """Tests for ElementRegistry append / remove_by_key / list."""

    def test_append_keeps_insertion_order(self):
        reg = _registry("a", "b", "c")
        assert [el.key for el in reg.list()] == ["a", "b", "c"]
        assert len(reg) == 3

    def test_remove_missing_key_is_noop(self):
        reg = _registry("a", "b")
        before = reg.list()
        assert reg.remove_by_key("zzz") is None
        assert reg.list() == before

    def test_remove_preserves_order_of_rest(self):
        reg = _registry("a", "b", "c", "d")
        removed = reg.remove_by_key("b")
        assert removed is not None and removed.key == "b"
        assert [el.key for el in reg.list()] == ["a", "c", "d"]
        assert "b" not in reg

    def test_remove_twice(self):
        reg = _registry("a")
        assert reg.remove_by_key("a") is not None
        assert reg.remove_by_key("a") is None
        assert len(reg) == 0

    def test_list_is_snapshot(self):
        reg = _registry("a")
        snap = reg.list()
        reg.append(TextElement(data="x", key="b"))
        assert isinstance(snap, tuple)
        assert [el.key for el in snap] == ["a"]

    def test_get_and_contains(self):
        reg = _registry("a", "b")
        assert reg.get("b").key == "b"
        assert reg.get("nope") is None
        assert "a" in reg
        assert reg.keys() == ["a", "b"]

    def test_mixed_kinds(self):
        reg = ElementRegistry()
        reg.append(make_element(TEXT, "id1", "Hi"))
        reg.append(make_element(QR_CODE, "id2", "Hi"))
        reg.append(make_element("ITF", "id3", "1234"))
        assert [el.type for el in reg] == [TEXT, QR_CODE, "ITF"]
