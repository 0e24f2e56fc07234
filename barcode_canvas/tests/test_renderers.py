"""
Tests for the symbology renderers and the render error helpers.
"""

import pytest
from PIL import Image

from barcode_canvas.core.errors import (
    CanvasError,
    InvalidInputError,
    RenderError,
    as_render_error,
    friendly_message,
)
from barcode_canvas.core.models import BarcodeFormat
from barcode_canvas.core.renderers import (
    BARCODE_CACHE_SIZE,
    BARCODE_FORMATS,
    QR_CACHE_SIZE,
    clear_render_caches,
    has_checksum,
    render_barcode,
    render_cache_info,
    render_qr,
    validate_barcode_data,
)


@pytest.fixture(autouse=True)
def _fresh_caches():
    clear_render_caches()
    yield
    clear_render_caches()


class TestHasChecksum:
    @pytest.mark.parametrize(
        "fmt, data, expected",
        [
            (BarcodeFormat.UPC_A, "036000291452", True),
            (BarcodeFormat.UPC_A, "03600029145", False),
            (BarcodeFormat.EAN_13, "4006381333931", True),
            (BarcodeFormat.EAN_13, "400638133393", False),
            (BarcodeFormat.EAN_8, "96385074", True),
            (BarcodeFormat.EAN_8, "9638507", False),
            (BarcodeFormat.CODE_128, "123456789012", False),
            (BarcodeFormat.ITF, "1234567890123", False),
        ],
    )
    def test_table(self, fmt, data, expected):
        assert has_checksum(fmt, data) is expected

    def test_accepts_format_name(self):
        assert has_checksum("EAN-13", "4006381333931") is True


class TestValidation:
    def test_ean_strips_valid_check_digit(self):
        assert validate_barcode_data(BarcodeFormat.EAN_13, "4006381333931", True) == "400638133393"

    def test_ean_bad_check_digit(self):
        with pytest.raises(RenderError, match="check digit"):
            validate_barcode_data(BarcodeFormat.EAN_13, "4006381333932", True)

    def test_ean_wrong_length(self):
        with pytest.raises(RenderError):
            validate_barcode_data(BarcodeFormat.EAN_13, "12345", False)

    def test_ean_non_digit(self):
        with pytest.raises(RenderError, match="digits only"):
            validate_barcode_data(BarcodeFormat.UPC_A, "03600029145X", False)

    def test_itf_odd_length(self):
        with pytest.raises(RenderError, match="even"):
            validate_barcode_data(BarcodeFormat.ITF, "12345")

    def test_code39_uppercases(self):
        assert validate_barcode_data(BarcodeFormat.CODE_39, "abc-1") == "ABC-1"

    def test_code39_rejects_star(self):
        with pytest.raises(RenderError):
            validate_barcode_data(BarcodeFormat.CODE_39, "*ABC*")

    def test_codabar_needs_start_stop(self):
        with pytest.raises(RenderError):
            validate_barcode_data(BarcodeFormat.CODABAR, "123456")
        assert validate_barcode_data(BarcodeFormat.CODABAR, "a123456a") == "A123456A"

    def test_code128_rejects_control_chars(self):
        with pytest.raises(RenderError, match="printable ASCII"):
            validate_barcode_data(BarcodeFormat.CODE_128, "AB\x01")

    def test_empty_data(self):
        with pytest.raises(RenderError, match="empty"):
            validate_barcode_data(BarcodeFormat.CODE_128, "")

    def test_fim_unsupported(self):
        with pytest.raises(RenderError, match="FIM"):
            validate_barcode_data(BarcodeFormat.FIM, "A")


class TestRenderBarcode:
    def test_returns_image(self):
        img = render_barcode("HELLO-123", 30, 2, False, BarcodeFormat.CODE_128)
        assert isinstance(img, Image.Image)
        assert img.width > 0 and img.height > 0

    def test_wider_modules_give_wider_image(self):
        narrow = render_barcode("HELLO", 20, 1, False, BarcodeFormat.CODE_128)
        wide = render_barcode("HELLO", 20, 3, False, BarcodeFormat.CODE_128)
        assert wide.width > narrow.width

    @pytest.mark.parametrize("module_width", [0.5, 1, 1.5, 2, 3])
    def test_exact_pixel_size(self, module_width):
        """Code 128 "HELLO" is 90 modules; no margins above or below the bars."""
        img = render_barcode("HELLO", 20, module_width, False, BarcodeFormat.CODE_128)
        assert img.size == (round(90 * module_width), 20)

    @pytest.mark.parametrize("module_width", [0.5, 1, 1.5])
    def test_thin_modules_still_draw_bars(self, module_width):
        img = render_barcode("HELLO", 20, module_width, False, BarcodeFormat.CODE_128)
        # start pattern opens with a bar and the stop pattern ends with one
        assert img.getpixel((0, 0)) == (0, 0, 0)
        assert img.getpixel((img.width - 1, 19)) == (0, 0, 0)

    def test_one_px_modules_match_pattern(self):
        """Start B (11010010000) at one pixel per module."""
        img = render_barcode("HELLO", 5, 1, False, BarcodeFormat.CODE_128)
        row = "".join("1" if img.getpixel((x, 2)) == (0, 0, 0) else "0" for x in range(11))
        assert row == "11010010000"

    def test_height_is_exact(self):
        for height in (1, 20, 77):
            assert render_barcode("ABC", height, 2, False, BarcodeFormat.CODE_39).height == height

    def test_ean13_with_and_without_check_digit(self):
        a = render_barcode("4006381333931", 20, 2, True, BarcodeFormat.EAN_13)
        b = render_barcode("400638133393", 20, 2, False, BarcodeFormat.EAN_13)
        assert a.size == b.size == (95 * 2, 20)
        assert a.tobytes() == b.tobytes()

    @pytest.mark.parametrize(
        "fmt, data",
        [
            (BarcodeFormat.GS1_128, "0101234567890128"),
            (BarcodeFormat.CODABAR, "A123456A"),
            (BarcodeFormat.ITF, "123456"),
            (BarcodeFormat.EAN_8, "9638507"),
            (BarcodeFormat.UPC_A, "036000291452"),
        ],
    )
    def test_other_symbologies(self, fmt, data):
        img = render_barcode(data, 20, 1, has_checksum(fmt, data), fmt)
        assert img.height == 20 and img.width > 0

    def test_cache_is_bounded(self):
        for i in range(BARCODE_CACHE_SIZE + 10):
            render_barcode(f"ITEM{i}", 10, 1, False, BarcodeFormat.CODE_128)
        info = render_cache_info()["barcode"]
        assert info.maxsize == BARCODE_CACHE_SIZE
        assert info.currsize == BARCODE_CACHE_SIZE

    def test_cached(self):
        a = render_barcode("036000291452", 20, 2, True, BarcodeFormat.UPC_A)
        b = render_barcode("036000291452", 20, 2, True, BarcodeFormat.UPC_A)
        assert a is b

    def test_invalid_data_raises(self):
        with pytest.raises(RenderError):
            render_barcode("12345", 20, 2, False, BarcodeFormat.ITF)

    def test_fim_raises(self):
        with pytest.raises(RenderError):
            render_barcode("A", 20, 2, False, BarcodeFormat.FIM)

    @pytest.mark.parametrize("height, module_width", [(0, 2), (20, 0), (20, -1)])
    def test_bad_dimensions(self, height, module_width):
        with pytest.raises(RenderError):
            render_barcode("ABC", height, module_width, False, BarcodeFormat.CODE_128)


class TestRenderQr:
    def test_size_is_modules_times_scale(self):
        """Version 1 is 21 modules; no quiet zone by default."""
        img = render_qr("hello", 3)
        assert img.size == (63, 63)

    def test_margin_adds_quiet_zone(self):
        img = render_qr("hello", 2, margin=4)
        assert img.size == ((21 + 8) * 2,) * 2

    def test_cached(self):
        assert render_qr("abc", 2) is render_qr("abc", 2)

    def test_cache_is_bounded(self):
        for i in range(QR_CACHE_SIZE + 5):
            render_qr(f"item {i}", 1)
        info = render_cache_info()["qr"]
        assert info.currsize == QR_CACHE_SIZE
        clear_render_caches()
        assert render_cache_info()["qr"].currsize == 0

    def test_empty_data(self):
        with pytest.raises(RenderError):
            render_qr("", 2)

    def test_bad_scale(self):
        with pytest.raises(RenderError):
            render_qr("abc", 0)

    def test_bad_error_correction(self):
        with pytest.raises(RenderError, match="error correction"):
            render_qr("abc", 2, error_correction="Z")

    def test_overflow_for_fixed_version(self):
        with pytest.raises(RenderError):
            render_qr("x" * 200, 2, version=1)


class TestErrorHelpers:
    def test_as_render_error_wraps(self):
        cause = ValueError("bad input")
        err = as_render_error(cause, "EAN-13")
        assert isinstance(err, RenderError)
        assert str(err) == "EAN-13: bad input"
        assert err.__cause__ is cause

    def test_as_render_error_passthrough(self):
        err = RenderError("already")
        assert as_render_error(err) is err

    def test_as_render_error_empty_message(self):
        assert str(as_render_error(KeyError())) == "KeyError"

    def test_invalid_input_is_value_error(self):
        assert issubclass(InvalidInputError, ValueError)
        assert issubclass(InvalidInputError, CanvasError)

    def test_friendly_message(self):
        assert friendly_message(RenderError("oops")) == "oops"
        assert friendly_message(RenderError()) == "RenderError"
        assert friendly_message(OSError()) == "unknown error"


def test_barcode_formats_order():
    assert [f.value for f in BARCODE_FORMATS] == [
        "Code 128", "GS1 128", "Codabar", "Code 39",
        "EAN-8", "EAN-13", "FIM", "ITF", "UPC-A",
    ]
