"""
Tests for check digit computation and test identifier generators.
"""

import random

import pytest

from barcode_canvas.core.checksums import (
    DEFAULT_TAC,
    GENERATORS,
    ean_check_digit,
    generate_ean13,
    generate_iccid,
    generate_imei,
    generate_upc,
    luhn_check_digit,
    random_digit_string,
    verify_ean,
    verify_luhn,
)
from barcode_canvas.core.errors import InvalidInputError


@pytest.fixture()
def rng():
    return random.Random(1234)


def _digit_strings(rng, count=200, max_len=20):
    return [random_digit_string(rng.randint(1, max_len), rng) for _ in range(count)]


class TestLuhn:
    """Tests for the Luhn check digit."""

    def test_known_examples(self):
        """Textbook Luhn and IMEI examples."""
        assert luhn_check_digit("7992739871") == "3"
        assert luhn_check_digit("49015420323751") == "8"
        assert luhn_check_digit("0") == "0"

    def test_verify_known_numbers(self):
        assert verify_luhn("79927398713")
        assert verify_luhn("490154203237518")
        assert not verify_luhn("79927398710")

    def test_appended_digit_always_verifies(self, rng):
        """d + luhn_check_digit(d) passes the Luhn test for any digit string."""
        for d in _digit_strings(rng):
            assert verify_luhn(d + luhn_check_digit(d)), d

    def test_single_digit_change_is_detected(self):
        number = "490154203237518"
        broken = "4901542032375" + "2" + "8"
        assert verify_luhn(number)
        assert not verify_luhn(broken)

    @pytest.mark.parametrize("bad", ["", "12a4", " 123", "12.3", "١٢٣"])
    def test_rejects_non_digits(self, bad):
        """Empty or non 0-9 input raises InvalidInputError, never corrected."""
        with pytest.raises(InvalidInputError):
            luhn_check_digit(bad)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            verify_luhn("")


class TestEan:
    """Tests for the EAN/UPC check digit."""

    @pytest.mark.parametrize(
        "payload, expected",
        [
            ("400638133393", "1"),    # EAN-13 4006381333931
            ("590123412345", "7"),    # EAN-13 5901234123457
            ("03600029145", "2"),     # UPC-A 036000291452
            ("9638507", "4"),         # EAN-8 96385074
            ("1234567890123", "1"),   # GTIN-14 12345678901231
        ],
    )
    def test_standard_payloads(self, payload, expected):
        assert ean_check_digit(payload) == expected

    def test_weight_follows_distance_from_end(self):
        """Same digits, different length: weights shift with the string end."""
        # rightmost digit always has weight 3
        assert ean_check_digit("1") == "7"
        assert ean_check_digit("01") == "7"
        assert ean_check_digit("10") == "9"

    def test_all_ones_ean13_payload(self):
        """4 + eleven 1s: 4*1 + 6*3 + 5*1 = 27 -> 3."""
        assert ean_check_digit("411111111111") == "3"

    def test_appended_digit_always_verifies(self, rng):
        for d in _digit_strings(rng):
            assert verify_ean(d + ean_check_digit(d)), d

    def test_verify_rejects_wrong_digit(self):
        assert verify_ean("4006381333931")
        assert not verify_ean("4006381333932")

    def test_verify_single_digit_is_false(self):
        assert verify_ean("0") is False

    @pytest.mark.parametrize("bad", ["", "12345678901x", "-1"])
    def test_rejects_non_digits(self, bad):
        with pytest.raises(InvalidInputError):
            ean_check_digit(bad)


class TestRandomDigits:
    def test_length_and_alphabet(self, rng):
        for n in (0, 1, 7, 30):
            s = random_digit_string(n, rng)
            assert len(s) == n
            assert all(ch in "0123456789" for ch in s)

    def test_zero_length(self):
        assert random_digit_string(0) == ""

    def test_negative_length(self):
        with pytest.raises(ValueError):
            random_digit_string(-1)

    def test_seeded_source_is_reproducible(self):
        assert random_digit_string(12, random.Random(7)) == random_digit_string(12, random.Random(7))

    def test_uses_every_digit(self, rng):
        s = random_digit_string(2000, rng)
        assert set(s) == set("0123456789")


class TestGenerators:
    """Generated identifiers are always structurally valid."""

    def test_ean13(self, rng):
        for _ in range(100):
            code = generate_ean13(rng)
            assert len(code) == 13 and code.isdigit()
            assert verify_ean(code)

    def test_upc(self, rng):
        for _ in range(100):
            code = generate_upc(rng)
            assert len(code) == 12 and code.isdigit()
            assert verify_ean(code)

    def test_imei(self, rng):
        for _ in range(100):
            code = generate_imei(rng=rng)
            assert len(code) == 15 and code.isdigit()
            assert code.startswith(DEFAULT_TAC)
            assert verify_luhn(code)

    def test_imei_custom_tac(self, rng):
        code = generate_imei("01234567", rng=rng)
        assert code.startswith("01234567")
        assert len(code) == 15
        assert verify_luhn(code)

    def test_iccid(self, rng):
        for _ in range(100):
            code = generate_iccid(rng)
            assert len(code) == 20 and code.isdigit()
            assert code.startswith("89")
            assert verify_luhn(code)

    def test_default_random_source(self):
        """Without an explicit rng the module-level source is used."""
        assert verify_ean(generate_ean13())
        assert verify_luhn(generate_iccid())

    def test_generator_table_order(self):
        assert list(GENERATORS) == ["IMEI", "ICCID", "EAN 13", "UPC-A"]
        for fn in GENERATORS.values():
            assert fn().isdigit()
