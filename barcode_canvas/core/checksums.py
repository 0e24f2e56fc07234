"""
core/checksums.py - Check digits and test identifier generators.

Pure functions, no Qt and no I/O. The generators draw their random digits
from the module-level ``random`` source unless a ``random.Random`` instance
is passed in (tests use a seeded one).

    luhn_check_digit("7992739871")   -> "3"
    ean_check_digit("411111111111")  -> "3"
    generate_imei()                  -> "35671211" + 6 random + Luhn digit
"""
from __future__ import annotations

import math
import random
from typing import Optional

from .errors import InvalidInputError

DEFAULT_TAC = "35671211"
ICCID_PREFIX = "89"

_DIGITS = "0123456789"


def _require_digits(digits: str) -> None:
    if not isinstance(digits, str):
        raise InvalidInputError(f"Expected a digit string, got {type(digits).__name__}")
    if not digits:
        raise InvalidInputError("Digit string cannot be empty.")
    for ch in digits:
        if ch not in _DIGITS:
            raise InvalidInputError(f"Only digits 0-9 are allowed. Offending char: {ch!r}")


def _luhn_sum(digits: str, double_first: bool) -> int:
    """
    Sum *digits* right to left, doubling every second one.

    double_first=True doubles the rightmost digit (payload without check
    digit); False starts doubling one position further left (full number).
    """
    total = 0
    double = double_first
    for ch in reversed(digits):
        d = int(ch)
        if double:
            d *= 2
            if d > 9:
                d -= 9
        total += d
        double = not double
    return total


def luhn_check_digit(digits: str) -> str:
    """Return the Luhn check digit for *digits* (payload without check digit)."""
    _require_digits(digits)
    return str((10 - _luhn_sum(digits, double_first=True) % 10) % 10)


def verify_luhn(number: str) -> bool:
    """True when *number* (check digit included) passes the Luhn test."""
    _require_digits(number)
    return _luhn_sum(number, double_first=False) % 10 == 0


def _ean_sum(digits: str) -> int:
    # weight depends on the distance from the end of the string, not the index
    length = len(digits)
    total = 0
    for i, ch in enumerate(digits):
        weight = 3 if (length - i) % 2 == 1 else 1
        total += weight * int(ch)
    return total


def ean_check_digit(digits: str) -> str:
    """
    Return the EAN/UPC check digit for *digits*.

    Works for every GS1 payload length (EAN-8, UPC-A, EAN-13, GTIN-14,
    SSCC...): the rightmost payload digit always carries weight 3.
    """
    _require_digits(digits)
    total = _ean_sum(digits)
    return str(math.ceil(total / 10) * 10 - total)


def verify_ean(number: str) -> bool:
    """True when *number* (check digit included) satisfies the EAN weighting rule."""
    _require_digits(number)
    if len(number) < 2:
        return False
    return ean_check_digit(number[:-1]) == number[-1]


# --- Generators ------------------------------------------------------------


def random_digit_string(n: int, rng: Optional[random.Random] = None) -> str:
    """Return *n* decimal digits drawn uniformly and independently."""
    if n < 0:
        raise ValueError(f"Length must be >= 0, got {n}")
    source = rng if rng is not None else random
    return "".join(source.choice(_DIGITS) for _ in range(n))


def with_ean_check_digit(payload: str) -> str:
    return payload + ean_check_digit(payload)


def with_luhn_check_digit(payload: str) -> str:
    return payload + luhn_check_digit(payload)


def generate_ean13(rng: Optional[random.Random] = None) -> str:
    """12 random digits + EAN check digit."""
    return with_ean_check_digit(random_digit_string(12, rng))


def generate_upc(rng: Optional[random.Random] = None) -> str:
    """11 random digits + EAN check digit (UPC-A)."""
    return with_ean_check_digit(random_digit_string(11, rng))


def generate_imei(tac: str = DEFAULT_TAC, rng: Optional[random.Random] = None) -> str:
    """
    TAC + 6 random digits (serial number) + Luhn check digit.

    The TAC is used as a literal prefix; it is only required to be digits
    so that the Luhn digit can be computed.
    """
    return with_luhn_check_digit(tac + random_digit_string(6, rng))


def generate_iccid(rng: Optional[random.Random] = None) -> str:
    """"89" (telecom industry prefix) + 17 random digits + Luhn check digit."""
    return with_luhn_check_digit(ICCID_PREFIX + random_digit_string(17, rng))


# Label -> generator, in the order the form shows its buttons
GENERATORS = {
    "IMEI": generate_imei,
    "ICCID": generate_iccid,
    "EAN 13": generate_ean13,
    "UPC-A": generate_upc,
}
