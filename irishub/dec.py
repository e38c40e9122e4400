"""Fixed-point decimals with 18 digits of precision, and integer helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass

PRECISION = 18
PRECISION_MULTIPLIER = 10**PRECISION
MAX_BIT_LEN = 256
MAX_DEC_BIT_LEN = MAX_BIT_LEN + 60

_DIGITS = re.compile(r"[0-9]+")


def _quo_truncate(numerator: int, denominator: int) -> int:
    if denominator == 0:
        raise ZeroDivisionError("division by zero")
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


@dataclass(frozen=True, order=True)
class Dec:
    """A signed decimal stored as an integer scaled by ``10**18``."""

    raw: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.raw, bool) or not isinstance(self.raw, int):
            raise TypeError(f"Dec needs an integer, got {type(self.raw).__name__}")

    def mul_int(self, value: int) -> "Dec":
        """Multiply by an integer."""
        return Dec(self.raw * int(value))

    def quo_int(self, value: int) -> "Dec":
        """Divide by an integer, truncating toward zero."""
        return Dec(_quo_truncate(self.raw, int(value)))

    def truncate_int(self) -> int:
        """Drop the fractional part, truncating toward zero."""
        return _quo_truncate(self.raw, PRECISION_MULTIPLIER)

    def is_positive(self) -> bool:
        return self.raw > 0

    def is_negative(self) -> bool:
        return self.raw < 0

    def __add__(self, other: "Dec") -> "Dec":
        return Dec(self.raw + other.raw)

    def __sub__(self, other: "Dec") -> "Dec":
        return Dec(self.raw - other.raw)

    def __neg__(self) -> "Dec":
        return Dec(-self.raw)

    def __str__(self) -> str:
        sign = "-" if self.raw < 0 else ""
        whole, fraction = divmod(abs(self.raw), PRECISION_MULTIPLIER)
        return f"{sign}{whole}.{fraction:0{PRECISION}d}"


ZERO_DEC = Dec(0)


def new_dec_with_prec(value: int, prec: int) -> Dec:
    """Return ``value * 10**-prec`` as a decimal."""
    if not 0 <= prec <= PRECISION:
        raise ValueError(f"too much precision, maximum {PRECISION}, provided {prec}")
    return Dec(int(value) * 10 ** (PRECISION - prec))


def parse_dec(text: str) -> Dec:
    """Parse decimal text such as ``"-1.25"`` into a :class:`Dec`."""
    if not text:
        raise ValueError("decimal string cannot be empty")
    negative = text.startswith("-")
    body = text[1:] if negative else text
    if not body:
        raise ValueError("decimal string cannot be empty")
    parts = body.split(".")
    if len(parts) > 2:
        raise ValueError(f"invalid decimal string: {text}")
    whole = parts[0]
    fraction = ""
    if len(parts) == 2:
        fraction = parts[1]
        if not fraction or not whole:
            raise ValueError(f"invalid decimal length: {text}")
    if len(fraction) > PRECISION:
        raise ValueError(
            f"value '{text}' exceeds max precision by {len(fraction) - PRECISION} decimal places: "
            f"max precision {PRECISION}"
        )
    combined = whole + fraction + "0" * (PRECISION - len(fraction))
    if not _DIGITS.fullmatch(combined):
        raise ValueError(f"failed to set decimal string: {text}")
    raw = int(combined)
    if raw.bit_length() > MAX_DEC_BIT_LEN:
        raise ValueError(f"decimal '{text}' out of range; bitLen: got {raw.bit_length()}, max {MAX_DEC_BIT_LEN}")
    return Dec(-raw if negative else raw)


def int_with_decimal(value: int, decimals: int) -> int:
    """Return ``value * 10**decimals``, bounded to 256 bits."""
    if decimals < 0:
        raise ValueError("decimal is negative")
    result = int(value) * 10**decimals
    if result.bit_length() > MAX_BIT_LEN:
        raise OverflowError("integer out of bound")
    return result