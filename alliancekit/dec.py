"""Fixed-point decimal with 18 digits of fractional precision."""

from __future__ import annotations

from functools import total_ordering

PRECISION = 18
_SCALE = 10**PRECISION
_HALF = _SCALE // 2
_DIGITS = frozenset("0123456789")


def _chop_and_round(value: int) -> int:
    """Drop PRECISION digits from ``value``, rounding half to even."""
    if value < 0:
        return -_chop_and_round(-value)
    quotient, remainder = divmod(value, _SCALE)
    if remainder < _HALF:
        return quotient
    if remainder > _HALF:
        return quotient + 1
    return quotient + (quotient & 1)


def _truncating_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


@total_ordering
class Dec:
    """A signed decimal number stored as an integer scaled by 10**18."""

    __slots__ = ("_raw",)

    def __init__(self, *, raw: int = 0) -> None:
        if not isinstance(raw, int) or isinstance(raw, bool):
            raise TypeError("raw value must be an int")
        self._raw = raw

    @classmethod
    def from_int(cls, value: int) -> Dec:
        """Return the decimal equal to the integer ``value``."""
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("value must be an int")
        return cls(raw=value * _SCALE)

    @classmethod
    def from_str(cls, text: str) -> Dec:
        """Parse a decimal such as ``"-12.345"``."""
        if not text:
            raise ValueError("decimal string cannot be empty")
        negative = text.startswith("-")
        body = text[1:] if negative else text
        if not body:
            raise ValueError(f"failed to parse decimal {text!r}")
        parts = body.split(".")
        if len(parts) > 2:
            raise ValueError(f"invalid decimal string: {text!r}")
        digits = parts[0]
        fraction_length = 0
        if len(parts) == 2:
            fraction_length = len(parts[1])
            if fraction_length == 0 or not digits:
                raise ValueError(f"invalid decimal string: {text!r}")
            digits += parts[1]
        if fraction_length > PRECISION:
            raise ValueError(
                f"value {text!r} exceeds max precision by "
                f"{fraction_length - PRECISION} decimal places"
            )
        if not digits or not set(digits) <= _DIGITS:
            raise ValueError(f"failed to parse decimal {text!r}")
        raw = int(digits) * 10 ** (PRECISION - fraction_length)
        return cls(raw=-raw if negative else raw)

    @classmethod
    def with_prec(cls, value: int, prec: int) -> Dec:
        """Return ``value`` * 10**-``prec``."""
        if not 0 <= prec <= PRECISION:
            raise ValueError(f"too much precision, maximum {PRECISION}, provided {prec}")
        return cls(raw=value * 10 ** (PRECISION - prec))

    @classmethod
    def zero(cls) -> Dec:
        return cls(raw=0)

    @classmethod
    def one(cls) -> Dec:
        return cls(raw=_SCALE)

    def mul(self, other: Dec) -> Dec:
        """Multiply, rounding the result half to even."""
        return Dec(raw=_chop_and_round(self._raw * other._raw))

    def quo(self, other: Dec) -> Dec:
        """Divide, rounding the result half to even."""
        if other._raw == 0:
            raise ZeroDivisionError("division by zero")
        scaled = _truncating_div(self._raw * _SCALE * _SCALE, other._raw)
        return Dec(raw=_chop_and_round(scaled))

    def mul_int(self, value: int) -> Dec:
        """Multiply by an integer without rounding."""
        return Dec(raw=self._raw * value)

    def truncate_int(self) -> int:
        """Return the integer part, rounding toward zero."""
        return _truncating_div(self._raw, _SCALE)

    def is_zero(self) -> bool:
        return self._raw == 0

    def is_positive(self) -> bool:
        return self._raw > 0

    def is_negative(self) -> bool:
        return self._raw < 0

    def __add__(self, other: object) -> Dec:
        if not isinstance(other, Dec):
            return NotImplemented
        return Dec(raw=self._raw + other._raw)

    def __sub__(self, other: object) -> Dec:
        if not isinstance(other, Dec):
            return NotImplemented
        return Dec(raw=self._raw - other._raw)

    def __mul__(self, other: object) -> Dec:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other: object) -> Dec:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.quo(other)

    def __neg__(self) -> Dec:
        return Dec(raw=-self._raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self._raw == other._raw

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self._raw < other._raw

    def __hash__(self) -> int:
        return hash(("Dec", self._raw))

    def __str__(self) -> str:
        sign = "-" if self._raw < 0 else ""
        whole, fraction = divmod(abs(self._raw), _SCALE)
        return f"{sign}{whole}.{fraction:0{PRECISION}d}"

    def __repr__(self) -> str:
        return f"Dec('{self}')"