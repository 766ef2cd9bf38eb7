from typing import Union

from fairlaunch_core.common.errors import AmountOverflowError, AmountUnderflowError, DivisionByZeroError


U64_BITS = 64
U128_BITS = 128
BPS_DENOMINATOR = 10_000


class FixedPointAmount:
    """
    A non-negative integer bounded by an explicit bit width.

    Reserve math multiplies two 64-bit quantities, so the default width is 128 bits.
    Every operation checks its result against the width and raises a typed error
    instead of wrapping:
      - add / mul          -> AmountOverflowError
      - sub                -> AmountUnderflowError
      - div_floor          -> DivisionByZeroError
    """
    __slots__ = ("_value", "_bits")

    def __init__(self, value: int, bits: int = U128_BITS):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"FixedPointAmount requires an int, got {type(value).__name__}")
        self._bits = bits
        self._value = self._checked(value)

    @property
    def value(self) -> int:
        return self._value

    @property
    def bits(self) -> int:
        return self._bits

    @property
    def max_value(self) -> int:
        return (1 << self._bits) - 1

    def _checked(self, value: int) -> int:
        if value < 0:
            raise AmountUnderflowError(f"Result {value} is negative.")
        if value > (1 << self._bits) - 1:
            raise AmountOverflowError(f"Result exceeds {self._bits}-bit range.")
        return value

    def _coerce(self, other: Union["FixedPointAmount", int]) -> int:
        if isinstance(other, FixedPointAmount):
            return other.value
        return FixedPointAmount(other, self._bits).value

    def add(self, other: Union["FixedPointAmount", int]) -> "FixedPointAmount":
        return FixedPointAmount(self._value + self._coerce(other), self._bits)

    def sub(self, other: Union["FixedPointAmount", int]) -> "FixedPointAmount":
        return FixedPointAmount(self._value - self._coerce(other), self._bits)

    def mul(self, other: Union["FixedPointAmount", int]) -> "FixedPointAmount":
        return FixedPointAmount(self._value * self._coerce(other), self._bits)

    def div_floor(self, other: Union["FixedPointAmount", int]) -> "FixedPointAmount":
        divisor = self._coerce(other)
        if divisor == 0:
            raise DivisionByZeroError("Division by zero.")
        return FixedPointAmount(self._value // divisor, self._bits)

    def narrow(self, bits: int = U64_BITS) -> int:
        """
        Returns the raw int after checking it fits in 'bits'.
        Used to check widened results against the 64-bit storage of reserve fields.
        """
        return FixedPointAmount(self._value, bits).value

    def __int__(self):
        return self._value

    def __eq__(self, other):
        if isinstance(other, FixedPointAmount):
            return self._value == other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __hash__(self):
        return hash(self._value)

    def __lt__(self, other):
        return self._value < self._coerce(other)

    def __le__(self, other):
        return self._value <= self._coerce(other)

    def __gt__(self, other):
        return self._value > self._coerce(other)

    def __ge__(self, other):
        return self._value >= self._coerce(other)

    def __repr__(self):
        return f"FixedPointAmount({self._value}, bits={self._bits})"


def mul_div_floor(a: int, b: int, c: int, bits: int = U128_BITS) -> int:
    """floor(a * b / c) with the product checked against 'bits'."""
    return FixedPointAmount(a, bits).mul(b).div_floor(c).value


def isqrt(value: int) -> int:
    """Integer square root (floor), Newton iteration."""
    if value < 0:
        raise AmountUnderflowError("Square root of a negative amount.")
    if value == 0:
        return 0
    x = value
    y = (x + 1) // 2
    while y < x:
        x = y
        y = (x + value // x) // 2
    return x


def div_round_half_up(numerator: int, denominator: int) -> int:
    """
    Signed integer division rounded to the nearest integer, ties away from zero.
    """
    if denominator == 0:
        raise DivisionByZeroError("Division by zero.")
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    sign = -1 if numerator < 0 else 1
    return sign * ((2 * abs(numerator) + denominator) // (2 * denominator))
