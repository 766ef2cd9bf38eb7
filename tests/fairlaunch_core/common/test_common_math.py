import math

import pytest

from fairlaunch_core.common.errors import AmountOverflowError, AmountUnderflowError, DivisionByZeroError
from fairlaunch_core.common.math import (
    FixedPointAmount,
    U64_BITS,
    div_round_half_up,
    isqrt,
    mul_div_floor,
)


class TestFixedPointAmount:
    def test_add_sub_mul(self):
        a = FixedPointAmount(30_000_000_000)
        assert a.add(990_000_000).value == 30_990_000_000
        assert a.sub(1).value == 29_999_999_999
        assert a.mul(1_073_000_000_000_000).value == 32_190_000_000_000_000_000_000_000

    def test_product_of_two_u64_fits_default_width(self):
        max_u64 = (1 << 64) - 1
        product = FixedPointAmount(max_u64).mul(max_u64)
        assert product.value == max_u64 * max_u64

    def test_mul_overflow(self):
        with pytest.raises(AmountOverflowError):
            FixedPointAmount(1 << 100).mul(1 << 30)

    def test_add_overflow_at_width(self):
        with pytest.raises(AmountOverflowError):
            FixedPointAmount((1 << 64) - 1, bits=U64_BITS).add(1)

    def test_sub_underflow(self):
        with pytest.raises(AmountUnderflowError):
            FixedPointAmount(5).sub(6)

    def test_negative_construction_underflows(self):
        with pytest.raises(AmountUnderflowError):
            FixedPointAmount(-1)

    def test_non_int_rejected(self):
        with pytest.raises(TypeError):
            FixedPointAmount(1.5)
        with pytest.raises(TypeError):
            FixedPointAmount(True)

    @pytest.mark.parametrize(
        "numerator, denominator, expected",
        [
            (10, 3, 3),
            (9, 3, 3),
            (2, 3, 0),
            (32_190_000_000_000_000_000_000_000, 30_990_000_000, 1_038_722_168_441_432),
        ]
    )
    def test_div_floor_truncates(self, numerator, denominator, expected):
        assert FixedPointAmount(numerator).div_floor(denominator).value == expected

    def test_div_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            FixedPointAmount(10).div_floor(0)

    def test_narrow(self):
        assert FixedPointAmount(123).narrow() == 123
        with pytest.raises(AmountOverflowError):
            FixedPointAmount(1 << 64).narrow(U64_BITS)

    def test_comparisons_and_int(self):
        a = FixedPointAmount(7)
        assert a == 7
        assert a == FixedPointAmount(7, bits=256)
        assert a < 8 and a <= 7 and a > 6 and a >= 7
        assert int(a) == 7


def test_mul_div_floor():
    assert mul_div_floor(1_000_000_000, 1, 100) == 10_000_000
    assert mul_div_floor(999, 1, 100) == 9
    with pytest.raises(DivisionByZeroError):
        mul_div_floor(1, 1, 0)


@pytest.mark.parametrize("value", [0, 1, 2, 3, 4, 9, 15, 16, 17, 10**18, 85 * 10**9 * 793 * 10**12])
def test_isqrt_matches_stdlib(value):
    assert isqrt(value) == math.isqrt(value)


def test_isqrt_negative():
    with pytest.raises(AmountUnderflowError):
        isqrt(-4)


@pytest.mark.parametrize(
    "numerator, denominator, expected",
    [
        (10, 4, 3),      # 2.5 rounds away from zero
        (-10, 4, -3),
        (9, 4, 2),       # 2.25
        (-9, 4, -2),
        (11, 4, 3),      # 2.75
        (0, 7, 0),
        (10, -4, -3),
    ]
)
def test_div_round_half_up(numerator, denominator, expected):
    assert div_round_half_up(numerator, denominator) == expected


def test_div_round_half_up_by_zero():
    with pytest.raises(DivisionByZeroError):
        div_round_half_up(1, 0)
