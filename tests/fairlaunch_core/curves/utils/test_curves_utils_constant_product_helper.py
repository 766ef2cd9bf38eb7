import pytest

from fairlaunch_core.common.errors import AmountOverflowError, InsufficientLiquidityError
from fairlaunch_core.curves.utils.constant_product_helper import ConstantProductHelper


VIRTUAL_SOL = 30_000_000_000
VIRTUAL_TOKEN = 1_073_000_000_000_000


def test_compute_k():
    assert ConstantProductHelper.compute_k(VIRTUAL_SOL, VIRTUAL_TOKEN) == 32_190_000_000_000_000_000_000_000


def test_compute_k_overflow_on_narrow_width():
    with pytest.raises(AmountOverflowError):
        ConstantProductHelper.compute_k(VIRTUAL_SOL, VIRTUAL_TOKEN, bits=64)


def test_swap_sol_in():
    step = ConstantProductHelper.swap(VIRTUAL_SOL, VIRTUAL_TOKEN, 990_000_000)
    assert step.new_reserve_in == 30_990_000_000
    assert step.new_reserve_out == 1_038_722_168_441_432
    assert step.amount_out == 34_277_831_558_568
    assert step.new_reserve_in * step.new_reserve_out <= step.k


def test_swap_tokens_in():
    step = ConstantProductHelper.swap(VIRTUAL_TOKEN, VIRTUAL_SOL, 1_000_000)
    assert step.new_reserve_in == VIRTUAL_TOKEN + 1_000_000
    assert step.amount_out == VIRTUAL_SOL - step.new_reserve_out
    assert step.amount_out > 0
    assert step.new_reserve_in * step.new_reserve_out <= step.k


def test_swap_that_drains_the_curve():
    # k = 1, so floor(k / new_in) hits zero
    with pytest.raises(InsufficientLiquidityError):
        ConstantProductHelper.swap(1, 1, 5)


@pytest.mark.parametrize(
    "amount, numerator, denominator, expected_fee, expected_net",
    [
        (1_000_000_000, 1, 100, 10_000_000, 990_000_000),
        (99, 1, 100, 0, 99),
        (199, 1, 100, 1, 198),
        (1_000_000, 0, 100, 0, 1_000_000),
        (10_000, 25, 1_000, 250, 9_750),
    ]
)
def test_apply_fee_floors(amount, numerator, denominator, expected_fee, expected_net):
    assert ConstantProductHelper.apply_fee(amount, numerator, denominator) == (expected_fee, expected_net)


@pytest.mark.parametrize(
    "fee, share, expected",
    [
        (10_000_000, 0, (0, 10_000_000)),
        (10_000_000, 5_000, (5_000_000, 5_000_000)),
        (3, 5_000, (1, 2)),
        (10, 10_000, (10, 0)),
    ]
)
def test_split_fee(fee, share, expected):
    assert ConstantProductHelper.split_fee(fee, share) == expected


def test_price_impact_buy_and_sell():
    assert ConstantProductHelper.price_impact_bps(
        VIRTUAL_SOL, VIRTUAL_TOKEN, 30_990_000_000, 1_038_722_168_441_432
    ) == 671
    assert ConstantProductHelper.price_impact_bps(
        30_990_000_000, 1_038_722_168_441_432, 30_486_965_076, 1_055_861_084_220_716
    ) == -322


def test_price_impact_unchanged():
    assert ConstantProductHelper.price_impact_bps(10, 20, 10, 20) == 0


@pytest.mark.parametrize(
    "amount, slippage, expected",
    [
        (34_277_831_558_568, 100, 33_935_053_242_982),
        (1_000, 0, 1_000),
        (1_000, 9_999, 0),
        (999, 50, 994),
    ]
)
def test_minimum_output(amount, slippage, expected):
    assert ConstantProductHelper.minimum_output(amount, slippage) == expected
