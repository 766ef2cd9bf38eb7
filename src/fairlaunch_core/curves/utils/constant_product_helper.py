from dataclasses import dataclass
from typing import Tuple

from fairlaunch_core.common.errors import InsufficientLiquidityError
from fairlaunch_core.common.math import (
    BPS_DENOMINATOR,
    U128_BITS,
    FixedPointAmount,
    div_round_half_up,
    mul_div_floor,
)


@dataclass(frozen=True)
class SwapStep:
    """Raw x*y=k step before fees: reserves oriented as (in, out)."""
    k: int
    amount_in: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int


class ConstantProductHelper:
    """
    Shared widened-integer logic for the constant-product curve:
      - Invariant product
      - The swap step, oriented by (reserve_in, reserve_out) so BUY and SELL share it
      - Fee deduction and fee split
      - Price impact in basis points
      - Slippage floor
    """

    @staticmethod
    def compute_k(sol_reserves: int, token_reserves: int, bits: int = U128_BITS) -> int:
        return FixedPointAmount(sol_reserves, bits).mul(token_reserves).value

    @staticmethod
    def swap(reserve_in: int, reserve_out: int, amount_in: int, bits: int = U128_BITS) -> SwapStep:
        """
        new_in  = reserve_in + amount_in
        new_out = floor(k / new_in)
        out     = reserve_out - new_out

        Preserves k up to the floor on new_out, so new_in * new_out <= k.
        :raises InsufficientLiquidityError: if the curve cannot pay out anything
        """
        k = ConstantProductHelper.compute_k(reserve_in, reserve_out, bits)
        new_in = FixedPointAmount(reserve_in, bits).add(amount_in)
        new_out = FixedPointAmount(k, bits).div_floor(new_in)

        if new_out.value <= 0:
            raise InsufficientLiquidityError("Trade would drain the curve.")
        if new_out.value >= reserve_out:
            raise InsufficientLiquidityError("Trade is too small to yield any output.")

        return SwapStep(
            k=k,
            amount_in=amount_in,
            amount_out=reserve_out - new_out.value,
            new_reserve_in=new_in.value,
            new_reserve_out=new_out.value,
        )

    @staticmethod
    def apply_fee(amount: int, fee_numerator: int, fee_denominator: int, bits: int = U128_BITS) -> Tuple[int, int]:
        """
        fee = floor(amount * fee_numerator / fee_denominator).
        Returns (fee, amount - fee).
        """
        fee = mul_div_floor(amount, fee_numerator, fee_denominator, bits)
        return fee, FixedPointAmount(amount, bits).sub(fee).value

    @staticmethod
    def split_fee(fee: int, creator_fee_share_bps: int) -> Tuple[int, int]:
        """Returns (creator_fee, platform_fee); the platform keeps the rounding remainder."""
        creator_fee = mul_div_floor(fee, creator_fee_share_bps, BPS_DENOMINATOR)
        return creator_fee, fee - creator_fee

    @staticmethod
    def price_impact_bps(old_sol: int, old_token: int, new_sol: int, new_token: int) -> int:
        """
        round((new_price - old_price) / old_price * 10000), with price = sol / token.

        Exact on integers: (new_sol * old_token - old_sol * new_token) / (old_sol * new_token).
        Positive for buys, negative for sells.
        """
        numerator = (new_sol * old_token - old_sol * new_token) * BPS_DENOMINATOR
        denominator = old_sol * new_token
        return div_round_half_up(numerator, denominator)

    @staticmethod
    def minimum_output(amount_out: int, slippage_bps: int) -> int:
        """floor(amount_out * (10000 - slippage_bps) / 10000)."""
        return mul_div_floor(amount_out, BPS_DENOMINATOR - slippage_bps, BPS_DENOMINATOR)
