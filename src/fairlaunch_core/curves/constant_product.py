from typing import Optional

from fairlaunch_core.common.config import CurveConfig
from fairlaunch_core.common.enums import OrderSide
from fairlaunch_core.common.errors import (
    CurveError,
    EmptyReservesError,
    InsufficientLiquidityError,
    SlippageExceededError,
)
from fairlaunch_core.common.logger import get_logger
from fairlaunch_core.common.math import FixedPointAmount
from fairlaunch_core.common.model import CurveState, TradeQuote, TradeRequest
from fairlaunch_core.curves.base import BondingCurve
from fairlaunch_core.curves.utils.constant_product_helper import ConstantProductHelper as helper
from fairlaunch_core.graduation.policy import GraduationPolicy
from fairlaunch_core.validation.trade_validator import TradeValidator


logger = get_logger(__name__)


class ConstantProductBondingCurve(BondingCurve):
    """
        The pricing engine: a constant-product curve over virtual reserves.

          k = virtual_sol * virtual_token

        BUY (sol_in lamports):
          fee       = floor(sol_in * fee_num / fee_den)
          new_sol   = virtual_sol + (sol_in - fee)
          new_token = floor(k / new_sol)
          out       = virtual_token - new_token

        SELL (token_in base units):
          new_token = virtual_token + token_in
          new_sol   = floor(k / new_token)
          gross     = virtual_sol - new_sol
          fee       = floor(gross * fee_num / fee_den)
          out       = gross - fee

        The fee is always SOL and never enters the curve. Every accepted quote is
        checked against the protocol price-impact ceiling, and its resulting state is
        passed through GraduationPolicy before it is returned.
    """

    def __init__(self, config: Optional[CurveConfig] = None):
        super().__init__(config)
        self._validator = TradeValidator(self.config)
        self._graduation = GraduationPolicy(self.config)

    @property
    def validator(self) -> TradeValidator:
        return self._validator

    @property
    def graduation(self) -> GraduationPolicy:
        return self._graduation

    def calculate_fees(self, amount: int):
        """Returns (fee, amount_after_fee) for a lamport amount."""
        return helper.apply_fee(
            amount,
            self.config.fee_numerator,
            self.config.fee_denominator,
            self.config.arithmetic_bits,
        )

    def quote(self, state: CurveState, request: TradeRequest) -> TradeQuote:
        """
        Validates and prices 'request' against 'state'.

        :raises CurveError: typed rejection; the snapshot is never modified
        """
        try:
            self._validator.validate(state, request)
            self._require_reserves(state)
            trade_quote = self._price(state, request)
        except CurveError as e:
            logger.info(
                "Quote rejected",
                side=str(request.side),
                input_amount=request.input_amount,
                kind=e.kind.value,
                reason=str(e),
            )
            raise

        logger.debug(
            "Quote accepted",
            side=str(request.side),
            input_amount=request.input_amount,
            output_amount=trade_quote.output_amount,
            fee_amount=trade_quote.fee_amount,
            price_impact_bps=trade_quote.price_impact_bps,
            graduated=trade_quote.graduated,
        )
        return trade_quote

    def max_trade_size(self, state: CurveState, side: OrderSide) -> int:
        """
        Binary search for the largest input that prices without breaching the impact
        ceiling, the real reserves or the 64-bit reserve width. Returns 0 when nothing
        above the minimum fits.
        """
        if state.complete or state.virtual_token_reserves == 0 or state.virtual_sol_reserves == 0:
            return 0

        if side == OrderSide.BUY:
            # net input of at least virtual_sol moves the price by 300%, past any ceiling
            fee_den = self.config.fee_denominator
            hi = state.virtual_sol_reserves * fee_den // (fee_den - self.config.fee_numerator) + 1
            if self.config.max_buy_lamports is not None:
                hi = min(hi, self.config.max_buy_lamports)
            minimum = max(1, self.config.min_buy_lamports)
        else:
            hi = state.virtual_token_reserves
            minimum = max(1, self.config.min_sell_tokens)

        if hi < minimum or not self._fits(state, side, minimum):
            return 0
        if self._fits(state, side, hi):
            return hi

        lo = minimum
        while hi - lo > 1:
            mid = (lo + hi) // 2
            if self._fits(state, side, mid):
                lo = mid
            else:
                hi = mid
        return lo

    def _fits(self, state: CurveState, side: OrderSide, amount: int) -> bool:
        try:
            self._price(state, TradeRequest(side, amount, 0), graduate=False)
        except CurveError:
            return False
        return True

    @staticmethod
    def _require_reserves(state: CurveState):
        if state.virtual_token_reserves == 0 or state.virtual_sol_reserves == 0:
            raise EmptyReservesError("Curve has empty virtual reserves.")

    def _price(self, state: CurveState, request: TradeRequest, graduate: bool = True) -> TradeQuote:
        bits = self.config.arithmetic_bits
        amount = request.input_amount

        if request.side == OrderSide.BUY:
            fee, net_in = self.calculate_fees(amount)
            step = helper.swap(state.virtual_sol_reserves, state.virtual_token_reserves, net_in, bits)
            output_amount = step.amount_out
            if output_amount > state.real_token_reserves:
                raise InsufficientLiquidityError("Curve does not hold enough real tokens for this buy.")

            new_sol, new_token = step.new_reserve_in, step.new_reserve_out
            new_real_sol = FixedPointAmount(state.real_sol_reserves, bits).add(net_in)
            new_real_token = FixedPointAmount(state.real_token_reserves, bits).sub(output_amount)
        else:
            if amount > state.virtual_token_reserves:
                raise InsufficientLiquidityError("Sell exceeds the virtual token reserves.")
            step = helper.swap(state.virtual_token_reserves, state.virtual_sol_reserves, amount, bits)
            gross_out = step.amount_out
            if gross_out > state.real_sol_reserves:
                raise InsufficientLiquidityError("Curve does not hold enough real SOL for this sell.")

            fee, output_amount = self.calculate_fees(gross_out)
            new_sol, new_token = step.new_reserve_out, step.new_reserve_in
            new_real_sol = FixedPointAmount(state.real_sol_reserves, bits).sub(gross_out)
            new_real_token = FixedPointAmount(state.real_token_reserves, bits).add(amount)

        impact = helper.price_impact_bps(
            state.virtual_sol_reserves, state.virtual_token_reserves, new_sol, new_token
        )
        if abs(impact) > self.config.max_price_impact_bps:
            raise SlippageExceededError(
                f"Price impact of {impact} bps exceeds the {self.config.max_price_impact_bps} bps ceiling."
            )

        minimum_output_amount = helper.minimum_output(output_amount, request.slippage_bps)
        creator_fee, platform_fee = helper.split_fee(fee, self.config.creator_fee_share_bps)

        resulting_state = state.with_reserves(
            virtual_sol_reserves=FixedPointAmount(new_sol, bits).narrow(),
            virtual_token_reserves=FixedPointAmount(new_token, bits).narrow(),
            real_sol_reserves=new_real_sol.narrow(),
            real_token_reserves=new_real_token.narrow(),
        )
        graduation_event = None
        if graduate:
            resulting_state, graduation_event = self._graduation.evaluate(resulting_state)

        return TradeQuote(
            side=request.side,
            input_amount=amount,
            output_amount=output_amount,
            fee_amount=fee,
            creator_fee=creator_fee,
            platform_fee=platform_fee,
            price_impact_bps=impact,
            minimum_output_amount=minimum_output_amount,
            resulting_state=resulting_state,
            graduation_event=graduation_event,
        )
