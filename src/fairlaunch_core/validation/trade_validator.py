from typing import Any, Dict, List, Optional

from fairlaunch_core.common.config import CurveConfig
from fairlaunch_core.common.enums import OrderSide
from fairlaunch_core.common.errors import (
    CurveCompleteError,
    CurveError,
    InvalidAmountError,
    InvalidSlippageError,
)
from fairlaunch_core.common.math import BPS_DENOMINATOR
from fairlaunch_core.common.model import CurveState, TradeRequest


class TradeValidator:
    """
    Pre-trade checks, run before any pricing arithmetic:
      1) Completed curve           -> CurveCompleteError
      2) Non-integer / <= 0 amount -> InvalidAmountError
      3) Slippage outside [0,10000) -> InvalidSlippageError
      4) Below minimum / above max -> InvalidAmountError

    Checks only read the fields they need and never build a partial quote, so the same
    request against the same snapshot always fails the same way.
    """

    def __init__(self, config: Optional[CurveConfig] = None):
        self.config = config or CurveConfig()

    def validate(self, state: CurveState, request: TradeRequest) -> None:
        """
        :raises CurveError: the first failing check, in the order above
        """
        if state.complete:
            raise CurveCompleteError("Bonding curve is complete; trade on the migrated pool.")

        if not isinstance(request.side, OrderSide):
            raise InvalidAmountError(f"Unknown order side {request.side!r}.")

        amount = request.input_amount
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidAmountError("Trade amount must be an integer number of base units.")
        if amount <= 0:
            raise InvalidAmountError("Trade amount must be positive.")

        slippage = request.slippage_bps
        if isinstance(slippage, bool) or not isinstance(slippage, int):
            raise InvalidSlippageError("Slippage must be an integer number of basis points.")
        if not 0 <= slippage < BPS_DENOMINATOR:
            raise InvalidSlippageError(f"Slippage must be in [0, {BPS_DENOMINATOR}) basis points.")

        if request.side == OrderSide.BUY:
            if amount < self.config.min_buy_lamports:
                raise InvalidAmountError(
                    f"Buy of {amount} lamports is below the minimum of {self.config.min_buy_lamports}."
                )
            if self.config.max_buy_lamports is not None and amount > self.config.max_buy_lamports:
                raise InvalidAmountError(
                    f"Buy of {amount} lamports exceeds the maximum of {self.config.max_buy_lamports}."
                )
        elif amount < self.config.min_sell_tokens:
            raise InvalidAmountError(
                f"Sell of {amount} base units is below the minimum of {self.config.min_sell_tokens}."
            )

    def run_all_validations(self, state: CurveState, request: TradeRequest) -> Dict[str, Any]:
        """
        Non-raising report for callers that want every finding at once:
          {"errors": [...], "warnings": [...], "info": {...}}
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        try:
            self.validate(state, request)
        except CurveError as e:
            errors.append(f"{e.kind.value}: {e}")
            info["error_kind"] = e.kind.value

        if not state.complete:
            if state.virtual_token_reserves <= 0:
                errors.append("Curve: 'virtual_token_reserves' must be > 0 while active.")
            if state.virtual_sol_reserves <= 0:
                errors.append("Curve: 'virtual_sol_reserves' must be > 0 while active.")

        if request.side == OrderSide.SELL and state.real_sol_reserves == 0:
            warnings.append("Curve holds no real SOL; any sell will fail for insufficient liquidity.")
        if request.side == OrderSide.BUY and state.real_token_reserves == 0:
            warnings.append("Curve holds no real tokens; any buy will fail for insufficient liquidity.")

        info["request_summary"] = {
            "side": str(request.side),
            "input_amount": str(request.input_amount),
            "slippage_bps": str(request.slippage_bps),
            "phase": str(state.phase),
        }

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }
