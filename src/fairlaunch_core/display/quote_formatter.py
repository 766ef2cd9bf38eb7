import math
from fractions import Fraction
from typing import Any, Dict, Optional, Union

from fairlaunch_core.common.config import LAMPORTS_PER_SOL, CurveConfig
from fairlaunch_core.common.enums import OrderSide
from fairlaunch_core.common.errors import EmptyReservesError
from fairlaunch_core.common.logger import get_logger
from fairlaunch_core.common.model import CurveState, TradeQuote
from fairlaunch_core.graduation.policy import GraduationPolicy


logger = get_logger(__name__)

NOT_AVAILABLE = "N/A"

Number = Union[int, float, Fraction]


class QuoteFormatter:
    """
    Display-only derivations. Floats are allowed here and nowhere else; nothing in this
    class feeds back into pricing, and bad inputs render as "N/A" instead of raising.
    """

    def __init__(self, config: Optional[CurveConfig] = None):
        self.config = config or CurveConfig()

    @staticmethod
    def _as_float(value: Optional[Number]) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None
        if not isinstance(value, (int, float, Fraction)):
            return None
        as_float = float(value)
        if not math.isfinite(as_float):
            return None
        return as_float

    @staticmethod
    def format_price(price: Optional[Number]) -> str:
        """Exponential notation below 1e-6, then 6 / 4 / 2 decimals as the price grows."""
        value = QuoteFormatter._as_float(price)
        if value is None:
            return NOT_AVAILABLE
        if value < 0.000001:
            return f"{value:.2e}"
        elif value < 0.01:
            return f"{value:.6f}"
        elif value < 1:
            return f"{value:.4f}"
        return f"{value:.2f}"

    @staticmethod
    def format_amount(amount: Optional[Number], decimals: int = 6) -> str:
        """Abbreviates large amounts with K / M / B suffixes."""
        value = QuoteFormatter._as_float(amount)
        if value is None:
            return NOT_AVAILABLE
        if abs(value) < 0.000001:
            return "0"
        elif abs(value) < 0.01:
            return f"{value:.{decimals}f}"
        elif abs(value) < 1_000:
            return f"{value:.2f}"
        elif abs(value) < 1_000_000:
            return f"{value / 1_000:.1f}K"
        elif abs(value) < 1_000_000_000:
            return f"{value / 1_000_000:.1f}M"
        return f"{value / 1_000_000_000:.1f}B"

    @staticmethod
    def format_percent(fraction: Optional[Number]) -> str:
        value = QuoteFormatter._as_float(fraction)
        if value is None:
            return NOT_AVAILABLE
        return f"{value * 100:.2f}%"

    @staticmethod
    def format_bps(bps: Optional[int]) -> str:
        value = QuoteFormatter._as_float(bps)
        if value is None:
            return NOT_AVAILABLE
        return f"{value / 100:.2f}%"

    @staticmethod
    def lamports_to_sol(lamports: int) -> float:
        return lamports / LAMPORTS_PER_SOL

    def base_units_to_tokens(self, base_units: int) -> float:
        return base_units / 10 ** self.config.token_decimals

    def price_in_sol(self, state: CurveState) -> Optional[float]:
        """SOL per whole token."""
        try:
            price = state.current_price()
        except EmptyReservesError:
            return None
        return float(price * 10 ** self.config.token_decimals / LAMPORTS_PER_SOL)

    def tokens_sold(self, state: CurveState) -> int:
        """Curve tokens bought out so far; held-back migration tokens never count."""
        return max(0, self.config.initial_real_token_reserves - state.real_token_reserves)

    def summarize(self, state: CurveState) -> Dict[str, Any]:
        """Display dict for a snapshot: price, market cap and bonding progress."""
        info = GraduationPolicy(self.config).progress_info(state)
        summary: Dict[str, Any] = {
            "phase": str(state.phase),
            "price": NOT_AVAILABLE,
            "market_cap": NOT_AVAILABLE,
            "progress": self.format_bps(info.progress_bps),
            "sol_raised": self.format_amount(self.lamports_to_sol(state.real_sol_reserves)),
            "sol_remaining": self.format_amount(self.lamports_to_sol(info.remaining)),
            "tokens_available": self.format_amount(self.base_units_to_tokens(state.real_token_reserves)),
            "tokens_sold": self.format_amount(self.base_units_to_tokens(self.tokens_sold(state))),
        }

        price = self.price_in_sol(state)
        if price is None:
            logger.warning("Cannot price snapshot with empty reserves")
            return summary

        market_cap = float(state.market_cap()) / LAMPORTS_PER_SOL
        summary["price"] = self.format_price(price)
        summary["market_cap"] = self.format_amount(market_cap)
        return summary

    def format_quote(self, trade_quote: TradeQuote) -> Dict[str, str]:
        if trade_quote.side == OrderSide.BUY:
            spent = self.lamports_to_sol(trade_quote.input_amount)
            received = self.base_units_to_tokens(trade_quote.output_amount)
            minimum = self.base_units_to_tokens(trade_quote.minimum_output_amount)
        else:
            spent = self.base_units_to_tokens(trade_quote.input_amount)
            received = self.lamports_to_sol(trade_quote.output_amount)
            minimum = self.lamports_to_sol(trade_quote.minimum_output_amount)

        return {
            "side": str(trade_quote.side),
            "input": self.format_amount(spent),
            "output": self.format_amount(received),
            "minimum_output": self.format_amount(minimum),
            "fee_sol": self.format_amount(self.lamports_to_sol(trade_quote.fee_amount)),
            "price_impact": self.format_bps(trade_quote.price_impact_bps),
            "average_price": self.format_price(
                float(trade_quote.average_price * 10 ** self.config.token_decimals / LAMPORTS_PER_SOL)
            ),
            "new_price": self.format_price(self.price_in_sol(trade_quote.resulting_state)),
            "graduated": "yes" if trade_quote.graduated else "no",
        }
