from abc import ABC, abstractmethod
from fractions import Fraction
from typing import Optional

from fairlaunch_core.common.config import CurveConfig
from fairlaunch_core.common.enums import OrderSide
from fairlaunch_core.common.model import CurveState, TradeQuote, TradeReceipt, TradeRequest


class BondingCurve(ABC):
    """Abstract base class defining the interface for any bonding curve pricing engine."""
    def __init__(self, config: Optional['CurveConfig'] = None):
        """
        Initializes the engine with injected configuration. Engines hold no curve state;
        every call prices against the snapshot it is given.

        :param config: CurveConfig - fees, thresholds, limits
        """
        self._config = config or CurveConfig()

    @property
    def config(self) -> 'CurveConfig':
        """Returns the curve configuration."""
        return self._config

    def get_spot_price(self, state: 'CurveState') -> Fraction:
        """
        Returns the current spot price (lamports per token base unit) of a snapshot.

        :param state: CurveState - snapshot to price.
        :return: Fraction: exact spot price.
        """
        return state.current_price()

    @abstractmethod
    def quote(self, state: 'CurveState', request: 'TradeRequest') -> 'TradeQuote':
        """
        Prices 'request' against 'state' without committing anything.

        :param state: CurveState - snapshot the quote is derived from.
        :param request: TradeRequest - side, input amount and slippage.
        :return: TradeQuote including the resulting state.
        """
        pass

    @abstractmethod
    def max_trade_size(self, state: 'CurveState', side: 'OrderSide') -> int:
        """
        Largest input amount on 'side' whose quote stays within the price impact ceiling.

        :param state: CurveState
        :param side: OrderSide
        :return: input amount in lamports (BUY) or token base units (SELL), 0 if none.
        """
        pass

    def execute(self, state: 'CurveState', request: 'TradeRequest') -> 'TradeReceipt':
        """
        Prices the request and binds the result to the snapshot it came from. The caller
        commits receipt.state_after only if receipt.is_valid_for(current snapshot).

        :param state: CurveState
        :param request: TradeRequest
        :return: A TradeReceipt with the quote and the originating snapshot.
        """
        trade_quote = self.quote(state, request)
        return TradeReceipt(request=request, quote=trade_quote, state_before=state)

    def buy(self, state: 'CurveState', sol_in: int, slippage_bps: int = 100) -> 'TradeReceipt':
        return self.execute(state, TradeRequest(OrderSide.BUY, sol_in, slippage_bps))

    def sell(self, state: 'CurveState', token_in: int, slippage_bps: int = 100) -> 'TradeReceipt':
        return self.execute(state, TradeRequest(OrderSide.SELL, token_in, slippage_bps))
