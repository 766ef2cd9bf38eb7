from dataclasses import dataclass, asdict, fields, replace
from fractions import Fraction
from typing import Any, Dict, Optional

from fairlaunch_core.common.config import CurveConfig
from fairlaunch_core.common.enums import CurvePhase, OrderSide
from fairlaunch_core.common.errors import EmptyReservesError


@dataclass(frozen=True)
class CurveState:
    """
    Canonical reserve snapshot of one launched token's bonding curve.

    Virtual reserves drive the pricing formula; real reserves only track what was
    actually deposited and withdrawn, for progress and graduation accounting.
    Instances are immutable: every accepted trade produces a new snapshot.
    """
    virtual_token_reserves: int
    virtual_sol_reserves: int
    real_token_reserves: int
    real_sol_reserves: int
    token_total_supply: int
    complete: bool = False

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "complete":
                if not isinstance(value, bool):
                    raise ValueError("'complete' must be a bool.")
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"'{f.name}' must be an integer.")
            if value < 0:
                raise ValueError(f"'{f.name}' cannot be negative.")

    @classmethod
    def launch(cls, config: Optional[CurveConfig] = None) -> "CurveState":
        """Snapshot of a freshly launched curve, seeded with the configured constants."""
        config = config or CurveConfig()
        return cls(
            virtual_token_reserves=config.initial_virtual_token_reserves,
            virtual_sol_reserves=config.initial_virtual_sol_reserves,
            real_token_reserves=config.initial_real_token_reserves,
            real_sol_reserves=0,
            token_total_supply=config.token_total_supply,
            complete=False,
        )

    @property
    def k(self) -> int:
        return self.virtual_sol_reserves * self.virtual_token_reserves

    @property
    def phase(self) -> CurvePhase:
        return CurvePhase.from_complete(self.complete)

    def _require_reserves(self):
        if self.virtual_token_reserves == 0:
            raise EmptyReservesError("Virtual token reserves are empty.")

    def current_price(self) -> Fraction:
        """Lamports per token base unit, kept as an exact rational."""
        self._require_reserves()
        return Fraction(self.virtual_sol_reserves, self.virtual_token_reserves)

    def market_cap(self) -> Fraction:
        """Market cap in lamports: current price times total supply."""
        return self.current_price() * self.token_total_supply

    def bonding_progress(self, graduation_threshold: int) -> Fraction:
        """real_sol_reserves / graduation_threshold, clamped to [0, 1]."""
        self._require_reserves()
        if graduation_threshold <= 0:
            raise ValueError("Graduation threshold must be positive.")
        progress = Fraction(self.real_sol_reserves, graduation_threshold)
        return min(max(progress, Fraction(0)), Fraction(1))

    def with_reserves(self, **changes) -> "CurveState":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CurveState":
        return cls(**{f.name: data[f.name] for f in fields(cls) if f.name in data})


@dataclass(frozen=True)
class TradeRequest:
    """
    A request to trade against one curve snapshot. Not validated on construction;
    TradeValidator decides whether it is acceptable.

    input_amount is lamports for BUY and token base units for SELL.
    """
    side: OrderSide
    input_amount: int
    slippage_bps: int = 100


@dataclass(frozen=True)
class GraduationEvent:
    """Emitted once, by the trade that pushes real SOL past the threshold."""
    final_state: CurveState
    graduation_threshold: int
    sol_to_migrate: int
    tokens_to_migrate: int
    initial_lp_supply: int


@dataclass(frozen=True)
class GraduationInfo:
    required: int
    current: int
    remaining: int
    progress_bps: int
    is_ready: bool


@dataclass(frozen=True)
class TradeQuote:
    """
    Outcome of pricing a TradeRequest against a snapshot.

    fee_amount is always lamports; output_amount is tokens for BUY, lamports for SELL.
    resulting_state is only valid when committed against the exact input snapshot.
    """
    side: OrderSide
    input_amount: int
    output_amount: int
    fee_amount: int
    creator_fee: int
    platform_fee: int
    price_impact_bps: int
    minimum_output_amount: int
    resulting_state: CurveState
    graduation_event: Optional[GraduationEvent] = None

    @property
    def graduated(self) -> bool:
        return self.graduation_event is not None

    @property
    def average_price(self) -> Fraction:
        """Lamports paid or received per token base unit, fees included."""
        if self.side == OrderSide.BUY:
            return Fraction(self.input_amount, self.output_amount)
        return Fraction(self.output_amount, self.input_amount)


@dataclass(frozen=True)
class TradeReceipt:
    """An accepted quote bound to the snapshot it was derived from."""
    request: TradeRequest
    quote: TradeQuote
    state_before: CurveState

    @property
    def state_after(self) -> CurveState:
        return self.quote.resulting_state

    def is_valid_for(self, current_state: CurveState) -> bool:
        """
        Optimistic-concurrency check: the resulting state may only be committed
        over the exact snapshot the quote was computed against.
        """
        return current_state == self.state_before
