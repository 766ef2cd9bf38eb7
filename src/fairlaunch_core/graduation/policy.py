from typing import Optional, Tuple

from fairlaunch_core.common.config import CurveConfig
from fairlaunch_core.common.logger import get_logger
from fairlaunch_core.common.math import BPS_DENOMINATOR, isqrt, mul_div_floor
from fairlaunch_core.common.model import CurveState, GraduationEvent, GraduationInfo


logger = get_logger(__name__)


class GraduationPolicy:
    """
    ACTIVE -> GRADUATED, terminal, fired at most once per curve.

    Evaluated on the resulting state of every accepted trade: once real SOL reaches
    the threshold, that same resulting state is marked complete and a GraduationEvent
    is handed to the migration collaborator.
    """

    def __init__(self, config: Optional[CurveConfig] = None):
        self.config = config or CurveConfig()

    @property
    def threshold(self) -> int:
        return self.config.graduation_threshold

    def is_ready(self, state: CurveState) -> bool:
        return state.real_sol_reserves >= self.threshold

    def evaluate(self, state: CurveState) -> Tuple[CurveState, Optional[GraduationEvent]]:
        """
        Returns (state, event). An already complete curve never fires again.
        """
        if state.complete or not self.is_ready(state):
            return state, None

        final_state = state.with_reserves(complete=True)
        event = self.build_event(final_state)
        logger.info(
            "Bonding curve graduated",
            real_sol_reserves=final_state.real_sol_reserves,
            real_token_reserves=final_state.real_token_reserves,
            threshold=self.threshold,
            initial_lp_supply=event.initial_lp_supply,
        )
        return final_state, event

    def build_event(self, final_state: CurveState) -> GraduationEvent:
        """
        The migrated pool is seeded with fixed amounts, not with whatever the curve holds:
          - SOL: the graduation threshold; any excess real SOL stays with the curve
          - tokens: migration_token_share_bps of total supply, from the held-back tokens
        """
        sol_to_migrate = self.threshold
        tokens_to_migrate = mul_div_floor(
            final_state.token_total_supply, self.config.migration_token_share_bps, BPS_DENOMINATOR
        )
        return GraduationEvent(
            final_state=final_state,
            graduation_threshold=self.threshold,
            sol_to_migrate=sol_to_migrate,
            tokens_to_migrate=tokens_to_migrate,
            initial_lp_supply=isqrt(sol_to_migrate * tokens_to_migrate),
        )

    def progress_info(self, state: CurveState) -> GraduationInfo:
        current = state.real_sol_reserves
        progress_bps = min(mul_div_floor(current, BPS_DENOMINATOR, self.threshold), BPS_DENOMINATOR)
        return GraduationInfo(
            required=self.threshold,
            current=current,
            remaining=max(0, self.threshold - current),
            progress_bps=progress_bps,
            is_ready=state.complete or self.is_ready(state),
        )
