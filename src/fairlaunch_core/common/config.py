from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from fairlaunch_core.common.math import BPS_DENOMINATOR, U128_BITS


LAMPORTS_PER_SOL = 1_000_000_000
TOKEN_DECIMALS = 6

INITIAL_VIRTUAL_TOKEN_RESERVES = 1_073_000_000 * 10 ** TOKEN_DECIMALS
INITIAL_VIRTUAL_SOL_RESERVES = 30 * LAMPORTS_PER_SOL
INITIAL_REAL_TOKEN_RESERVES = 793_100_000 * 10 ** TOKEN_DECIMALS
TOKEN_TOTAL_SUPPLY = 1_000_000_000 * 10 ** TOKEN_DECIMALS
GRADUATION_THRESHOLD = 85 * LAMPORTS_PER_SOL
MIGRATION_TOKEN_SHARE_BPS = 2_000
MIN_BUY_LAMPORTS = 10_000  # 0.00001 SOL


@dataclass(frozen=True)
class CurveConfig:
    """
    Injected configuration for one bonding curve engine. Every value that used to be
    a process-wide constant lives here with its default.

    :param initial_virtual_token_reserves: token base units seeded at launch
    :param initial_virtual_sol_reserves: lamports seeded at launch
    :param initial_real_token_reserves: tokens the curve may actually sell
    :param token_total_supply: constant for the life of the curve
    :param token_decimals: display decimals of the token
    :param fee_numerator: fee = floor(amount * fee_numerator / fee_denominator)
    :param fee_denominator: see fee_numerator
    :param creator_fee_share_bps: share of each fee attributed to the token creator
    :param graduation_threshold: real lamports at which the curve graduates
    :param migration_token_share_bps: share of total supply seeded into the migrated pool,
        taken from the tokens held back from the curve at launch
    :param max_price_impact_bps: protocol circuit breaker, not user configurable
    :param min_buy_lamports: smallest accepted buy
    :param min_sell_tokens: smallest accepted sell, in base units
    :param max_buy_lamports: optional per-trade cap on buys
    :param arithmetic_bits: width of the widened intermediate arithmetic
    """
    initial_virtual_token_reserves: int = INITIAL_VIRTUAL_TOKEN_RESERVES
    initial_virtual_sol_reserves: int = INITIAL_VIRTUAL_SOL_RESERVES
    initial_real_token_reserves: int = INITIAL_REAL_TOKEN_RESERVES
    token_total_supply: int = TOKEN_TOTAL_SUPPLY
    token_decimals: int = TOKEN_DECIMALS
    fee_numerator: int = 1
    fee_denominator: int = 100
    creator_fee_share_bps: int = 0
    graduation_threshold: int = GRADUATION_THRESHOLD
    migration_token_share_bps: int = MIGRATION_TOKEN_SHARE_BPS
    max_price_impact_bps: int = 1500
    min_buy_lamports: int = MIN_BUY_LAMPORTS
    min_sell_tokens: int = 1
    max_buy_lamports: Optional[int] = None
    arithmetic_bits: int = U128_BITS

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and f.name == "max_buy_lamports":
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"'{f.name}' must be an integer.")

        if self.initial_virtual_token_reserves <= 0:
            raise ValueError("Initial virtual token reserves must be positive.")
        if self.initial_virtual_sol_reserves <= 0:
            raise ValueError("Initial virtual SOL reserves must be positive.")
        if not 0 <= self.initial_real_token_reserves <= self.token_total_supply:
            raise ValueError("Initial real token reserves must be within the total supply.")
        if self.token_decimals < 0:
            raise ValueError("Token decimals must be non-negative.")
        if self.fee_denominator <= 0:
            raise ValueError("Fee denominator must be positive.")
        if not 0 <= self.fee_numerator < self.fee_denominator:
            raise ValueError("Fee numerator must be in [0, fee_denominator).")
        if not 0 <= self.creator_fee_share_bps <= BPS_DENOMINATOR:
            raise ValueError(f"Creator fee share must be in [0, {BPS_DENOMINATOR}].")
        if self.graduation_threshold <= 0:
            raise ValueError("Graduation threshold must be positive.")
        if not 0 <= self.migration_token_share_bps <= BPS_DENOMINATOR:
            raise ValueError(f"Migration token share must be in [0, {BPS_DENOMINATOR}].")
        held_back = self.token_total_supply - self.initial_real_token_reserves
        if self.token_total_supply * self.migration_token_share_bps // BPS_DENOMINATOR > held_back:
            raise ValueError("Migration token share exceeds the tokens held back from the curve.")
        if not 0 < self.max_price_impact_bps <= BPS_DENOMINATOR:
            raise ValueError(f"Max price impact must be in (0, {BPS_DENOMINATOR}].")
        if self.min_buy_lamports < 0 or self.min_sell_tokens < 0:
            raise ValueError("Minimum trade sizes must be non-negative.")
        if self.max_buy_lamports is not None and self.max_buy_lamports < self.min_buy_lamports:
            raise ValueError("Maximum buy must not be below the minimum buy.")
        if self.arithmetic_bits < 128:
            raise ValueError("Arithmetic width must be at least 128 bits.")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CurveConfig":
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown curve config keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Loads the YAML configuration file. The 'curve' section maps onto CurveConfig,
    the 'logging' section is handed to setup_logging.

    :raises FileNotFoundError: if the file does not exist
    :raises yaml.YAMLError: if the file is not valid YAML
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    if not isinstance(config_data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping.")

    config_data.setdefault("curve", {})
    config_data.setdefault("logging", {})
    return config_data


def load_curve_config(path: Union[str, Path]) -> CurveConfig:
    return CurveConfig.from_dict(load_config(path)["curve"])
