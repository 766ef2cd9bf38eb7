from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from flask import jsonify
from flask_openapi3 import Info, Tag
from flask_openapi3 import OpenAPI

from fairlaunch_core.common.config import CurveConfig
from fairlaunch_core.common.enums import OrderSide
from fairlaunch_core.common.errors import CurveError
from fairlaunch_core.common.logger import get_logger
from fairlaunch_core.common.model import CurveState, GraduationEvent, TradeQuote, TradeRequest
from fairlaunch_core.curves.constant_product import ConstantProductBondingCurve
from fairlaunch_core.display.quote_formatter import QuoteFormatter


logger = get_logger(__name__)

info = Info(title="Bonding Curve Quote API", version="1.0.0")


class CurveTransactionAction(Enum):
    buy = "buy"
    sell = "sell"


class CurveSnapshot(BaseModel):
    virtual_token_reserves: int = Field(ge=0, description="Virtual token reserves, base units")
    virtual_sol_reserves: int = Field(ge=0, description="Virtual SOL reserves, lamports")
    real_token_reserves: int = Field(ge=0, description="Real token reserves, base units")
    real_sol_reserves: int = Field(ge=0, description="Real SOL reserves, lamports")
    token_total_supply: int = Field(ge=0, description="Total token supply, base units")
    complete: bool = Field(False, description="True once the curve has graduated")


class CurveQuoteRequest(BaseModel):
    state: CurveSnapshot = Field(description="Curve snapshot to price against")
    action: CurveTransactionAction = Field(description="API action to perform")
    amount: int = Field(description="Lamports to spend (buy) or token base units to sell (sell)")
    slippage_bps: int = Field(100, description="Maximum tolerated adverse movement, basis points")


class CurveStatusRequest(BaseModel):
    state: CurveSnapshot = Field(description="Curve snapshot to describe")


curve_quote_tag = Tag(
    name="Bonding Curve Quote",
    description="Price a buy or sell against a curve snapshot and get the resulting state",
)

curve_status_tag = Tag(
    name="Bonding Curve Status",
    description="Get the price, market cap and graduation progress of a curve snapshot",
)


def _event_to_dict(event: Optional[GraduationEvent]) -> Optional[Dict[str, Any]]:
    if event is None:
        return None
    return {
        "final_state": event.final_state.to_dict(),
        "graduation_threshold": event.graduation_threshold,
        "sol_to_migrate": event.sol_to_migrate,
        "tokens_to_migrate": event.tokens_to_migrate,
        "initial_lp_supply": event.initial_lp_supply,
    }


def quote_to_dict(trade_quote: TradeQuote) -> Dict[str, Any]:
    return {
        "side": str(trade_quote.side),
        "input_amount": trade_quote.input_amount,
        "output_amount": trade_quote.output_amount,
        "fee_amount": trade_quote.fee_amount,
        "creator_fee": trade_quote.creator_fee,
        "platform_fee": trade_quote.platform_fee,
        "price_impact_bps": trade_quote.price_impact_bps,
        "minimum_output_amount": trade_quote.minimum_output_amount,
        "resulting_state": trade_quote.resulting_state.to_dict(),
        "graduation_event": _event_to_dict(trade_quote.graduation_event),
    }


def create_app(config: Optional[CurveConfig] = None) -> OpenAPI:
    """
    Builds the quote API around one engine. The API is stateless: callers send the
    snapshot with every request and commit the resulting state themselves.
    """
    config = config or CurveConfig()
    curve = ConstantProductBondingCurve(config)
    formatter = QuoteFormatter(config)

    app = OpenAPI(__name__, info=info)

    @app.post("/curve/quote", summary="Curve Quote", tags=[curve_quote_tag])
    def quote(body: CurveQuoteRequest):
        """
        Prices a buy or sell on a curve snapshot
        """
        state = CurveState.from_dict(body.state.model_dump())
        request = TradeRequest(
            side=OrderSide.from_str(body.action.value),
            input_amount=body.amount,
            slippage_bps=body.slippage_bps,
        )
        try:
            trade_quote = curve.quote(state, request)
        except CurveError as e:
            return jsonify(e.to_dict()), 400

        result = quote_to_dict(trade_quote)
        result["display"] = formatter.format_quote(trade_quote)
        return jsonify(result)

    @app.post("/curve/status", summary="Curve Status", tags=[curve_status_tag])
    def status(body: CurveStatusRequest):
        """
        Returns the price, market cap and graduation progress of a curve snapshot,
        plus the largest buy and sell the impact ceiling allows.
        """
        state = CurveState.from_dict(body.state.model_dump())
        progress = curve.graduation.progress_info(state)
        return jsonify({
            "phase": str(state.phase),
            "graduation": {
                "required": progress.required,
                "current": progress.current,
                "remaining": progress.remaining,
                "progress_bps": progress.progress_bps,
                "is_ready": progress.is_ready,
            },
            "max_buy_lamports": curve.max_trade_size(state, OrderSide.BUY),
            "max_sell_tokens": curve.max_trade_size(state, OrderSide.SELL),
            "display": formatter.summarize(state),
        })

    logger.info("Quote API created", graduation_threshold=config.graduation_threshold)
    return app


app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
