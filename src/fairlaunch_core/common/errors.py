from fairlaunch_core.common.enums import ErrorKind


class CurveError(ValueError):
    """Base class for every rejected quote. Never fatal, never retried by the engine."""
    kind: ErrorKind = None

    def __init__(self, message: str = None):
        super().__init__(message or self.kind.value)

    def to_dict(self) -> dict:
        return {"error": self.kind.value, "message": str(self)}


class InvalidAmountError(CurveError):
    kind = ErrorKind.INVALID_AMOUNT


class InvalidSlippageError(InvalidAmountError):
    """Slippage basis points outside [0, 10000)."""
    kind = ErrorKind.INVALID_SLIPPAGE


class InsufficientLiquidityError(CurveError):
    kind = ErrorKind.INSUFFICIENT_LIQUIDITY


class SlippageExceededError(CurveError):
    """Raised when a trade breaches the protocol price-impact ceiling."""
    kind = ErrorKind.SLIPPAGE_EXCEEDED


class CurveCompleteError(CurveError):
    kind = ErrorKind.CURVE_COMPLETE


class EmptyReservesError(CurveError):
    kind = ErrorKind.EMPTY_RESERVES


class AmountOverflowError(CurveError):
    kind = ErrorKind.OVERFLOW


class AmountUnderflowError(CurveError):
    kind = ErrorKind.UNDERFLOW


class DivisionByZeroError(CurveError):
    kind = ErrorKind.DIVISION_BY_ZERO
