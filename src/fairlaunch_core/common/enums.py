from enum import Enum


class OrderSide(Enum):
    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def from_str(cls, side_str):
        if side_str.upper() == OrderSide.BUY.name:
            return OrderSide.BUY
        elif side_str.upper() == OrderSide.SELL.name:
            return OrderSide.SELL
        else:
            raise NotImplementedError(f"No order side enum for {side_str}")

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()


class CurvePhase(Enum):
    ACTIVE = "ACTIVE"
    GRADUATED = "GRADUATED"

    @classmethod
    def from_complete(cls, complete: bool) -> "CurvePhase":
        """
        Maps the on-ledger 'complete' flag onto the curve lifecycle.
        :param complete: bool
        :return: CurvePhase
        """
        return CurvePhase.GRADUATED if complete else CurvePhase.ACTIVE

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()


class ErrorKind(Enum):
    INVALID_AMOUNT = "InvalidAmount"
    INVALID_SLIPPAGE = "InvalidSlippage"
    INSUFFICIENT_LIQUIDITY = "InsufficientLiquidity"
    SLIPPAGE_EXCEEDED = "SlippageExceeded"
    CURVE_COMPLETE = "CurveComplete"
    EMPTY_RESERVES = "EmptyReserves"
    OVERFLOW = "Overflow"
    UNDERFLOW = "Underflow"
    DIVISION_BY_ZERO = "DivisionByZero"

    def __str__(self):
        return self.value

    def __repr__(self):
        return self.__str__()
