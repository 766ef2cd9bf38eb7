import pytest

from fairlaunch_core.common.enums import ErrorKind
from fairlaunch_core.common.errors import (
    AmountOverflowError,
    AmountUnderflowError,
    CurveCompleteError,
    CurveError,
    DivisionByZeroError,
    EmptyReservesError,
    InsufficientLiquidityError,
    InvalidAmountError,
    InvalidSlippageError,
    SlippageExceededError,
)


@pytest.mark.parametrize(
    "error_cls, kind",
    [
        (InvalidAmountError, ErrorKind.INVALID_AMOUNT),
        (InvalidSlippageError, ErrorKind.INVALID_SLIPPAGE),
        (InsufficientLiquidityError, ErrorKind.INSUFFICIENT_LIQUIDITY),
        (SlippageExceededError, ErrorKind.SLIPPAGE_EXCEEDED),
        (CurveCompleteError, ErrorKind.CURVE_COMPLETE),
        (EmptyReservesError, ErrorKind.EMPTY_RESERVES),
        (AmountOverflowError, ErrorKind.OVERFLOW),
        (AmountUnderflowError, ErrorKind.UNDERFLOW),
        (DivisionByZeroError, ErrorKind.DIVISION_BY_ZERO),
    ]
)
def test_every_error_carries_its_kind(error_cls, kind):
    error = error_cls()
    assert error.kind == kind
    assert isinstance(error, CurveError)
    assert isinstance(error, ValueError)
    assert str(error) == kind.value


def test_slippage_is_an_amount_error():
    assert issubclass(InvalidSlippageError, InvalidAmountError)


def test_to_dict():
    error = CurveCompleteError("Curve graduated.")
    assert error.to_dict() == {"error": "CurveComplete", "message": "Curve graduated."}
