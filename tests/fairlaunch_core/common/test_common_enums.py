import pytest

from fairlaunch_core.common.enums import CurvePhase, ErrorKind, OrderSide


class TestOrderSide:
    @pytest.mark.parametrize("side_str, expected", [
        ("BUY", OrderSide.BUY),
        ("buy", OrderSide.BUY),
        ("Sell", OrderSide.SELL),
    ])
    def test_from_str(self, side_str, expected):
        assert OrderSide.from_str(side_str) == expected

    def test_from_str_invalid(self):
        with pytest.raises(NotImplementedError, match="No order side enum for HOLD"):
            OrderSide.from_str("HOLD")

    def test_str_and_repr(self):
        assert str(OrderSide.BUY) == "BUY"
        assert repr(OrderSide.SELL) == "SELL"


class TestCurvePhase:
    def test_from_complete(self):
        assert CurvePhase.from_complete(False) == CurvePhase.ACTIVE
        assert CurvePhase.from_complete(True) == CurvePhase.GRADUATED

    def test_str(self):
        assert str(CurvePhase.GRADUATED) == "GRADUATED"


class TestErrorKind:
    def test_str_is_wire_value(self):
        assert str(ErrorKind.DIVISION_BY_ZERO) == "DivisionByZero"
