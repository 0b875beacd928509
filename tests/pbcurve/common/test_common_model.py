import dataclasses

import pytest
from decimal import Decimal

from pbcurve.common.model import CurveConfig, CurveSnapshot, MintResult, TradeResult


class TestCurveConfig:
    def test_fields(self):
        config = CurveConfig(total_supply=10, sell_amount=8, vt=3, mc_target_sats=100)
        assert config.total_supply == 10
        assert config.sell_amount == 8
        assert config.vt == 3
        assert config.mc_target_sats == 100

    def test_frozen(self):
        config = CurveConfig(total_supply=10, sell_amount=8, vt=3, mc_target_sats=100)
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.vt = 4


class TestCurveSnapshot:
    def test_price_pair(self):
        snap = CurveSnapshot(step=5, x=7, y=3)
        assert snap.price_num == 7
        assert snap.price_den == 3

    @pytest.mark.parametrize(
        "precision, expected",
        [
            (28, Decimal("2.333333333333333333333333333")),
            (4, Decimal("2.333")),
            (1, Decimal("2")),
        ],
    )
    def test_decimal_price(self, precision, expected):
        assert CurveSnapshot(step=0, x=7, y=3).decimal_price(precision) == expected

    def test_value_equality(self):
        assert CurveSnapshot(step=1, x=2, y=3) == CurveSnapshot(step=1, x=2, y=3)


class TestTradeResult:
    def test_unpacks_as_pair(self):
        new_step, tokens_out = TradeResult(new_step=12, tokens_out=4)
        assert (new_step, tokens_out) == (12, 4)


class TestMintResult:
    def test_fields(self):
        result = MintResult(start_step=3, tokens_out=9)
        assert result.start_step == 3
        assert result.tokens_out == 9
