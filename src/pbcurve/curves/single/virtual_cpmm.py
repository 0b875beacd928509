import logging
from typing import Sequence

from pbcurve.common.errors import (
    ExceedsPoolError,
    InvalidConfigError,
    OutOfRangeError,
    ZeroInputError,
)
from pbcurve.common.math import U128_MAX, checked_mul, is_u128, saturating_add, saturating_mul, saturating_sub
from pbcurve.common.model import CurveConfig, CurveSnapshot, TradeResult
from pbcurve.curves.single.base import BondingCurve
from pbcurve.curves.utils.cpmm_curve_helper import CpmmCurveHelper as helper


logger = logging.getLogger(__name__)


def _require_int(name: str, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_amount(name: str, value: int) -> None:
    _require_int(name, value)
    if not is_u128(value):
        raise InvalidConfigError(f"{name} is not a u128 value: {value}")


class VirtualReserveCurve(BondingCurve):
    """
        A constant-product curve with virtual token reserves.

        Invariant:
          x * y = k
        where
          - x is the sats-side (conceptual) reserve
          - y is the token-side reserve = vt + (sell_amount - step)

        x0 is derived from the desired final FDV so that, once only the virtual reserve is left,
        the implied market cap (k / vt^2) * total_supply matches mc_target_sats up to floor rounding.

        All arithmetic is on integers bounded to the unsigned 128-bit range. Overflow raises
        InvalidConfigError instead of wrapping. The curve is immutable once built.
    """

    def __init__(self, config: CurveConfig):
        values = (
            ("total_supply", config.total_supply),
            ("sell_amount", config.sell_amount),
            ("vt", config.vt),
            ("mc_target_sats", config.mc_target_sats),
        )
        for name, value in values:
            if not is_u128(value):
                raise InvalidConfigError(f"{name} is not a u128 value: {value!r}")
            if value == 0:
                raise InvalidConfigError(f"{name} must be > 0")

        y0, x0, k = helper.derive_reserves(
            config.total_supply,
            config.sell_amount,
            config.vt,
            config.mc_target_sats,
        )

        self._total_supply = config.total_supply
        self._sell_amount = config.sell_amount
        self._vt = config.vt
        self._y0 = y0
        self._x0 = x0
        self._k = k
        logger.debug("Built curve: y0=%d x0=%d k=%d", y0, x0, k)

    @property
    def total_supply(self) -> int:
        return self._total_supply

    @property
    def sell_amount(self) -> int:
        return self._sell_amount

    @property
    def vt(self) -> int:
        return self._vt

    @property
    def y0(self) -> int:
        return self._y0

    @property
    def x0(self) -> int:
        return self._x0

    @property
    def k(self) -> int:
        return self._k

    def __repr__(self):
        return (
            f"VirtualReserveCurve(total_supply={self._total_supply}, sell_amount={self._sell_amount}, "
            f"vt={self._vt}, x0={self._x0}, y0={self._y0}, k={self._k})"
        )

    def max_step(self) -> int:
        return self._sell_amount

    def y_at(self, step: int) -> int:
        """
        Token-side reserve at 'step': vt + (sell_amount - step).
        Raises OutOfRangeError unless 0 <= step <= sell_amount.
        """
        _require_int("step", step)
        if step < 0 or step > self._sell_amount:
            raise OutOfRangeError(f"step {step} outside [0, {self._sell_amount}]")
        return self._vt + (self._sell_amount - step)

    def x_from_y(self, y: int) -> int:
        """Sats-side reserve for a token-side reserve: floor(k / y)."""
        _require_int("y", y)
        if y <= 0:
            raise OutOfRangeError("token-side reserve must be positive")
        return self._k // y

    def snapshot(self, step: int) -> CurveSnapshot:
        y = self.y_at(step)
        return CurveSnapshot(step=step, x=self.x_from_y(y), y=y)

    def mint(self, step: int, sats_in: int) -> TradeResult:
        """
        Buys tokens with 'sats_in' at 'step'.

        New token reserve is floor(k / (x + sats_in)) but never below vt, so the real reserve is
        exhausted exactly when the payment is large enough to push y down to the virtual floor.
        """
        tokens_out = self.asset_out_given_quote_in(step, sats_in)
        new_step = min(saturating_add(step, tokens_out), self._sell_amount)
        return TradeResult(new_step=new_step, tokens_out=tokens_out)

    def asset_out_given_quote_in(self, step: int, quote_in: int) -> int:
        """
        Tokens a payment of 'quote_in' sats would receive at 'step', without advancing any state.
        """
        _require_amount("quote_in", quote_in)
        if quote_in == 0:
            raise ZeroInputError("payment must be > 0")

        y = self.y_at(step)
        x = self.x_from_y(y)
        y_prime = helper.token_reserve_after(self._k, x, quote_in, self._vt)
        return saturating_sub(y, y_prime)

    def quote_in_given_asset_out(self, step: int, asset_out: int) -> int:
        """
        Sats required at 'step' to receive 'asset_out' tokens.

        floor(k / x) can skip token-reserve values where the curve is steep, so the returned
        payment is the smallest one whose output is at least 'asset_out'; it is exact whenever
        that output is reachable. Raises ExceedsPoolError if fewer than 'asset_out' tokens remain.
        """
        _require_amount("asset_out", asset_out)
        if asset_out == 0:
            raise ZeroInputError("asset amount must be > 0")

        y = self.y_at(step)
        remaining = self._sell_amount - step
        if asset_out > remaining:
            raise ExceedsPoolError(f"requested {asset_out} tokens but only {remaining} remain")

        x = self.x_from_y(y)
        x2 = helper.min_sats_reserve_for(self._k, y - asset_out)
        return x2 - x

    def cumulative_quote_to_step(self, step: int) -> int:
        """Total sats needed to move the curve from step 0 to 'step'."""
        x = self.x_from_y(self.y_at(step))
        return saturating_sub(x, self._x0)

    def total_raise_sats(self) -> int:
        """
        Total sats raised if the whole window [0, sell_amount] is sold: floor(k / vt) - x0.
        """
        x_final = self._k // self._vt
        return saturating_sub(x_final, self._x0)

    def final_mc_sats(self) -> int:
        """
        Fully diluted market cap once the curve is sold out: floor(k / vt^2) * total_supply,
        saturating at the u128 maximum.
        """
        vt_sq = checked_mul(self._vt, self._vt, "vt^2")
        p_final = self._k // vt_sq
        return saturating_mul(p_final, self._total_supply)

    def progress_at_step(self, step: int) -> int:
        """
        Integer percentage floor(step * 100 / total_supply).
        Measured against total_supply, so it stays below 100 at the last step whenever
        sell_amount < total_supply.
        """
        _require_int("step", step)
        if step < 0 or step > U128_MAX:
            raise OutOfRangeError(f"step {step} is not a u128 value")
        return saturating_mul(step, 100) // self._total_supply

    def avg_progress(self, steps: Sequence[int]) -> int:
        """
        Returns product(steps) // sum(steps). Despite the name this is not an arithmetic mean.
        """
        for s in steps:
            _require_amount("step", s)
        if not steps:
            raise ZeroInputError("no steps given")
        return helper.product_over_sum(steps)
