from typing import Sequence, Tuple

from pbcurve.common.errors import InvalidConfigError, ZeroInputError
from pbcurve.common.math import checked_add, checked_mul


class CpmmCurveHelper:
    """A separate helper class for the integer arithmetic used by VirtualReserveCurve."""

    @staticmethod
    def derive_reserves(total_supply: int, sell_amount: int, vt: int, mc_target_sats: int) -> Tuple[int, int, int]:
        """
        Back-solves the initial sats-side reserve from the final FDV target:
            MC_final ~= (x0 * y0 / vt^2) * total_supply
            => x0 = floor(mc_target_sats * vt^2 / (y0 * total_supply))
        Every product is formed before the single division. Returns (y0, x0, k).
        """
        y0 = checked_add(vt, sell_amount, "y0 = vt + sell_amount")
        vt_sq = checked_mul(vt, vt, "vt^2")
        num = checked_mul(mc_target_sats, vt_sq, "mc_target_sats * vt^2")
        den = checked_mul(y0, total_supply, "y0 * total_supply")
        if den == 0:
            raise InvalidConfigError("y0 * total_supply is zero")

        x0 = num // den
        if x0 == 0:
            raise InvalidConfigError("derived x0 is zero; raise mc_target_sats or vt")

        k = checked_mul(x0, y0, "k = x0 * y0")
        return y0, x0, k

    @staticmethod
    def token_reserve_after(k: int, x: int, sats_in: int, vt: int) -> int:
        """
        Token-side reserve after adding 'sats_in' to 'x': floor(k / (x + sats_in)), never below vt.
        """
        x2 = checked_add(x, sats_in, "x + sats_in")
        y_raw = k // x2
        return max(y_raw, vt)

    @staticmethod
    def min_sats_reserve_for(k: int, y_target: int) -> int:
        """
        Smallest x2 with floor(k / x2) <= y_target, i.e. floor(k / (y_target + 1)) + 1.
        """
        return k // (y_target + 1) + 1

    @staticmethod
    def product_over_sum(values: Sequence[int]) -> int:
        """
        floor(product(values) / sum(values)), both checked against the u128 width.
        """
        product = 1
        total = 0
        for v in values:
            product = checked_mul(product, v, "product of steps")
            total = checked_add(total, v, "sum of steps")
        if total == 0:
            raise ZeroInputError("sum of steps is zero")
        return product // total
