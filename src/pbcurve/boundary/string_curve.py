from contextlib import contextmanager
from typing import Dict, List, Sequence

from pbcurve.boundary.codec import BoundaryError, kind_message, parse_u128_dec, u128_to_str
from pbcurve.common.enums import BoundaryErrorType
from pbcurve.common.errors import CurveError
from pbcurve.common.model import CurveConfig
from pbcurve.curves.single.virtual_cpmm import VirtualReserveCurve


@contextmanager
def _translate(error_type: BoundaryErrorType):
    try:
        yield
    except CurveError as e:
        raise BoundaryError(kind_message(e.kind), error_type, e.kind) from e


class StringCurve:
    """
    VirtualReserveCurve behind a decimal-string interface, for hosts that cannot hold u128 values natively.
    Every argument and every result is a base-10 string; every failure is a BoundaryError.
    """

    def __init__(self, total_supply: str, sell_amount: str, vt: str, mc_target_sats: str):
        error_type = BoundaryErrorType.CREATE
        config = CurveConfig(
            total_supply=parse_u128_dec(total_supply, error_type),
            sell_amount=parse_u128_dec(sell_amount, error_type),
            vt=parse_u128_dec(vt, error_type),
            mc_target_sats=parse_u128_dec(mc_target_sats, error_type),
        )
        with _translate(error_type):
            self._inner = VirtualReserveCurve(config)

    @property
    def inner(self) -> VirtualReserveCurve:
        return self._inner

    def parameters(self) -> Dict[str, str]:
        curve = self._inner
        return {
            "total_supply": u128_to_str(curve.total_supply),
            "sell_amount": u128_to_str(curve.sell_amount),
            "vt": u128_to_str(curve.vt),
            "x0": u128_to_str(curve.x0),
            "y0": u128_to_str(curve.y0),
            "k": u128_to_str(curve.k),
        }

    def snapshot(self, step: str) -> Dict[str, str]:
        error_type = BoundaryErrorType.SNAPSHOT
        step_u = parse_u128_dec(step, error_type)
        with _translate(error_type):
            snap = self._inner.snapshot(step_u)
        return {
            "step": u128_to_str(snap.step),
            "x": u128_to_str(snap.x),
            "y": u128_to_str(snap.y),
        }

    def total_raise_sats(self) -> str:
        return u128_to_str(self._inner.total_raise_sats())

    def final_mc_sats(self) -> str:
        with _translate(BoundaryErrorType.FINAL_MC):
            return u128_to_str(self._inner.final_mc_sats())

    def progress_at_step(self, step: str) -> str:
        error_type = BoundaryErrorType.PROGRESS
        step_u = parse_u128_dec(step, error_type)
        with _translate(error_type):
            return u128_to_str(self._inner.progress_at_step(step_u))

    def asset_out_given_quote_in(self, step: str, quote_in: str) -> str:
        error_type = BoundaryErrorType.ASSET_OUT
        step_u = parse_u128_dec(step, error_type)
        quote_u = parse_u128_dec(quote_in, error_type)
        with _translate(error_type):
            return u128_to_str(self._inner.asset_out_given_quote_in(step_u, quote_u))

    def quote_in_given_asset_out(self, step: str, asset_out: str) -> str:
        error_type = BoundaryErrorType.QUOTE_IN
        step_u = parse_u128_dec(step, error_type)
        asset_u = parse_u128_dec(asset_out, error_type)
        with _translate(error_type):
            return u128_to_str(self._inner.quote_in_given_asset_out(step_u, asset_u))

    def cumulative_quote_to_step(self, step: str) -> str:
        error_type = BoundaryErrorType.CUMULATIVE_QUOTE
        step_u = parse_u128_dec(step, error_type)
        with _translate(error_type):
            return u128_to_str(self._inner.cumulative_quote_to_step(step_u))

    def simulate_mints(self, mints: Sequence[str]) -> List[Dict[str, str]]:
        """Batch form: parses every amount first, then runs the whole simulation in one call."""
        error_type = BoundaryErrorType.SIMULATE_MINTS
        parsed = [parse_u128_dec(m, error_type) for m in mints]
        with _translate(error_type):
            results = self._inner.simulate_mints(parsed)
        return [
            {"start_step": u128_to_str(r.start_step), "tokens_out": u128_to_str(r.tokens_out)}
            for r in results
        ]
