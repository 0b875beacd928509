from abc import ABC, abstractmethod
from typing import Iterable, List

from pbcurve.common.model import CurveSnapshot, MintResult, TradeResult


class BondingCurve(ABC):
    """Abstract base class defining the read-only interface of a step-indexed bonding curve."""

    @abstractmethod
    def max_step(self) -> int:
        """
        Returns the last valid step of the curve (the number of tokens sold over the whole curve).
        """
        pass

    @abstractmethod
    def snapshot(self, step: int) -> CurveSnapshot:
        """
        Returns the reserve state of the curve at 'step'.

        :param step: int - Number of tokens already sold.
        :return: CurveSnapshot: (step, x, y) at that step.
        """
        pass

    @abstractmethod
    def mint(self, step: int, sats_in: int) -> TradeResult:
        """
        Applies a payment of 'sats_in' at 'step' and returns the resulting step and tokens received.
        The curve itself is never mutated; the caller threads the returned step forward.

        :param step: int - Step the trade starts at.
        :param sats_in: int - Payment amount in sats.
        :return: TradeResult (new_step, tokens_out).
        """
        pass

    def simulate_mints(self, mints: Iterable[int]) -> List[MintResult]:
        """
        Replays 'mints' in order starting at step 0, feeding each trade's resulting step into the next.
        Any failing trade fails the whole batch; no partial results are returned.

        :param mints: iterable of sats amounts
        :return: list of MintResult(start_step, tokens_out), in input order
        """
        current_step = 0
        results = []
        for sats_in in mints:
            new_step, tokens_out = self.mint(current_step, sats_in)
            results.append(MintResult(start_step=current_step, tokens_out=tokens_out))
            current_step = new_step
        return results
