from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Iterator


@dataclass(frozen=True)
class CurveConfig:
    """Input parameters for a virtual-reserve curve. Consumed once by the curve constructor."""
    total_supply: int
    sell_amount: int
    vt: int
    mc_target_sats: int


@dataclass(frozen=True)
class CurveSnapshot:
    """Curve state at a given step: sats-side reserve x and token-side reserve y."""
    step: int
    x: int
    y: int

    @property
    def price_num(self) -> int:
        return self.x

    @property
    def price_den(self) -> int:
        return self.y

    def decimal_price(self, precision: int = 28) -> Decimal:
        """
        Renders x / y (sats per token base unit) as a Decimal with 'precision' significant digits.
        The curve itself never divides the price; this is for display and reporting only.
        """
        with localcontext() as ctx:
            ctx.prec = precision
            return Decimal(self.x) / Decimal(self.y)


@dataclass(frozen=True)
class TradeResult:
    """Outcome of a single mint: the step after the trade and the tokens received."""
    new_step: int
    tokens_out: int

    def __iter__(self) -> Iterator[int]:
        return iter((self.new_step, self.tokens_out))


@dataclass(frozen=True)
class MintResult:
    """One entry of a batch simulation: the step the trade started at and the tokens it received."""
    start_step: int
    tokens_out: int
