"""Portfolio snapshot representation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Tuple

from .allocation import TargetAllocation
from .position import Position, exact_arithmetic

if TYPE_CHECKING:
    from .rebalance import RebalanceSuggestion, Rebalancer


def held_units(positions: Iterable[Position]) -> Dict[str, int]:
    return dict(Counter(pos.name for pos in positions))


def total_value(positions: Iterable[Position]) -> Decimal:
    with exact_arithmetic():
        return sum((pos.current_price for pos in positions), Decimal(0))


@dataclass(frozen=True)
class Portfolio:
    """Held positions together with the allocation they should converge to."""

    positions: Tuple[Position, ...]
    allocation: TargetAllocation

    def __post_init__(self) -> None:
        object.__setattr__(self, "positions", tuple(self.positions))

    def held_units(self) -> Dict[str, int]:
        return held_units(self.positions)

    def total_value(self) -> Decimal:
        return total_value(self.positions)

    def price_of(self, name: str) -> Optional[Decimal]:
        """Price of the first recorded unit of ``name``, if held."""
        for pos in self.positions:
            if pos.name == name:
                return pos.current_price
        return None

    def rebalance(self, rebalancer: Optional["Rebalancer"] = None) -> "RebalanceSuggestion":
        from .rebalance import Rebalancer

        engine = rebalancer or Rebalancer()
        return engine.suggest(self.positions, self.allocation)
