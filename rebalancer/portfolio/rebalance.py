"""Rebalance logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, Optional

from .allocation import HUNDRED, TargetAllocation
from .position import Position, exact_arithmetic
from .state import held_units, total_value


@dataclass
class RebalanceSuggestion:
    """Whole-unit trades per asset name. Counts are positive, keys never overlap."""

    to_buy: Dict[str, int] = field(default_factory=dict)
    to_sell: Dict[str, int] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.to_buy and not self.to_sell

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {"to_buy": dict(self.to_buy), "to_sell": dict(self.to_sell)}


def target_units(total: Decimal, percentage: Decimal, price: Decimal) -> int:
    """Largest whole number of units whose cost stays within ``percentage`` of ``total``."""

    if price == 0:
        return 0
    with exact_arithmetic():
        target_money = total * percentage / HUNDRED
        # floor; both operands are non-negative so // truncates the right way
        return int(target_money // price)


class Rebalancer:
    """Conservative rebalancer: never buys past an asset's target share.

    Money that cannot buy a whole unit without overshooting stays unallocated.
    Targets are measured against the value of the current holdings, before any
    of the suggested sells.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def suggest(self, positions: Iterable[Position], allocation: TargetAllocation) -> RebalanceSuggestion:
        positions = tuple(positions)
        suggestion = RebalanceSuggestion()
        total = total_value(positions)
        if total == 0:
            self.logger.debug("Portfolio has no value; no trades suggested")
            return suggestion

        held = held_units(positions)
        self.logger.debug(f"Rebalancing {len(positions)} units across {len(held)} assets, total value {total}")

        for name, count in held.items():
            if not allocation.contains(name):
                self.logger.debug(f"Exiting {name}: {count} units not in target allocation")
                suggestion.to_sell[name] = count

        for percentage, asset in allocation:
            wanted = target_units(total, percentage, asset.current_price)
            current = held.get(asset.name, 0)
            if wanted > current:
                suggestion.to_buy[asset.name] = wanted - current
            elif wanted < current:
                suggestion.to_sell[asset.name] = current - wanted
            else:
                continue
            self.logger.debug(
                f"{asset.name}: target {percentage}% -> {wanted} units @ {asset.current_price}, holding {current}"
            )

        return suggestion


def rebalance(positions: Iterable[Position], allocation: TargetAllocation) -> RebalanceSuggestion:
    return Rebalancer().suggest(positions, allocation)
