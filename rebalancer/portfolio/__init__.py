"""Portfolio helpers."""

from .allocation import TargetAllocation
from .position import Position
from .rebalance import RebalanceSuggestion, Rebalancer, rebalance
from .state import Portfolio

__all__ = [
    "Portfolio",
    "Position",
    "RebalanceSuggestion",
    "Rebalancer",
    "TargetAllocation",
    "rebalance",
]
