"""Domain errors raised while building rebalancing inputs."""

from __future__ import annotations

from typing import Any


class RebalancerError(ValueError):
    """Base class for invalid rebalancing inputs."""


class InvalidAllocation(RebalancerError):
    """Raised when a target allocation breaks one of its invariants."""

    SUM_MISMATCH = "sum_mismatch"
    NON_POSITIVE = "non_positive"
    DUPLICATE_NAME = "duplicate_name"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class InvalidPrice(RebalancerError):
    """Raised when a position is recorded with a negative or non-finite price."""

    def __init__(self, name: str, price: Any):
        super().__init__(f"Invalid price for {name}: {price}")
        self.name = name
        self.price = price


class HoldingsFileError(RebalancerError):
    """Raised when a holdings file is missing columns or has unusable rows."""
