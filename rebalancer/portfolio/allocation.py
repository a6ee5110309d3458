"""Validated target allocations."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from rebalancer.errors import InvalidAllocation

from .position import Number, Position, as_decimal, exact_arithmetic

HUNDRED = Decimal(100)

Entry = Tuple[Decimal, Position]


@dataclass(frozen=True)
class TargetAllocation:
    """Percentages of total portfolio value per asset, e.g. 40% META / 60% AAPL.

    Construction is the only place the invariants are checked: every percentage
    is strictly positive, the percentages add up to exactly 100 and no asset
    name appears twice.
    """

    entries: Tuple[Entry, ...]

    def __post_init__(self) -> None:
        normalized = tuple((as_decimal(pct), asset) for pct, asset in self.entries)
        _validate(normalized)
        object.__setattr__(self, "entries", normalized)

    @classmethod
    def single(cls, position: Position) -> "TargetAllocation":
        """Allocate the whole portfolio to one asset."""
        return cls(((HUNDRED, position),))

    @classmethod
    def try_from(cls, entries: Iterable[Tuple[Number, Position]]) -> "TargetAllocation":
        return cls(tuple(entries))

    def contains(self, name: str) -> bool:
        return any(asset.name == name for _, asset in self.entries)

    def names(self) -> Tuple[str, ...]:
        return tuple(asset.name for _, asset in self.entries)

    def percentage_of(self, name: str) -> Optional[Decimal]:
        for pct, asset in self.entries:
            if asset.name == name:
                return pct
        return None

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def _validate(entries: Sequence[Entry]) -> None:
    for pct, asset in entries:
        if not pct.is_finite() or pct <= 0:
            raise InvalidAllocation(
                InvalidAllocation.NON_POSITIVE,
                f"Target percentage for {asset.name} must be positive, got {pct}",
            )

    with exact_arithmetic():
        total = sum((pct for pct, _ in entries), Decimal(0))
    if total != HUNDRED:
        raise InvalidAllocation(
            InvalidAllocation.SUM_MISMATCH,
            f"Target percentages must sum to 100, got {total}",
        )

    seen = set()
    for _, asset in entries:
        if asset.name in seen:
            raise InvalidAllocation(
                InvalidAllocation.DUPLICATE_NAME,
                f"{asset.name} appears more than once in the target allocation",
            )
        seen.add(asset.name)
