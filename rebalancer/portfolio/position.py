"""Held units and the numeric coercion shared by the portfolio types."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Any, List, Union

from rebalancer.errors import InvalidPrice

Number = Union[Decimal, int, float, str]


def as_decimal(value: Any) -> Decimal:
    """Convert an amount to Decimal, going through str() for floats so 0.1 stays 0.1."""

    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("booleans are not amounts")
    if isinstance(value, float):
        value = str(value)
    if not isinstance(value, (int, str)):
        raise TypeError(f"cannot convert {type(value).__name__} to Decimal")
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"not a number: {value!r}") from exc


def exact_arithmetic():
    """Decimal context where sums, products and terminating divisions are never rounded.

    Inexact is trapped, so anything that would have been rounded raises instead.
    """

    return localcontext(
        Context(
            prec=MAX_PREC,
            Emax=MAX_EMAX,
            Emin=MIN_EMIN,
            traps=[Inexact, InvalidOperation, DivisionByZero, Overflow],
        )
    )


@dataclass(frozen=True)
class Position:
    """One unit of an asset at the price it was recorded.

    Zero prices are accepted; negative, non-finite or non-numeric prices raise InvalidPrice.
    """

    name: str
    current_price: Decimal

    def __post_init__(self) -> None:
        try:
            price = as_decimal(self.current_price)
        except (TypeError, ValueError) as exc:
            raise InvalidPrice(self.name, self.current_price) from exc
        if not price.is_finite() or price < 0:
            raise InvalidPrice(self.name, self.current_price)
        object.__setattr__(self, "current_price", price)

    @classmethod
    def units(cls, name: str, price: Number, quantity: int) -> List["Position"]:
        if quantity < 0:
            raise ValueError(f"quantity for {name} must be non-negative, got {quantity}")
        unit = cls(name, price)
        return [unit] * quantity
