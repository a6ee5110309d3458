"""Holdings sources for a rebalancing run."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, List

import pandas as pd

from rebalancer.config import AppConfig
from rebalancer.errors import HoldingsFileError
from rebalancer.portfolio import Position

logger = logging.getLogger(__name__)

_REQUIRED_COLS = ["name", "price"]


def _read_holdings(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path, dtype={"name": str, "price": str}, keep_default_na=False)
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [col for col in _REQUIRED_COLS if col not in df.columns]
    if missing:
        raise HoldingsFileError(f"{path} is missing column(s): {', '.join(missing)}")
    if "quantity" not in df.columns:
        df["quantity"] = 1
    return df[["name", "price", "quantity"]]


def _quantity(value: Any, path: Path, line: int) -> int:
    """Whole number of units on a CSV line; fractional units are not supported."""

    try:
        qty = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise HoldingsFileError(f"{path} line {line}: quantity {value!r} is not a number") from exc
    if not qty.is_finite() or qty != qty.to_integral_value() or qty < 0:
        raise HoldingsFileError(f"{path} line {line}: quantity must be a non-negative whole number, got {value}")
    return int(qty)


def load_holdings_csv(path: str | Path) -> List[Position]:
    """Read ``name,price[,quantity]`` rows and expand each into unit positions."""

    path = Path(path)
    df = _read_holdings(path)
    positions: List[Position] = []
    # line 1 is the header
    for line, row in enumerate(df.itertuples(index=False), start=2):
        quantity = _quantity(row.quantity, path, line)
        positions.extend(Position.units(str(row.name).strip(), str(row.price).strip(), quantity))
    logger.info(f"Loaded {len(positions)} units from {len(df)} rows in {path}")
    return positions


def positions_from_config(config: AppConfig) -> List[Position]:
    if config.holdings_csv is not None:
        return load_holdings_csv(config.holdings_csv)
    positions: List[Position] = []
    for holding in config.holdings:
        positions.extend(Position.units(holding.name, holding.price, holding.quantity))
    logger.debug(f"Built {len(positions)} units from {len(config.holdings)} configured holdings")
    return positions
