"""Suggested trade report builder."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

import pandas as pd

from rebalancer.portfolio import Portfolio, RebalanceSuggestion

COLUMNS = ["name", "action", "units", "price", "value"]


def _row(name: str, action: str, units: int, price: Optional[Decimal]) -> dict:
    return {
        "name": name,
        "action": action,
        "units": units,
        "price": price,
        "value": price * units if price is not None else None,
    }


def build_suggestion_report(suggestion: RebalanceSuggestion, portfolio: Portfolio) -> pd.DataFrame:
    """Return a DataFrame with one row per suggested trade, sells first.

    Sell prices come from the held units, buy prices from the target entries.
    Names the portfolio knows nothing about get an empty price and value.
    """

    targets = {asset.name: asset.current_price for _, asset in portfolio.allocation}
    rows: List[dict] = []
    for name in sorted(suggestion.to_sell):
        rows.append(_row(name, "SELL", suggestion.to_sell[name], portfolio.price_of(name)))
    for name in sorted(suggestion.to_buy):
        rows.append(_row(name, "BUY", suggestion.to_buy[name], targets.get(name)))

    return pd.DataFrame(rows, columns=COLUMNS)
