from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from rebalancer.config import load_config
from rebalancer.data import load_holdings_csv, positions_from_config
from rebalancer.errors import HoldingsFileError, InvalidPrice
from rebalancer.portfolio import Position


def _write_csv(path: Path, rows: list[dict]):
    df = pd.DataFrame(rows)
    df.to_csv(path, index=False)


def test_csv_rows_expand_into_units(tmp_path):
    path = tmp_path / "holdings.csv"
    _write_csv(path, [{"name": "A", "price": "10", "quantity": 2}, {"name": "B", "price": "0.1", "quantity": 1}])

    positions = load_holdings_csv(path)

    assert positions == [Position("A", 10), Position("A", 10), Position("B", "0.1")]


def test_csv_headers_are_case_insensitive_and_quantity_optional(tmp_path):
    path = tmp_path / "holdings.csv"
    path.write_text("Name,Price\nMETA,25\nMETA,25\n")

    positions = load_holdings_csv(path)

    assert [p.name for p in positions] == ["META", "META"]


def test_csv_missing_price_column(tmp_path):
    path = tmp_path / "holdings.csv"
    path.write_text("name,quantity\nA,1\n")
    with pytest.raises(ValueError, match="price"):
        load_holdings_csv(path)


def test_csv_negative_price_rejected(tmp_path):
    path = tmp_path / "holdings.csv"
    path.write_text("name,price,quantity\nA,-3,1\n")
    with pytest.raises(InvalidPrice):
        load_holdings_csv(path)


def test_positions_from_inline_holdings():
    cfg = load_config(
        {
            "holdings": [{"name": "A", "price": 10, "quantity": 3}],
            "targets": [{"name": "A", "price": 10, "percentage": 100}],
        }
    )
    assert positions_from_config(cfg) == Position.units("A", 10, 3)


def test_positions_from_csv_config(tmp_path):
    path = tmp_path / "holdings.csv"
    path.write_text("name,price,quantity\nCASH,1,5\n")
    cfg = load_config(
        {
            "holdings_csv": str(path),
            "targets": [{"name": "A", "price": 10, "percentage": 100}],
        }
    )
    assert positions_from_config(cfg) == Position.units("CASH", 1, 5)


def test_csv_fractional_quantity_rejected(tmp_path):
    path = tmp_path / "holdings.csv"
    path.write_text("name,price,quantity\nA,10,2\nB,5,2.7\n")
    with pytest.raises(HoldingsFileError, match="line 3"):
        load_holdings_csv(path)


def test_csv_whole_float_quantity_accepted(tmp_path):
    path = tmp_path / "holdings.csv"
    path.write_text("name,price,quantity\nA,10,2.0\n")
    assert load_holdings_csv(path) == Position.units("A", 10, 2)


def test_csv_non_numeric_price_rejected(tmp_path):
    path = tmp_path / "holdings.csv"
    path.write_text("name,price,quantity\nA,ten,1\n")
    with pytest.raises(InvalidPrice):
        load_holdings_csv(path)
