import json
import subprocess
import sys
from pathlib import Path

import pandas as pd


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "rebalancer.cli", *args],
        capture_output=True,
        text=True,
        cwd=Path(__file__).resolve().parents[1],
    )


def test_cli_suggest_json(tmp_path):
    config = tmp_path / "config.yml"
    config.write_text(
        """
holdings:
  - {name: CASH, price: 1, quantity: 100}
targets:
  - {name: META, price: 25, percentage: 100}
"""
    )

    result = _run("suggest", "--config", str(config))

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout.strip())
    assert payload == {"total_value": "100", "to_buy": {"META": 4}, "to_sell": {"CASH": 100}}


def test_cli_writes_report_csv(tmp_path):
    (tmp_path / "holdings.csv").write_text("name,price,quantity\nA,10,4\nB,15,4\n")
    config = tmp_path / "config.yml"
    config.write_text(
        """
holdings_csv: holdings.csv
targets:
  - {name: A, price: 10, percentage: 50}
  - {name: B, price: 15, percentage: 50}
"""
    )
    output = tmp_path / "report.csv"

    result = _run("suggest", "--config", str(config), "--output", str(output))

    assert result.returncode == 0, result.stderr
    df = pd.read_csv(output)
    assert df.to_dict("records") == [
        {"name": "B", "action": "SELL", "units": 1, "price": 15, "value": 15},
        {"name": "A", "action": "BUY", "units": 1, "price": 10, "value": 10},
    ]


def test_cli_rejects_invalid_allocation(tmp_path):
    config = tmp_path / "config.yml"
    config.write_text(
        """
targets:
  - {name: A, price: 10, percentage: 90}
"""
    )

    result = _run("suggest", "--config", str(config))

    assert result.returncode == 2
    assert "sum to 100" in result.stderr


def test_cli_rejects_non_numeric_csv_price(tmp_path):
    (tmp_path / "holdings.csv").write_text("name,price\nA,ten\n")
    config = tmp_path / "config.yml"
    config.write_text(
        """
holdings_csv: holdings.csv
targets:
  - {name: A, price: 10, percentage: 100}
"""
    )

    result = _run("suggest", "--config", str(config))

    assert result.returncode == 2
    assert "Traceback" not in result.stderr
    assert "Invalid price for A" in result.stderr


def test_cli_rejects_fractional_csv_quantity(tmp_path):
    (tmp_path / "holdings.csv").write_text("name,price,quantity\nA,10,1.5\n")
    config = tmp_path / "config.yml"
    config.write_text(
        """
holdings_csv: holdings.csv
targets:
  - {name: A, price: 10, percentage: 100}
"""
    )

    result = _run("suggest", "--config", str(config))

    assert result.returncode == 2
    assert "whole number" in result.stderr
