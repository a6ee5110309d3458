"""Command line entry points."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from rebalancer.config import load_config
from rebalancer.data import positions_from_config
from rebalancer.errors import RebalancerError
from rebalancer.portfolio import Portfolio
from rebalancer.reports import build_suggestion_report

logger = logging.getLogger("rebalancer")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _suggest(config_path: Path, fmt: str, output: Path | None) -> None:
    config = load_config(config_path)
    configure_logging(config.logging.level)
    portfolio = Portfolio(positions=tuple(positions_from_config(config)), allocation=config.allocation())
    suggestion = portfolio.rebalance()
    logger.info(f"Suggested {len(suggestion.to_buy)} buys and {len(suggestion.to_sell)} sells")

    report = build_suggestion_report(suggestion, portfolio)
    if output:
        report.to_csv(output, index=False)
        print(f"Saved report to {output}")
    elif fmt == "table":
        print(report.to_string(index=False) if not report.empty else "Portfolio already balanced")
    else:
        payload = {"total_value": portfolio.total_value(), **suggestion.to_dict()}
        print(json.dumps(payload, default=str))


def main() -> None:
    parser = argparse.ArgumentParser(description="Portfolio rebalancer CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    suggest_parser = subparsers.add_parser("suggest", help="Suggest whole-unit trades toward the target")
    suggest_parser.add_argument("--config", required=True, type=Path)
    suggest_parser.add_argument("--format", choices=["json", "table"], default="json")
    suggest_parser.add_argument("--output", type=Path, help="Optional CSV output path")

    args = parser.parse_args()
    if args.command == "suggest":
        try:
            _suggest(args.config, args.format, args.output)
        except (RebalancerError, ValidationError) as exc:
            logger.error(f"Invalid portfolio input: {exc}")
            sys.exit(2)


if __name__ == "__main__":  # pragma: no cover
    main()
