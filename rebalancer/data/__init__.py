"""Holdings loaders."""

from .sources import load_holdings_csv, positions_from_config

__all__ = ["load_holdings_csv", "positions_from_config"]
