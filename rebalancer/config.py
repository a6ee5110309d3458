"""Configuration models and loader for portfolio rebalancing runs."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from rebalancer.portfolio import Position, TargetAllocation

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class HoldingConfig(BaseModel):
    name: str = Field(min_length=1)
    price: Decimal
    quantity: int = Field(1, ge=0)


class TargetConfig(BaseModel):
    name: str = Field(min_length=1)
    price: Decimal
    percentage: Decimal


class LoggingConfig(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def known_level(cls, level: str) -> str:
        level = level.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"logging level must be one of {', '.join(_LOG_LEVELS)}")
        return level


class AppConfig(BaseModel):
    holdings: List[HoldingConfig] = Field(default_factory=list)
    holdings_csv: Optional[Path] = None
    targets: List[TargetConfig] = Field(min_length=1)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def _single_holdings_source(self) -> "AppConfig":
        if self.holdings and self.holdings_csv is not None:
            raise ValueError("define either holdings or holdings_csv, not both")
        return self

    def allocation(self) -> TargetAllocation:
        """Build the validated target allocation; raises InvalidAllocation/InvalidPrice."""

        return TargetAllocation.try_from(
            (target.percentage, Position(target.name, target.price)) for target in self.targets
        )


def load_config(source: Union[str, Path, Dict[str, Any]]) -> AppConfig:
    """Load and validate the rebalancing config from a path or raw mapping."""

    if isinstance(source, (str, Path)):
        path = Path(source)
        payload = yaml.safe_load(path.read_text()) or {}
        csv_path = payload.get("holdings_csv") if isinstance(payload, dict) else None
        if csv_path and not Path(csv_path).is_absolute():
            payload["holdings_csv"] = path.parent / csv_path
    elif isinstance(source, dict):
        payload = source
    else:
        raise TypeError("config source must be a path or mapping")

    return AppConfig.model_validate(payload)


__all__ = [
    "AppConfig",
    "HoldingConfig",
    "LoggingConfig",
    "TargetConfig",
    "load_config",
]
