"""Tuning constants for a simulation session.

Defaults reproduce the shipped game balance.  A JSON file with a subset
of the fields can override them::

    config = SimConfig.load("tuning/hard_mode.json")
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SimConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    # -- combat --------------------------------------------------------------

    ambiguous_escape_chance: float = Field(default=0.20, ge=0.0, le=1.0)
    """Chance a split combat result lets the ship escape with its cargo.

    The remainder loses the payload with the crew unharmed.  The value is
    an unexplained tuning number carried over from the shipped game.
    """

    # -- pirates -------------------------------------------------------------

    pirate_min_level: int = Field(default=3, ge=1)
    pirate_chance_outbound: float = Field(default=0.05, ge=0.0, le=1.0)
    pirate_chance_inbound: float = Field(default=0.25, ge=0.0, le=1.0)

    # -- market --------------------------------------------------------------

    contract_premium_min: float = Field(default=1.10, gt=0.0)
    contract_premium_max: float = Field(default=1.25, gt=0.0)
    market_news_threshold: float = Field(default=0.15, ge=0.0)
    """Weekly move (as a fraction) above which a headline is produced."""

    history_limit: int = Field(default=52, ge=1)
    week_days: float = Field(default=7.0, gt=0.0)

    # -- session -------------------------------------------------------------

    time_scale: float = Field(default=0.333, gt=0.0)
    """Simulated days per real second."""

    starting_balance: float = 50_000_000
    contract_count: int = Field(default=4, ge=0)

    @model_validator(mode="after")
    def _check_premium_range(self) -> SimConfig:
        if self.contract_premium_min > self.contract_premium_max:
            raise ValueError(
                "contract_premium_min must not exceed contract_premium_max"
            )
        return self

    @classmethod
    def load(cls, path: str | Path) -> SimConfig:
        """Read overrides from a JSON object file."""
        with open(Path(path)) as f:
            raw: dict[str, Any] = json.load(f)
        return cls.model_validate(raw)


DEFAULT_CONFIG = SimConfig()
