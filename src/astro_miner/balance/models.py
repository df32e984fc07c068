"""Pydantic v2 models for balance baselines.

These models define the structured output of balance analysis:
combat outcome rates per escort, mission success and profit figures,
campaign-level progression, and market price spread.  All are
serializable to/from JSON.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CombatMetrics(BaseModel):
    """Outcome rates for one escort choice at one player level."""

    security_id: str | None
    """Escort id, or ``None`` for unescorted fights."""
    player_level: int
    relationship_level: int = 0
    trials: int
    pirates_defeated: int
    pirates_won: int
    payload_seized: int
    defeat_rate: float
    """pirates_defeated / trials -- the crew walks away with the cargo."""
    loss_rate: float
    """pirates_won / trials -- ship and crew lost."""
    seized_rate: float
    avg_player_attack: float
    avg_player_defense: float
    avg_pirate_attack: float
    avg_pirate_defense: float


class MissionMetrics(BaseModel):
    """Aggregate mission statistics across campaigns."""

    total_missions: int
    finished: int
    """Missions that reached a terminal phase before their campaign ended."""
    successes: int
    seized: int
    failures: int
    success_rate: float
    """successes / finished."""
    avg_cost: float
    avg_revenue: float
    avg_profit: float
    avg_duration_days: float
    pirate_encounter_rate: float
    """Fraction of finished missions that met pirates at least once."""
    terminal_counts: dict[str, int] = Field(default_factory=dict)
    """``terminal phase -> missions`` ending there."""


class CampaignMetrics(BaseModel):
    """Aggregate player progression across campaigns."""

    total_runs: int
    avg_days: float
    avg_final_balance: float
    min_final_balance: float
    max_final_balance: float
    avg_missions_completed: float
    avg_final_level: float
    avg_blocked_targets: float
    avg_news_by_category: dict[str, float] = Field(default_factory=dict)


class MarketMetrics(BaseModel):
    """Spot price spread observed for one commodity."""

    resource: str
    base_price: float
    price_floor: float
    price_ceiling: float
    min_seen: float
    max_seen: float
    avg_spread: float
    """Mean of ``max - min`` per campaign."""


class BalanceBaseline(BaseModel):
    """Top-level baseline data structure."""

    num_runs: int
    days: float
    """Simulated days per campaign."""
    generated_at: str
    """ISO 8601 timestamp."""
    combat: list[CombatMetrics]
    missions: MissionMetrics
    campaigns: CampaignMetrics
    market: list[MarketMetrics]
