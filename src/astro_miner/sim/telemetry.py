"""Telemetry data models for per-mission and per-campaign statistics.

These lightweight dataclasses capture what balance analysis needs
without keeping the full session history:

- **MissionTelemetry**: route through the phase table, money in and out.
- **CampaignTelemetry**: seed, mission list, final balance and market range.

Both classes are plain ``dataclass`` instances (not Pydantic models) to
keep collection cheap during batch runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class MissionTelemetry:
    """Stats from a single mission.

    Attributes
    ----------
    mission_id:
        Session-local mission id.
    target_id:
        Catalog id of the mined body.
    phases:
        Every phase entered, in order, starting with ``contract_signed``.
    final_phase:
        Terminal phase value, or ``""`` if the campaign ended first.
    launch_time:
        Simulated day the mission was committed.
    end_time:
        Simulated day it reached its terminal phase.
    cost:
        Everything paid at launch, escort included.
    revenue:
        Payout on success, else 0.
    combat_outcomes:
        Outcome phase value of each pirate fight.
    """

    mission_id: str
    target_id: str
    phases: list[str] = field(default_factory=list)
    final_phase: str = ""
    launch_time: float = 0.0
    end_time: float = 0.0
    cost: float = 0.0
    revenue: float = 0.0
    security_id: str | None = None
    combat_outcomes: list[str] = field(default_factory=list)

    @property
    def profit(self) -> float:
        return self.revenue - self.cost


@dataclass
class CampaignTelemetry:
    """Stats from one seeded campaign.

    Attributes
    ----------
    seed:
        The master RNG seed used for this campaign.
    days:
        Simulated days covered.
    missions:
        Missions launched, in launch order.
    final_balance:
        Player balance when the campaign stopped.
    missions_completed:
        Progression counter at the end.
    final_level:
        Player level at the end.
    blocked_targets:
        Targets claimed by competitors.
    news_by_category:
        ``category -> items emitted``.
    price_range:
        ``resource -> [min, max]`` spot price seen.
    """

    seed: int
    days: float = 0.0
    missions: list[MissionTelemetry] = field(default_factory=list)
    final_balance: float = 0.0
    missions_completed: int = 0
    final_level: int = 1
    blocked_targets: int = 0
    news_by_category: dict[str, int] = field(default_factory=dict)
    price_range: dict[str, list[float]] = field(default_factory=dict)
