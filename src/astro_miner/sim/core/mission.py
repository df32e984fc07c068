"""Mission state carried between ticks.

A ``Mission`` is created when the player commits to a launch and is
replaced (never mutated in place) by the phase engine on every
transition, so an observer always sees either the old or the new phase
with all of its associated fields.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

from astro_miner.ir.phases import MissionPhase
from astro_miner.ir.resources import ResourceType


class ContractTerms(BaseModel):
    """A guaranteed-buyer contract.  The price is fixed when it is offered."""

    id: str = Field(default_factory=lambda: f"contract-{uuid.uuid4().hex[:8]}")
    vendor: str
    resource: ResourceType
    quantity_tons: float
    price_per_ton: float
    deadline_days: float
    """Days after signing by which the payload must be delivered."""

    @property
    def total_value(self) -> float:
        return self.quantity_tons * self.price_per_ton


class CombatResult(BaseModel):
    """Dice and totals from one pirate encounter."""

    outcome: MissionPhase
    """One of PIRATES_DEFEATED, PIRATES_WON, PAYLOAD_SEIZED."""

    player_attack_roll: int
    player_defense_roll: int
    pirate_attack_roll: int
    pirate_defense_roll: int
    player_total_attack: float
    player_total_defense: float
    pirate_total_attack: float
    pirate_total_defense: float
    narrative: str
    security_id: str | None = None


class Mission(BaseModel):
    """An in-flight mining mission."""

    id: str = Field(default_factory=lambda: f"mission-{uuid.uuid4().hex[:10]}")
    target_id: str
    target_name: str = ""
    provider_id: str
    crew_id: str

    phase: MissionPhase = MissionPhase.CONTRACT_SIGNED
    phase_start_time: float = 0.0
    phase_duration: float = 0.0

    provider_reliability: float
    crew_reliability: float
    crew_efficiency: float = 1.0
    anomaly_reduction: float = Field(default=0.0, ge=0.0, le=1.0)
    """Share of anomaly risk removed by researched technology."""

    outbound_days: float
    mining_days: float
    return_days: float

    start_time: float = 0.0
    """Simulated day the mission was committed."""

    cost: float = 0.0
    expected_yield: float = 0.0
    actual_yield: float = 0.0

    contract: ContractTerms | None = None
    """``None`` for missions flown without a contract, which sell at spot on return."""

    security_id: str | None = None
    combat: CombatResult | None = None
    resume_phase: MissionPhase | None = None
    """Leg to continue with after a won fight."""

    @property
    def is_contract(self) -> bool:
        return self.contract is not None

    @property
    def phase_end_time(self) -> float:
        return self.phase_start_time + self.phase_duration

    def is_phase_complete(self, now: float) -> bool:
        return now >= self.phase_end_time
