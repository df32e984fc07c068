"""Hireable contractors: launch providers, crews, and security escorts.

Also holds the pirate stat table, since pirate strength is the yardstick
security contractors are measured against.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class LaunchCadence(str, Enum):
    """How often a provider flies.  Drives the contract-signed wait."""

    WEEKLY = "Weekly"
    BI_WEEKLY = "Bi-weekly"
    MONTHLY = "Monthly"


class LaunchProvider(BaseModel):
    id: str
    name: str
    description: str = ""
    cost_per_kg: float
    """Dollars per kilogram to orbit."""

    payload_capacity: float
    """Kilograms."""

    reliability: float = Field(ge=0.0, le=1.0)
    launch_cadence: LaunchCadence


class CrewType(BaseModel):
    id: str
    name: str
    description: str = ""
    daily_cost: float
    mining_efficiency: float
    """Yield multiplier; 1.0 is baseline."""

    reliability: float = Field(ge=0.0, le=1.0)
    required_payload: float
    """Kilograms of crew and equipment to launch."""


class SecurityTier(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


class SecurityContractor(BaseModel):
    id: str
    name: str
    tier: SecurityTier
    cost_per_mission: float
    attack_rating: int
    defense_rating: int
    description: str = ""


class PirateStatRange(BaseModel):
    """Inclusive ranges pirate attack/defense ratings are drawn from."""

    attack_min: int
    attack_max: int
    defense_min: int
    defense_max: int


LAUNCH_PROVIDERS: list[LaunchProvider] = [
    LaunchProvider(
        id="spacey",
        name="SpaceY",
        description="Reliable workhorse with reusable rockets",
        cost_per_kg=2500,
        payload_capacity=22000,
        reliability=0.97,
        launch_cadence=LaunchCadence.WEEKLY,
    ),
    LaunchProvider(
        id="ula",
        name="ULA",
        description="Premium service with perfect safety record",
        cost_per_kg=5500,
        payload_capacity=28000,
        reliability=0.995,
        launch_cadence=LaunchCadence.MONTHLY,
    ),
    LaunchProvider(
        id="rocketforge",
        name="RocketForge",
        description="Budget option for small payloads",
        cost_per_kg=1800,
        payload_capacity=8000,
        reliability=0.92,
        launch_cadence=LaunchCadence.BI_WEEKLY,
    ),
    LaunchProvider(
        id="bluegenesis",
        name="Blue Genesis",
        description="Balanced performance and cost",
        cost_per_kg=3200,
        payload_capacity=18000,
        reliability=0.95,
        launch_cadence=LaunchCadence.WEEKLY,
    ),
]

CREW_TYPES: list[CrewType] = [
    CrewType(
        id="robotic",
        name="Robotic Crew",
        description="Autonomous mining bots. Slow but cheap.",
        daily_cost=5000,
        mining_efficiency=0.6,
        reliability=0.85,
        required_payload=2000,
    ),
    CrewType(
        id="small_human",
        name="Small Human Crew",
        description="3-person team with good flexibility.",
        daily_cost=25000,
        mining_efficiency=1.0,
        reliability=0.92,
        required_payload=5000,
    ),
    CrewType(
        id="large_expedition",
        name="Large Expedition",
        description="8-person team for maximum output.",
        daily_cost=75000,
        mining_efficiency=1.8,
        reliability=0.88,
        required_payload=12000,
    ),
]

SECURITY_CONTRACTORS: list[SecurityContractor] = [
    SecurityContractor(
        id="frontier_guards",
        name="Frontier Guards",
        tier=SecurityTier.LIGHT,
        cost_per_mission=500_000,
        attack_rating=2,
        defense_rating=2,
        description="Basic armed escort. Better than nothing.",
    ),
    SecurityContractor(
        id="orbital_defense",
        name="Orbital Defense Corp",
        tier=SecurityTier.MEDIUM,
        cost_per_mission=2_000_000,
        attack_rating=5,
        defense_rating=5,
        description="Professional security with combat experience.",
    ),
    SecurityContractor(
        id="military_escort",
        name="Military Escort",
        tier=SecurityTier.HEAVY,
        cost_per_mission=8_000_000,
        attack_rating=9,
        defense_rating=9,
        description="Former military operators with heavy weaponry.",
    ),
]

# Pirate strength scales with the player.  Levels outside the table clamp
# to the nearest defined row.
PIRATE_STATS_BY_LEVEL: dict[int, PirateStatRange] = {
    3: PirateStatRange(attack_min=3, attack_max=8, defense_min=2, defense_max=7),
    4: PirateStatRange(attack_min=5, attack_max=10, defense_min=4, defense_max=9),
    5: PirateStatRange(attack_min=8, attack_max=14, defense_min=7, defense_max=13),
}

MAX_RELATIONSHIP_LEVEL = 10


def get_provider(provider_id: str) -> LaunchProvider | None:
    return next((p for p in LAUNCH_PROVIDERS if p.id == provider_id), None)


def get_crew(crew_id: str) -> CrewType | None:
    return next((c for c in CREW_TYPES if c.id == crew_id), None)


def get_security(security_id: str | None) -> SecurityContractor | None:
    if security_id is None:
        return None
    return next((s for s in SECURITY_CONTRACTORS if s.id == security_id), None)


def get_pirate_stats(player_level: int) -> PirateStatRange:
    """Return the pirate stat row for *player_level*, clamped to 3..5."""
    level = min(max(player_level, min(PIRATE_STATS_BY_LEVEL)), max(PIRATE_STATS_BY_LEVEL))
    return PIRATE_STATS_BY_LEVEL[level]
