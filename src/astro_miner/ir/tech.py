"""Research tree: five tracks of purchasable technology.

Each node names its parents; a node can be bought once every parent is
owned and the player has reached its unlock level.  Effects of all owned
nodes combine into one :class:`TechEffects`.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, Field


class TechCategory(str, Enum):
    PROPULSION = "propulsion"
    MINING = "mining"
    STABILIZATION = "stabilization"
    NAVIGATION = "navigation"
    AUTOMATION = "automation"


MAX_ANOMALY_REDUCTION = 0.5


class TechEffects(BaseModel):
    """Modifiers granted by technology.  Defaults are neutral."""

    travel_time_modifier: float = Field(default=1.0, gt=0.0)
    """Scales flight legs; 0.85 is 15% faster."""

    yield_modifier: float = Field(default=1.0, gt=0.0)
    anomaly_reduction: float = Field(default=0.0, ge=0.0, le=1.0)
    """Fraction removed from every anomaly probability."""

    crew_cost_modifier: float = Field(default=1.0, gt=0.0)


class TechNode(BaseModel):
    id: str
    name: str
    category: TechCategory
    tier: int = Field(ge=1, le=5)
    cost: float = Field(ge=0.0)
    prerequisites: list[str] = Field(default_factory=list)
    effects: TechEffects = Field(default_factory=TechEffects)
    description: str = ""
    unlock_level: int = Field(default=1, ge=1)
    """Minimum player level to purchase."""


def _tech(
    id: str,
    name: str,
    category: TechCategory,
    tier: int,
    cost: float,
    parent: str | None,
    description: str,
    unlock_level: int,
    **effects: float,
) -> TechNode:
    return TechNode(
        id=id,
        name=name,
        category=category,
        tier=tier,
        cost=cost,
        prerequisites=[parent] if parent else [],
        effects=TechEffects(**effects),
        description=description,
        unlock_level=unlock_level,
    )


_P = TechCategory.PROPULSION
_M = TechCategory.MINING
_S = TechCategory.STABILIZATION
_N = TechCategory.NAVIGATION
_A = TechCategory.AUTOMATION

TECH_TREE: list[TechNode] = [
    # -- propulsion --
    _tech("chemical_rockets", "Chemical Rockets", _P, 1, 0, None,
          "Standard chemical propulsion. Isp ~400s.", 1),
    _tech("ion_propulsion", "Ion Propulsion", _P, 2, 5_000_000, "chemical_rockets",
          "Xenon ion thrusters provide 15% faster transit times.", 2,
          travel_time_modifier=0.85),
    _tech("hall_effect", "Hall Effect Thrusters", _P, 3, 15_000_000, "ion_propulsion",
          "Advanced Hall thrusters cut travel time by 25%.", 2,
          travel_time_modifier=0.75),
    _tech("vasimr", "VASIMR Drive", _P, 4, 50_000_000, "hall_effect",
          "Variable Specific Impulse Magnetoplasma Rocket. 40% faster travel.", 4,
          travel_time_modifier=0.60),
    _tech("plasma_drive", "Plasma Drive", _P, 5, 150_000_000, "vasimr",
          "Cutting-edge plasma propulsion. 60% faster travel times.", 5,
          travel_time_modifier=0.40),
    # -- mining --
    _tech("percussion_drills", "Percussion Drills", _M, 1, 0, None,
          "Standard rotary percussion drilling equipment.", 1),
    _tech("laser_cutters", "Laser Cutters", _M, 2, 8_000_000, "percussion_drills",
          "Precision laser cutting increases yield by 10%.", 2,
          yield_modifier=1.10),
    _tech("shaped_charges", "Shaped Charges", _M, 3, 20_000_000, "laser_cutters",
          "Controlled explosives for efficient extraction. 20% yield bonus.", 3,
          yield_modifier=1.20),
    _tech("plasma_excavation", "Plasma Excavation", _M, 4, 60_000_000, "shaped_charges",
          "Plasma torch mining technology. 35% increased yield.", 4,
          yield_modifier=1.35),
    # -- stabilization --
    _tech("manual_anchoring", "Manual Anchoring", _S, 1, 0, None,
          "Crew manually anchors to asteroid surface.", 1),
    _tech("magnetic_anchors", "Magnetic Anchor Rigs", _S, 2, 4_000_000, "manual_anchoring",
          "Magnetic anchoring system. +5% yield, -5% anomaly chance.", 2,
          yield_modifier=1.05, anomaly_reduction=0.05),
    _tech("spin_counter", "Spin Counter Thrusters", _S, 3, 12_000_000, "magnetic_anchors",
          "Active spin compensation. +10% yield, -10% anomaly chance.", 3,
          yield_modifier=1.10, anomaly_reduction=0.10),
    _tech("dust_containment", "Dust Containment Fields", _S, 4, 30_000_000, "spin_counter",
          "Electromagnetic dust control. +15% yield, -15% anomaly chance.", 4,
          yield_modifier=1.15, anomaly_reduction=0.15),
    # -- navigation --
    _tech("basic_star_trackers", "Basic Star Trackers", _N, 1, 0, None,
          "Standard optical star tracker navigation.", 1),
    _tech("advanced_gnc", "Advanced GNC", _N, 2, 6_000_000, "basic_star_trackers",
          "Improved guidance, navigation & control. 5% faster, 5% safer.", 2,
          travel_time_modifier=0.95, anomaly_reduction=0.05),
    _tech("relativistic_nav", "Relativistic Navigation", _N, 3, 25_000_000, "advanced_gnc",
          "Accounts for relativistic effects. 10% faster, 10% safer.", 3,
          travel_time_modifier=0.90, anomaly_reduction=0.10),
    _tech("quantum_positioning", "Quantum Positioning", _N, 4, 80_000_000, "relativistic_nav",
          "Quantum-entangled positioning system. 15% faster, 15% safer.", 5,
          travel_time_modifier=0.85, anomaly_reduction=0.15),
    # -- automation --
    _tech("manual_operations", "Manual Operations", _A, 1, 0, None,
          "All operations require human crew oversight.", 1),
    _tech("basic_mining_bots", "Basic Mining Bots", _A, 2, 10_000_000, "manual_operations",
          "Robotic assistants reduce crew costs by 20%.", 2,
          crew_cost_modifier=0.80),
    _tech("autonomous_swarm", "Autonomous Swarm", _A, 3, 40_000_000, "basic_mining_bots",
          "Coordinated robot swarms cut crew costs by 40%.", 3,
          crew_cost_modifier=0.60),
    _tech("full_ai_mining", "Full AI Mining", _A, 4, 120_000_000, "autonomous_swarm",
          "Fully autonomous AI mining operations. 70% crew cost reduction.", 4,
          crew_cost_modifier=0.30),
]

# Free tier-1 nodes every player starts with.
BASE_TECHS: list[str] = [t.id for t in TECH_TREE if t.tier == 1]

_BY_ID: dict[str, TechNode] = {t.id: t for t in TECH_TREE}


def get_tech(tech_id: str) -> TechNode | None:
    return _BY_ID.get(tech_id)


def techs_by_category(category: TechCategory) -> list[TechNode]:
    return sorted((t for t in TECH_TREE if t.category == category), key=lambda t: t.tier)


def visible_techs(unlocked: Iterable[str]) -> list[TechNode]:
    """Owned nodes plus every node whose parents are all owned."""
    owned = set(unlocked)
    return [
        t for t in TECH_TREE
        if t.id in owned or all(p in owned for p in t.prerequisites)
    ]


def combine_tech_effects(unlocked: Iterable[str]) -> TechEffects:
    """Fold the effects of every owned node.

    Travel, yield and crew-cost modifiers multiply.  Anomaly reductions
    add up and are capped at 50%.  Unknown ids are ignored.
    """
    travel = yield_mod = crew = 1.0
    anomaly = 0.0
    for tech_id in set(unlocked):
        tech = _BY_ID.get(tech_id)
        if tech is None:
            continue
        travel *= tech.effects.travel_time_modifier
        yield_mod *= tech.effects.yield_modifier
        crew *= tech.effects.crew_cost_modifier
        anomaly += tech.effects.anomaly_reduction
    return TechEffects(
        travel_time_modifier=travel,
        yield_modifier=yield_mod,
        anomaly_reduction=min(anomaly, MAX_ANOMALY_REDUCTION),
        crew_cost_modifier=crew,
    )
