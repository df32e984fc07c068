"""Mission planning -- trip lengths, costs, yield estimates and contracts.

These are the numbers a player sees before committing to a launch, plus
the payout rule applied when a mission comes home.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from astro_miner.ir.contractors import CrewType, LaunchProvider
from astro_miner.ir.resources import COMMODITIES, PRECIOUS_RESOURCES, ResourceType
from astro_miner.ir.targets import (
    DEFAULT_DENSITY_KG_M3,
    MiningTarget,
    extraction_rate,
)
from astro_miner.sim.config import DEFAULT_CONFIG, SimConfig
from astro_miner.sim.core.mission import ContractTerms, Mission
from astro_miner.sim.core.rng import GameRNG
from astro_miner.sim.market import MarketState, get_contract_price

MIN_LEG_DAYS = 5
MAX_YIELD_TONS = 50_000

CONTRACT_VENDORS: list[str] = [
    "Lunar Industries",
    "Mars Colonial Authority",
    "Orbital Dynamics Corp",
    "Deep Space Mining Co",
    "Stellar Resources Ltd",
    "Asteroid Ventures Inc",
]


@dataclass
class TripLegs:
    outbound: int
    mining: int
    return_: int

    @property
    def total(self) -> int:
        return self.outbound + self.mining + self.return_


@dataclass
class MissionCost:
    launch_cost: float
    crew_cost: float

    @property
    def total(self) -> float:
        return self.launch_cost + self.crew_cost


def calculate_trip_legs(distance_au: float, travel_time_modifier: float = 1.0) -> TripLegs:
    """Leg lengths in days.  Propulsion tech shortens flights, not drilling."""
    flight = max(MIN_LEG_DAYS, round((distance_au * 50 + 15) * travel_time_modifier))
    mining = round(30 + distance_au * 10)
    return TripLegs(outbound=flight, mining=mining, return_=flight)


def calculate_mission_cost(
    provider: LaunchProvider,
    crew: CrewType,
    duration_days: float,
    crew_cost_modifier: float = 1.0,
) -> MissionCost:
    return MissionCost(
        launch_cost=provider.cost_per_kg * crew.required_payload,
        crew_cost=round(crew.daily_cost * duration_days * crew_cost_modifier),
    )


def estimate_mass_kg(target: MiningTarget) -> float:
    """Catalog mass, else a sphere of the catalog diameter at 2000 kg/m^3."""
    if target.mass_kg:
        return target.mass_kg
    if target.diameter_km:
        radius_m = target.diameter_km * 1000 / 2
        return (4 / 3) * math.pi * radius_m ** 3 * DEFAULT_DENSITY_KG_M3
    return 0.0


def estimate_resource_yield(
    target: MiningTarget,
    crew_efficiency: float,
    yield_modifier: float = 1.0,
) -> float:
    """Tons a crew can bring back, capped at 50 000."""
    mass_tons = estimate_mass_kg(target) / 1000
    base = mass_tons * extraction_rate(target.taxonomic_class)
    return min(round(base * crew_efficiency * yield_modifier), MAX_YIELD_TONS)


# =====================================================================
# Contracts
# =====================================================================

def generate_contracts(
    count: int,
    market: MarketState,
    rng: GameRNG,
    config: SimConfig = DEFAULT_CONFIG,
) -> list[ContractTerms]:
    """Offer *count* contracts, each for a different resource while possible.

    The per-ton price is the contract price at offer time and does not
    change afterwards.
    """
    contracts: list[ContractTerms] = []
    used: set[ResourceType] = set()
    all_resources = list(COMMODITIES)

    for _ in range(count):
        pool = [r for r in all_resources if r not in used] or all_resources
        resource = rng.random_choice(pool)
        used.add(resource)

        if resource in PRECIOUS_RESOURCES:
            quantity = rng.random_int(50, 199)
        else:
            quantity = rng.random_int(500, 2499)

        price = get_contract_price(market, resource, rng, config)
        deadline = rng.random_int(60, 239)

        contracts.append(ContractTerms(
            vendor=rng.random_choice(CONTRACT_VENDORS),
            resource=resource,
            quantity_tons=quantity,
            price_per_ton=price,
            deadline_days=deadline,
        ))
    return contracts


def late_penalty(days_elapsed: float, deadline_days: float) -> float:
    """Fraction of the payout forfeited for late delivery (0..1)."""
    if deadline_days <= 0:
        return 0.0
    days_late = max(0.0, days_elapsed - deadline_days)
    return min(1.0, days_late / deadline_days)


def calculate_contract_revenue(mission: Mission, now: float) -> float:
    """Contract payout scaled by crew efficiency and any late penalty."""
    contract = mission.contract
    if contract is None:
        return 0.0
    base = round(contract.total_value * (0.8 + mission.crew_efficiency * 0.4))
    penalty = late_penalty(now - mission.start_time, contract.deadline_days)
    return round(base * (1.0 - penalty))
