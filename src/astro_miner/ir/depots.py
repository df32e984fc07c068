"""Orbital storage depots for cargo flown without a contract.

Depots unlock from level 3.  A player may own several of the same type;
capacity scales with the count.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class StorageDepot(BaseModel):
    id: str
    name: str
    location: str
    description: str = ""
    purchase_cost: float = Field(ge=0.0)
    capacity: float = Field(gt=0.0)
    """Tons per depot owned."""

    travel_days: float = 0.0
    """Average days from Earth."""

    security_risk: str = "None"
    unlock_level: int = Field(default=3, ge=1)


STORAGE_DEPOTS: list[StorageDepot] = [
    StorageDepot(
        id="leo_depot",
        name="LEO Storage Hub",
        location="Low Earth Orbit",
        description="Compact orbital warehouse in low Earth orbit. Quick access but limited space.",
        purchase_cost=10_000_000,
        capacity=5_000,
        travel_days=0,
        unlock_level=3,
    ),
    StorageDepot(
        id="geo_depot",
        name="GEO Warehouse",
        location="Geostationary Orbit",
        description="Medium-capacity depot in stable geostationary orbit.",
        purchase_cost=25_000_000,
        capacity=15_000,
        travel_days=1,
        unlock_level=3,
    ),
    StorageDepot(
        id="lunar_l2",
        name="Lunar L2 Station",
        location="Earth-Moon L2 Point",
        description="Strategic position beyond the Moon. Good capacity with minimal risk.",
        purchase_cost=50_000_000,
        capacity=25_000,
        travel_days=3,
        unlock_level=3,
    ),
    StorageDepot(
        id="belt_depot",
        name="Belt Transfer Station",
        location="Asteroid Belt Orbit",
        description="Massive capacity close to mining operations. Exposed to pirate activity.",
        purchase_cost=100_000_000,
        capacity=50_000,
        travel_days=120,
        security_risk="Level 4+ pirates",
        unlock_level=4,
    ),
]


def get_depot(depot_id: str) -> StorageDepot | None:
    return next((d for d in STORAGE_DEPOTS if d.id == depot_id), None)


def depots_for_level(level: int) -> list[StorageDepot]:
    return [d for d in STORAGE_DEPOTS if d.unlock_level <= level]
