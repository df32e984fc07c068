"""Ownable assets: vehicles, mining equipment and robotic crews.

Assets are bought once and kept for the rest of the game.  They unlock
from level 2, and the rental figure is what a single mission would cost
without owning one.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class AssetCategory(str, Enum):
    VEHICLE = "vehicle"
    EQUIPMENT = "equipment"
    CREW = "crew"


class OwnableAsset(BaseModel):
    id: str
    name: str
    category: AssetCategory
    description: str = ""
    purchase_cost: float = Field(ge=0.0)
    rental_cost: float = Field(ge=0.0)
    """Per-mission cost when renting instead of owning."""

    break_even_missions: int
    unlock_level: int = Field(default=2, ge=1)

    payload_capacity: float | None = None
    """Vehicles only, kilograms."""

    reliability: float | None = Field(default=None, ge=0.0, le=1.0)
    efficiency: float | None = None
    """Mining yield multiplier for equipment and crews."""

    required_payload: float | None = None
    """Crews only, kilograms."""


OWNABLE_VEHICLES: list[OwnableAsset] = [
    OwnableAsset(
        id="light_freighter",
        name="Light Freighter",
        category=AssetCategory.VEHICLE,
        description="Compact vessel for small asteroid runs. Low capacity but efficient.",
        purchase_cost=20_000_000,
        rental_cost=2_000_000,
        break_even_missions=10,
        unlock_level=2,
        payload_capacity=10_000,
        reliability=0.94,
    ),
    OwnableAsset(
        id="heavy_hauler",
        name="Heavy Hauler",
        category=AssetCategory.VEHICLE,
        description="Industrial workhorse. Great capacity for large payloads.",
        purchase_cost=80_000_000,
        rental_cost=8_000_000,
        break_even_missions=10,
        unlock_level=2,
        payload_capacity=25_000,
        reliability=0.92,
    ),
    OwnableAsset(
        id="deep_space_vessel",
        name="Deep Space Vessel",
        category=AssetCategory.VEHICLE,
        description="Long-range explorer. Required for distant asteroid belt missions.",
        purchase_cost=200_000_000,
        rental_cost=25_000_000,
        break_even_missions=8,
        unlock_level=3,
        payload_capacity=35_000,
        reliability=0.96,
    ),
]

OWNABLE_EQUIPMENT: list[OwnableAsset] = [
    OwnableAsset(
        id="basic_drill_rig",
        name="Basic Drill Rig",
        category=AssetCategory.EQUIPMENT,
        description="Standard percussion drilling system. Gets the job done.",
        purchase_cost=5_000_000,
        rental_cost=500_000,
        break_even_missions=10,
        unlock_level=2,
        efficiency=1.0,
    ),
    OwnableAsset(
        id="industrial_extractor",
        name="Industrial Extractor",
        category=AssetCategory.EQUIPMENT,
        description="Heavy-duty mining equipment with improved yield.",
        purchase_cost=25_000_000,
        rental_cost=2_000_000,
        break_even_missions=12,
        unlock_level=2,
        efficiency=1.15,
    ),
    OwnableAsset(
        id="plasma_mining_array",
        name="Plasma Mining Array",
        category=AssetCategory.EQUIPMENT,
        description="Cutting-edge extraction tech. Maximum resource yield.",
        purchase_cost=100_000_000,
        rental_cost=10_000_000,
        break_even_missions=10,
        unlock_level=3,
        efficiency=1.35,
    ),
]

OWNABLE_CREWS: list[OwnableAsset] = [
    OwnableAsset(
        id="mining_bots_basic",
        name="Mining Bots (Basic)",
        category=AssetCategory.CREW,
        description="Entry-level autonomous mining drones. Reliable and cheap to operate.",
        purchase_cost=8_000_000,
        rental_cost=800_000,
        break_even_missions=10,
        unlock_level=2,
        efficiency=0.6,
        reliability=0.85,
        required_payload=2000,
    ),
    OwnableAsset(
        id="mining_bots_advanced",
        name="Mining Bots (Advanced)",
        category=AssetCategory.CREW,
        description="AI-enhanced mining systems with improved decision making.",
        purchase_cost=30_000_000,
        rental_cost=3_000_000,
        break_even_missions=10,
        unlock_level=2,
        efficiency=0.9,
        reliability=0.90,
        required_payload=3000,
    ),
    OwnableAsset(
        id="autonomous_mining_fleet",
        name="Autonomous Mining Fleet",
        category=AssetCategory.CREW,
        description="Fully autonomous swarm mining operation. Near-human efficiency.",
        purchase_cost=150_000_000,
        rental_cost=12_000_000,
        break_even_missions=12,
        unlock_level=3,
        efficiency=1.2,
        reliability=0.92,
        required_payload=5000,
    ),
]

ALL_OWNABLE_ASSETS: list[OwnableAsset] = OWNABLE_VEHICLES + OWNABLE_EQUIPMENT + OWNABLE_CREWS


def get_asset(asset_id: str) -> OwnableAsset | None:
    return next((a for a in ALL_OWNABLE_ASSETS if a.id == asset_id), None)


def assets_by_category(category: AssetCategory) -> list[OwnableAsset]:
    return [a for a in ALL_OWNABLE_ASSETS if a.category == category]


def assets_for_level(level: int) -> list[OwnableAsset]:
    return [a for a in ALL_OWNABLE_ASSETS if a.unlock_level <= level]


def ownership_savings(asset: OwnableAsset, missions: int) -> float:
    """Rental spend over *missions* minus the purchase price (negative = not yet paid off)."""
    return asset.rental_cost * missions - asset.purchase_cost
