"""Mining target catalog entries and per-class composition tables."""

from __future__ import annotations

from pydantic import BaseModel, Field

from astro_miner.ir.resources import ResourceType


class MiningTarget(BaseModel):
    """A minable body as supplied by the external catalog."""

    id: str
    name: str
    diameter_km: float | None = None
    mass_kg: float | None = None
    taxonomic_class: str = "S"
    """Single-letter spectral class (C, S, M, ...)."""

    distance_au: float = Field(default=1.0, ge=0.0)
    """Distance from Earth used for trip planning."""


DEFAULT_DENSITY_KG_M3 = 2000.0

# Fraction of total mass a crew of efficiency 1.0 can extract.
EXTRACTION_RATES: dict[str, float] = {
    "M": 0.003,
    "C": 0.002,
    "S": 0.0015,
    "Q": 0.002,
    "V": 0.0018,
}
DEFAULT_EXTRACTION_RATE = 0.001

# Resources present in each class, most abundant first.
PRIMARY_RESOURCES: dict[str, list[ResourceType]] = {
    "C": [
        ResourceType.WATER,
        ResourceType.VOLATILES,
        ResourceType.IRON,
        ResourceType.NICKEL,
        ResourceType.RARE_EARTH,
    ],
    "S": [
        ResourceType.IRON,
        ResourceType.NICKEL,
        ResourceType.WATER,
        ResourceType.RARE_EARTH,
        ResourceType.PLATINUM,
    ],
    "Q": [
        ResourceType.IRON,
        ResourceType.NICKEL,
        ResourceType.RARE_EARTH,
        ResourceType.PLATINUM,
        ResourceType.GOLD,
    ],
    "M": [
        ResourceType.IRON,
        ResourceType.NICKEL,
        ResourceType.PLATINUM,
        ResourceType.GOLD,
        ResourceType.RARE_EARTH,
    ],
    "D": [
        ResourceType.VOLATILES,
        ResourceType.WATER,
        ResourceType.RARE_EARTH,
        ResourceType.LITHIUM,
    ],
    "P": [
        ResourceType.VOLATILES,
        ResourceType.WATER,
        ResourceType.LITHIUM,
        ResourceType.RARE_EARTH,
    ],
    "V": [
        ResourceType.IRON,
        ResourceType.RARE_EARTH,
        ResourceType.NICKEL,
        ResourceType.LITHIUM,
    ],
    "E": [
        ResourceType.IRON,
        ResourceType.RARE_EARTH,
        ResourceType.NICKEL,
        ResourceType.LITHIUM,
        ResourceType.PLATINUM,
    ],
}


# A handful of well-studied bodies for demos and balance runs.  The game
# proper receives its catalog from an external data feed.
SAMPLE_TARGETS: list[MiningTarget] = [
    MiningTarget(id="99942", name="99942 Apophis", diameter_km=0.34,
                 taxonomic_class="Q", distance_au=0.92),
    MiningTarget(id="101955", name="101955 Bennu", diameter_km=0.49,
                 mass_kg=7.329e10, taxonomic_class="C", distance_au=1.13),
    MiningTarget(id="162173", name="162173 Ryugu", diameter_km=0.9,
                 mass_kg=4.5e11, taxonomic_class="C", distance_au=1.19),
    MiningTarget(id="25143", name="25143 Itokawa", diameter_km=0.33,
                 mass_kg=3.51e10, taxonomic_class="S", distance_au=1.32),
    MiningTarget(id="433", name="433 Eros", diameter_km=16.8,
                 mass_kg=6.687e15, taxonomic_class="S", distance_au=1.46),
    MiningTarget(id="65803", name="65803 Didymos", diameter_km=0.78,
                 taxonomic_class="S", distance_au=1.64),
    MiningTarget(id="4", name="4 Vesta", diameter_km=525.0,
                 taxonomic_class="V", distance_au=2.36),
    MiningTarget(id="1", name="1 Ceres", diameter_km=939.0,
                 taxonomic_class="C", distance_au=2.77),
    MiningTarget(id="16", name="16 Psyche", diameter_km=226.0,
                 taxonomic_class="M", distance_au=2.92),
    MiningTarget(id="3200", name="3200 Phaethon", diameter_km=5.1,
                 taxonomic_class="D", distance_au=1.27),
]


def primary_resources(taxonomic_class: str) -> list[ResourceType]:
    """Resources for a spectral class; unknown classes are treated as S."""
    key = taxonomic_class[:1].upper() if taxonomic_class else "S"
    return PRIMARY_RESOURCES.get(key, PRIMARY_RESOURCES["S"])


def extraction_rate(taxonomic_class: str) -> float:
    key = taxonomic_class[:1].upper() if taxonomic_class else ""
    return EXTRACTION_RATES.get(key, DEFAULT_EXTRACTION_RATE)
