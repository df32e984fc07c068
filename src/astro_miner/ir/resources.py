"""Commodity definitions: base prices, volatility, and price-swing headlines."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ResourceType(str, Enum):
    """The eight tradeable commodities."""

    WATER = "water"
    LITHIUM = "lithium"
    RARE_EARTH = "rare_earth"
    PLATINUM = "platinum"
    GOLD = "gold"
    IRON = "iron"
    NICKEL = "nickel"
    VOLATILES = "volatiles"


class CommodityDefinition(BaseModel):
    """Static market parameters for one commodity."""

    name: str
    base_price: float
    """Dollars per ton.  Prices are clamped to [0.5x, 2x] of this value."""

    volatility: float
    """Maximum weekly move as a fraction of the current price."""

    description: str
    up_templates: list[str]
    """Headlines for large upward moves.  ``{pct}`` is the magnitude."""

    down_templates: list[str]

    @property
    def price_floor(self) -> float:
        return self.base_price * 0.5

    @property
    def price_ceiling(self) -> float:
        return self.base_price * 2


COMMODITIES: dict[ResourceType, CommodityDefinition] = {
    ResourceType.WATER: CommodityDefinition(
        name="Water Ice",
        base_price=5000,
        volatility=0.40,
        description="Essential for life support and hydrogen fuel production",
        up_templates=[
            "Mars colony expansion drives water demand up {pct}%",
            "Lunar base life support systems require more water - prices up {pct}%",
            "Hydrogen fuel production surge pushes water prices {pct}% higher",
        ],
        down_templates=[
            "Europa ice discovery floods market - water down {pct}%",
            "Comet capture delivers water surplus - prices drop {pct}%",
            "Recycling breakthrough reduces water demand {pct}%",
        ],
    ),
    ResourceType.LITHIUM: CommodityDefinition(
        name="Lithium",
        base_price=45000,
        volatility=0.25,
        description="Battery production for energy storage systems",
        up_templates=[
            "New battery tech breakthrough - lithium prices surge {pct}%",
            "Orbital station energy storage needs spike lithium {pct}%",
            "Electric spacecraft demand drives lithium up {pct}%",
        ],
        down_templates=[
            "New fusion tech crashes lithium prices {pct}%",
            "Solid-state battery breakthrough - lithium drops {pct}%",
            "Lithium asteroid discovery floods market {pct}%",
        ],
    ),
    ResourceType.RARE_EARTH: CommodityDefinition(
        name="Rare Earths",
        base_price=80000,
        volatility=0.20,
        description="Critical for advanced electronics and magnets",
        up_templates=[
            "Advanced electronics shortage - rare earths up {pct}%",
            "Quantum computer production boosts rare earth prices {pct}%",
            "Magnet demand for ion drives pushes rare earths {pct}% higher",
        ],
        down_templates=[
            "Synthetic rare earth production cuts prices {pct}%",
            "Recycling tech reduces rare earth demand {pct}%",
            "New deposits discovered - rare earths fall {pct}%",
        ],
    ),
    ResourceType.PLATINUM: CommodityDefinition(
        name="Platinum",
        base_price=150000,
        volatility=0.15,
        description="Catalyst for fuel cells and chemical processes",
        up_templates=[
            "Fuel cell demand drives platinum up {pct}%",
            "Catalyst shortage pushes platinum prices {pct}% higher",
            "Chemical processing expansion - platinum up {pct}%",
        ],
        down_templates=[
            "Alternative catalyst discovered - platinum drops {pct}%",
            "Platinum-rich asteroid find crashes prices {pct}%",
            "Fuel cell efficiency gains reduce platinum need {pct}%",
        ],
    ),
    ResourceType.GOLD: CommodityDefinition(
        name="Gold",
        base_price=200000,
        volatility=0.15,
        description="Electronics and radiation shielding applications",
        up_templates=[
            "Radiation shielding demand pushes gold up {pct}%",
            "Electronics manufacturing surge - gold prices up {pct}%",
            "Orbital habitat construction drives gold {pct}% higher",
        ],
        down_templates=[
            "Gold-laden asteroid discovery - prices plummet {pct}%",
            "New shielding materials reduce gold demand {pct}%",
            "Electronics miniaturization cuts gold use {pct}%",
        ],
    ),
    ResourceType.IRON: CommodityDefinition(
        name="Iron",
        base_price=1000,
        volatility=0.10,
        description="Primary construction material for orbital infrastructure",
        up_templates=[
            "Orbital construction boom - iron prices up {pct}%",
            "Space station expansion drives iron demand {pct}% higher",
            "Shipyard activity pushes iron prices up {pct}%",
        ],
        down_templates=[
            "Lunar mining operations flood iron market {pct}%",
            "Construction slowdown drops iron prices {pct}%",
            "Composite materials reduce iron demand {pct}%",
        ],
    ),
    ResourceType.NICKEL: CommodityDefinition(
        name="Nickel",
        base_price=2000,
        volatility=0.12,
        description="Key alloy component for spacecraft hulls",
        up_templates=[
            "Spacecraft hull production surge - nickel up {pct}%",
            "Alloy demand for new vessels drives nickel {pct}% higher",
            "Defense contractor orders push nickel prices up {pct}%",
        ],
        down_templates=[
            "Nickel asteroid discovery crashes prices {pct}%",
            "New alloys reduce nickel requirements {pct}%",
            "Recycling surge drops nickel demand {pct}%",
        ],
    ),
    ResourceType.VOLATILES: CommodityDefinition(
        name="Volatiles",
        base_price=8000,
        volatility=0.35,
        description="Chemical feedstock and propellant production",
        up_templates=[
            "Propellant shortage drives volatiles up {pct}%",
            "Chemical feedstock demand pushes volatiles {pct}% higher",
            "Deep space mission prep surges volatile prices {pct}%",
        ],
        down_templates=[
            "Titan atmospheric harvest floods volatile market {pct}%",
            "New synthesis process drops volatile prices {pct}%",
            "Propellant efficiency gains reduce demand {pct}%",
        ],
    ),
}

PRECIOUS_RESOURCES: frozenset[ResourceType] = frozenset(
    {ResourceType.PLATINUM, ResourceType.GOLD}
)


def get_commodity(resource: ResourceType | str) -> CommodityDefinition | None:
    """Look up a commodity by enum member or raw value; ``None`` if unknown."""
    try:
        return COMMODITIES[ResourceType(resource)]
    except ValueError:
        return None
