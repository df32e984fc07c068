"""Player-side state the simulation reads and mutates through setters."""

from __future__ import annotations

from pydantic import BaseModel, Field

from astro_miner.ir.assets import get_asset
from astro_miner.ir.contractors import MAX_RELATIONSHIP_LEVEL
from astro_miner.ir.depots import get_depot
from astro_miner.ir.resources import ResourceType
from astro_miner.ir.tech import BASE_TECHS, combine_tech_effects, get_tech


class ActionResult(BaseModel):
    """Outcome of a player action that can be refused for ordinary reasons.

    Insufficient funds, a depleted target and the like are expected
    conditions, so they come back as a value instead of an exception.
    """

    success: bool
    reason: str = ""
    mission_id: str | None = None
    revenue: float = 0.0

    @classmethod
    def ok(cls, mission_id: str | None = None, revenue: float = 0.0) -> ActionResult:
        return cls(success=True, mission_id=mission_id, revenue=revenue)

    @classmethod
    def fail(cls, reason: str) -> ActionResult:
        return cls(success=False, reason=reason)


class TechModifiers(BaseModel):
    """Multipliers granted by researched technology."""

    travel_time: float = 1.0
    """Scales outbound and return legs; below 1.0 is faster."""

    yield_multiplier: float = 1.0
    crew_cost: float = 1.0
    anomaly_reduction: float = 0.0


class DepotHolding(BaseModel):
    """Depots of one type owned by the player and the cargo inside them."""

    count: int = 0
    contents: dict[ResourceType, float] = Field(default_factory=dict)

    @property
    def used(self) -> float:
        return sum(self.contents.values())


class FlightLogEntry(BaseModel):
    target_name: str
    resource: str
    tons: float
    profit: float
    completed_time: float


FLIGHT_LOG_LIMIT = 3


class PlayerState(BaseModel):
    """Balance, progression and contractor relationships."""

    balance: float = 50_000_000
    missions_completed: int = 0
    level_override: int | None = None
    """Forces a player level; the only way to reach level 5."""

    security_relationships: dict[str, int] = Field(default_factory=dict)
    depleted_targets: list[str] = Field(default_factory=list)
    unlocked_techs: list[str] = Field(default_factory=lambda: list(BASE_TECHS))
    owned_assets: list[str] = Field(default_factory=list)
    depots: dict[str, DepotHolding] = Field(default_factory=dict)
    flight_log: list[FlightLogEntry] = Field(default_factory=list)

    # -- progression ---------------------------------------------------------

    @property
    def level(self) -> int:
        if self.level_override is not None:
            return self.level_override
        return player_level(self.missions_completed)

    def record_completion(self) -> None:
        self.missions_completed += 1

    # -- money ---------------------------------------------------------------

    def can_afford(self, amount: float) -> bool:
        return self.balance >= amount

    def add_money(self, amount: float) -> None:
        self.balance += amount

    def subtract_money(self, amount: float) -> ActionResult:
        if not self.can_afford(amount):
            return ActionResult.fail(
                f"Insufficient funds: need {amount:,.0f}, have {self.balance:,.0f}"
            )
        self.balance -= amount
        return ActionResult.ok()

    # -- relationships -------------------------------------------------------

    def relationship(self, security_id: str | None) -> int:
        if security_id is None:
            return 0
        return self.security_relationships.get(security_id, 0)

    def improve_relationship(self, security_id: str) -> int:
        """Raise the relationship with *security_id* by one, capped at 10."""
        level = min(MAX_RELATIONSHIP_LEVEL, self.relationship(security_id) + 1)
        self.security_relationships[security_id] = level
        return level

    # -- targets -------------------------------------------------------------

    def mark_depleted(self, target_id: str) -> bool:
        """Record that drilling started at *target_id*.  Returns True if new."""
        if target_id in self.depleted_targets:
            return False
        self.depleted_targets.append(target_id)
        return True

    def is_depleted(self, target_id: str) -> bool:
        return target_id in self.depleted_targets

    def log_flight(self, entry: FlightLogEntry) -> None:
        self.flight_log = (self.flight_log + [entry])[-FLIGHT_LOG_LIMIT:]

    # -- research ------------------------------------------------------------

    @property
    def tech(self) -> TechModifiers:
        effects = combine_tech_effects(self.unlocked_techs)
        return TechModifiers(
            travel_time=effects.travel_time_modifier,
            yield_multiplier=effects.yield_modifier,
            crew_cost=effects.crew_cost_modifier,
            anomaly_reduction=effects.anomaly_reduction,
        )

    def is_tech_unlocked(self, tech_id: str) -> bool:
        return tech_id in self.unlocked_techs

    def can_unlock_tech(self, tech_id: str) -> ActionResult:
        tech = get_tech(tech_id)
        if tech is None:
            return ActionResult.fail(f"Unknown tech: {tech_id}")
        if self.is_tech_unlocked(tech_id):
            return ActionResult.fail("Already unlocked")
        if self.level < tech.unlock_level:
            return ActionResult.fail(f"Requires Level {tech.unlock_level}")
        if not self.can_afford(tech.cost):
            return ActionResult.fail(
                f"Insufficient funds: need {tech.cost:,.0f}, have {self.balance:,.0f}"
            )
        for parent_id in tech.prerequisites:
            if not self.is_tech_unlocked(parent_id):
                parent = get_tech(parent_id)
                return ActionResult.fail(f"Requires {parent.name if parent else parent_id}")
        return ActionResult.ok()

    def unlock_tech(self, tech_id: str) -> ActionResult:
        check = self.can_unlock_tech(tech_id)
        if not check.success:
            return check
        paid = self.subtract_money(get_tech(tech_id).cost)
        if not paid.success:
            return paid
        self.unlocked_techs.append(tech_id)
        return ActionResult.ok()

    # -- assets --------------------------------------------------------------

    def owns_asset(self, asset_id: str) -> bool:
        return asset_id in self.owned_assets

    def purchase_asset(self, asset_id: str) -> ActionResult:
        asset = get_asset(asset_id)
        if asset is None:
            return ActionResult.fail(f"Unknown asset: {asset_id}")
        if self.owns_asset(asset_id):
            return ActionResult.fail("Already owned")
        if self.level < asset.unlock_level:
            return ActionResult.fail(f"Requires Level {asset.unlock_level}")
        paid = self.subtract_money(asset.purchase_cost)
        if not paid.success:
            return paid
        self.owned_assets.append(asset_id)
        return ActionResult.ok()

    # -- storage -------------------------------------------------------------

    def depot_count(self, depot_id: str) -> int:
        holding = self.depots.get(depot_id)
        return holding.count if holding else 0

    def purchase_depot(self, depot_id: str) -> ActionResult:
        """Buy one more depot of this type.  Several of a type stack capacity."""
        depot = get_depot(depot_id)
        if depot is None:
            return ActionResult.fail(f"Unknown depot: {depot_id}")
        if self.level < depot.unlock_level:
            return ActionResult.fail(f"Requires Level {depot.unlock_level}")
        paid = self.subtract_money(depot.purchase_cost)
        if not paid.success:
            return paid
        self.depots.setdefault(depot_id, DepotHolding()).count += 1
        return ActionResult.ok()

    def _free_space(self, depot_id: str) -> float:
        depot = get_depot(depot_id)
        holding = self.depots[depot_id]
        if depot is None:
            return 0.0
        return max(0.0, depot.capacity * holding.count - holding.used)

    def storage_capacity(self) -> float:
        total = 0.0
        for depot_id, holding in self.depots.items():
            depot = get_depot(depot_id)
            if depot is not None:
                total += depot.capacity * holding.count
        return total

    def stored_tons(self, resource: ResourceType | None = None) -> float:
        if resource is None:
            return sum(h.used for h in self.depots.values())
        return sum(h.contents.get(resource, 0.0) for h in self.depots.values())

    def store_resources(self, resource: ResourceType, tons: float) -> float:
        """Put up to *tons* into owned depots, smallest first.  Returns tons stored."""
        remaining = tons
        for depot_id in sorted(self.depots, key=_depot_capacity):
            if remaining <= 0:
                break
            amount = min(remaining, self._free_space(depot_id))
            if amount <= 0:
                continue
            contents = self.depots[depot_id].contents
            contents[resource] = contents.get(resource, 0.0) + amount
            remaining -= amount
        return tons - remaining

    def sell_stored(
        self,
        depot_id: str,
        resource: ResourceType,
        tons: float,
        price_per_ton: float,
    ) -> ActionResult:
        """Sell up to *tons* of *resource* out of one depot at *price_per_ton*."""
        holding = self.depots.get(depot_id)
        if holding is None or holding.count == 0:
            return ActionResult.fail("Depot not owned")
        held = holding.contents.get(resource, 0.0)
        sold = min(tons, held)
        if sold <= 0:
            return ActionResult.fail("Nothing to sell")
        if held - sold > 0:
            holding.contents[resource] = held - sold
        else:
            del holding.contents[resource]
        revenue = round(sold * price_per_ton)
        self.add_money(revenue)
        return ActionResult.ok(revenue=revenue)


def _depot_capacity(depot_id: str) -> float:
    depot = get_depot(depot_id)
    return depot.capacity if depot else float("inf")


def player_level(missions_completed: int) -> int:
    """Map a completed-mission count to a progression level (1-4)."""
    if missions_completed >= 500:
        return 4
    if missions_completed >= 50:
        return 3
    if missions_completed >= 10:
        return 2
    return 1
