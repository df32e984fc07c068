"""Game session -- owns all mutable simulation state and drives ticks.

A session is the single owner of the active-mission list, the market and
the news scheduler.  Each :meth:`GameSession.tick` runs, in order:

1. weekly market updates up to the new time;
2. phase advancement for every active mission, in launch order;
3. payout and removal of missions that reached a terminal phase;
4. periodic news (easter eggs, competitors, educational, flavor).

Because the market settles first, a mission finishing on the same tick
as a price update is paid at the post-update price.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from astro_miner.ir.contractors import LaunchCadence, get_crew, get_provider, get_security
from astro_miner.ir.news_content import EasterEggState, NewsCategory
from astro_miner.ir.phases import PHASE_TABLE, MissionPhase
from astro_miner.ir.resources import COMMODITIES, ResourceType
from astro_miner.ir.targets import MiningTarget, primary_resources
from astro_miner.sim.combat import format_combat_news
from astro_miner.sim.config import DEFAULT_CONFIG, SimConfig
from astro_miner.sim.core.mission import Mission
from astro_miner.sim.core.player import ActionResult, FlightLogEntry, PlayerState
from astro_miner.sim.core.rng import GameRNG
from astro_miner.sim.errors import ConfigurationError, require_reliability
from astro_miner.sim.market import (
    MarketState,
    format_price,
    get_spot_price,
    initialize_market,
    update_market_prices,
)
from astro_miner.sim.news import NewsItem, NewsScheduler, day_to_calendar
from astro_miner.sim.phases import PhaseTransition, advance_mission, calculate_phase_duration
from astro_miner.sim.planning import (
    calculate_contract_revenue,
    calculate_mission_cost,
    calculate_trip_legs,
    estimate_resource_yield,
    generate_contracts,
    late_penalty,
)

logger = logging.getLogger(__name__)

RNG_STREAMS = ("phases", "combat", "market", "news", "planning")


@dataclass
class MissionOutcome:
    """Settlement of a mission that reached a terminal phase."""

    mission: Mission
    revenue: float = 0.0
    profit: float = 0.0
    resource: ResourceType | None = None
    tons: float = 0.0
    stored_tons: float = 0.0
    """Part of the payload put into depots instead of sold."""

    @property
    def phase(self) -> MissionPhase:
        return self.mission.phase

    @property
    def is_success(self) -> bool:
        return PHASE_TABLE[self.mission.phase].is_success


@dataclass
class TickReport:
    now: float
    transitions: list[PhaseTransition] = field(default_factory=list)
    completed: list[MissionOutcome] = field(default_factory=list)
    news: list[NewsItem] = field(default_factory=list)


class GameSession:
    """A single player's running game.

    Parameters
    ----------
    seed:
        Master seed.  Each subsystem gets its own named fork.
    targets:
        Catalog of minable bodies, in display order.
    config:
        Tuning constants.
    """

    def __init__(
        self,
        seed: int,
        targets: Sequence[MiningTarget] = (),
        config: SimConfig = DEFAULT_CONFIG,
    ) -> None:
        self.config = config
        self.rng = GameRNG(seed)
        self.rngs: dict[str, GameRNG] = {name: self.rng.fork(name) for name in RNG_STREAMS}

        self.now = 0.0
        self.player = PlayerState(balance=config.starting_balance)
        self.targets: dict[str, MiningTarget] = {t.id: t for t in targets}
        self.market: MarketState = initialize_market(self.rngs["market"], self.now)
        self.scheduler = NewsScheduler(self.rngs["news"])
        self.missions: list[Mission] = []
        self.contracts = generate_contracts(
            config.contract_count, self.market, self.rngs["planning"], config,
        )

    # -- queries -------------------------------------------------------------

    def is_target_available(self, target_id: str) -> bool:
        return (
            target_id in self.targets
            and not self.player.is_depleted(target_id)
            and not self.scheduler.is_target_blocked(target_id)
        )

    def available_targets(self) -> list[str]:
        return [t for t in self.targets if self.is_target_available(t)]

    def get_mission(self, mission_id: str) -> Mission | None:
        return next((m for m in self.missions if m.id == mission_id), None)

    def refresh_contracts(self) -> None:
        self.contracts = generate_contracts(
            self.config.contract_count, self.market, self.rngs["planning"], self.config,
        )

    def sell_stored(self, depot_id: str, resource: ResourceType, tons: float) -> ActionResult:
        """Sell stockpiled cargo from a depot at the current spot price."""
        price = get_spot_price(self.market, resource)
        result = self.player.sell_stored(depot_id, resource, tons, price)
        if result.success:
            logger.info(
                "Sold %s from %s for %s", resource.value, depot_id, format_price(result.revenue),
            )
        return result

    # -- launching -----------------------------------------------------------

    def launch_mission(
        self,
        target_id: str,
        provider_id: str,
        crew_id: str,
        contract_id: str | None = None,
        security_id: str | None = None,
    ) -> ActionResult:
        """Commit to a mission, paying its full cost up front."""
        target = self.targets.get(target_id)
        if target is None:
            return ActionResult.fail(f"Unknown target: {target_id}")
        if self.player.is_depleted(target_id):
            return ActionResult.fail(f"{target.name} has already been mined")
        if self.scheduler.is_target_blocked(target_id):
            return ActionResult.fail(f"{target.name} has been claimed by a competitor")

        provider = get_provider(provider_id)
        if provider is None:
            return ActionResult.fail(f"Unknown launch provider: {provider_id}")
        crew = get_crew(crew_id)
        if crew is None:
            return ActionResult.fail(f"Unknown crew type: {crew_id}")

        security = None
        if security_id is not None:
            if self.player.level < self.config.pirate_min_level:
                return ActionResult.fail(
                    f"Security contractors are available from level {self.config.pirate_min_level}"
                )
            security = get_security(security_id)
            if security is None:
                return ActionResult.fail(f"Unknown security contractor: {security_id}")

        contract = None
        if contract_id is not None:
            contract = next((c for c in self.contracts if c.id == contract_id), None)
            if contract is None:
                return ActionResult.fail(f"Contract {contract_id} is no longer offered")

        # Reliabilities must lie in [0, 1] before they reach the phase engine.
        require_reliability(provider.reliability, f"{provider.id} reliability")
        require_reliability(crew.reliability, f"{crew.id} reliability")

        tech = self.player.tech
        legs = calculate_trip_legs(target.distance_au, tech.travel_time)
        cost = calculate_mission_cost(provider, crew, legs.total, tech.crew_cost).total
        if security is not None:
            cost += security.cost_per_mission

        paid = self.player.subtract_money(cost)
        if not paid.success:
            return paid

        mission = Mission(
            target_id=target.id,
            target_name=target.name,
            provider_id=provider.id,
            crew_id=crew.id,
            phase=MissionPhase.CONTRACT_SIGNED,
            phase_start_time=self.now,
            phase_duration=calculate_phase_duration(
                MissionPhase.CONTRACT_SIGNED,
                legs.outbound, legs.mining, legs.return_,
                provider.launch_cadence,
                self.rngs["phases"],
            ),
            provider_reliability=provider.reliability,
            crew_reliability=crew.reliability,
            crew_efficiency=crew.mining_efficiency,
            anomaly_reduction=tech.anomaly_reduction,
            outbound_days=legs.outbound,
            mining_days=legs.mining,
            return_days=legs.return_,
            start_time=self.now,
            cost=cost,
            expected_yield=estimate_resource_yield(
                target, crew.mining_efficiency, tech.yield_multiplier,
            ),
            contract=contract,
            security_id=security.id if security else None,
        )
        self.missions.append(mission)
        if contract is not None:
            self.contracts = [c for c in self.contracts if c.id != contract.id]

        logger.info(
            "Launched %s to %s (%s / %s) for %s",
            mission.id, target.name, provider.name, crew.name, format_price(cost),
        )
        return ActionResult.ok(mission.id)

    # -- ticking -------------------------------------------------------------

    def advance(self, days: float) -> TickReport:
        return self.tick(self.now + days)

    def advance_real_seconds(self, seconds: float) -> TickReport:
        return self.tick(self.now + seconds * self.config.time_scale)

    def tick(self, now: float) -> TickReport:
        """Advance the whole simulation to simulated day *now*."""
        if now < self.now:
            raise ConfigurationError(
                f"Simulated time must not go backwards ({now} < {self.now})"
            )
        self.now = now
        report = TickReport(now=now)

        for headline in update_market_prices(self.market, now, self.rngs["market"], self.config):
            report.news.append(self.scheduler.make_item(headline, NewsCategory.MARKET, now))

        still_active: list[Mission] = []
        for mission in self.missions:
            transition = advance_mission(
                mission,
                now,
                self.rngs["phases"],
                self.rngs["combat"],
                player_level=self.player.level,
                relationship_level=self.player.relationship(mission.security_id),
                launch_cadence=self._cadence_for(mission),
                config=self.config,
            )
            if transition is None:
                still_active.append(mission)
                continue

            report.transitions.append(transition)
            report.news.extend(self._transition_news(transition))
            if transition.entered_drilling:
                self.player.mark_depleted(transition.mission.target_id)

            if transition.is_terminal:
                outcome = self._settle(transition.mission)
                report.completed.append(outcome)
                report.news.extend(self._settlement_news(outcome))
            else:
                still_active.append(transition.mission)
        self.missions = still_active

        month, day = day_to_calendar(now)
        egg_state = EasterEggState(
            game_month=month,
            game_day=day,
            missions_completed=self.player.missions_completed,
            balance=self.player.balance,
        )
        names = {tid: t.name for tid, t in self.targets.items()}
        report.news.extend(
            self.scheduler.emit_periodic(now, self.available_targets(), names, egg_state)
        )
        return report

    # -- internals -----------------------------------------------------------

    def _cadence_for(self, mission: Mission) -> LaunchCadence | None:
        provider = get_provider(mission.provider_id)
        return provider.launch_cadence if provider else None

    def _transition_news(self, transition: PhaseTransition) -> list[NewsItem]:
        mission = transition.mission
        name = mission.target_name or mission.target_id
        make = self.scheduler.make_item
        items: list[NewsItem] = []

        if transition.combat is not None:
            category = (
                NewsCategory.IMPORTANT
                if transition.combat.outcome == MissionPhase.PIRATES_DEFEATED
                else NewsCategory.CRITICAL
            )
            items.append(make(format_combat_news(transition.combat, name), category, self.now))
        elif transition.pirates_detected:
            if mission.phase == MissionPhase.PIRATE_ATTACK_OUTBOUND:
                text = f"⚠️ Pirates detected near {name}!"
            else:
                text = f"⚠️ Pirates intercepting {name} cargo ship!"
            items.append(make(text, NewsCategory.CRITICAL, self.now))

        info = PHASE_TABLE[mission.phase]
        if info.is_terminal:
            if not info.is_success and transition.combat is None:
                items.append(make(f"Mission to {name}: {info.name}", NewsCategory.CRITICAL, self.now))
        elif mission.phase == MissionPhase.LAUNCH:
            items.append(make(f"Mission to {name} launching!", NewsCategory.MARKET, self.now))
        elif mission.phase == MissionPhase.DRILLING:
            items.append(make(f"Drilling underway at {name}", NewsCategory.IMPORTANT, self.now))
        return items

    def _settle(self, mission: Mission) -> MissionOutcome:
        """Pay out (or write off) a mission that reached a terminal phase."""
        outcome = MissionOutcome(mission=mission, profit=-mission.cost)

        if mission.phase == MissionPhase.MISSION_SUCCESS:
            tons = mission.expected_yield
            if mission.contract is not None:
                resource = mission.contract.resource
                revenue = calculate_contract_revenue(mission, self.now)
            else:
                target = self.targets.get(mission.target_id)
                klass = target.taxonomic_class if target else "S"
                resource = self.rngs["planning"].random_choice(primary_resources(klass))
                outcome.stored_tons = self.player.store_resources(resource, tons)
                overflow = tons - outcome.stored_tons
                revenue = round(overflow * get_spot_price(self.market, resource))

            self.player.add_money(revenue)
            self.player.record_completion()
            if mission.security_id is not None:
                self.player.improve_relationship(mission.security_id)

            outcome.revenue = revenue
            outcome.profit = revenue - mission.cost
            outcome.resource = resource
            outcome.tons = tons
            mission = mission.model_copy(update={"actual_yield": tons})
            outcome.mission = mission

        elif mission.phase == MissionPhase.PAYLOAD_SEIZED:
            # Crew made it home, so the run still counts toward progression.
            self.player.record_completion()

        resource_label = COMMODITIES[outcome.resource].name if outcome.resource else "None"
        self.player.log_flight(FlightLogEntry(
            target_name=mission.target_name or mission.target_id,
            resource=resource_label,
            tons=outcome.tons,
            profit=outcome.profit,
            completed_time=self.now,
        ))
        logger.info(
            "Mission %s ended in %s (profit %s)",
            mission.id, mission.phase.value, format_price(outcome.profit),
        )
        return outcome

    def _settlement_news(self, outcome: MissionOutcome) -> list[NewsItem]:
        if not outcome.is_success:
            return []
        mission = outcome.mission
        name = mission.target_name or mission.target_id
        text = f"Mission to {name} complete! Earned {format_price(outcome.revenue)}"
        if outcome.stored_tons > 0:
            overflow = outcome.tons - outcome.stored_tons
            text += f" ({outcome.stored_tons:,.0f}t stored, {overflow:,.0f}t sold)"
        if mission.contract is not None:
            penalty = late_penalty(self.now - mission.start_time, mission.contract.deadline_days)
            if penalty > 0:
                text += f" ({penalty * 100:.1f}% late penalty)"
        return [self.scheduler.make_item(text, NewsCategory.IMPORTANT, self.now)]
