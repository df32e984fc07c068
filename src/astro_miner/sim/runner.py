"""Batch simulation runner -- many seeded combats or campaigns at once.

Provides:

- **CampaignPolicy**: a fixed, greedy launch strategy for unattended runs.
- **run_campaign**: plays one seeded campaign and collects telemetry.
- **BatchRunner**: orchestrates many runs (optionally in parallel).
"""

from __future__ import annotations

import logging
import multiprocessing
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from astro_miner.ir.targets import SAMPLE_TARGETS, MiningTarget
from astro_miner.sim.combat import resolve_combat
from astro_miner.sim.config import DEFAULT_CONFIG, SimConfig
from astro_miner.sim.core.mission import CombatResult
from astro_miner.sim.core.rng import GameRNG
from astro_miner.sim.session import GameSession
from astro_miner.sim.telemetry import CampaignTelemetry, MissionTelemetry

logger = logging.getLogger(__name__)


@dataclass
class CampaignPolicy:
    """How an unattended campaign picks its missions.

    Attributes
    ----------
    provider_id, crew_id:
        Used for every launch.
    security_id:
        Escort hired once the player is allowed to; ``None`` flies unescorted.
    max_active:
        Missions kept in flight at once.
    use_contracts:
        Take the first offered contract on each launch.
    level_override:
        Pin the player level (e.g. 3 to face pirates from the start).
    """

    provider_id: str = "spacey"
    crew_id: str = "small_human"
    security_id: str | None = None
    max_active: int = 2
    use_contracts: bool = True
    level_override: int | None = None


def _launch_if_idle(
    session: GameSession,
    policy: CampaignPolicy,
    tracked: dict[str, MissionTelemetry],
    order: list[str],
) -> None:
    while len(session.missions) < policy.max_active:
        available = session.available_targets()
        if not available:
            return

        contract_id = None
        if policy.use_contracts:
            if not session.contracts:
                session.refresh_contracts()
            if session.contracts:
                contract_id = session.contracts[0].id

        security_id = None
        if policy.security_id and session.player.level >= session.config.pirate_min_level:
            security_id = policy.security_id

        result = session.launch_mission(
            available[0], policy.provider_id, policy.crew_id,
            contract_id=contract_id, security_id=security_id,
        )
        if not result.success:
            logger.debug("Campaign launch refused: %s", result.reason)
            return

        mission = session.get_mission(result.mission_id)
        tracked[mission.id] = MissionTelemetry(
            mission_id=mission.id,
            target_id=mission.target_id,
            phases=[mission.phase.value],
            launch_time=mission.start_time,
            cost=mission.cost,
            security_id=mission.security_id,
        )
        order.append(mission.id)


def run_campaign(
    seed: int,
    policy: CampaignPolicy,
    days: float = 730.0,
    tick_days: float = 1.0,
    targets: Sequence[MiningTarget] | None = None,
    config: SimConfig = DEFAULT_CONFIG,
) -> CampaignTelemetry:
    """Play one campaign for *days* simulated days and return telemetry."""
    session = GameSession(seed, targets if targets is not None else SAMPLE_TARGETS, config)
    if policy.level_override is not None:
        session.player.level_override = policy.level_override

    tracked: dict[str, MissionTelemetry] = {}
    order: list[str] = []
    news_counts: Counter[str] = Counter()
    price_range: dict[str, list[float]] = {
        r.value: [m.current_price, m.current_price]
        for r, m in session.market.resources.items()
    }

    while session.now < days:
        _launch_if_idle(session, policy, tracked, order)
        report = session.advance(tick_days)

        for transition in report.transitions:
            tel = tracked[transition.mission.id]
            tel.phases.append(transition.new_phase.value)
            if transition.combat is not None:
                tel.combat_outcomes.append(transition.combat.outcome.value)
        for outcome in report.completed:
            tel = tracked[outcome.mission.id]
            tel.final_phase = outcome.phase.value
            tel.end_time = report.now
            tel.revenue = outcome.revenue
        for item in report.news:
            news_counts[item.category.value] += 1
        for resource, market in session.market.resources.items():
            low, high = price_range[resource.value]
            price_range[resource.value] = [
                min(low, market.current_price), max(high, market.current_price),
            ]

    return CampaignTelemetry(
        seed=seed,
        days=session.now,
        missions=[tracked[mid] for mid in order],
        final_balance=session.player.balance,
        missions_completed=session.player.missions_completed,
        final_level=session.player.level,
        blocked_targets=len(session.scheduler.blocked_targets()),
        news_by_category=dict(news_counts),
        price_range=price_range,
    )


def _worker_run_campaign(
    args: tuple[int, CampaignPolicy, float, float, list[MiningTarget] | None, SimConfig],
) -> CampaignTelemetry:
    """Top-level function for multiprocessing (must be picklable)."""
    seed, policy, days, tick_days, targets, config = args
    return run_campaign(seed, policy, days, tick_days, targets, config)


# =====================================================================
# BatchRunner
# =====================================================================

class BatchRunner:
    """Runs many seeded simulations, optionally in parallel."""

    def __init__(
        self,
        config: SimConfig = DEFAULT_CONFIG,
        targets: Sequence[MiningTarget] | None = None,
    ) -> None:
        self.config = config
        self.targets = list(targets) if targets is not None else None

    def run_combat_trials(
        self,
        n_trials: int,
        player_level: int = 3,
        security_id: str | None = None,
        relationship_level: int = 0,
        base_seed: int = 42,
    ) -> list[CombatResult]:
        """Resolve *n_trials* independent encounters from one seeded stream."""
        rng = GameRNG(base_seed).fork("combat")
        return [
            resolve_combat(player_level, security_id, relationship_level, rng, self.config)
            for _ in range(n_trials)
        ]

    def run_campaigns(
        self,
        n_runs: int,
        policy: CampaignPolicy | None = None,
        days: float = 730.0,
        tick_days: float = 1.0,
        base_seed: int = 42,
        parallel: bool = False,
    ) -> list[CampaignTelemetry]:
        """Run *n_runs* campaigns with seeds ``base_seed .. base_seed + n_runs - 1``."""
        policy = policy or CampaignPolicy()
        seeds = [base_seed + i for i in range(n_runs)]

        if parallel and n_runs > 1:
            work_items = [
                (seed, policy, days, tick_days, self.targets, self.config)
                for seed in seeds
            ]
            n_workers = min(len(seeds), multiprocessing.cpu_count() or 1)
            with multiprocessing.Pool(processes=n_workers) as pool:
                return pool.map(_worker_run_campaign, work_items)

        return [
            run_campaign(seed, policy, days, tick_days, self.targets, self.config)
            for seed in seeds
        ]
