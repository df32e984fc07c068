"""Baseline generation: run sims, compute metrics, save/load JSON.

Orchestrates BatchRunner -> metric computation -> BalanceBaseline model.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from astro_miner.balance.metrics import (
    compute_campaign_metrics,
    compute_combat_metrics,
    compute_market_metrics,
    compute_mission_metrics,
)
from astro_miner.balance.models import BalanceBaseline, CombatMetrics
from astro_miner.ir.contractors import SECURITY_CONTRACTORS
from astro_miner.sim.config import DEFAULT_CONFIG, SimConfig
from astro_miner.sim.runner import BatchRunner, CampaignPolicy

logger = logging.getLogger(__name__)


def generate_baseline(
    num_runs: int = 200,
    days: float = 730.0,
    combat_trials: int = 10_000,
    combat_level: int = 3,
    base_seed: int = 42,
    policy: CampaignPolicy | None = None,
    config: SimConfig = DEFAULT_CONFIG,
    parallel: bool = False,
) -> BalanceBaseline:
    """Run batch simulations and compute a full balance baseline.

    Parameters
    ----------
    num_runs:
        Number of campaigns to simulate.
    days:
        Simulated days per campaign.
    combat_trials:
        Encounters resolved per escort choice (unescorted plus every
        security contractor).
    combat_level:
        Player level the combat trials are fought at.
    base_seed:
        Starting seed for reproducible runs.
    policy:
        Launch strategy for the campaigns; defaults to :class:`CampaignPolicy`.
    """
    runner = BatchRunner(config=config)

    combat: list[CombatMetrics] = []
    for security_id in [None, *(s.id for s in SECURITY_CONTRACTORS)]:
        results = runner.run_combat_trials(
            combat_trials, player_level=combat_level,
            security_id=security_id, base_seed=base_seed,
        )
        combat.append(compute_combat_metrics(results, security_id, combat_level))
        logger.info("Combat trials for %s done", security_id or "unescorted")

    campaigns = runner.run_campaigns(
        num_runs, policy=policy, days=days, base_seed=base_seed, parallel=parallel,
    )
    logger.info("%d campaigns done", len(campaigns))

    return BalanceBaseline(
        num_runs=num_runs,
        days=days,
        generated_at=datetime.now(timezone.utc).isoformat(),
        combat=combat,
        missions=compute_mission_metrics(campaigns),
        campaigns=compute_campaign_metrics(campaigns),
        market=compute_market_metrics(campaigns),
    )


def save_baseline(baseline: BalanceBaseline, path: Path) -> None:
    """Save baseline to JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(baseline.model_dump(), indent=2))


def load_baseline(path: Path) -> BalanceBaseline:
    """Load baseline from JSON file."""
    data = json.loads(path.read_text())
    return BalanceBaseline.model_validate(data)
