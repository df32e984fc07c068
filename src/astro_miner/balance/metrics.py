"""Pure metric computation functions for balance analysis.

All functions take combat results or campaign telemetry and return
structured metrics.  No side effects, no I/O.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from astro_miner.balance.models import (
    CampaignMetrics,
    CombatMetrics,
    MarketMetrics,
    MissionMetrics,
)
from astro_miner.ir.phases import MissionPhase
from astro_miner.ir.resources import COMMODITIES, ResourceType
from astro_miner.sim.errors import require_phase

if TYPE_CHECKING:
    from astro_miner.sim.core.mission import CombatResult
    from astro_miner.sim.telemetry import CampaignTelemetry

_PIRATE_PHASES = frozenset({
    MissionPhase.PIRATE_ATTACK_OUTBOUND.value,
    MissionPhase.PIRATE_ATTACK_INBOUND.value,
})


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_combat_metrics(
    results: list[CombatResult],
    security_id: str | None,
    player_level: int,
    relationship_level: int = 0,
) -> CombatMetrics:
    """Summarize a batch of encounters fought under the same conditions."""
    trials = len(results)
    outcomes = Counter(r.outcome for r in results)
    defeated = outcomes[MissionPhase.PIRATES_DEFEATED]
    won = outcomes[MissionPhase.PIRATES_WON]
    seized = outcomes[MissionPhase.PAYLOAD_SEIZED]

    return CombatMetrics(
        security_id=security_id,
        player_level=player_level,
        relationship_level=relationship_level,
        trials=trials,
        pirates_defeated=defeated,
        pirates_won=won,
        payload_seized=seized,
        defeat_rate=defeated / trials if trials else 0.0,
        loss_rate=won / trials if trials else 0.0,
        seized_rate=seized / trials if trials else 0.0,
        avg_player_attack=_mean([r.player_total_attack for r in results]),
        avg_player_defense=_mean([r.player_total_defense for r in results]),
        avg_pirate_attack=_mean([r.pirate_total_attack for r in results]),
        avg_pirate_defense=_mean([r.pirate_total_defense for r in results]),
    )


def compute_mission_metrics(campaigns: list[CampaignTelemetry]) -> MissionMetrics:
    """Compute mission-level statistics across every campaign."""
    missions = [m for c in campaigns for m in c.missions]
    finished = [m for m in missions if m.final_phase]
    # Telemetry phases are plain strings; reject anything outside the table.
    terminal_counts = Counter(require_phase(m.final_phase).value for m in finished)

    successes = terminal_counts[MissionPhase.MISSION_SUCCESS.value]
    seized = terminal_counts[MissionPhase.PAYLOAD_SEIZED.value]
    failures = len(finished) - successes - seized
    encountered = sum(1 for m in finished if _PIRATE_PHASES.intersection(m.phases))

    return MissionMetrics(
        total_missions=len(missions),
        finished=len(finished),
        successes=successes,
        seized=seized,
        failures=failures,
        success_rate=successes / len(finished) if finished else 0.0,
        avg_cost=_mean([m.cost for m in finished]),
        avg_revenue=_mean([m.revenue for m in finished]),
        avg_profit=_mean([m.profit for m in finished]),
        avg_duration_days=_mean([m.end_time - m.launch_time for m in finished]),
        pirate_encounter_rate=encountered / len(finished) if finished else 0.0,
        terminal_counts=dict(sorted(terminal_counts.items())),
    )


def compute_campaign_metrics(campaigns: list[CampaignTelemetry]) -> CampaignMetrics:
    """Compute player progression statistics."""
    total = len(campaigns)
    if total == 0:
        return CampaignMetrics(
            total_runs=0, avg_days=0.0, avg_final_balance=0.0,
            min_final_balance=0.0, max_final_balance=0.0,
            avg_missions_completed=0.0, avg_final_level=0.0,
            avg_blocked_targets=0.0,
        )

    balances = [c.final_balance for c in campaigns]
    news_totals: Counter[str] = Counter()
    for c in campaigns:
        news_totals.update(c.news_by_category)

    return CampaignMetrics(
        total_runs=total,
        avg_days=_mean([c.days for c in campaigns]),
        avg_final_balance=_mean(balances),
        min_final_balance=min(balances),
        max_final_balance=max(balances),
        avg_missions_completed=_mean([c.missions_completed for c in campaigns]),
        avg_final_level=_mean([c.final_level for c in campaigns]),
        avg_blocked_targets=_mean([c.blocked_targets for c in campaigns]),
        avg_news_by_category={
            category: count / total for category, count in sorted(news_totals.items())
        },
    )


def compute_market_metrics(campaigns: list[CampaignTelemetry]) -> list[MarketMetrics]:
    """Per-commodity price spread, in :class:`ResourceType` order."""
    if not campaigns:
        return []

    results: list[MarketMetrics] = []
    for resource in ResourceType:
        ranges = [c.price_range[resource.value] for c in campaigns
                  if resource.value in c.price_range]
        if not ranges:
            continue
        commodity = COMMODITIES[resource]
        results.append(MarketMetrics(
            resource=resource.value,
            base_price=commodity.base_price,
            price_floor=commodity.price_floor,
            price_ceiling=commodity.price_ceiling,
            min_seen=min(low for low, _ in ranges),
            max_seen=max(high for _, high in ranges),
            avg_spread=_mean([high - low for low, high in ranges]),
        ))
    return results
