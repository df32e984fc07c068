"""Balance analysis: simulated baselines, metrics, and reports."""

from astro_miner.balance.baselines import generate_baseline, load_baseline, save_baseline
from astro_miner.balance.metrics import (
    compute_campaign_metrics,
    compute_combat_metrics,
    compute_market_metrics,
    compute_mission_metrics,
)
from astro_miner.balance.models import (
    BalanceBaseline,
    CampaignMetrics,
    CombatMetrics,
    MarketMetrics,
    MissionMetrics,
)
from astro_miner.balance.report import generate_text_report

__all__ = [
    "BalanceBaseline",
    "CampaignMetrics",
    "CombatMetrics",
    "MarketMetrics",
    "MissionMetrics",
    "compute_campaign_metrics",
    "compute_combat_metrics",
    "compute_market_metrics",
    "compute_mission_metrics",
    "generate_baseline",
    "generate_text_report",
    "load_baseline",
    "save_baseline",
]
