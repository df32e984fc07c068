"""Tests for the text report."""

from __future__ import annotations

from astro_miner.balance.models import (
    BalanceBaseline,
    CampaignMetrics,
    CombatMetrics,
    MarketMetrics,
    MissionMetrics,
)
from astro_miner.balance.report import generate_text_report


def _make_baseline() -> BalanceBaseline:
    return BalanceBaseline(
        num_runs=10,
        days=365,
        generated_at="2032-01-01T00:00:00+00:00",
        combat=[
            CombatMetrics(
                security_id=None, player_level=3, trials=100,
                pirates_defeated=10, pirates_won=60, payload_seized=30,
                defeat_rate=0.1, loss_rate=0.6, seized_rate=0.3,
                avg_player_attack=10.5, avg_player_defense=11.5,
                avg_pirate_attack=16.0, avg_pirate_defense=15.0,
            ),
        ],
        missions=MissionMetrics(
            total_missions=20, finished=18, successes=15, seized=1, failures=2,
            success_rate=15 / 18, avg_cost=16_000_000, avg_revenue=30_000_000,
            avg_profit=14_000_000, avg_duration_days=180.0,
            pirate_encounter_rate=0.05,
            terminal_counts={"mission_success": 15, "launch_anomaly": 2, "payload_seized": 1},
        ),
        campaigns=CampaignMetrics(
            total_runs=10, avg_days=365, avg_final_balance=90_000_000,
            min_final_balance=20_000_000, max_final_balance=200_000_000,
            avg_missions_completed=1.6, avg_final_level=1.0, avg_blocked_targets=2.5,
            avg_news_by_category={"flavor": 200.0},
        ),
        market=[
            MarketMetrics(
                resource="water", base_price=5000, price_floor=2500, price_ceiling=10000,
                min_seen=2600, max_seen=9100, avg_spread=4000,
            ),
        ],
    )


class TestGenerateTextReport:
    def test_sections_present(self):
        report = generate_text_report(_make_baseline())
        for header in ("## Combat", "## Missions", "## Campaigns", "## Market"):
            assert header in report

    def test_figures_formatted(self):
        report = generate_text_report(_make_baseline())
        assert "unescorted" in report
        assert "won=60.0%" in report
        assert "83.3% (15/18)" in report
        assert "$90,000,000" in report
        assert report.index("mission_success") < report.index("launch_anomaly")
