"""Integration tests for baseline generation, save, and load."""

from __future__ import annotations

from pathlib import Path

import pytest

from astro_miner.balance.baselines import generate_baseline, load_baseline, save_baseline
from astro_miner.balance.models import BalanceBaseline
from astro_miner.ir.contractors import SECURITY_CONTRACTORS


@pytest.fixture(scope="module")
def baseline() -> BalanceBaseline:
    return generate_baseline(num_runs=3, days=180, combat_trials=500)


class TestGenerateBaseline:
    def test_small_batch(self, baseline):
        assert baseline.num_runs == 3
        assert baseline.campaigns.total_runs == 3
        assert baseline.missions.total_missions > 0
        assert len(baseline.market) == 8

    def test_combat_row_per_escort(self, baseline):
        escorts = [c.security_id for c in baseline.combat]
        assert escorts == [None, *(s.id for s in SECURITY_CONTRACTORS)]
        for row in baseline.combat:
            assert row.trials == 500
            assert row.pirates_defeated + row.pirates_won + row.payload_seized == 500

    def test_stronger_escort_loses_less(self, baseline):
        by_id = {c.security_id: c for c in baseline.combat}
        assert by_id["military_escort"].loss_rate < by_id[None].loss_rate


class TestSaveLoad:
    def test_round_trip(self, baseline, tmp_path: Path):
        path = tmp_path / "nested" / "baseline.json"
        save_baseline(baseline, path)
        assert path.exists()
        assert load_baseline(path) == baseline
