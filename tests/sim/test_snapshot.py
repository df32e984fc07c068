"""Tests for session snapshots: round trip and per-section failure handling."""

from __future__ import annotations

import copy
import json

import pytest

from astro_miner.ir.resources import ResourceType
from astro_miner.ir.targets import SAMPLE_TARGETS
from astro_miner.sim.errors import SnapshotError
from astro_miner.sim.session import GameSession
from astro_miner.sim.snapshot import SECTIONS, SNAPSHOT_VERSION, restore_snapshot, take_snapshot


@pytest.fixture()
def played() -> GameSession:
    """A session a few weeks in, with a mission in flight."""
    s = GameSession(seed=77, targets=SAMPLE_TARGETS)
    s.launch_mission("101955", "spacey", "small_human", contract_id=s.contracts[0].id)
    for _ in range(30):
        s.advance(1.0)
    return s


def _fresh() -> GameSession:
    return GameSession(seed=5, targets=SAMPLE_TARGETS)


class TestRoundTrip:
    def test_snapshot_is_json_safe(self, played):
        data = take_snapshot(played)
        assert json.loads(json.dumps(data)) == data
        assert data["version"] == SNAPSHOT_VERSION

    def test_restore_reproduces_state(self, played):
        data = json.loads(json.dumps(take_snapshot(played)))
        target = _fresh()
        result = restore_snapshot(target, data)

        assert result.complete
        assert result.restored_sections == list(SECTIONS)
        assert target.now == played.now
        assert target.market == played.market
        assert target.missions == played.missions
        assert target.contracts == played.contracts
        assert target.player == played.player
        assert target.scheduler.serialize() == played.scheduler.serialize()

    def test_upgrades_and_stockpile_survive(self, played):
        played.player.level_override = 3
        played.player.balance = 1e9
        assert played.player.unlock_tech("ion_propulsion").success
        assert played.player.purchase_asset("light_freighter").success
        assert played.player.purchase_depot("leo_depot").success
        played.player.store_resources(ResourceType.PLATINUM, 120)

        target = _fresh()
        restore_snapshot(target, json.loads(json.dumps(take_snapshot(played))))

        assert target.player.is_tech_unlocked("ion_propulsion")
        assert target.player.tech.travel_time == pytest.approx(0.85)
        assert target.player.owns_asset("light_freighter")
        assert target.player.stored_tons(ResourceType.PLATINUM) == 120

    def test_restored_session_continues_identically(self, played):
        target = _fresh()
        restore_snapshot(target, take_snapshot(played))

        for _ in range(60):
            a = played.advance(1.0)
            b = target.advance(1.0)
            assert [i.text for i in a.news] == [i.text for i in b.news]
        assert target.player.balance == played.player.balance


class TestRestoreFailures:
    def test_non_mapping_rejected(self):
        with pytest.raises(SnapshotError):
            restore_snapshot(_fresh(), ["not", "a", "snapshot"])

    def test_wrong_version_rejected(self, played):
        data = take_snapshot(played)
        data["version"] = 99
        with pytest.raises(SnapshotError):
            restore_snapshot(_fresh(), data)

    def test_bad_market_keeps_current_market(self, played):
        data = take_snapshot(played)
        data["market"] = {"resources": {"water": {"current_price": "lots"}}}
        target = _fresh()
        before = copy.deepcopy(target.market)

        result = restore_snapshot(target, data)

        assert result.failed_sections == ["market"]
        assert target.market == before
        assert target.now == played.now
        assert target.player == played.player

    def test_missing_section_reported(self, played):
        data = take_snapshot(played)
        del data["player"]
        target = _fresh()
        result = restore_snapshot(target, data)

        assert "player" in result.failed_sections
        assert target.player.balance == 50_000_000
        assert "missions" in result.restored_sections

    def test_missions_restored_all_or_nothing(self, played):
        data = take_snapshot(played)
        data["missions"].append({"target_id": "433"})
        target = _fresh()
        target.launch_mission("433", "spacey", "robotic")
        before = list(target.missions)

        result = restore_snapshot(target, data)

        assert "missions" in result.failed_sections
        assert target.missions == before

    def test_bad_rng_state_leaves_generators_untouched(self, played):
        data = take_snapshot(played)
        data["rng"]["market"] = [3, [1, 2, 3], None]
        target = _fresh()
        before = {name: rng.get_state() for name, rng in target.rngs.items()}

        result = restore_snapshot(target, data)

        assert "rng" in result.failed_sections
        assert {name: rng.get_state() for name, rng in target.rngs.items()} == before

    def test_scheduler_key_failure_is_partial(self, played):
        data = take_snapshot(played)
        data["scheduler"]["fired_easter_eggs"] = ["halloween"]
        target = _fresh()

        result = restore_snapshot(target, data)

        assert "scheduler" in result.restored_sections
        assert "scheduler.fired_easter_eggs" in result.failed_sections
        assert target.scheduler.blocked_targets() == played.scheduler.blocked_targets()


# ---------------------------------------------------------------------------
# Market bounds on restore
# ---------------------------------------------------------------------------


class TestMarketRestoreBounds:
    def _restore_with(self, played, mutate) -> tuple[GameSession, object, object]:
        data = take_snapshot(played)
        mutate(data["market"]["resources"])
        target = _fresh()
        before = copy.deepcopy(target.market)
        return target, before, restore_snapshot(target, data)

    def test_zero_price_rejected_and_session_keeps_ticking(self, played):
        def zero(resources):
            resources["water"]["current_price"] = 0

        target, before, result = self._restore_with(played, zero)

        assert result.failed_sections == ["market"]
        assert target.market == before
        target.advance(8.0)
        assert target.market.resources[ResourceType.WATER].current_price > 0

    def test_price_above_ceiling_rejected(self, played):
        def inflate(resources):
            resources["gold"]["current_price"] = 1e9

        target, before, result = self._restore_with(played, inflate)

        assert "market" in result.failed_sections
        assert target.market == before

    def test_history_longer_than_limit_rejected(self, played):
        def pad(resources):
            point = resources["iron"]["price_history"][0]
            resources["iron"]["price_history"] = [dict(point) for _ in range(53)]

        target, before, result = self._restore_with(played, pad)

        assert "market" in result.failed_sections
        assert target.market == before

    def test_history_price_out_of_bounds_rejected(self, played):
        def corrupt(resources):
            resources["nickel"]["price_history"][0]["price"] = 1.0

        _, _, result = self._restore_with(played, corrupt)

        assert "market" in result.failed_sections

    def test_missing_commodity_rejected(self, played):
        def drop(resources):
            del resources["lithium"]

        target, before, result = self._restore_with(played, drop)

        assert "market" in result.failed_sections
        assert target.market == before

    def test_other_sections_still_restored(self, played):
        def zero(resources):
            resources["water"]["current_price"] = 0

        target, _, result = self._restore_with(played, zero)

        assert "player" in result.restored_sections
        assert target.player == played.player
