"""Tests for PlayerState progression, money and relationships."""

from __future__ import annotations

import pytest

from astro_miner.ir.resources import ResourceType
from astro_miner.ir.tech import BASE_TECHS
from astro_miner.sim.core.player import (
    FLIGHT_LOG_LIMIT,
    FlightLogEntry,
    PlayerState,
    player_level,
)


class TestPlayerLevel:
    @pytest.mark.parametrize(
        ("missions", "level"),
        [(0, 1), (9, 1), (10, 2), (49, 2), (50, 3), (499, 3), (500, 4), (5000, 4)],
    )
    def test_thresholds(self, missions, level):
        assert player_level(missions) == level

    def test_override_wins(self):
        player = PlayerState(missions_completed=3, level_override=5)
        assert player.level == 5


class TestMoney:
    def test_subtract_refuses_overdraft(self):
        player = PlayerState(balance=100)
        result = player.subtract_money(150)
        assert not result.success
        assert player.balance == 100

    def test_subtract_and_add(self):
        player = PlayerState(balance=100)
        assert player.subtract_money(100).success
        player.add_money(25)
        assert player.balance == 25


class TestRelationships:
    def test_unescorted_relationship_is_zero(self):
        assert PlayerState().relationship(None) == 0

    def test_capped_at_ten(self):
        player = PlayerState()
        for _ in range(15):
            player.improve_relationship("orbital_defense")
        assert player.relationship("orbital_defense") == 10


class TestTargetsAndLog:
    def test_mark_depleted_once(self):
        player = PlayerState()
        assert player.mark_depleted("433")
        assert not player.mark_depleted("433")
        assert player.depleted_targets == ["433"]

    def test_flight_log_keeps_latest(self):
        player = PlayerState()
        for i in range(5):
            player.log_flight(FlightLogEntry(
                target_name=f"t{i}", resource="Iron", tons=1, profit=0, completed_time=i,
            ))
        assert len(player.flight_log) == FLIGHT_LOG_LIMIT
        assert [e.target_name for e in player.flight_log] == ["t2", "t3", "t4"]


# ---------------------------------------------------------------------------
# Research
# ---------------------------------------------------------------------------

class TestResearch:
    def test_starts_with_base_techs_and_neutral_modifiers(self):
        player = PlayerState()
        assert player.unlocked_techs == BASE_TECHS
        tech = player.tech
        assert (tech.travel_time, tech.yield_multiplier, tech.crew_cost) == (1.0, 1.0, 1.0)
        assert tech.anomaly_reduction == 0.0

    def test_unlock_charges_and_records(self):
        player = PlayerState(level_override=2, balance=10_000_000)
        result = player.unlock_tech("ion_propulsion")
        assert result.success
        assert player.balance == 5_000_000
        assert player.is_tech_unlocked("ion_propulsion")
        assert player.tech.travel_time == pytest.approx(0.85)

    def test_effects_stack(self):
        player = PlayerState(level_override=5, balance=1e9)
        for tech_id in ("ion_propulsion", "advanced_gnc", "laser_cutters",
                        "magnetic_anchors", "basic_mining_bots"):
            assert player.unlock_tech(tech_id).success
        tech = player.tech
        assert tech.travel_time == pytest.approx(0.85 * 0.95)
        assert tech.yield_multiplier == pytest.approx(1.10 * 1.05)
        assert tech.crew_cost == pytest.approx(0.80)
        assert tech.anomaly_reduction == pytest.approx(0.10)

    def test_already_unlocked(self):
        result = PlayerState().unlock_tech("chemical_rockets")
        assert not result.success
        assert result.reason == "Already unlocked"

    def test_level_gate(self):
        player = PlayerState(balance=1e9)
        result = player.unlock_tech("ion_propulsion")
        assert not result.success
        assert result.reason == "Requires Level 2"
        assert player.balance == 1e9

    def test_insufficient_funds(self):
        player = PlayerState(level_override=2, balance=1_000_000)
        result = player.unlock_tech("ion_propulsion")
        assert not result.success
        assert "Insufficient funds" in result.reason
        assert not player.is_tech_unlocked("ion_propulsion")

    def test_missing_prerequisite(self):
        player = PlayerState(level_override=2, balance=1e9)
        result = player.unlock_tech("hall_effect")
        assert not result.success
        assert result.reason == "Requires Ion Propulsion"

    def test_unknown_tech(self):
        result = PlayerState().unlock_tech("warp_drive")
        assert not result.success
        assert "Unknown tech" in result.reason


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------

class TestAssets:
    def test_purchase(self):
        player = PlayerState(level_override=2, balance=30_000_000)
        assert player.purchase_asset("light_freighter").success
        assert player.owns_asset("light_freighter")
        assert player.balance == 10_000_000

    def test_already_owned(self):
        player = PlayerState(level_override=2, balance=1e9, owned_assets=["light_freighter"])
        result = player.purchase_asset("light_freighter")
        assert not result.success
        assert result.reason == "Already owned"
        assert player.balance == 1e9

    def test_level_gate(self):
        player = PlayerState(level_override=2, balance=1e9)
        result = player.purchase_asset("deep_space_vessel")
        assert not result.success
        assert result.reason == "Requires Level 3"

    def test_insufficient_funds(self):
        player = PlayerState(level_override=2, balance=1_000_000)
        result = player.purchase_asset("heavy_hauler")
        assert not result.success
        assert "Insufficient funds" in result.reason
        assert player.owned_assets == []


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

def _depot_owner(*depot_ids: str) -> PlayerState:
    player = PlayerState(level_override=4, balance=1e9)
    for depot_id in depot_ids:
        assert player.purchase_depot(depot_id).success
    return player


class TestStorage:
    def test_purchase_stacks_capacity(self):
        player = _depot_owner("leo_depot", "leo_depot")
        assert player.depot_count("leo_depot") == 2
        assert player.storage_capacity() == 10_000
        assert player.balance == 1e9 - 20_000_000

    def test_depot_level_gate(self):
        player = PlayerState(level_override=3, balance=1e9)
        result = player.purchase_depot("belt_depot")
        assert not result.success
        assert result.reason == "Requires Level 4"

    def test_store_fills_smallest_first(self):
        player = _depot_owner("geo_depot", "leo_depot")
        stored = player.store_resources(ResourceType.IRON, 8_000)
        assert stored == 8_000
        assert player.depots["leo_depot"].contents[ResourceType.IRON] == 5_000
        assert player.depots["geo_depot"].contents[ResourceType.IRON] == 3_000

    def test_store_reports_overflow(self):
        player = _depot_owner("leo_depot")
        assert player.store_resources(ResourceType.WATER, 4_000) == 4_000
        assert player.store_resources(ResourceType.IRON, 4_000) == 1_000
        assert player.stored_tons() == 5_000
        assert player.stored_tons(ResourceType.IRON) == 1_000

    def test_store_without_depots(self):
        assert PlayerState().store_resources(ResourceType.IRON, 100) == 0

    def test_sell_stored(self):
        player = _depot_owner("leo_depot")
        player.store_resources(ResourceType.NICKEL, 300)
        before = player.balance

        result = player.sell_stored("leo_depot", ResourceType.NICKEL, 500, 12.5)
        assert result.success
        assert result.revenue == 3_750
        assert player.balance == before + 3_750
        assert player.stored_tons(ResourceType.NICKEL) == 0

    def test_sell_partial(self):
        player = _depot_owner("leo_depot")
        player.store_resources(ResourceType.NICKEL, 300)
        assert player.sell_stored("leo_depot", ResourceType.NICKEL, 100, 10).success
        assert player.stored_tons(ResourceType.NICKEL) == 200

    def test_nothing_to_sell(self):
        player = _depot_owner("leo_depot")
        result = player.sell_stored("leo_depot", ResourceType.GOLD, 10, 100)
        assert not result.success
        assert result.reason == "Nothing to sell"

    def test_depot_not_owned(self):
        result = PlayerState().sell_stored("leo_depot", ResourceType.GOLD, 10, 100)
        assert not result.success
        assert result.reason == "Depot not owned"

    def test_storage_survives_json_round_trip(self):
        player = _depot_owner("leo_depot")
        player.store_resources(ResourceType.IRON, 42)
        restored = PlayerState.model_validate(player.model_dump(mode="json"))
        assert restored.stored_tons(ResourceType.IRON) == 42
