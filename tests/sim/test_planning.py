"""Tests for trip planning, costs, yields and contracts."""

from __future__ import annotations

import math

import pytest

from astro_miner.ir.contractors import get_crew, get_provider
from astro_miner.ir.resources import PRECIOUS_RESOURCES, ResourceType
from astro_miner.ir.targets import MiningTarget
from astro_miner.sim.core.mission import ContractTerms
from astro_miner.sim.core.rng import GameRNG
from astro_miner.sim.market import initialize_market
from astro_miner.sim.planning import (
    CONTRACT_VENDORS,
    MAX_YIELD_TONS,
    calculate_contract_revenue,
    calculate_mission_cost,
    calculate_trip_legs,
    estimate_mass_kg,
    estimate_resource_yield,
    generate_contracts,
    late_penalty,
)


# ---------------------------------------------------------------------------
# Trip legs and cost
# ---------------------------------------------------------------------------

class TestTripPlanning:
    def test_legs_from_distance(self):
        legs = calculate_trip_legs(0.92)
        assert (legs.outbound, legs.mining, legs.return_) == (61, 39, 61)
        assert legs.total == 161

    def test_travel_modifier_shortens_flights_only(self):
        legs = calculate_trip_legs(2.0, travel_time_modifier=0.5)
        assert legs.outbound == 58
        assert legs.mining == 50

    def test_minimum_leg_length(self):
        assert calculate_trip_legs(0.0, travel_time_modifier=0.01).outbound == 5

    def test_mission_cost(self):
        cost = calculate_mission_cost(get_provider("spacey"), get_crew("small_human"), 161)
        assert cost.launch_cost == 12_500_000
        assert cost.crew_cost == 4_025_000
        assert cost.total == 16_525_000

    def test_crew_cost_modifier(self):
        cost = calculate_mission_cost(get_provider("ula"), get_crew("robotic"), 100, 0.5)
        assert cost.launch_cost == 5500 * 2000
        assert cost.crew_cost == 250_000


# ---------------------------------------------------------------------------
# Yield
# ---------------------------------------------------------------------------

class TestYield:
    def test_mass_prefers_catalog_value(self):
        target = MiningTarget(id="x", name="x", mass_kg=1e9, diameter_km=100.0)
        assert estimate_mass_kg(target) == 1e9

    def test_mass_from_diameter(self):
        target = MiningTarget(id="x", name="x", diameter_km=1.0)
        expected = (4 / 3) * math.pi * 500.0 ** 3 * 2000
        assert estimate_mass_kg(target) == pytest.approx(expected)

    def test_mass_unknown(self):
        assert estimate_mass_kg(MiningTarget(id="x", name="x")) == 0.0

    def test_yield_scales_with_efficiency(self):
        target = MiningTarget(id="x", name="x", mass_kg=1e9, taxonomic_class="C")
        assert estimate_resource_yield(target, 1.0) == 2000
        assert estimate_resource_yield(target, 0.6) == 1200
        assert estimate_resource_yield(target, 0.6, yield_modifier=1.5) == 1800

    def test_unknown_class_uses_default_rate(self):
        target = MiningTarget(id="x", name="x", mass_kg=1e9, taxonomic_class="Z")
        assert estimate_resource_yield(target, 1.0) == 1000

    def test_yield_capped(self):
        target = MiningTarget(id="433", name="433 Eros", mass_kg=6.687e15)
        assert estimate_resource_yield(target, 1.8) == MAX_YIELD_TONS


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------

class TestContracts:
    @pytest.fixture()
    def market(self):
        return initialize_market(GameRNG(12))

    def test_offers_distinct_resources(self, market):
        contracts = generate_contracts(4, market, GameRNG(1))
        assert len(contracts) == 4
        assert len({c.resource for c in contracts}) == 4

    def test_more_offers_than_resources(self, market):
        contracts = generate_contracts(10, market, GameRNG(1))
        assert len({c.resource for c in contracts}) == len(ResourceType)

    def test_terms_in_range(self, market):
        for contract in generate_contracts(8, market, GameRNG(3)):
            spot = market.resources[contract.resource].current_price
            if contract.resource in PRECIOUS_RESOURCES:
                assert 50 <= contract.quantity_tons <= 199
            else:
                assert 500 <= contract.quantity_tons <= 2499
            assert 60 <= contract.deadline_days <= 239
            assert round(spot * 1.10) <= contract.price_per_ton <= round(spot * 1.25)
            assert contract.vendor in CONTRACT_VENDORS

    @pytest.mark.parametrize(
        ("elapsed", "deadline", "expected"),
        [(50, 100, 0.0), (110, 100, 0.1), (500, 100, 1.0), (10, 0, 0.0)],
    )
    def test_late_penalty(self, elapsed, deadline, expected):
        assert late_penalty(elapsed, deadline) == pytest.approx(expected)

    def test_contract_revenue(self, make_mission):
        contract = ContractTerms(
            vendor="Lunar Industries", resource=ResourceType.WATER,
            quantity_tons=100, price_per_ton=1000, deadline_days=100,
        )
        mission = make_mission(contract=contract, crew_efficiency=1.0, start_time=20.0)
        assert calculate_contract_revenue(mission, 100.0) == 120_000
        assert calculate_contract_revenue(mission, 130.0) == 108_000

    def test_robotic_crew_pays_less(self, make_mission):
        contract = ContractTerms(
            vendor="Lunar Industries", resource=ResourceType.IRON,
            quantity_tons=1000, price_per_ton=1100, deadline_days=200,
        )
        mission = make_mission(contract=contract, crew_efficiency=0.6)
        assert calculate_contract_revenue(mission, 50.0) == round(1_100_000 * 1.04)

    def test_no_contract_no_revenue(self, make_mission):
        assert calculate_contract_revenue(make_mission(), 10.0) == 0.0
