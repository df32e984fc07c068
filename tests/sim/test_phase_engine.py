"""Tests for the mission phase engine: transitions, pirates, durations."""

from __future__ import annotations

import logging

import pytest

from astro_miner.ir.contractors import LaunchCadence
from astro_miner.ir.phases import PHASE_TABLE, MissionPhase
from astro_miner.sim.phases import (
    MIN_ANOMALY_PROBABILITY,
    adjusted_edge_probabilities,
    advance_mission,
    calculate_phase_duration,
    check_pirate_attack,
    reliability_modifier,
    roll_next_phase,
)

TERMINAL_PHASES = [p for p, info in PHASE_TABLE.items() if info.is_terminal]


# ---------------------------------------------------------------------------
# Reliability-adjusted probabilities
# ---------------------------------------------------------------------------

class TestAdjustedProbabilities:
    def test_outbound_at_high_reliability(self):
        adjusted = dict(adjusted_edge_probabilities(MissionPhase.OUTBOUND, 0.98, 0.98))
        assert adjusted[MissionPhase.IN_FLIGHT_ANOMALY] == pytest.approx(0.0104)
        assert adjusted[MissionPhase.DRILLING] == pytest.approx(0.9896)

    def test_modifier_is_average_of_clamped_inputs(self):
        assert reliability_modifier(0.9, 0.7) == pytest.approx(0.8)
        assert reliability_modifier(1.5, -0.5) == pytest.approx(0.5)

    def test_anomaly_probability_falls_as_reliability_rises(self):
        steps = [i / 20 for i in range(21)]
        values = [
            dict(adjusted_edge_probabilities(MissionPhase.LAUNCH, r, r))[MissionPhase.LAUNCH_ANOMALY]
            for r in steps
        ]
        for lower, higher in zip(values, values[1:]):
            assert higher <= lower

    def test_anomaly_probability_never_below_floor(self):
        for phase in (MissionPhase.LAUNCH, MissionPhase.OUTBOUND,
                      MissionPhase.DRILLING, MissionPhase.INBOUND):
            for r in (0.0, 0.5, 1.0):
                for target, prob in adjusted_edge_probabilities(phase, r, r):
                    if PHASE_TABLE[target].is_anomaly:
                        assert prob >= MIN_ANOMALY_PROBABILITY

    def test_nominal_edge_capped_at_one(self):
        adjusted = dict(adjusted_edge_probabilities(MissionPhase.DELIVERING_PAYLOAD, 1.0, 1.0))
        assert adjusted[MissionPhase.MISSION_SUCCESS] == 1.0

    def test_anomaly_reduction_moves_mass_to_nominal(self):
        adjusted = dict(adjusted_edge_probabilities(
            MissionPhase.OUTBOUND, 0.98, 0.98, anomaly_reduction=0.5,
        ))
        assert adjusted[MissionPhase.IN_FLIGHT_ANOMALY] == pytest.approx(0.0052)
        assert adjusted[MissionPhase.DRILLING] == pytest.approx(0.9948)

    def test_anomaly_reduction_respects_floor(self):
        for _, prob in adjusted_edge_probabilities(
            MissionPhase.LAUNCH, 1.0, 1.0, anomaly_reduction=1.0,
        ):
            assert prob >= MIN_ANOMALY_PROBABILITY


# ---------------------------------------------------------------------------
# roll_next_phase
# ---------------------------------------------------------------------------

class TestRollNextPhase:
    @pytest.mark.parametrize("phase", TERMINAL_PHASES)
    def test_terminal_phase_unchanged_without_draw(self, phase, scripted_rng):
        rng = scripted_rng()
        assert roll_next_phase(phase, 0.9, 0.9, rng, player_level=5) == phase
        assert rng.float_calls == 0

    def test_unknown_phase_returned_as_is(self, scripted_rng, caplog):
        rng = scripted_rng()
        with caplog.at_level(logging.WARNING):
            assert roll_next_phase("warp_drive", 0.9, 0.9, rng) == "warp_drive"
        assert "warp_drive" in caplog.text
        assert rng.float_calls == 0

    def test_combat_phase_not_rolled(self, scripted_rng):
        rng = scripted_rng()
        phase = MissionPhase.PIRATE_ATTACK_INBOUND
        assert roll_next_phase(phase, 0.9, 0.9, rng) == phase
        assert rng.float_calls == 0

    def test_low_roll_takes_nominal_edge(self, scripted_rng):
        rng = scripted_rng(floats=[0.5])
        assert roll_next_phase(MissionPhase.LAUNCH, 0.98, 0.98, rng) == MissionPhase.OUTBOUND

    def test_high_roll_takes_anomaly_edge(self, scripted_rng):
        rng = scripted_rng(floats=[0.995])
        assert roll_next_phase(MissionPhase.LAUNCH, 0.98, 0.98, rng) == MissionPhase.LAUNCH_ANOMALY

    def test_accepts_raw_phase_value(self, scripted_rng):
        rng = scripted_rng(floats=[0.1])
        assert roll_next_phase("drilling", 0.9, 0.9, rng) == MissionPhase.INBOUND

    def test_anomaly_reduction_shifts_roll(self, scripted_rng):
        plain = roll_next_phase(MissionPhase.LAUNCH, 0.98, 0.98, scripted_rng(floats=[0.993]))
        researched = roll_next_phase(
            MissionPhase.LAUNCH, 0.98, 0.98, scripted_rng(floats=[0.993]), anomaly_reduction=0.5,
        )
        assert plain == MissionPhase.LAUNCH_ANOMALY
        assert researched == MissionPhase.OUTBOUND

    def test_outbound_intercepted_at_level_three(self, scripted_rng):
        rng = scripted_rng(floats=[0.1, 0.01])
        result = roll_next_phase(MissionPhase.OUTBOUND, 0.9, 0.9, rng, player_level=3)
        assert result == MissionPhase.PIRATE_ATTACK_OUTBOUND

    def test_inbound_intercepted_at_level_three(self, scripted_rng):
        rng = scripted_rng(floats=[0.1, 0.2])
        result = roll_next_phase(MissionPhase.INBOUND, 0.9, 0.9, rng, player_level=4)
        assert result == MissionPhase.PIRATE_ATTACK_INBOUND

    def test_no_pirates_below_level_three(self, scripted_rng):
        rng = scripted_rng(floats=[0.1, 0.0])
        result = roll_next_phase(MissionPhase.OUTBOUND, 0.9, 0.9, rng, player_level=2)
        assert result == MissionPhase.DRILLING
        assert rng.float_calls == 1

    def test_anomaly_not_replaced_by_pirates(self, scripted_rng):
        rng = scripted_rng(floats=[0.999, 0.0])
        result = roll_next_phase(MissionPhase.OUTBOUND, 0.9, 0.9, rng, player_level=5)
        assert result == MissionPhase.IN_FLIGHT_ANOMALY
        assert rng.float_calls == 1

    def test_pirate_check_only_for_flight_legs(self, scripted_rng):
        rng = scripted_rng(floats=[0.0])
        assert check_pirate_attack(MissionPhase.DRILLING, 5, rng) is False
        assert rng.float_calls == 0


# ---------------------------------------------------------------------------
# Durations
# ---------------------------------------------------------------------------

class TestPhaseDuration:
    @pytest.mark.parametrize("phase", TERMINAL_PHASES)
    def test_terminal_is_zero(self, phase, scripted_rng):
        assert calculate_phase_duration(phase, 50, 40, 50, None, scripted_rng()) == 0.0

    def test_unknown_phase_is_zero(self, scripted_rng, caplog):
        rng = scripted_rng()
        with caplog.at_level(logging.WARNING):
            assert calculate_phase_duration("bogus", 1, 1, 1, None, rng) == 0.0
        assert "bogus" in caplog.text
        assert rng.float_calls == 0

    def test_accepts_raw_phase_value(self, scripted_rng):
        assert calculate_phase_duration("outbound", 61, 39, 60, None, scripted_rng()) == 61

    def test_flight_legs_use_trip_plan(self, scripted_rng):
        rng = scripted_rng()
        assert calculate_phase_duration(MissionPhase.OUTBOUND, 61, 39, 60, None, rng) == 61
        assert calculate_phase_duration(MissionPhase.DRILLING, 61, 39, 60, None, rng) == 39
        assert calculate_phase_duration(MissionPhase.INBOUND, 61, 39, 60, None, rng) == 60

    @pytest.mark.parametrize(
        ("cadence", "expected"),
        [
            (LaunchCadence.WEEKLY, 14.0),
            (LaunchCadence.MONTHLY, 105.0),
            (LaunchCadence.BI_WEEKLY, 29.0),
            (None, 29.0),
            ("Fortnightly-ish", 29.0),
        ],
    )
    def test_contract_wait_by_cadence(self, cadence, expected, scripted_rng):
        rng = scripted_rng(floats=[0.5])
        duration = calculate_phase_duration(MissionPhase.CONTRACT_SIGNED, 0, 0, 0, cadence, rng)
        assert duration == pytest.approx(expected)

    def test_fixed_ranges(self, scripted_rng):
        assert calculate_phase_duration(
            MissionPhase.LAUNCH, 0, 0, 0, None, scripted_rng(floats=[0.5]),
        ) == pytest.approx(2.0)
        assert calculate_phase_duration(
            MissionPhase.DELIVERING_PAYLOAD, 0, 0, 0, None, scripted_rng(floats=[0.5]),
        ) == pytest.approx(4.5)
        assert calculate_phase_duration(
            MissionPhase.PIRATE_ATTACK_INBOUND, 0, 0, 0, None, scripted_rng(floats=[0.5]),
        ) == pytest.approx(1.5)
        assert calculate_phase_duration(
            MissionPhase.PIRATES_DEFEATED, 0, 0, 0, None, scripted_rng(),
        ) == 1.0


# ---------------------------------------------------------------------------
# advance_mission
# ---------------------------------------------------------------------------

class TestAdvanceMission:
    def test_running_phase_is_left_alone(self, make_mission, scripted_rng):
        mission = make_mission(phase_duration=10.0)
        assert advance_mission(mission, 9.9, scripted_rng(), scripted_rng(), player_level=1) is None

    def test_terminal_mission_is_left_alone(self, make_mission, scripted_rng):
        mission = make_mission(phase=MissionPhase.MISSION_SUCCESS, phase_duration=0.0)
        assert advance_mission(mission, 100.0, scripted_rng(), scripted_rng(), player_level=1) is None

    def test_transition_returns_updated_copy(self, make_mission, scripted_rng):
        mission = make_mission(phase=MissionPhase.OUTBOUND, phase_duration=10.0)
        transition = advance_mission(
            mission, 12.0, scripted_rng(floats=[0.1]), scripted_rng(), player_level=1,
        )

        assert transition is not None
        assert transition.previous_phase == MissionPhase.OUTBOUND
        assert transition.new_phase == MissionPhase.DRILLING
        assert transition.entered_drilling
        assert transition.mission.phase_start_time == 12.0
        assert transition.mission.phase_duration == mission.mining_days
        # Input untouched
        assert mission.phase == MissionPhase.OUTBOUND
        assert mission.phase_start_time == 0.0

    def test_mission_anomaly_reduction_used_in_roll(self, make_mission, scripted_rng):
        mission = make_mission(
            phase=MissionPhase.OUTBOUND, phase_duration=1.0,
            provider_reliability=0.98, crew_reliability=0.98, anomaly_reduction=0.5,
        )
        transition = advance_mission(
            mission, 2.0, scripted_rng(floats=[0.993]), scripted_rng(), player_level=1,
        )
        assert transition.new_phase == MissionPhase.DRILLING

    def test_pirate_interception_flagged(self, make_mission, scripted_rng):
        mission = make_mission(phase=MissionPhase.OUTBOUND)
        transition = advance_mission(
            mission, 10.0, scripted_rng(floats=[0.1, 0.0, 0.5]), scripted_rng(), player_level=3,
        )
        assert transition.new_phase == MissionPhase.PIRATE_ATTACK_OUTBOUND
        assert transition.pirates_detected
        assert transition.combat is None

    def test_won_fight_then_resume(self, make_mission, scripted_rng):
        mission = make_mission(phase=MissionPhase.PIRATE_ATTACK_OUTBOUND, phase_duration=1.0)
        # Player rolls 20/20, pirates roll 1/1 with the weakest level-3 ratings.
        combat_rng = scripted_rng(ints=[20, 20, 1, 1, 3, 2])
        transition = advance_mission(mission, 1.0, scripted_rng(), combat_rng, player_level=3)

        assert transition.new_phase == MissionPhase.PIRATES_DEFEATED
        assert transition.combat is not None
        assert transition.mission.combat == transition.combat
        assert transition.mission.resume_phase == MissionPhase.DRILLING
        assert transition.mission.phase_duration == 1.0

        resumed = advance_mission(
            transition.mission, 2.0, scripted_rng(), scripted_rng(), player_level=3,
        )
        assert resumed.new_phase == MissionPhase.DRILLING
        assert resumed.mission.resume_phase is None
        assert resumed.mission.phase_duration == mission.mining_days

    def test_inbound_fight_resumes_delivery(self, make_mission, scripted_rng):
        mission = make_mission(phase=MissionPhase.PIRATE_ATTACK_INBOUND, phase_duration=1.0)
        combat_rng = scripted_rng(ints=[20, 20, 1, 1, 3, 2])
        transition = advance_mission(mission, 1.0, scripted_rng(), combat_rng, player_level=3)
        assert transition.mission.resume_phase == MissionPhase.DELIVERING_PAYLOAD

    def test_lost_fight_is_terminal(self, make_mission, scripted_rng):
        mission = make_mission(phase=MissionPhase.PIRATE_ATTACK_INBOUND, phase_duration=1.0)
        combat_rng = scripted_rng(ints=[1, 1, 20, 20, 3, 2])
        transition = advance_mission(mission, 1.0, scripted_rng(), combat_rng, player_level=3)

        assert transition.new_phase == MissionPhase.PIRATES_WON
        assert transition.is_terminal
        assert transition.mission.resume_phase is None
        assert transition.mission.phase_duration == 0.0

    def test_regroup_without_resume_target_falls_back(self, make_mission, scripted_rng, caplog):
        mission = make_mission(phase=MissionPhase.PIRATES_DEFEATED, phase_duration=1.0)
        with caplog.at_level(logging.WARNING):
            transition = advance_mission(mission, 1.0, scripted_rng(), scripted_rng(), player_level=3)
        assert transition.new_phase == MissionPhase.DRILLING
        assert "without a resume target" in caplog.text
