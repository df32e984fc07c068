"""Tests for the caller-side input guards."""

from __future__ import annotations

import pytest

from astro_miner.ir.phases import MissionPhase
from astro_miner.sim.errors import ConfigurationError, require_phase, require_reliability


class TestRequireReliability:
    @pytest.mark.parametrize("value", [0.0, 0.5, 1.0])
    def test_unit_interval_accepted(self, value):
        assert require_reliability(value) == value

    @pytest.mark.parametrize("value", [-0.01, 1.01, 97.0])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(ConfigurationError, match="crew reliability"):
            require_reliability(value, "crew reliability")

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            require_reliability(-1.0)


class TestRequirePhase:
    def test_member_passes_through(self):
        assert require_phase(MissionPhase.DRILLING) is MissionPhase.DRILLING

    def test_raw_value_coerced(self):
        assert require_phase("pirates_won") is MissionPhase.PIRATES_WON

    @pytest.mark.parametrize("value", ["warp_drive", "", "Drilling"])
    def test_unknown_phase_rejected(self, value):
        with pytest.raises(ConfigurationError, match="Unknown mission phase"):
            require_phase(value)
