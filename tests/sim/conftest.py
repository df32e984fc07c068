"""Shared fixtures and helpers for simulation tests."""

from __future__ import annotations

from typing import Callable, Sequence

import pytest

from astro_miner.ir.phases import MissionPhase
from astro_miner.ir.targets import SAMPLE_TARGETS
from astro_miner.sim.core.mission import Mission
from astro_miner.sim.core.rng import GameRNG
from astro_miner.sim.session import GameSession


class ScriptedRNG(GameRNG):
    """GameRNG that hands out queued values before falling back to its seed.

    ``random_float`` (and so ``uniform``/``chance``) pops from *floats*;
    ``random_int`` (and so ``roll_die``) pops from *ints*.
    """

    def __init__(
        self,
        floats: Sequence[float] = (),
        ints: Sequence[int] = (),
        seed: int = 0,
    ) -> None:
        super().__init__(seed)
        self.floats = list(floats)
        self.ints = list(ints)
        self.float_calls = 0

    def random_float(self) -> float:
        self.float_calls += 1
        if self.floats:
            return self.floats.pop(0)
        return super().random_float()

    def random_int(self, low: int, high: int) -> int:
        if self.ints:
            value = self.ints.pop(0)
            assert low <= value <= high, f"scripted {value} outside [{low}, {high}]"
            return value
        return super().random_int(low, high)


@pytest.fixture()
def scripted_rng() -> Callable[..., ScriptedRNG]:
    """Factory for :class:`ScriptedRNG` instances."""
    return ScriptedRNG


@pytest.fixture()
def session() -> GameSession:
    return GameSession(seed=1234, targets=SAMPLE_TARGETS)


@pytest.fixture()
def make_mission() -> Callable[..., Mission]:
    """Factory for a mission with plausible defaults; override any field."""

    def _make(**overrides: object) -> Mission:
        fields: dict[str, object] = {
            "target_id": "433",
            "target_name": "433 Eros",
            "provider_id": "spacey",
            "crew_id": "small_human",
            "phase": MissionPhase.OUTBOUND,
            "phase_start_time": 0.0,
            "phase_duration": 10.0,
            "provider_reliability": 0.97,
            "crew_reliability": 0.92,
            "crew_efficiency": 1.0,
            "outbound_days": 88,
            "mining_days": 45,
            "return_days": 88,
        }
        fields.update(overrides)
        return Mission(**fields)

    return _make
