"""Exception types for integration bugs and unreadable saves.

Ordinary player refusals are not exceptions; see
:class:`astro_miner.sim.core.player.ActionResult`.
"""

from __future__ import annotations

from astro_miner.ir.phases import MissionPhase


class ConfigurationError(ValueError):
    """A caller passed an id or value that cannot come from valid game data."""


class SnapshotError(ValueError):
    """A snapshot payload is not restorable at all."""


def require_reliability(value: float, name: str = "reliability") -> float:
    """Return *value* if it lies in [0, 1], else raise ConfigurationError."""
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{name} must be in [0, 1], got {value!r}")
    return value


def require_phase(value: MissionPhase | str) -> MissionPhase:
    """Coerce *value* to a MissionPhase or raise ConfigurationError."""
    try:
        return MissionPhase(value)
    except ValueError:
        raise ConfigurationError(f"Unknown mission phase: {value!r}") from None
