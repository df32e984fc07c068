"""Core simulation primitives for the asteroid-mining simulator."""

from astro_miner.sim.core.mission import CombatResult, ContractTerms, Mission
from astro_miner.sim.core.player import (
    ActionResult,
    DepotHolding,
    FlightLogEntry,
    PlayerState,
    TechModifiers,
    player_level,
)
from astro_miner.sim.core.rng import GameRNG

__all__ = [
    # rng
    "GameRNG",
    # mission
    "CombatResult",
    "ContractTerms",
    "Mission",
    # player
    "ActionResult",
    "DepotHolding",
    "FlightLogEntry",
    "PlayerState",
    "TechModifiers",
    "player_level",
]
