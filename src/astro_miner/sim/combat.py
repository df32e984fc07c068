"""Pirate combat resolution.

A fight is four opposed d20 checks: each side's attack against the other
side's defense.  Winning both checks is a clear result either way; a
split decision is settled by a further escape draw.
"""

from __future__ import annotations

import logging

from astro_miner.ir.contractors import (
    MAX_RELATIONSHIP_LEVEL,
    SecurityContractor,
    get_pirate_stats,
    get_security,
)
from astro_miner.ir.phases import MissionPhase
from astro_miner.sim.config import DEFAULT_CONFIG, SimConfig
from astro_miner.sim.core.mission import CombatResult
from astro_miner.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

# Minimum evasion when flying without an escort.
UNESCORTED_ATTACK = 0
UNESCORTED_DEFENSE = 1

RELATIONSHIP_BONUS_PER_LEVEL = 0.5

COMBAT_OUTCOMES: frozenset[MissionPhase] = frozenset({
    MissionPhase.PIRATES_DEFEATED,
    MissionPhase.PIRATES_WON,
    MissionPhase.PAYLOAD_SEIZED,
})


def relationship_bonus(relationship_level: int) -> float:
    """Bonus added to both escort ratings; +0.5 per level, capped at level 10."""
    return min(relationship_level, MAX_RELATIONSHIP_LEVEL) * RELATIONSHIP_BONUS_PER_LEVEL


def resolve_combat(
    player_level: int,
    security_id: str | None,
    relationship_level: int,
    rng: GameRNG,
    config: SimConfig = DEFAULT_CONFIG,
) -> CombatResult:
    """Resolve one pirate encounter.

    Parameters
    ----------
    player_level:
        Selects the pirate stat row.  Levels outside 3..5 clamp.
    security_id:
        Hired escort, or ``None``.  An unknown id fights unescorted.
    relationship_level:
        Standing with the escort; ignored when flying unescorted.
    rng:
        Source for the four d20 rolls, the pirate ratings and the
        escape draw on a split decision.
    config:
        Supplies ``ambiguous_escape_chance``.
    """
    security: SecurityContractor | None = get_security(security_id)
    if security_id is not None and security is None:
        logger.warning("Unknown security contractor %r; fighting unescorted", security_id)

    if security is not None:
        bonus = relationship_bonus(relationship_level)
        base_attack = security.attack_rating + bonus
        base_defense = security.defense_rating + bonus
    else:
        base_attack = UNESCORTED_ATTACK
        base_defense = UNESCORTED_DEFENSE

    pirate = get_pirate_stats(player_level)

    player_attack_roll = rng.roll_die(20)
    player_defense_roll = rng.roll_die(20)
    pirate_attack_roll = rng.roll_die(20)
    pirate_defense_roll = rng.roll_die(20)

    player_total_attack = player_attack_roll + base_attack
    player_total_defense = player_defense_roll + base_defense
    pirate_total_attack = pirate_attack_roll + rng.random_int(pirate.attack_min, pirate.attack_max)
    pirate_total_defense = pirate_defense_roll + rng.random_int(pirate.defense_min, pirate.defense_max)

    player_wins_attack = player_total_attack > pirate_total_defense
    player_wins_defense = player_total_defense > pirate_total_attack
    pirate_wins_attack = pirate_total_attack > player_total_defense
    pirate_wins_defense = pirate_total_defense > player_total_attack

    if player_wins_attack and player_wins_defense:
        outcome = MissionPhase.PIRATES_DEFEATED
        if security is not None:
            narrative = (
                f"{security.name} repelled the pirate attack! "
                "Our forces overwhelmed their defenses."
            )
        else:
            narrative = "Against all odds, evasive maneuvers allowed us to escape the pirates!"
    elif pirate_wins_attack and pirate_wins_defense:
        outcome = MissionPhase.PIRATES_WON
        if security is not None:
            narrative = (
                f"Despite {security.name}'s best efforts, the pirates overwhelmed "
                "our defenses. All hands lost."
            )
        else:
            narrative = "Without security escort, we were defenseless. The pirates showed no mercy."
    elif rng.random_float() < config.ambiguous_escape_chance:
        outcome = MissionPhase.PIRATES_DEFEATED
        narrative = "A desperate gambit paid off! We managed to escape with cargo intact."
    else:
        outcome = MissionPhase.PAYLOAD_SEIZED
        narrative = (
            "The battle was fierce but inconclusive. The pirates escaped with "
            "our cargo, but the crew survived."
        )

    logger.debug(
        "Combat L%d escort=%s: %.1f/%.1f vs %d/%d -> %s",
        player_level, security.id if security else None,
        player_total_attack, player_total_defense,
        pirate_total_attack, pirate_total_defense, outcome.value,
    )

    return CombatResult(
        outcome=outcome,
        player_attack_roll=player_attack_roll,
        player_defense_roll=player_defense_roll,
        pirate_attack_roll=pirate_attack_roll,
        pirate_defense_roll=pirate_defense_roll,
        player_total_attack=player_total_attack,
        player_total_defense=player_total_defense,
        pirate_total_attack=pirate_total_attack,
        pirate_total_defense=pirate_total_defense,
        narrative=narrative,
        security_id=security.id if security else None,
    )


def format_combat_news(result: CombatResult, target_name: str) -> str:
    """One-line headline for a resolved encounter."""
    if result.outcome == MissionPhase.PIRATES_DEFEATED:
        return f"\U0001f6e1️ {target_name}: {result.narrative}"
    if result.outcome == MissionPhase.PIRATES_WON:
        return f"☠️ {target_name}: {result.narrative}"
    return f"\U0001f4e6 {target_name}: {result.narrative}"
