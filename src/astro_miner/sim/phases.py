"""Mission phase engine -- reliability-weighted transitions and durations.

The engine reads the static table in :mod:`astro_miner.ir.phases` and
decides, once a phase's duration has elapsed, where the mission goes
next:

- **roll** phases draw over their edges, with anomaly edges scaled down
  and the nominal edge scaled up by the mission's reliability;
- **combat** phases hand over to :func:`astro_miner.sim.combat.resolve_combat`;
- the **resume** phase continues the leg an attack interrupted.

:func:`advance_mission` wraps all of this into a single step that
returns a fresh ``Mission`` plus a :class:`PhaseTransition` record, so
callers never see a half-updated mission.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from astro_miner.ir.contractors import LaunchCadence
from astro_miner.ir.phases import (
    PHASE_TABLE,
    RESUME_AFTER_ATTACK,
    MissionPhase,
    PhaseDefinition,
    PhaseResolver,
)
from astro_miner.sim.combat import resolve_combat
from astro_miner.sim.config import DEFAULT_CONFIG, SimConfig
from astro_miner.sim.core.mission import CombatResult, Mission
from astro_miner.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

MIN_ANOMALY_PROBABILITY = 0.001

# Natural transition -> the pirate phase that can replace it.
_PIRATE_INTERCEPTS: dict[tuple[MissionPhase, MissionPhase], MissionPhase] = {
    (MissionPhase.OUTBOUND, MissionPhase.DRILLING): MissionPhase.PIRATE_ATTACK_OUTBOUND,
    (MissionPhase.INBOUND, MissionPhase.DELIVERING_PAYLOAD): MissionPhase.PIRATE_ATTACK_INBOUND,
}


def _lookup(phase: MissionPhase | str) -> tuple[MissionPhase, PhaseDefinition] | None:
    try:
        member = MissionPhase(phase)
    except ValueError:
        logger.warning("Unknown mission phase %r; ignoring", phase)
        return None
    return member, PHASE_TABLE[member]


def _clamp_unit(value: float) -> float:
    return min(1.0, max(0.0, value))


def reliability_modifier(provider_reliability: float, crew_reliability: float) -> float:
    """Average of the two reliabilities, each clamped to [0, 1]."""
    return (_clamp_unit(provider_reliability) + _clamp_unit(crew_reliability)) / 2


# =====================================================================
# Transition probabilities
# =====================================================================

def adjusted_edge_probabilities(
    phase: MissionPhase,
    provider_reliability: float,
    crew_reliability: float,
    anomaly_reduction: float = 0.0,
) -> list[tuple[MissionPhase, float]]:
    """Edge probabilities of a roll phase after reliability adjustment.

    Anomaly edges (terminal, not success) become
    ``max(0.001, p * (1 - m + 0.5))``; every other edge gains
    ``sum(p_anomaly * (m - 0.5))`` capped at 1, where ``m`` is the
    reliability modifier.  A non-zero *anomaly_reduction* ``r`` (from
    researched technology) further scales anomaly edges by ``1 - r`` and
    moves the removed mass onto the other edges.  Values are returned in
    table order and are not renormalised.
    """
    info = PHASE_TABLE[phase]
    modifier = reliability_modifier(provider_reliability, crew_reliability)
    reduction = _clamp_unit(anomaly_reduction)

    anomaly_shift = sum(
        edge.base_probability * (modifier - 0.5)
        + edge.base_probability * (1 - modifier + 0.5) * reduction
        for edge in info.edges
        if PHASE_TABLE[edge.phase].is_anomaly
    )

    adjusted: list[tuple[MissionPhase, float]] = []
    for edge in info.edges:
        if PHASE_TABLE[edge.phase].is_anomaly:
            prob = max(
                MIN_ANOMALY_PROBABILITY,
                edge.base_probability * (1 - modifier + 0.5) * (1 - reduction),
            )
        else:
            prob = min(1.0, edge.base_probability + anomaly_shift)
        adjusted.append((edge.phase, prob))
    return adjusted


def check_pirate_attack(
    phase: MissionPhase,
    player_level: int,
    rng: GameRNG,
    config: SimConfig = DEFAULT_CONFIG,
) -> bool:
    """Bernoulli draw for a pirate interception at the end of a flight leg.

    Only OUTBOUND and INBOUND can be intercepted, and only once the player
    reaches ``config.pirate_min_level``.  No random value is consumed when
    an attack is impossible.
    """
    if player_level < config.pirate_min_level:
        return False
    if phase == MissionPhase.OUTBOUND:
        return rng.chance(config.pirate_chance_outbound)
    if phase == MissionPhase.INBOUND:
        return rng.chance(config.pirate_chance_inbound)
    return False


def roll_next_phase(
    phase: MissionPhase | str,
    provider_reliability: float,
    crew_reliability: float,
    rng: GameRNG,
    player_level: int | None = None,
    config: SimConfig = DEFAULT_CONFIG,
    anomaly_reduction: float = 0.0,
) -> MissionPhase | str:
    """Draw the successor of a roll phase.

    Terminal phases, combat and resume phases, and unrecognised values are
    returned unchanged.  When *player_level* is given, a natural
    OUTBOUND -> DRILLING or INBOUND -> DELIVERING_PAYLOAD result may be
    overridden by a pirate interception.
    """
    found = _lookup(phase)
    if found is None:
        return phase
    member, info = found
    if info.is_terminal or info.resolver is not PhaseResolver.ROLL or not info.edges:
        return member

    roll = rng.random_float()
    cumulative = 0.0
    result = info.edges[0].phase
    for candidate, prob in adjusted_edge_probabilities(
        member, provider_reliability, crew_reliability, anomaly_reduction,
    ):
        cumulative += prob
        if roll < cumulative:
            result = candidate
            break

    if player_level is not None:
        pirate_phase = _PIRATE_INTERCEPTS.get((member, result))
        if pirate_phase is not None and check_pirate_attack(member, player_level, rng, config):
            logger.debug("Pirates intercept %s -> %s", member.value, result.value)
            result = pirate_phase

    return result


# =====================================================================
# Durations
# =====================================================================

def calculate_phase_duration(
    phase: MissionPhase | str,
    outbound_days: float,
    mining_days: float,
    return_days: float,
    launch_cadence: LaunchCadence | str | None,
    rng: GameRNG,
) -> float:
    """Days a mission spends in *phase*.

    Flight legs and drilling pass through the planned trip lengths;
    terminal and unrecognised phases last 0 days.  The rest are drawn
    from fixed ranges, with the wait after signing depending on how often
    the provider launches.
    """
    found = _lookup(phase)
    if found is None:
        return 0.0
    phase, info = found
    if info.is_terminal:
        return 0.0

    if phase == MissionPhase.CONTRACT_SIGNED:
        try:
            cadence = LaunchCadence(launch_cadence) if launch_cadence else None
        except ValueError:
            cadence = None
        if cadence == LaunchCadence.WEEKLY:
            return 7 + rng.random_float() * 14
        if cadence == LaunchCadence.MONTHLY:
            return 30 + rng.random_float() * 150
        return 14 + rng.random_float() * 30
    if phase == MissionPhase.LAUNCH:
        return 1 + rng.random_float() * 2
    if phase == MissionPhase.OUTBOUND:
        return outbound_days
    if phase == MissionPhase.DRILLING:
        return mining_days
    if phase == MissionPhase.INBOUND:
        return return_days
    if phase == MissionPhase.DELIVERING_PAYLOAD:
        return 2 + rng.random_float() * 5
    if phase in (MissionPhase.PIRATE_ATTACK_OUTBOUND, MissionPhase.PIRATE_ATTACK_INBOUND):
        return 1 + rng.random_float()
    if phase == MissionPhase.PIRATES_DEFEATED:
        return 1.0
    return 0.0


# =====================================================================
# Atomic mission step
# =====================================================================

@dataclass
class PhaseTransition:
    """Everything that changed when a mission left a phase.

    Attributes
    ----------
    mission:
        The mission after the transition (a new object).
    previous_phase:
        Phase the mission was leaving.
    combat:
        Set when the phase left was a pirate attack.
    pirates_detected:
        True when a pirate interception replaced the natural result.
    """

    mission: Mission
    previous_phase: MissionPhase
    combat: CombatResult | None = None
    pirates_detected: bool = False

    @property
    def new_phase(self) -> MissionPhase:
        return self.mission.phase

    @property
    def entered_drilling(self) -> bool:
        """Drilling started; the caller must mark the target depleted."""
        return self.new_phase == MissionPhase.DRILLING

    @property
    def is_terminal(self) -> bool:
        return PHASE_TABLE[self.new_phase].is_terminal


def advance_mission(
    mission: Mission,
    now: float,
    rng: GameRNG,
    combat_rng: GameRNG,
    player_level: int,
    relationship_level: int = 0,
    launch_cadence: LaunchCadence | str | None = None,
    config: SimConfig = DEFAULT_CONFIG,
) -> PhaseTransition | None:
    """Move *mission* to its next phase if the current one has elapsed.

    Returns ``None`` when nothing happens (terminal phase, or the phase
    is still running).  The input mission is never modified; the
    returned transition carries a copy with phase, timing, combat result
    and resume target all updated together.
    """
    info = PHASE_TABLE[mission.phase]
    if info.is_terminal or not mission.is_phase_complete(now):
        return None

    previous = mission.phase
    combat: CombatResult | None = None
    pirates_detected = False
    resume_phase = mission.resume_phase

    if info.resolver is PhaseResolver.COMBAT:
        combat = resolve_combat(
            player_level, mission.security_id, relationship_level, combat_rng, config,
        )
        next_phase = combat.outcome
        resume_phase = (
            RESUME_AFTER_ATTACK[previous]
            if next_phase == MissionPhase.PIRATES_DEFEATED
            else None
        )
    elif info.resolver is PhaseResolver.RESUME:
        next_phase = resume_phase or info.edges[0].phase
        if resume_phase is None:
            logger.warning(
                "Mission %s regrouping without a resume target; continuing to %s",
                mission.id, next_phase.value,
            )
        resume_phase = None
    else:
        next_phase = roll_next_phase(
            previous,
            mission.provider_reliability,
            mission.crew_reliability,
            rng,
            player_level=player_level,
            config=config,
            anomaly_reduction=mission.anomaly_reduction,
        )
        pirates_detected = next_phase in RESUME_AFTER_ATTACK

    duration = calculate_phase_duration(
        next_phase,
        mission.outbound_days,
        mission.mining_days,
        mission.return_days,
        launch_cadence,
        rng,
    )

    update: dict[str, object] = {
        "phase": next_phase,
        "phase_start_time": now,
        "phase_duration": duration,
        "resume_phase": resume_phase,
    }
    if combat is not None:
        update["combat"] = combat

    logger.debug(
        "Mission %s: %s -> %s (%.1f days)",
        mission.id, previous.value, next_phase.value, duration,
    )
    return PhaseTransition(
        mission=mission.model_copy(update=update),
        previous_phase=previous,
        combat=combat,
        pirates_detected=pirates_detected,
    )
