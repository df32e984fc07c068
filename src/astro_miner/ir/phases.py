"""Mission phase definitions -- the static transition table of a mining run.

The table is a directed acyclic graph that always drains into a terminal
phase.  Probability-driven phases list their successors with base
probabilities; combat phases list the outcomes the combat resolver can
produce; the regroup phase lists the legs it can resume to.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class MissionPhase(str, Enum):
    """Every stage a mission can be in."""

    CONTRACT_SIGNED = "contract_signed"
    LAUNCH = "launch"
    LAUNCH_ANOMALY = "launch_anomaly"
    OUTBOUND = "outbound"
    PIRATE_ATTACK_OUTBOUND = "pirate_attack_outbound"
    IN_FLIGHT_ANOMALY = "in_flight_anomaly"
    DRILLING = "drilling"
    EXPLOSION_AT_DRILL_SITE = "explosion_at_drill_site"
    INBOUND = "inbound"
    PIRATE_ATTACK_INBOUND = "pirate_attack_inbound"
    DELIVERING_PAYLOAD = "delivering_payload"
    MISSION_SUCCESS = "mission_success"
    PIRATES_DEFEATED = "pirates_defeated"
    PIRATES_WON = "pirates_won"
    PAYLOAD_SEIZED = "payload_seized"


class PhaseResolver(str, Enum):
    """How the successor of a phase is chosen once its duration elapses."""

    ROLL = "roll"
    """Weighted draw over the edges, adjusted by reliability."""

    COMBAT = "combat"
    """The combat resolver picks the outcome phase."""

    RESUME = "resume"
    """Continue to the leg recorded on the mission before the attack."""


class PhaseEdge(BaseModel):
    """One outgoing transition of a phase."""

    phase: MissionPhase
    base_probability: float = 0.0
    """Probability before reliability modifiers.  Only used by ROLL phases."""


class PhaseDefinition(BaseModel):
    """Static metadata for a single phase."""

    name: str
    description: str
    is_terminal: bool = False
    is_success: bool = False
    """Only meaningful for terminal phases."""

    is_partial: bool = False
    """Terminal failure in which the crew survives but the cargo is lost."""

    resolver: PhaseResolver = PhaseResolver.ROLL
    edges: list[PhaseEdge] = Field(default_factory=list)

    @property
    def is_anomaly(self) -> bool:
        return self.is_terminal and not self.is_success


def _edges(*pairs: tuple[MissionPhase, float]) -> list[PhaseEdge]:
    return [PhaseEdge(phase=p, base_probability=prob) for p, prob in pairs]


_COMBAT_OUTCOMES = _edges(
    (MissionPhase.PIRATES_DEFEATED, 0.0),
    (MissionPhase.PIRATES_WON, 0.0),
    (MissionPhase.PAYLOAD_SEIZED, 0.0),
)


PHASE_TABLE: dict[MissionPhase, PhaseDefinition] = {
    MissionPhase.CONTRACT_SIGNED: PhaseDefinition(
        name="Contract Signed",
        description="Contract secured. Crew and launch vehicle readiness are pending.",
        edges=_edges((MissionPhase.LAUNCH, 1.0)),
    ),
    MissionPhase.LAUNCH: PhaseDefinition(
        name="Launch",
        description="Wet dress rehearsal complete. Vehicle is on the pad.",
        edges=_edges(
            (MissionPhase.OUTBOUND, 0.98),
            (MissionPhase.LAUNCH_ANOMALY, 0.02),
        ),
    ),
    MissionPhase.LAUNCH_ANOMALY: PhaseDefinition(
        name="Launch Anomaly",
        description="Launch abort. The mission is scrubbed.",
        is_terminal=True,
    ),
    MissionPhase.OUTBOUND: PhaseDefinition(
        name="Outbound",
        description="Crew and mining rig are outbound to the target.",
        edges=_edges(
            (MissionPhase.DRILLING, 0.98),
            (MissionPhase.IN_FLIGHT_ANOMALY, 0.02),
        ),
    ),
    MissionPhase.IN_FLIGHT_ANOMALY: PhaseDefinition(
        name="In Flight Anomaly",
        description="An anomaly occurred in flight. Crew and hardware lost.",
        is_terminal=True,
    ),
    MissionPhase.DRILLING: PhaseDefinition(
        name="Drilling",
        description="Crew is assessing and extracting resources.",
        edges=_edges(
            (MissionPhase.INBOUND, 0.98),
            (MissionPhase.EXPLOSION_AT_DRILL_SITE, 0.02),
        ),
    ),
    MissionPhase.EXPLOSION_AT_DRILL_SITE: PhaseDefinition(
        name="Explosion At Drill Site",
        description="An anomaly occurred while drilling. Contact with the crew lost.",
        is_terminal=True,
    ),
    MissionPhase.INBOUND: PhaseDefinition(
        name="Inbound",
        description="Crew is returning with payload.",
        edges=_edges(
            (MissionPhase.DELIVERING_PAYLOAD, 0.98),
            (MissionPhase.IN_FLIGHT_ANOMALY, 0.02),
        ),
    ),
    MissionPhase.DELIVERING_PAYLOAD: PhaseDefinition(
        name="Delivering Payload",
        description="Crew has returned and is delivering payload to the client.",
        edges=_edges((MissionPhase.MISSION_SUCCESS, 1.0)),
    ),
    MissionPhase.MISSION_SUCCESS: PhaseDefinition(
        name="Mission Success",
        description="Mission success. Pay day!",
        is_terminal=True,
        is_success=True,
    ),
    MissionPhase.PIRATE_ATTACK_OUTBOUND: PhaseDefinition(
        name="Pirate Attack!",
        description="Pirates have intercepted the outbound vessel.",
        resolver=PhaseResolver.COMBAT,
        edges=_COMBAT_OUTCOMES,
    ),
    MissionPhase.PIRATE_ATTACK_INBOUND: PhaseDefinition(
        name="Pirate Ambush!",
        description="Pirates are attempting to board and seize the payload.",
        resolver=PhaseResolver.COMBAT,
        edges=_COMBAT_OUTCOMES,
    ),
    MissionPhase.PIRATES_DEFEATED: PhaseDefinition(
        name="Pirates Defeated",
        description="The pirate attack was repelled. Mission continues.",
        resolver=PhaseResolver.RESUME,
        edges=_edges(
            (MissionPhase.DRILLING, 0.0),
            (MissionPhase.DELIVERING_PAYLOAD, 0.0),
        ),
    ),
    MissionPhase.PIRATES_WON: PhaseDefinition(
        name="Pirates Won",
        description="The pirates overwhelmed our defenses. All hands lost.",
        is_terminal=True,
    ),
    MissionPhase.PAYLOAD_SEIZED: PhaseDefinition(
        name="Payload Seized",
        description="The pirates escaped with the cargo. Crew is safe.",
        is_terminal=True,
        is_partial=True,
    ),
}

# Where an interrupted leg picks up after a won fight.
RESUME_AFTER_ATTACK: dict[MissionPhase, MissionPhase] = {
    MissionPhase.PIRATE_ATTACK_OUTBOUND: MissionPhase.DRILLING,
    MissionPhase.PIRATE_ATTACK_INBOUND: MissionPhase.DELIVERING_PAYLOAD,
}


def get_phase_definition(phase: MissionPhase | str) -> PhaseDefinition | None:
    """Look up a phase by enum member or raw value; ``None`` if unknown."""
    try:
        return PHASE_TABLE[MissionPhase(phase)]
    except ValueError:
        return None


def is_terminal(phase: MissionPhase) -> bool:
    return PHASE_TABLE[phase].is_terminal


def validate_phase_table(
    table: dict[MissionPhase, PhaseDefinition] | None = None,
) -> None:
    """Check the structural invariants of the transition table.

    * every ``MissionPhase`` member has a definition
    * terminal phases have no outgoing edges
    * non-terminal phases have at least one outgoing edge
    * every edge points at a defined phase
    * the edge graph contains no cycles

    Raises ``ValueError`` describing the first violation found.
    """
    if table is None:
        table = PHASE_TABLE

    missing = [p.value for p in MissionPhase if p not in table]
    if missing:
        raise ValueError(f"Phases without a definition: {', '.join(missing)}")

    for phase, info in table.items():
        if info.is_terminal and info.edges:
            raise ValueError(f"Terminal phase {phase.value!r} has outgoing edges")
        if not info.is_terminal and not info.edges:
            raise ValueError(f"Non-terminal phase {phase.value!r} has no outgoing edges")
        for edge in info.edges:
            if edge.phase not in table:
                raise ValueError(
                    f"Phase {phase.value!r} points at undefined phase {edge.phase.value!r}"
                )

    # Depth-first search with colouring: grey = on stack, black = done.
    colour: dict[MissionPhase, int] = {}

    def _visit(phase: MissionPhase, path: list[MissionPhase]) -> None:
        colour[phase] = 1
        for edge in table[phase].edges:
            state = colour.get(edge.phase, 0)
            if state == 1:
                cycle = " -> ".join(p.value for p in path + [phase, edge.phase])
                raise ValueError(f"Cycle in phase table: {cycle}")
            if state == 0:
                _visit(edge.phase, path + [phase])
        colour[phase] = 2

    for phase in table:
        if colour.get(phase, 0) == 0:
            _visit(phase, [])


validate_phase_table()
