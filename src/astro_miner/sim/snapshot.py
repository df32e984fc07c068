"""Versioned save format for a :class:`~astro_miner.sim.session.GameSession`.

The snapshot is plain JSON-compatible data: no callables, no live RNG
objects.  Restoring decodes every section into temporaries first and
only installs the sections that decoded cleanly, so a damaged save never
leaves a session half-overwritten within a section.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, ValidationError

from astro_miner.sim.core.mission import ContractTerms, Mission
from astro_miner.sim.core.player import PlayerState
from astro_miner.sim.core.rng import GameRNG
from astro_miner.sim.errors import SnapshotError
from astro_miner.sim.market import MarketState, check_market_state
from astro_miner.sim.news import NewsScheduler

if TYPE_CHECKING:
    from astro_miner.sim.session import GameSession

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1

SECTIONS = ("time", "market", "scheduler", "missions", "contracts", "player", "rng")


class GameSnapshot(BaseModel):
    """Serializable image of a session."""

    version: int = SNAPSHOT_VERSION
    time: float
    market: dict[str, Any]
    scheduler: dict[str, Any]
    missions: list[dict[str, Any]] = Field(default_factory=list)
    contracts: list[dict[str, Any]] = Field(default_factory=list)
    player: dict[str, Any]
    rng: dict[str, list[Any]]


@dataclass
class RestoreResult:
    restored_sections: list[str] = field(default_factory=list)
    failed_sections: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed_sections


def take_snapshot(session: GameSession) -> dict[str, Any]:
    """Capture *session* as a JSON-safe dict."""
    snapshot = GameSnapshot(
        time=session.now,
        market=session.market.model_dump(mode="json"),
        scheduler=session.scheduler.serialize(),
        missions=[m.model_dump(mode="json") for m in session.missions],
        contracts=[c.model_dump(mode="json") for c in session.contracts],
        player=session.player.model_dump(mode="json"),
        rng={name: rng.get_state() for name, rng in session.rngs.items()},
    )
    return snapshot.model_dump(mode="json")


def restore_snapshot(session: GameSession, payload: Any) -> RestoreResult:
    """Load *payload* into *session*, section by section.

    Raises :class:`SnapshotError` only when the payload is not a mapping or
    its version is unsupported.  Any other problem is confined to the
    affected section, which keeps the session's current value and is
    listed in ``failed_sections``.  The mission list is restored whole or
    not at all.
    """
    if not isinstance(payload, Mapping):
        raise SnapshotError(f"Snapshot must be a mapping, got {type(payload).__name__}")
    version = payload.get("version")
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version: {version!r}")

    result = RestoreResult()
    decoders: dict[str, Callable[[Any], Callable[[], None]]] = {
        "time": _decode_time(session),
        "market": _decode_market(session),
        "scheduler": _decode_scheduler(session, result),
        "missions": _decode_missions(session),
        "contracts": _decode_contracts(session),
        "player": _decode_player(session),
        "rng": _decode_rng(session),
    }

    staged: list[tuple[str, Callable[[], None]]] = []
    for section in SECTIONS:
        if section not in payload:
            logger.warning("Snapshot is missing section %r", section)
            result.failed_sections.append(section)
            continue
        try:
            staged.append((section, decoders[section](payload[section])))
        except (ValidationError, TypeError, ValueError, KeyError) as exc:
            logger.warning("Could not restore snapshot section %r: %s", section, exc)
            result.failed_sections.append(section)

    for section, apply in staged:
        apply()
        result.restored_sections.append(section)
    return result


# -- per-section decoders ----------------------------------------------------
#
# Each decoder validates its raw input and returns a closure that installs
# the decoded value.  Nothing touches the session until every section has
# been decoded.

def _decode_time(session: GameSession) -> Callable[[Any], Callable[[], None]]:
    def decode(raw: Any) -> Callable[[], None]:
        now = float(raw)
        if now < 0:
            raise ValueError("time must be non-negative")

        def apply() -> None:
            session.now = now
        return apply
    return decode


def _decode_market(session: GameSession) -> Callable[[Any], Callable[[], None]]:
    def decode(raw: Any) -> Callable[[], None]:
        market = MarketState.model_validate(raw)
        check_market_state(market, session.config)

        def apply() -> None:
            session.market = market
        return apply
    return decode


def _decode_scheduler(
    session: GameSession,
    result: RestoreResult,
) -> Callable[[Any], Callable[[], None]]:
    def decode(raw: Any) -> Callable[[], None]:
        if not isinstance(raw, Mapping):
            raise TypeError("scheduler section must be a mapping")
        scheduler = NewsScheduler(session.rngs["news"])
        scheduler.deserialize(session.scheduler.serialize())
        failed = scheduler.deserialize(raw)

        def apply() -> None:
            session.scheduler = scheduler
            result.failed_sections.extend(f"scheduler.{key}" for key in failed)
        return apply
    return decode


def _decode_missions(session: GameSession) -> Callable[[Any], Callable[[], None]]:
    def decode(raw: Any) -> Callable[[], None]:
        if not isinstance(raw, list):
            raise TypeError("missions section must be a list")
        missions = [Mission.model_validate(m) for m in raw]

        def apply() -> None:
            session.missions = missions
        return apply
    return decode


def _decode_contracts(session: GameSession) -> Callable[[Any], Callable[[], None]]:
    def decode(raw: Any) -> Callable[[], None]:
        if not isinstance(raw, list):
            raise TypeError("contracts section must be a list")
        contracts = [ContractTerms.model_validate(c) for c in raw]

        def apply() -> None:
            session.contracts = contracts
        return apply
    return decode


def _decode_player(session: GameSession) -> Callable[[Any], Callable[[], None]]:
    def decode(raw: Any) -> Callable[[], None]:
        player = PlayerState.model_validate(raw)

        def apply() -> None:
            session.player = player
        return apply
    return decode


def _decode_rng(session: GameSession) -> Callable[[Any], Callable[[], None]]:
    def decode(raw: Any) -> Callable[[], None]:
        if not isinstance(raw, Mapping):
            raise TypeError("rng section must be a mapping")
        states: dict[str, list[Any]] = {}
        for name in session.rngs:
            state = raw[name]
            # Try the state on a scratch generator first; a bad state never reaches a live one.
            GameRNG(0).set_state(state)
            states[name] = state

        def apply() -> None:
            for name, state in states.items():
                session.rngs[name].set_state(state)
        return apply
    return decode
