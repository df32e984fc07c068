"""News scheduler -- cooldown-gated feed, competitor activity, easter eggs.

One :class:`NewsScheduler` is owned by the session.  It decides *when*
each category of periodic news may appear, phrases competitor actions
(permanently blocking targets when a rival stakes a claim), and fires
each easter egg once on the rising edge of its predicate.

Event-driven items (mission results, pirate alerts) are wrapped with
:meth:`NewsScheduler.make_item` and go out immediately; only the periodic
categories wait for their cooldowns.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import date, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict

from astro_miner.ir.news_content import (
    COMPETITOR_ACTIONS,
    COMPETITORS,
    EASTER_EGG_IDS,
    EASTER_EGGS,
    EDUCATIONAL_NEWS,
    FLAVOR_NEWS,
    MARKET_NEWS_TEMPLATES,
    NEWS_COOLDOWNS,
    NEWS_PRIORITY,
    UNKNOWN_TARGET_NAME,
    CompetitorActionType,
    EasterEggState,
    NewsCategory,
)
from astro_miner.ir.resources import ResourceType
from astro_miner.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

CALENDAR_EPOCH = date(2032, 1, 1)


class NewsAction(BaseModel):
    """Structured side effect attached to a news item."""

    model_config = ConfigDict(frozen=True)

    action_type: str
    """``"block_target"`` is the only action produced today."""

    data: dict[str, Any] = {}


class NewsItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    category: NewsCategory
    priority: int
    timestamp: float
    action: NewsAction | None = None


class CompetitorNews(BaseModel):
    """Result of one competitor roll."""

    text: str
    action_type: CompetitorActionType
    competitor: str
    blocks_target: bool
    """True only when a target was actually claimed."""

    target_id: str | None = None


def day_to_calendar(game_day: float) -> tuple[int, int]:
    """(month, day) of a simulated day counted from 1 January 2032."""
    current = CALENDAR_EPOCH + timedelta(days=int(game_day // 1))
    return current.month, current.day


class NewsScheduler:
    """Stateful news feed owned by a single session.

    Parameters
    ----------
    rng:
        Source for every content pick.  The session passes its ``"news"``
        fork so feed randomness never shifts mission or market draws.
    """

    def __init__(self, rng: GameRNG) -> None:
        self._rng = rng
        # None = never emitted.
        self._last_emit: dict[NewsCategory, float | None] = {c: None for c in NewsCategory}
        self._fired_eggs: set[str] = set()
        self._blocked_targets: set[str] = set()
        self._egg_previous: dict[str, bool] = {}
        self._next_item_id = 0

    # -- cooldowns -----------------------------------------------------------

    def can_show_news(self, category: NewsCategory | str, now: float) -> bool:
        """True once *category*'s cooldown has passed.  Unknown categories never show."""
        member = _category(category)
        if member is None:
            return False
        last = self._last_emit[member]
        if last is None:
            return True
        return now - last >= NEWS_COOLDOWNS[member]

    def record_news_shown(self, category: NewsCategory | str, now: float) -> None:
        member = _category(category)
        if member is not None:
            self._last_emit[member] = now

    def last_emit_time(self, category: NewsCategory | str) -> float | None:
        member = _category(category)
        return None if member is None else self._last_emit[member]

    # -- item construction ---------------------------------------------------

    def make_item(
        self,
        text: str,
        category: NewsCategory,
        now: float,
        action: NewsAction | None = None,
    ) -> NewsItem:
        self._next_item_id += 1
        return NewsItem(
            id=f"{category.value}-{self._next_item_id}",
            text=text,
            category=category,
            priority=NEWS_PRIORITY[category],
            timestamp=now,
            action=action,
        )

    # -- content pools -------------------------------------------------------

    def get_educational_news(self) -> str | None:
        if not EDUCATIONAL_NEWS:
            return None
        return self._rng.random_choice(EDUCATIONAL_NEWS)

    def get_flavor_news(self) -> str | None:
        if not FLAVOR_NEWS:
            return None
        return self._rng.random_choice(FLAVOR_NEWS)

    def get_market_news(self, resource: ResourceType, percent_change: float) -> str | None:
        """Qualitative headline for a price move; ``None`` if none is defined."""
        direction = "up" if percent_change > 0 else "down"
        templates = MARKET_NEWS_TEMPLATES.get((resource, direction))
        if not templates:
            return None
        return self._rng.random_choice(templates)

    # -- competitors ---------------------------------------------------------

    def generate_competitor_news(
        self,
        available_targets: Sequence[str],
        target_names: Mapping[str, str] | None = None,
    ) -> CompetitorNews:
        """Roll one competitor action.

        Targets are drawn only from *available_targets* that are not
        already blocked.  A blocking archetype that lands on a target adds
        it to the blocked set for the rest of the session.  With no
        eligible target the text names an unknown location and nothing is
        blocked.
        """
        action = self._rng.random_choice(COMPETITOR_ACTIONS)
        competitor = self._rng.random_choice(COMPETITORS)
        template = self._rng.random_choice(action.templates)

        target_id: str | None = None
        target_name = UNKNOWN_TARGET_NAME
        if "{target}" in template:
            unblocked = [t for t in available_targets if t not in self._blocked_targets]
            if unblocked:
                target_id = self._rng.random_choice(unblocked)
                target_name = (target_names or {}).get(target_id, target_id)

        text = (
            template
            .replace("{competitor}", competitor.name)
            .replace("{target}", target_name)
            .replace("{ceo}", competitor.ceo or competitor.name)
        )

        blocks = action.blocks_target and target_id is not None
        if blocks:
            self._blocked_targets.add(target_id)
            logger.debug("%s blocked target %s", competitor.name, target_id)

        return CompetitorNews(
            text=text,
            action_type=action.action_type,
            competitor=competitor.name,
            blocks_target=blocks,
            target_id=target_id,
        )

    def is_target_blocked(self, target_id: str) -> bool:
        return target_id in self._blocked_targets

    def blocked_targets(self) -> list[str]:
        return sorted(self._blocked_targets)

    # -- easter eggs ---------------------------------------------------------

    def check_easter_eggs(
        self,
        state: EasterEggState,
        now: float = 0.0,
        is_first_check: bool | None = None,
    ) -> list[NewsItem]:
        """Fire every egg whose predicate has just become true.

        The scheduler remembers each predicate's previous value and treats
        a false -> true change as the trigger.  Passing *is_first_check*
        overrides that edge test for this call: ``False`` suppresses all
        eggs, ``True`` lets any currently-true predicate fire.  An egg that
        has fired stays silent until :meth:`reset_easter_egg`.
        """
        fired: list[NewsItem] = []
        for egg in EASTER_EGGS:
            holds = bool(egg.condition(state))
            previous = self._egg_previous.get(egg.egg_id, False)
            self._egg_previous[egg.egg_id] = holds

            rising = is_first_check if is_first_check is not None else not previous
            if egg.egg_id in self._fired_eggs or not (holds and rising):
                continue

            self._fired_eggs.add(egg.egg_id)
            logger.debug("Easter egg %s fired", egg.egg_id)
            fired.append(self.make_item(egg.message, egg.category, now))
        return fired

    def reset_easter_egg(self, egg_id: str) -> None:
        self._fired_eggs.discard(egg_id)

    def fired_easter_eggs(self) -> list[str]:
        return sorted(self._fired_eggs)

    # -- periodic feed -------------------------------------------------------

    def emit_periodic(
        self,
        now: float,
        available_targets: Sequence[str],
        target_names: Mapping[str, str] | None = None,
        egg_state: EasterEggState | None = None,
    ) -> list[NewsItem]:
        """Everything the feed is allowed to show at *now*, by priority."""
        items: list[NewsItem] = []
        if egg_state is not None:
            items.extend(self.check_easter_eggs(egg_state, now))

        if available_targets and self.can_show_news(NewsCategory.COMPETITOR, now):
            result = self.generate_competitor_news(available_targets, target_names)
            action = None
            if result.blocks_target:
                action = NewsAction(
                    action_type="block_target",
                    data={"target_id": result.target_id},
                )
            items.append(self.make_item(result.text, NewsCategory.COMPETITOR, now, action))
            self.record_news_shown(NewsCategory.COMPETITOR, now)

        if self.can_show_news(NewsCategory.EDUCATIONAL, now):
            text = self.get_educational_news()
            if text:
                items.append(self.make_item(text, NewsCategory.EDUCATIONAL, now))
                self.record_news_shown(NewsCategory.EDUCATIONAL, now)

        if self.can_show_news(NewsCategory.FLAVOR, now):
            text = self.get_flavor_news()
            if text:
                items.append(self.make_item(text, NewsCategory.FLAVOR, now))
                self.record_news_shown(NewsCategory.FLAVOR, now)

        items.sort(key=lambda item: item.priority)
        return items

    # -- persistence ---------------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        return {
            "last_emit": {c.value: t for c, t in self._last_emit.items()},
            "fired_easter_eggs": sorted(self._fired_eggs),
            "blocked_targets": sorted(self._blocked_targets),
            "easter_egg_previous": dict(sorted(self._egg_previous.items())),
            "next_item_id": self._next_item_id,
        }

    def deserialize(self, data: Mapping[str, Any]) -> list[str]:
        """Restore from :meth:`serialize` output.

        Each key is decoded on its own; a malformed key leaves the
        corresponding state untouched and is named in the returned list.
        Missing keys are left at their current values.
        """
        failed: list[str] = []

        decoders = {
            "last_emit": self._decode_last_emit,
            "fired_easter_eggs": self._decode_fired,
            "blocked_targets": self._decode_blocked,
            "easter_egg_previous": self._decode_egg_previous,
            "next_item_id": self._decode_next_id,
        }
        for key, decode in decoders.items():
            if key not in data:
                continue
            try:
                decode(data[key])
            except (TypeError, ValueError, KeyError) as exc:
                logger.warning("Could not restore scheduler %s: %s", key, exc)
                failed.append(key)
        return failed

    def _decode_last_emit(self, raw: Any) -> None:
        if not isinstance(raw, Mapping):
            raise TypeError("last_emit must be a mapping")
        decoded = {c: None for c in NewsCategory}
        for key, value in raw.items():
            decoded[NewsCategory(key)] = None if value is None else float(value)
        self._last_emit = decoded

    def _decode_fired(self, raw: Any) -> None:
        ids = _string_list(raw, "fired_easter_eggs")
        unknown = set(ids) - EASTER_EGG_IDS
        if unknown:
            raise ValueError(f"unknown easter eggs: {sorted(unknown)}")
        self._fired_eggs = set(ids)

    def _decode_blocked(self, raw: Any) -> None:
        self._blocked_targets = set(_string_list(raw, "blocked_targets"))

    def _decode_egg_previous(self, raw: Any) -> None:
        if not isinstance(raw, Mapping):
            raise TypeError("easter_egg_previous must be a mapping")
        if not all(isinstance(v, bool) for v in raw.values()):
            raise TypeError("easter_egg_previous values must be booleans")
        self._egg_previous = {str(k): v for k, v in raw.items()}

    def _decode_next_id(self, raw: Any) -> None:
        self._next_item_id = int(raw)


def _category(value: NewsCategory | str) -> NewsCategory | None:
    try:
        return NewsCategory(value)
    except ValueError:
        logger.warning("Unknown news category %r; ignoring", value)
        return None


def _string_list(raw: Any, name: str) -> list[str]:
    if not isinstance(raw, list) or not all(isinstance(x, str) for x in raw):
        raise TypeError(f"{name} must be a list of strings")
    return raw
