"""Commodity market -- a clamped weekly random walk with rolling history.

Each commodity moves once per elapsed simulated week by a uniform draw in
``[-volatility, +volatility]``.  Prices stay within half and double the
base price, and the last 52 weekly points are kept for trend queries.
"""

from __future__ import annotations

import logging
import math
from typing import Literal

from pydantic import BaseModel, Field

from astro_miner.ir.resources import COMMODITIES, ResourceType
from astro_miner.sim.config import DEFAULT_CONFIG, SimConfig
from astro_miner.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

MARKET_NEWS_PREFIX = "\U0001f4ca "
TREND_WINDOW = 4
TREND_THRESHOLD = 0.1

PriceTrend = Literal["up", "down", "stable"]


class PricePoint(BaseModel):
    time: float
    price: float
    change: float
    """Fractional change from the previous price (0.2 == +20%)."""


class ResourceMarket(BaseModel):
    current_price: float
    price_history: list[PricePoint] = Field(default_factory=list)
    last_update_time: float = 0.0


class MarketState(BaseModel):
    """Price state for every commodity."""

    resources: dict[ResourceType, ResourceMarket]

    def get(self, resource: ResourceType | str) -> ResourceMarket | None:
        try:
            return self.resources.get(ResourceType(resource))
        except ValueError:
            return None


# =====================================================================
# Construction and weekly ticks
# =====================================================================

def initialize_market(rng: GameRNG, now: float = 0.0) -> MarketState:
    """Fresh market with every price within +/-10% of base."""
    resources: dict[ResourceType, ResourceMarket] = {}
    for resource, info in COMMODITIES.items():
        start_price = round(info.base_price * (0.9 + rng.random_float() * 0.2))
        resources[resource] = ResourceMarket(
            current_price=start_price,
            price_history=[PricePoint(time=now, price=start_price, change=0.0)],
            last_update_time=now,
        )
    return MarketState(resources=resources)


def update_market_prices(
    market: MarketState,
    now: float,
    rng: GameRNG,
    config: SimConfig = DEFAULT_CONFIG,
) -> list[str]:
    """Apply every whole week elapsed since each commodity's last update.

    Weeks are processed one at a time, each stamped exactly one week
    after the previous point, so a long gap never skips history.  Mutates
    *market* in place and returns headlines for moves larger than
    ``config.market_news_threshold``.
    """
    news: list[str] = []
    week = config.week_days

    for resource, info in COMMODITIES.items():
        state = market.resources.get(resource)
        if state is None:
            logger.warning("Market has no entry for %s; skipping", resource.value)
            continue

        weeks_elapsed = math.floor((now - state.last_update_time) / week)
        for _ in range(max(0, weeks_elapsed)):
            delta = (rng.random_float() * 2 - 1) * info.volatility
            old_price = state.current_price
            new_price = round(old_price * (1 + delta))
            new_price = max(info.price_floor, min(info.price_ceiling, new_price))
            actual_change = (new_price - old_price) / old_price

            update_time = state.last_update_time + week
            state.price_history.append(
                PricePoint(time=update_time, price=new_price, change=actual_change)
            )
            if len(state.price_history) > config.history_limit:
                del state.price_history[: len(state.price_history) - config.history_limit]
            state.current_price = new_price
            state.last_update_time = update_time

            logger.debug(
                "%s: %.0f -> %.0f (%+.1f%%) at day %.1f",
                resource.value, old_price, new_price, actual_change * 100, update_time,
            )

            if abs(actual_change) > config.market_news_threshold:
                pct = abs(round(actual_change * 100))
                templates = info.up_templates if actual_change > 0 else info.down_templates
                headline = rng.random_choice(templates).replace("{pct}", str(pct))
                news.append(f"{MARKET_NEWS_PREFIX}{headline}")

    return news


# =====================================================================
# Integrity
# =====================================================================

def check_market_state(market: MarketState, config: SimConfig = DEFAULT_CONFIG) -> None:
    """Raise ValueError unless *market* could have come from weekly ticks.

    Every commodity must be present, every current and historical price
    must lie within that commodity's floor and ceiling, and no history may
    exceed ``config.history_limit`` points.
    """
    problems: list[str] = []
    for resource, info in COMMODITIES.items():
        state = market.resources.get(resource)
        if state is None:
            problems.append(f"{resource.value}: missing")
            continue
        low, high = info.price_floor, info.price_ceiling
        if not low <= state.current_price <= high:
            problems.append(
                f"{resource.value}: price {state.current_price} outside [{low}, {high}]"
            )
        if len(state.price_history) > config.history_limit:
            problems.append(
                f"{resource.value}: {len(state.price_history)} history points "
                f"(limit {config.history_limit})"
            )
        bad = [p.price for p in state.price_history if not low <= p.price <= high]
        if bad:
            problems.append(f"{resource.value}: {len(bad)} history prices out of bounds")
    if problems:
        raise ValueError("Inconsistent market state: " + "; ".join(problems))


# =====================================================================
# Queries
# =====================================================================

def get_spot_price(market: MarketState, resource: ResourceType | str) -> float:
    """Current price with no premium.  Unknown resources price at 0."""
    state = market.get(resource)
    if state is None:
        logger.warning("No market price for %r", resource)
        return 0.0
    return state.current_price


def get_contract_price(
    market: MarketState,
    resource: ResourceType | str,
    rng: GameRNG,
    config: SimConfig = DEFAULT_CONFIG,
) -> float:
    """Spot price times a premium drawn fresh on every call.

    Two calls for the same resource can differ.  Contracts therefore
    store the value returned when they are generated, see
    :func:`astro_miner.sim.planning.generate_contracts`.
    """
    spot = get_spot_price(market, resource)
    premium = rng.uniform(config.contract_premium_min, config.contract_premium_max)
    return round(spot * premium)


def get_price_trend(market: MarketState, resource: ResourceType | str) -> PriceTrend:
    """Compare the current price to the average of the last four points."""
    state = market.get(resource)
    if state is None or len(state.price_history) < 2:
        return "stable"

    recent = state.price_history[-TREND_WINDOW:]
    average = sum(p.price for p in recent) / len(recent)
    diff = (state.current_price - average) / average
    if diff > TREND_THRESHOLD:
        return "up"
    if diff < -TREND_THRESHOLD:
        return "down"
    return "stable"


def resources_by_price(market: MarketState) -> list[ResourceType]:
    """All commodities, most expensive first."""
    return sorted(
        market.resources,
        key=lambda r: market.resources[r].current_price,
        reverse=True,
    )


def calculate_haul_value(
    market: MarketState,
    haul: dict[ResourceType, float],
) -> float:
    """Spot value of a mixed cargo; non-positive amounts are ignored."""
    return sum(
        get_spot_price(market, resource) * amount
        for resource, amount in haul.items()
        if amount > 0
    )


def format_price(price: float) -> str:
    if price >= 1_000_000:
        return f"${price / 1_000_000:.2f}M"
    if price >= 1000:
        return f"${price / 1000:.1f}K"
    return f"${price:g}"
