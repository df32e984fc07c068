"""Plot simulated commodity price walks against their clamp bounds.

Usage:
    uv run python scripts/plot_market_walk.py [--years 3] [--runs 50] [--seed 0]
"""

from __future__ import annotations

import argparse

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from astro_miner.ir.resources import COMMODITIES, ResourceType
from astro_miner.sim.config import DEFAULT_CONFIG
from astro_miner.sim.core.rng import GameRNG
from astro_miner.sim.market import initialize_market, update_market_prices


def simulate_walks(weeks: int, runs: int, seed: int) -> tuple[dict[ResourceType, np.ndarray], int]:
    """Return ``resource -> (runs, weeks + 1)`` price arrays and headline count."""
    prices = {r: np.zeros((runs, weeks + 1)) for r in COMMODITIES}
    headlines = 0
    for run in range(runs):
        rng = GameRNG(seed + run).fork("market")
        market = initialize_market(rng)
        for r in COMMODITIES:
            prices[r][run, 0] = market.resources[r].current_price
        for week in range(1, weeks + 1):
            headlines += len(update_market_prices(market, week * DEFAULT_CONFIG.week_days, rng))
            for r in COMMODITIES:
                prices[r][run, week] = market.resources[r].current_price
    return prices, headlines


def plot(prices: dict[ResourceType, np.ndarray], out_path: str) -> None:
    fig, axes = plt.subplots(2, 4, figsize=(18, 8))
    for ax, (resource, data) in zip(axes.flat, prices.items()):
        info = COMMODITIES[resource]
        weeks = np.arange(data.shape[1])
        for row in data[:5]:
            ax.plot(weeks, row / 1000, alpha=0.35, linewidth=0.8)
        ax.plot(weeks, np.median(data, axis=0) / 1000, color="black", linewidth=1.5, label="median")
        ax.fill_between(
            weeks,
            np.percentile(data, 10, axis=0) / 1000,
            np.percentile(data, 90, axis=0) / 1000,
            color="grey", alpha=0.2, label="10-90%",
        )
        ax.axhline(info.price_floor / 1000, color="#c62828", linestyle="--", linewidth=0.8)
        ax.axhline(info.price_ceiling / 1000, color="#c62828", linestyle="--", linewidth=0.8)
        ax.set_title(f"{info.name} (vol {info.volatility:.0%})")
        ax.set_xlabel("week")
        ax.set_ylabel("$K / ton")
    axes.flat[0].legend(loc="upper left")

    plt.tight_layout()
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    print(f"Chart saved to {out_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--years", type=int, default=3)
    parser.add_argument("--runs", type=int, default=50)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--output", type=str, default="market_walk.png")
    args = parser.parse_args()

    weeks = args.years * 52
    prices, headlines = simulate_walks(weeks, args.runs, args.seed)
    for resource, data in prices.items():
        at_floor = np.mean(data[:, 1:] == COMMODITIES[resource].price_floor)
        at_ceiling = np.mean(data[:, 1:] == COMMODITIES[resource].price_ceiling)
        print(
            f"  {resource.value:12s} median end ${np.median(data[:, -1]):>12,.0f}"
            f"  at floor {at_floor:5.1%}  at ceiling {at_ceiling:5.1%}"
        )
    print(f"  {headlines / args.runs:.1f} price headlines per run")
    plot(prices, args.output)
