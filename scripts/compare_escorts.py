"""Compare pirate combat outcomes across escorts and player levels.

Usage:
    uv run python scripts/compare_escorts.py [--trials N]
"""

from __future__ import annotations

import argparse
import time

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from astro_miner.balance.metrics import compute_combat_metrics
from astro_miner.ir.contractors import PIRATE_STATS_BY_LEVEL, SECURITY_CONTRACTORS
from astro_miner.sim.runner import BatchRunner


def run_comparison(n_trials: int = 10_000, relationship: int = 0) -> None:
    runner = BatchRunner()
    escorts: list[str | None] = [None, *(s.id for s in SECURITY_CONTRACTORS)]
    labels = [e or "unescorted" for e in escorts]
    levels = sorted(PIRATE_STATS_BY_LEVEL)

    # rates[level][escort] = (defeated, seized, won)
    rates: dict[int, list[tuple[float, float, float]]] = {}
    t0 = time.time()
    for level in levels:
        rates[level] = []
        for security_id in escorts:
            results = runner.run_combat_trials(
                n_trials, player_level=level, security_id=security_id,
                relationship_level=relationship,
            )
            m = compute_combat_metrics(results, security_id, level, relationship)
            rates[level].append((m.defeat_rate, m.seized_rate, m.loss_rate))
            print(
                f"  L{level} {labels[escorts.index(security_id)]:18s}"
                f"  defeated={m.defeat_rate:6.1%}  seized={m.seized_rate:6.1%}"
                f"  won={m.loss_rate:6.1%}"
            )
    print(f"\n{len(levels) * len(escorts) * n_trials:,} encounters in {time.time() - t0:.1f}s")

    fig, axes = plt.subplots(1, len(levels), figsize=(5 * len(levels), 5), sharey=True)
    x = np.arange(len(escorts))
    for ax, level in zip(axes, levels):
        data = np.array(rates[level])
        ax.bar(x, data[:, 0], color="#2e7d32", label="pirates defeated")
        ax.bar(x, data[:, 1], bottom=data[:, 0], color="#f9a825", label="payload seized")
        ax.bar(x, data[:, 2], bottom=data[:, 0] + data[:, 1], color="#c62828", label="pirates won")
        ax.set_xticks(x)
        ax.set_xticklabels(labels, rotation=20, ha="right")
        ax.set_title(f"Player level {level}")
        ax.set_ylim(0, 1)
    axes[0].set_ylabel("Share of encounters")
    axes[0].legend(loc="upper left")

    plt.tight_layout()
    out_path = "escort_comparison.png"
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    print(f"\nChart saved to {out_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--trials", type=int, default=10_000, help="Encounters per escort and level")
    parser.add_argument("--relationship", type=int, default=0, help="Standing with every escort")
    args = parser.parse_args()
    run_comparison(args.trials, args.relationship)
