"""Generate balance baselines from seeded campaigns and combat trials.

Usage:
    uv run python scripts/generate_baselines.py [--runs 200] [--days 730] [--output data/baselines/]
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from astro_miner.balance.baselines import generate_baseline, save_baseline
from astro_miner.balance.report import generate_text_report
from astro_miner.sim.config import DEFAULT_CONFIG, SimConfig
from astro_miner.sim.runner import CampaignPolicy


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate balance baselines")
    parser.add_argument("--runs", type=int, default=200, help="Number of campaigns")
    parser.add_argument("--days", type=float, default=730.0, help="Simulated days per campaign")
    parser.add_argument("--trials", type=int, default=10_000, help="Combat trials per escort")
    parser.add_argument("--security", type=str, default=None, help="Escort hired from level 3")
    parser.add_argument("--config", type=str, default=None, help="JSON tuning overrides")
    parser.add_argument("--output", type=str, default="data/baselines/", help="Output directory")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--parallel", action="store_true", help="Run campaigns in worker processes")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = SimConfig.load(args.config) if args.config else DEFAULT_CONFIG
    policy = CampaignPolicy(security_id=args.security)

    print(f"Running {args.runs:,} campaigns of {args.days:.0f} days...")
    t0 = time.perf_counter()
    baseline = generate_baseline(
        num_runs=args.runs, days=args.days, combat_trials=args.trials,
        base_seed=args.seed, policy=policy, config=config, parallel=args.parallel,
    )
    elapsed = time.perf_counter() - t0
    print(f"Done in {elapsed:.1f}s")

    out_dir = Path(args.output)
    escort = args.security or "unescorted"
    json_path = out_dir / f"campaign_{escort}_{args.runs}x{args.days:.0f}d.json"
    save_baseline(baseline, json_path)
    print(f"Saved baseline to {json_path}")

    print()
    print(generate_text_report(baseline))


if __name__ == "__main__":
    main()
