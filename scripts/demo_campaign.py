"""Play a short campaign and print the news feed as it happens.

Usage:
    uv run python scripts/demo_campaign.py [--seed 7] [--days 365] [--security frontier_guards]
"""

from __future__ import annotations

import argparse
import logging

from astro_miner.ir.targets import SAMPLE_TARGETS
from astro_miner.sim.market import format_price
from astro_miner.sim.session import GameSession


def separator(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--days", type=int, default=365)
    parser.add_argument("--level", type=int, default=None, help="Pin the player level")
    parser.add_argument("--security", type=str, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    session = GameSession(args.seed, SAMPLE_TARGETS)
    if args.level is not None:
        session.player.level_override = args.level

    separator(f"Campaign seed={args.seed} for {args.days} days")
    for day in range(1, args.days + 1):
        if not session.missions and session.available_targets():
            contract = session.contracts[0] if session.contracts else None
            result = session.launch_mission(
                session.available_targets()[0], "spacey", "small_human",
                contract_id=contract.id if contract else None,
                security_id=args.security if session.player.level >= 3 else None,
            )
            if not result.success:
                print(f"day {day:4d}  launch refused: {result.reason}")
            elif not session.contracts:
                session.refresh_contracts()

        report = session.advance(1.0)
        for item in report.news:
            print(f"day {day:4d}  [{item.category.value:11s}] {item.text}")

    separator("Final state")
    print(f"Balance:            {format_price(session.player.balance)}")
    print(f"Missions completed: {session.player.missions_completed}")
    print(f"Level:              {session.player.level}")
    print(f"Blocked targets:    {', '.join(session.scheduler.blocked_targets()) or '-'}")
    for entry in session.player.flight_log:
        print(
            f"  {entry.target_name:22s} {entry.resource:12s}"
            f" {entry.tons:8.0f} t  {format_price(entry.profit)}"
        )


if __name__ == "__main__":
    main()
