"""Human-readable report generation for balance baselines."""

from __future__ import annotations

from astro_miner.balance.models import BalanceBaseline


def generate_text_report(baseline: BalanceBaseline) -> str:
    """Generate a human-readable summary of the baseline."""
    m = baseline.missions
    c = baseline.campaigns
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append("Balance Baseline Report")
    lines.append(
        f"Campaigns: {baseline.num_runs:,} x {baseline.days:.0f} days"
        f" | Generated: {baseline.generated_at}"
    )
    lines.append("=" * 60)

    lines.append("")
    lines.append("## Combat")
    for cm in baseline.combat:
        escort = cm.security_id or "unescorted"
        lines.append(
            f"  {escort:20s}  L{cm.player_level}"
            f"  defeated={cm.defeat_rate:.1%}"
            f"  won={cm.loss_rate:.1%}"
            f"  seized={cm.seized_rate:.1%}"
            f"  n={cm.trials:,}"
        )

    lines.append("")
    lines.append("## Missions")
    lines.append(f"  Launched:        {m.total_missions:,} ({m.finished:,} finished)")
    lines.append(f"  Success rate:    {m.success_rate:.1%} ({m.successes}/{m.finished})")
    lines.append(f"  Payload seized:  {m.seized}")
    lines.append(f"  Lost:            {m.failures}")
    lines.append(f"  Pirate contact:  {m.pirate_encounter_rate:.1%}")
    lines.append(f"  Avg duration:    {m.avg_duration_days:.1f} days")
    lines.append(f"  Avg cost:        ${m.avg_cost:,.0f}")
    lines.append(f"  Avg revenue:     ${m.avg_revenue:,.0f}")
    lines.append(f"  Avg profit:      ${m.avg_profit:,.0f}")
    if m.terminal_counts:
        lines.append("  Endings:")
        for phase, count in sorted(m.terminal_counts.items(), key=lambda kv: -kv[1]):
            lines.append(f"    {phase:26s} {count}")

    lines.append("")
    lines.append("## Campaigns")
    lines.append(f"  Avg final balance:   ${c.avg_final_balance:,.0f}")
    lines.append(
        f"  Balance range:       ${c.min_final_balance:,.0f} .. ${c.max_final_balance:,.0f}"
    )
    lines.append(f"  Avg completed:       {c.avg_missions_completed:.1f}")
    lines.append(f"  Avg final level:     {c.avg_final_level:.2f}")
    lines.append(f"  Avg blocked targets: {c.avg_blocked_targets:.1f}")
    for category, avg in c.avg_news_by_category.items():
        lines.append(f"  News/{category:15s} {avg:.1f}")

    if baseline.market:
        lines.append("")
        lines.append("## Market")
        for mm in baseline.market:
            lines.append(
                f"  {mm.resource:12s}  base=${mm.base_price:,.0f}"
                f"  seen=${mm.min_seen:,.0f}..${mm.max_seen:,.0f}"
                f"  bounds=${mm.price_floor:,.0f}..${mm.price_ceiling:,.0f}"
                f"  avg_spread=${mm.avg_spread:,.0f}"
            )

    lines.append("")
    return "\n".join(lines)
