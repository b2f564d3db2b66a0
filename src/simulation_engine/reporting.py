"""Tabular and text reports for simulation results."""

import json
import logging
from pathlib import Path
from typing import List

import pandas as pd

from src.auction_core.models import ALL_ROLES
from src.simulation_engine.config import CAPTAIN_STYLES, SimulationConfig
from src.simulation_engine.models import Personality, SimulationResult

logger = logging.getLogger(__name__)

ROLE_ABBREVIATIONS = {
    "BATSMAN": "BAT",
    "BOWLER": "BOWL",
    "ALL_ROUNDER": "AR",
    "WICKETKEEPER": "WK",
}


def auction_log_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per round, with one ``bid_<team>`` column per team."""
    names = {team.team_id: team.name for team in result.teams}
    rows = []
    for entry in result.auction_log:
        row = {
            "round": entry.round,
            "player": entry.player.name,
            "role": entry.player.playing_role.value,
            "tier": entry.player.tier,
            "base_price": entry.player.base_price,
            "winner": names.get(entry.winner_id) if entry.winner_id is not None else None,
            "winning_bid": entry.winning_bid,
            "active_bids": sum(1 for bid in entry.bids if bid.is_active),
        }
        for bid in entry.bids:
            row[f"bid_{names.get(bid.team_id, bid.team_id)}"] = bid.amount
        rows.append(row)
    return pd.DataFrame(rows)


def team_summary_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per team: spend, squad size, tier and role counts."""
    rows = []
    for team in result.teams:
        row = {
            "team_id": team.team_id,
            "team": team.name,
            "personality": team.personality,
            "squad_size": team.squad_size,
            "total_spent": team.total_spent,
            "remaining_budget": team.remaining_budget,
        }
        row.update(team.tier_counts)
        row.update({role.value: team.role_counts.get(role, 0) for role in ALL_ROLES})
        rows.append(row)
    return pd.DataFrame(rows)


def squad_frame(result: SimulationResult) -> pd.DataFrame:
    """Every acquired player with the team and price paid."""
    rows = [
        {
            "team": team.name,
            "player": picked.player.name,
            "role": picked.player.playing_role.value,
            "tier": picked.player.tier,
            "base_price": picked.player.base_price,
            "paid_price": picked.paid_price,
        }
        for team in result.teams
        for picked in team.squad
    ]
    return pd.DataFrame(
        rows, columns=["team", "player", "role", "tier", "base_price", "paid_price"]
    )


def write_results(result: SimulationResult, output_dir: Path) -> Path:
    """Write CSV tables and a JSON dump of ``result`` into ``output_dir``.

    Returns:
        Path to the JSON file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = f"simulation_{result.seed}"

    auction_log_frame(result).to_csv(output_dir / f"{stem}_auction_log.csv", index=False)
    team_summary_frame(result).to_csv(output_dir / f"{stem}_teams.csv", index=False)
    squad_frame(result).to_csv(output_dir / f"{stem}_squads.csv", index=False)

    output_file = output_dir / f"{stem}.json"
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2)

    logger.info("Wrote simulation results to %s", output_dir)
    return output_file


def format_report(result: SimulationResult, config: SimulationConfig) -> str:
    """Plain-text dry-run report, as printed by the CLI."""
    lines: List[str] = []
    total = len(result.auction_log)
    lines.append(f"=== CLOSED AUCTION DRY RUN (Seed: {result.seed}) ===")
    lines.append("")
    lines.append(
        f"{total} players | {len(result.teams)} teams | "
        f"{config.budget_per_team} coins budget | {config.target_squad_size} picks each"
    )
    lines.append("")

    squads = squad_frame(result)
    for team in result.teams:
        lines.append(f"--- {team.name} ({team.personality}) ---")
        style = CAPTAIN_STYLES.get(Personality(team.personality))
        if style:
            lines.append(f"  Style: {style['name']} - {style['strategy']}")
        lines.append(
            f"  Budget: {team.total_spent} spent / {team.remaining_budget} remaining"
        )
        team_rows = squads[squads["team"] == team.name]
        for tier in config.ranked_tiers:
            in_tier = team_rows[team_rows["tier"] == tier.name].sort_values(
                "paid_price", ascending=False, kind="stable"
            )
            if in_tier.empty:
                continue
            players = ", ".join(
                f"{row.player} [{row.paid_price}]" for row in in_tier.itertuples()
            )
            lines.append(f"  {tier.name} ({tier.display_name}) ({len(in_tier)}): {players}")
        roles = ", ".join(
            f"{team.role_counts.get(role, 0)} {ROLE_ABBREVIATIONS[role.value]}"
            for role in ALL_ROLES
        )
        lines.append(f"  Roles: {roles}")
        lines.append("")

    if result.unsold_players:
        tiers = config.tier_map
        lines.append(f"--- Unsold Players ({len(result.unsold_players)}) ---")
        for player in result.unsold_players:
            label = tiers[player.tier].display_name if player.tier in tiers else player.tier
            lines.append(f"  {player.name} ({label}, {player.playing_role.value})")
        lines.append("")

    report = result.balance_report
    counts = [team.squad_size for team in result.teams]
    perfect = all(c == config.target_squad_size for c in counts)
    lines.append("=== BALANCE REPORT ===")
    lines.append(f"Overall Score: {report.overall_score}/100")
    lines.append(
        f"  Player Count: {'-'.join(map(str, counts))}{' (perfect)' if perfect else ''}"
    )
    for tier_name, distribution in report.tier_distributions.items():
        lines.append(f"  {tier_name} Distribution: {'-'.join(map(str, distribution))}")
    lines.append(f"  Spending: {'-'.join(map(str, report.spending))}")
    lines.append("  Breakdown:")
    lines.append(f"    Player Count Variance: {report.metrics.player_count_variance}/100")
    lines.append(f"    Top-Tier Distribution: {report.metrics.top_tier_distribution}/100")
    lines.append(f"    Spend Variance:        {report.metrics.spend_variance}/100")
    lines.append(f"    Role Balance:          {report.metrics.role_balance}/100")
    lines.append("Recommendations:")
    lines.extend(f"  - {rec}" for rec in report.recommendations)
    return "\n".join(lines)
