"""Tests for simulation reporting (DataFrames, files and text report)."""

import json

from src.simulation_engine.config import SimulationConfig
from src.simulation_engine.reporting import (
    auction_log_frame,
    format_report,
    squad_frame,
    team_summary_frame,
    write_results,
)


# ── DataFrames ───────────────────────────────────────────────────────

class TestFrames:
    def test_auction_log_frame(self, reference_result):
        df = auction_log_frame(reference_result)
        assert len(df) == 45
        for team in reference_result.teams:
            assert f"bid_{team.name}" in df.columns
        assert df["round"].tolist() == list(range(1, 46))

    def test_unsold_rounds_have_no_winner(self, reference_result):
        df = auction_log_frame(reference_result)
        unsold = df[df["winning_bid"] == 0]
        assert unsold["winner"].isna().all()

    def test_team_summary_frame(self, reference_result):
        df = team_summary_frame(reference_result).set_index("team")
        assert len(df) == 4
        for team in reference_result.teams:
            assert df.loc[team.name, "total_spent"] == team.total_spent
            assert df.loc[team.name, "squad_size"] == team.squad_size

    def test_squad_frame_matches_spend(self, reference_result):
        df = squad_frame(reference_result)
        paid = df.groupby("team")["paid_price"].sum()
        for team in reference_result.teams:
            assert paid.get(team.name, 0) == team.total_spent


# ── Files ────────────────────────────────────────────────────────────

class TestWriteResults:
    def test_writes_json_and_csvs(self, reference_result, tmp_path):
        output_file = write_results(reference_result, tmp_path / "out")
        assert output_file.name == "simulation_42.json"
        with open(output_file) as f:
            data = json.load(f)
        assert data["seed"] == 42
        assert len(data["teams"]) == 4

        for suffix in ("auction_log", "teams", "squads"):
            assert (tmp_path / "out" / f"simulation_42_{suffix}.csv").exists()


# ── Text Report ──────────────────────────────────────────────────────

class TestFormatReport:
    def test_sections(self, reference_result):
        text = format_report(reference_result, SimulationConfig())
        assert text.startswith("=== CLOSED AUCTION DRY RUN (Seed: 42) ===")
        assert "45 players | 4 teams | 1000 coins budget | 11 picks each" in text
        assert "=== BALANCE REPORT ===" in text
        assert f"Overall Score: {reference_result.balance_report.overall_score}/100" in text
        assert "Recommendations:" in text

    def test_every_team_listed(self, reference_result):
        text = format_report(reference_result, SimulationConfig())
        for team in reference_result.teams:
            assert f"--- {team.name} ({team.personality}) ---" in text

    def test_unsold_section_matches(self, reference_result):
        text = format_report(reference_result, SimulationConfig())
        if reference_result.unsold_players:
            assert f"--- Unsold Players ({len(reference_result.unsold_players)}) ---" in text
        else:
            assert "Unsold Players" not in text

    def test_captain_style_shown(self, reference_result):
        text = format_report(reference_result, SimulationConfig())
        assert "  Style: Sniper - Goes all-out on specific targets, base price on others" in text
