"""Tests for auction and simulation data models."""

import json

import pytest

from src.auction_core.models import (
    PlayingRole,
    Player,
    SealedBid,
    TeamState,
    Tier,
)
from src.simulation_engine.models import Personality, PoolTier


# ── Player / Tier ────────────────────────────────────────────────────

class TestPlayer:
    def test_key_defaults_to_name(self):
        player = Player("MS Dhoni", PlayingRole.WICKETKEEPER, "TIER_0", 150)
        assert player.key == "MS Dhoni"

    def test_key_prefers_player_id(self):
        player = Player("MS Dhoni", PlayingRole.WICKETKEEPER, "TIER_0", 150, player_id="p7")
        assert player.key == "p7"

    def test_negative_base_price_rejected(self):
        with pytest.raises(ValueError, match="base_price"):
            Player("X", PlayingRole.BATSMAN, "TIER_0", -1)


class TestTier:
    def test_display_name(self):
        assert Tier("TIER_0", 150, label="Elite").display_name == "Elite"
        assert Tier("TIER_0", 150).display_name == "TIER_0"

    def test_max_below_min_rejected(self):
        with pytest.raises(ValueError, match="below min_per_team"):
            Tier("TIER_0", 150, min_per_team=2, max_per_team=1)

    def test_pool_tier_name(self):
        pool_tier = PoolTier(Tier("TIER_1", 100), "GOLD", count=7)
        assert pool_tier.name == "TIER_1"


# ── TeamState ───────────────────────────────────────────────────────

class TestTeamState:
    def test_create(self):
        team = TeamState.create(3, "Delhi Dynamos", 1000, Personality.SNIPER.value, ["TIER_0"])
        assert team.budget_remaining == 1000
        assert team.total_spent == 0
        assert team.squad_size == 0
        assert team.tier_counts == {"TIER_0": 0}

    def test_negative_budget_rejected(self):
        with pytest.raises(ValueError):
            TeamState.create(0, "A", -1)

    def test_add_player(self):
        team = TeamState.create(0, "A", 1000)
        player = Player("Rohit Sharma", PlayingRole.BATSMAN, "TIER_0", 150)
        picked = team.add_player(player, 240)
        assert picked.paid_price == 240
        assert team.budget_remaining == 760
        assert team.total_spent == 240
        assert team.tier_count("TIER_0") == 1

    def test_overspend_rejected(self):
        team = TeamState.create(0, "A", 100)
        player = Player("Rohit Sharma", PlayingRole.BATSMAN, "TIER_0", 150)
        with pytest.raises(ValueError, match="cannot pay"):
            team.add_player(player, 150)
        assert team.budget_remaining == 100
        assert team.squad == []

    def test_role_counts_include_every_role(self):
        team = TeamState.create(0, "A", 1000)
        team.add_player(Player("b", PlayingRole.BOWLER, "TIER_3", 20), 20)
        counts = team.role_counts()
        assert set(counts) == set(PlayingRole)
        assert counts[PlayingRole.BOWLER] == 1
        assert counts[PlayingRole.BATSMAN] == 0


class TestSealedBid:
    def test_active(self):
        assert SealedBid(0, 20).is_active
        assert not SealedBid(0, 0).is_active


# ── SimulationResult ─────────────────────────────────────────────────

class TestSimulationResultDict:
    def test_json_serializable(self, reference_result):
        data = reference_result.to_dict()
        text = json.dumps(data)
        assert '"seed": 42' in text

    def test_enums_become_values(self, reference_result):
        data = reference_result.to_dict()
        player = data["auction_log"][0]["player"]
        assert player["playing_role"] in {role.value for role in PlayingRole}
        assert type(player["playing_role"]) is str
        assert set(data["teams"][0]["role_counts"]) == {role.value for role in PlayingRole}
