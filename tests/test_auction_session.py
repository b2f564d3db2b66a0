"""Tests for the live auction session (round lifecycle and sealed bids)."""

import pytest

from src.auction_core.auction_session import AuctionObserver, AuctionSession
from src.auction_core.bid_resolver import BidResolver
from src.auction_core.bid_rules import InvalidBidError, RoundStateError
from src.auction_core.models import Player, PlayingRole, RoundStatus, TeamState, Tier
from src.auction_core.rng import SeededRandom


# ── Helpers ──────────────────────────────────────────────────────────

TIERS = [
    Tier("TIER_0", 150, label="Elite", max_per_team=2),
    Tier("TIER_3", 20, label="Base"),
]


class RecordingObserver(AuctionObserver):
    def __init__(self):
        self.events = []

    def round_opened(self, round_):
        self.events.append(("opened", round_.round_id))

    def bid_received(self, round_, team_id):
        self.events.append(("bid", team_id))

    def round_closed(self, round_, resolution):
        self.events.append(("closed", resolution.winning_team_id))


def _make_teams(n=3, budget=1000):
    return [TeamState.create(i, f"Team {i}", budget, tier_names=["TIER_0", "TIER_3"]) for i in range(n)]


def _make_session(**overrides):
    kwargs = {
        "teams": _make_teams(),
        "tiers": TIERS,
        "rng": SeededRandom(42),
        "round_duration": 60,
    }
    kwargs.update(overrides)
    return AuctionSession(**kwargs)


def _make_player(name="Jasprit Bumrah", tier="TIER_0", base=150):
    return Player(name, PlayingRole.BOWLER, tier, base)


# ── Round Lifecycle ──────────────────────────────────────────────────

class TestRoundLifecycle:
    def test_open_round(self):
        session = _make_session()
        round_ = session.open_round(_make_player())
        assert round_.status == RoundStatus.OPEN
        assert round_.round_id == 1
        assert round_.time_remaining == 60
        assert session.current_round is round_

    def test_cannot_open_two_rounds(self):
        session = _make_session()
        session.open_round(_make_player())
        with pytest.raises(RoundStateError, match="still open"):
            session.open_round(_make_player("Rashid Khan"))

    def test_unknown_tier_raises(self):
        session = _make_session()
        with pytest.raises(ValueError, match="Unknown tier"):
            session.open_round(_make_player(tier="TIER_9"))

    def test_close_round_twice_raises(self):
        session = _make_session()
        session.open_round(_make_player())
        session.close_round()
        with pytest.raises(RoundStateError):
            session.close_round()

    def test_round_ids_increase(self):
        session = _make_session()
        session.open_round(_make_player("p1"))
        session.close_round()
        round_ = session.open_round(_make_player("p2"))
        assert round_.round_id == 2
        assert len(session.rounds) == 2


class TestTimer:
    def test_tick_counts_down(self):
        session = _make_session()
        session.open_round(_make_player())
        assert session.tick(30) is False
        assert session.current_round.time_remaining == 30

    def test_tick_expires_and_clamps(self):
        session = _make_session()
        session.open_round(_make_player())
        assert session.tick(90) is True
        assert session.current_round.time_remaining == 0

    def test_untimed_round_never_expires(self):
        session = _make_session(round_duration=None)
        session.open_round(_make_player())
        assert session.tick(1000) is False

    def test_tick_without_round_raises(self):
        with pytest.raises(RoundStateError):
            _make_session().tick(1)


# ── Bid Submission ───────────────────────────────────────────────────

class TestSubmitBid:
    def test_submit_updates_bid_count_only(self):
        session = _make_session()
        session.open_round(_make_player())
        session.submit_bid(0, "Jasprit Bumrah", 200)
        session.submit_bid(1, "Jasprit Bumrah", 160)
        session.submit_bid(2, "Jasprit Bumrah", 0)
        round_ = session.current_round
        assert round_.bid_count == 2
        assert round_.highest_bid == 0

        session.close_round()
        assert round_.highest_bid == 200

    def test_resubmit_replaces_bid(self):
        session = _make_session()
        session.open_round(_make_player())
        session.submit_bid(0, "Jasprit Bumrah", 300)
        session.submit_bid(0, "Jasprit Bumrah", 170)
        session.submit_bid(1, "Jasprit Bumrah", 160)
        resolution = session.close_round()
        assert resolution.winning_team_id == 0
        assert resolution.winning_bid == 170
        assert len(resolution.all_bids) == 2

    def test_submit_without_open_round(self):
        with pytest.raises(RoundStateError):
            _make_session().submit_bid(0, "Jasprit Bumrah", 150)

    def test_wrong_player_rejected(self):
        session = _make_session()
        session.open_round(_make_player())
        with pytest.raises(InvalidBidError, match="auctioning"):
            session.submit_bid(0, "Rashid Khan", 150)

    def test_unknown_team_rejected(self):
        session = _make_session()
        session.open_round(_make_player())
        with pytest.raises(InvalidBidError, match="not part of this auction"):
            session.submit_bid(99, "Jasprit Bumrah", 150)

    def test_rule_violation_rejected(self):
        session = _make_session()
        session.open_round(_make_player())
        with pytest.raises(InvalidBidError, match="Minimum bid is 150"):
            session.submit_bid(0, "Jasprit Bumrah", 100)
        assert session.current_round.bid_count == 0

    def test_max_allowable_bid_query(self):
        session = _make_session()
        assert session.max_allowable_bid(0) == 800


# ── Resolution and Award ─────────────────────────────────────────────

class TestCloseRound:
    def test_winner_is_debited(self):
        session = _make_session()
        session.open_round(_make_player())
        session.submit_bid(0, "Jasprit Bumrah", 200)
        session.submit_bid(1, "Jasprit Bumrah", 250)
        resolution = session.close_round()

        winner = session.get_team(1)
        assert resolution.winning_team_id == 1
        assert winner.budget_remaining == 750
        assert winner.squad[0].paid_price == 250
        assert winner.tier_count("TIER_0") == 1
        assert session.get_team(0).budget_remaining == 1000

    def test_no_bids_is_unsold(self):
        session = _make_session()
        player = _make_player()
        session.open_round(player)
        resolution = session.close_round()
        assert not resolution.is_sold
        assert session.unsold_players == [player]
        assert session.rounds[0].status == RoundStatus.CLOSED
        assert session.rounds[0].resolution is resolution

    def test_tie_uses_budget_snapshot(self):
        teams = _make_teams()
        teams[2].add_player(_make_player("p0", "TIER_3", 20), 20)
        session = _make_session(teams=teams)
        session.open_round(_make_player())
        session.submit_bid(1, "Jasprit Bumrah", 200)
        session.submit_bid(2, "Jasprit Bumrah", 200)
        assert session.close_round().winning_team_id == 1

    def test_custom_resolver(self):
        teams = _make_teams()
        teams[2].add_player(_make_player("p0", "TIER_3", 20), 20)
        session = _make_session(teams=teams, resolver=BidResolver(prefer_higher_budget=False))
        session.open_round(_make_player())
        session.submit_bid(1, "Jasprit Bumrah", 200)
        session.submit_bid(2, "Jasprit Bumrah", 200)
        assert session.close_round().winning_team_id == 2

    def test_resolver_failure_leaves_round_open(self):
        class FailingResolver(BidResolver):
            def resolve(self, player, bids, team_budgets, rng):
                raise RuntimeError("resolver down")

        session = _make_session(resolver=FailingResolver())
        player = _make_player()
        session.open_round(player)
        session.submit_bid(0, "Jasprit Bumrah", 200)
        with pytest.raises(RuntimeError, match="resolver down"):
            session.close_round()

        round_ = session.current_round
        assert round_ is not None
        assert round_.status == RoundStatus.OPEN
        assert round_.resolution is None
        assert session.unsold_players == []
        assert session.get_team(0).budget_remaining == 1000

        # Same bids resolve once the resolver recovers
        session.resolver = BidResolver()
        assert session.close_round().winning_team_id == 0


class TestObserver:
    def test_events_in_order(self):
        observer = RecordingObserver()
        session = _make_session(observer=observer)
        session.open_round(_make_player())
        session.submit_bid(2, "Jasprit Bumrah", 150)
        session.close_round()
        assert observer.events == [("opened", 1), ("bid", 2), ("closed", 2)]

    def test_amounts_hidden_until_close(self):
        seen = []

        class SpyObserver(AuctionObserver):
            def bid_received(self, round_, team_id):
                seen.append((team_id, round_.highest_bid, round_.bid_count, round_.resolution))

            def round_closed(self, round_, resolution):
                seen.append(("closed", round_.highest_bid))

        session = _make_session(observer=SpyObserver())
        session.open_round(_make_player())
        session.submit_bid(0, "Jasprit Bumrah", 275)
        session.submit_bid(1, "Jasprit Bumrah", 180)
        session.close_round()
        assert seen == [(0, 0, 1, None), (1, 0, 2, None), ("closed", 275)]


class TestConstruction:
    def test_duplicate_team_ids_rejected(self):
        teams = _make_teams(2) + [TeamState.create(0, "Dup", 1000)]
        with pytest.raises(ValueError, match="Duplicate team ids"):
            _make_session(teams=teams)

    def test_requires_tiers(self):
        with pytest.raises(ValueError):
            _make_session(tiers=[])

    def test_price_floor_defaults_to_cheapest_tier(self):
        assert _make_session().reserve.price_floor == 20

    def test_default_round_duration(self):
        session = AuctionSession(_make_teams(), TIERS, SeededRandom(1))
        round_ = session.open_round(_make_player())
        assert round_.time_remaining == 60
