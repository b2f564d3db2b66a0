"""Auction session - orchestrates live sealed-bid rounds for one auction."""

import logging
from typing import Dict, List, Optional, Sequence

from src.auction_core.bid_resolver import BidResolver
from src.auction_core.bid_rules import BidRules, InvalidBidError, RoundStateError
from src.auction_core.config import (
    DEFAULT_ROUND_DURATION_SECONDS,
    DEFAULT_TARGET_SQUAD_SIZE,
)
from src.auction_core.models import (
    BidResolution,
    Player,
    Round,
    RoundStatus,
    SealedBid,
    TeamState,
    Tier,
)
from src.auction_core.reserve import ReserveCalculator
from src.auction_core.rng import SeededRandom

logger = logging.getLogger(__name__)


class AuctionObserver:
    """Receives session events. Subclass and override what you need.

    The observer is owned by the caller and passed to the session at
    construction; bid amounts are never exposed before the round closes.
    """

    def round_opened(self, round_: Round) -> None:
        pass

    def bid_received(self, round_: Round, team_id: int) -> None:
        pass

    def round_closed(self, round_: Round, resolution: BidResolution) -> None:
        pass


class AuctionSession:
    """Main controller for one live auction.

    Coordinates BidRules (validation), BidResolver (winner selection) and the
    TeamState objects (budget and squad mutation). One round is OPEN at a time
    and every round is resolved exactly once, when it is closed.
    """

    def __init__(
        self,
        teams: Sequence[TeamState],
        tiers: Sequence[Tier],
        rng: SeededRandom,
        target_squad_size: int = DEFAULT_TARGET_SQUAD_SIZE,
        price_floor: Optional[int] = None,
        round_duration: Optional[float] = DEFAULT_ROUND_DURATION_SECONDS,
        resolver: Optional[BidResolver] = None,
        observer: Optional[AuctionObserver] = None,
    ):
        if not tiers:
            raise ValueError("At least one tier is required")
        team_ids = [team.team_id for team in teams]
        if len(set(team_ids)) != len(team_ids):
            raise ValueError(f"Duplicate team ids: {team_ids}")

        self.teams: Dict[int, TeamState] = {team.team_id: team for team in teams}
        self.tiers: Dict[str, Tier] = {tier.name: tier for tier in tiers}
        if price_floor is None:
            price_floor = min(tier.base_price for tier in tiers)
        self.reserve = ReserveCalculator(target_squad_size, price_floor)
        self.rules = BidRules(self.reserve)
        self.resolver = resolver or BidResolver()
        self.observer = observer or AuctionObserver()
        self.rng = rng
        self.round_duration = round_duration

        self.rounds: List[Round] = []
        self.unsold_players: List[Player] = []
        self._current: Optional[Round] = None
        self._sealed_bids: Dict[int, SealedBid] = {}

    @property
    def current_round(self) -> Optional[Round]:
        return self._current

    def get_team(self, team_id: int) -> TeamState:
        try:
            return self.teams[team_id]
        except KeyError:
            raise InvalidBidError(f"Team {team_id} is not part of this auction") from None

    def team_budgets(self) -> Dict[int, int]:
        """Remaining budget per team id."""
        return {tid: team.budget_remaining for tid, team in self.teams.items()}

    def max_allowable_bid(self, team_id: int) -> int:
        return self.reserve.max_bid_for(self.get_team(team_id))

    def open_round(self, player: Player) -> Round:
        """Queue ``player`` and open bidding on it.

        Raises:
            RoundStateError: If another round is still open.
            ValueError: If the player's tier is not configured.
        """
        if self._current is not None:
            raise RoundStateError(
                f"Round {self._current.round_id} for {self._current.player.name} "
                "is still open"
            )
        tier = self.tiers.get(player.tier)
        if tier is None:
            raise ValueError(f"Unknown tier {player.tier!r} for {player.name}")

        round_ = Round(round_id=len(self.rounds) + 1, player=player, tier=tier)
        self.rounds.append(round_)

        round_.status = RoundStatus.OPEN
        round_.time_remaining = self.round_duration
        self._current = round_
        self._sealed_bids = {}

        logger.info(
            "Round %d open: %s (%s, base %d)",
            round_.round_id, player.name, tier.display_name, tier.base_price,
        )
        self.observer.round_opened(round_)
        return round_

    def submit_bid(self, team_id: int, player_id: str, amount: int) -> SealedBid:
        """Validate and record (or replace) a team's sealed bid.

        Returns:
            The stored SealedBid.

        Raises:
            RoundStateError: If no round is open.
            InvalidBidError: If the bid targets another player, comes from an
                unknown team, or breaks a bidding rule.
        """
        round_ = self._require_open_round()
        if player_id != round_.player.key:
            raise InvalidBidError(
                f"Bid is for {player_id!r} but round {round_.round_id} "
                f"is auctioning {round_.player.key!r}"
            )

        team = self.get_team(team_id)
        is_valid, error_msg = self.rules.validate_bid(team, round_.tier, amount)
        if not is_valid:
            logger.warning(
                "Rejected bid from %s on %s: %s", team.name, round_.player.name, error_msg
            )
            raise InvalidBidError(error_msg)

        bid = SealedBid(team_id=team_id, amount=amount)
        self._sealed_bids[team_id] = bid

        # Amounts stay sealed until close; only the count is published
        round_.bid_count = sum(1 for b in self._sealed_bids.values() if b.is_active)

        logger.debug("Round %d: bid received from %s", round_.round_id, team.name)
        self.observer.bid_received(round_, team_id)
        return bid

    def tick(self, elapsed_seconds: float) -> bool:
        """Advance the open round's timer.

        Returns:
            True when the bidding window has run out. Closing is still the
            caller's decision.
        """
        round_ = self._require_open_round()
        if round_.time_remaining is None:
            return False
        round_.time_remaining = max(0.0, round_.time_remaining - elapsed_seconds)
        return round_.time_remaining == 0.0

    def close_round(self) -> BidResolution:
        """Freeze bids, resolve the round once and apply the award.

        If the resolver raises, the round stays OPEN with its bids intact.
        """
        round_ = self._require_open_round()

        bids = [
            self._sealed_bids[tid] for tid in self.teams if tid in self._sealed_bids
        ]
        resolution = self.resolver.resolve(
            round_.player, bids, self.team_budgets(), self.rng
        )

        round_.status = RoundStatus.CLOSED
        round_.resolution = resolution
        round_.highest_bid = resolution.winning_bid
        self._current = None

        if resolution.is_sold:
            winner = self.teams[resolution.winning_team_id]
            winner.add_player(round_.player, resolution.winning_bid)
            logger.info(
                "Round %d closed: %s sold to %s for %d (%d bids)",
                round_.round_id, round_.player.name, winner.name,
                resolution.winning_bid, round_.bid_count,
            )
        else:
            self.unsold_players.append(round_.player)
            logger.info("Round %d closed: %s unsold", round_.round_id, round_.player.name)

        self.observer.round_closed(round_, resolution)
        return resolution

    def _require_open_round(self) -> Round:
        if self._current is None or not self._current.is_open:
            raise RoundStateError("No round is currently open")
        return self._current
