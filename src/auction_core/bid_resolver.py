"""Sealed-bid round resolution.

Winner selection, in order:

1. Highest bid amount.
2. Among tied top bidders, the highest remaining budget (or the lowest, when
   the resolver is built with ``prefer_higher_budget=False``).
3. Among teams still tied, a uniform draw from the supplied seeded RNG.
"""

import logging
from typing import Mapping, Sequence

from src.auction_core.models import BidResolution, Player, SealedBid
from src.auction_core.rng import SeededRandom

logger = logging.getLogger(__name__)


class BidResolver:
    """Resolves one player's sealed bids to a single winner or unsold.

    Stateless apart from the budget tie-break policy. The RNG is consumed only
    when the first two criteria leave more than one candidate.
    """

    def __init__(self, prefer_higher_budget: bool = True):
        self.prefer_higher_budget = prefer_higher_budget

    def resolve(
        self,
        player: Player,
        bids: Sequence[SealedBid],
        team_budgets: Mapping[int, int],
        rng: SeededRandom,
    ) -> BidResolution:
        """Resolve a round.

        Args:
            player: The player being auctioned.
            bids: Every submitted bid; non-positive amounts are abstentions.
            team_budgets: Remaining budget per team id, snapshotted at close.
            rng: A :class:`SeededRandom` used only for the final tie-break.

        Returns:
            :class:`BidResolution` with ``winning_team_id=None`` when no
            active bid exists.

        Raises:
            ValueError: If a team bids twice or an active bidder has no
                budget entry.
        """
        self._check_bids(bids, team_budgets)

        all_bids = list(bids)
        active = [bid for bid in all_bids if bid.is_active]

        if not active:
            logger.debug("No active bids for %s - unsold", player.name)
            return BidResolution(
                player=player,
                winning_team_id=None,
                winning_bid=0,
                all_bids=all_bids,
            )

        max_amount = max(bid.amount for bid in active)
        top_bidders = [bid for bid in active if bid.amount == max_amount]

        if len(top_bidders) == 1:
            winner = top_bidders[0]
        else:
            candidates = self._break_tie_on_budget(top_bidders, team_budgets)
            if len(candidates) == 1:
                winner = candidates[0]
            else:
                winner = candidates[rng.next_int(0, len(candidates) - 1)]
                logger.debug(
                    "Random tie-break for %s among teams %s -> team %d",
                    player.name,
                    [bid.team_id for bid in candidates],
                    winner.team_id,
                )

        return BidResolution(
            player=player,
            winning_team_id=winner.team_id,
            winning_bid=winner.amount,
            all_bids=all_bids,
        )

    def _break_tie_on_budget(
        self, top_bidders: Sequence[SealedBid], team_budgets: Mapping[int, int]
    ) -> list:
        budgets = [team_budgets[bid.team_id] for bid in top_bidders]
        target = max(budgets) if self.prefer_higher_budget else min(budgets)
        return [
            bid for bid, budget in zip(top_bidders, budgets) if budget == target
        ]

    @staticmethod
    def _check_bids(bids: Sequence[SealedBid], team_budgets: Mapping[int, int]):
        seen = set()
        for bid in bids:
            if bid.team_id in seen:
                raise ValueError(f"Team {bid.team_id} submitted more than one bid")
            seen.add(bid.team_id)
            if bid.is_active and bid.team_id not in team_budgets:
                raise ValueError(f"No budget supplied for bidding team {bid.team_id}")
