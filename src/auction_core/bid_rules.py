"""Bid rule enforcement and submission validation."""

from typing import Optional, Tuple

from src.auction_core.models import TeamState, Tier
from src.auction_core.reserve import ReserveCalculator


class InvalidBidError(Exception):
    """Raised when a bid submission violates auction rules."""

    pass


class RoundStateError(Exception):
    """Raised when a round is used outside its OPEN window."""

    pass


class BidRules:
    """Enforces the legality of a single sealed bid."""

    def __init__(self, reserve: ReserveCalculator):
        self.reserve = reserve

    def validate_bid(
        self, team: TeamState, tier: Tier, amount: int
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate a bid amount for a player in ``tier``.

        A zero amount is an abstention and is always accepted.

        Returns:
            (is_valid, error_message) - (True, None) if valid
        """
        if amount < 0:
            return False, f"Bid amount cannot be negative (got {amount})"

        if amount == 0:
            return True, None

        # Check 1: Squad space
        if team.squad_size >= self.reserve.target_squad_size:
            return (
                False,
                f"{team.name} already has a full squad "
                f"({team.squad_size}/{self.reserve.target_squad_size})",
            )

        # Check 2: Tier cap
        if tier.max_per_team is not None and team.tier_count(tier.name) >= tier.max_per_team:
            return (
                False,
                f"{team.name} has reached the {tier.display_name} limit "
                f"({team.tier_count(tier.name)}/{tier.max_per_team})",
            )

        # Check 3: Base price
        if amount < tier.base_price:
            return False, f"Minimum bid is {tier.base_price}"

        # Check 4: Budget
        if amount > team.budget_remaining:
            return (
                False,
                f"Insufficient budget ({amount} > {team.budget_remaining} remaining)",
            )

        # Check 5: Mandatory reserve
        max_bid = self.reserve.max_bid_for(team)
        if amount > max_bid:
            return (
                False,
                f"Bid {amount} exceeds max allowable bid {max_bid} "
                f"({self.reserve.reserve_for(team)} reserved for remaining slots)",
            )

        return True, None
