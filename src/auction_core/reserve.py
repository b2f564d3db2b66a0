"""Mandatory-reserve arithmetic for sealed bids.

A team must always keep enough budget to fill every remaining mandatory squad
slot at the cheapest legal price. The slot being bid on right now is excluded
from the reserve, since the current bid pays for it.
"""

from src.auction_core.models import TeamState


def mandatory_slots_remaining(current_squad_size: int, target_squad_size: int) -> int:
    """Open slots after the one currently up for auction."""
    return max(0, target_squad_size - current_squad_size - 1)


def max_allowable_bid(
    budget_remaining: int,
    current_squad_size: int,
    target_squad_size: int,
    price_floor: int,
) -> int:
    """Largest legal bid for the current player.

    Formula::

        reserve = mandatory_slots_remaining * price_floor
        result = max(0, budget_remaining - reserve)

    Never raises; a negative budget simply clamps to 0.
    """
    reserve = mandatory_slots_remaining(current_squad_size, target_squad_size) * price_floor
    return max(0, budget_remaining - reserve)


class ReserveCalculator:
    """Binds the reserve formula to one auction's squad size and price floor."""

    def __init__(self, target_squad_size: int, price_floor: int):
        if target_squad_size <= 0:
            raise ValueError(
                f"target_squad_size must be positive, got {target_squad_size}"
            )
        if price_floor < 0:
            raise ValueError(f"price_floor must be >= 0, got {price_floor}")
        self.target_squad_size = target_squad_size
        self.price_floor = price_floor

    def reserve_for(self, team: TeamState) -> int:
        """Budget the team must hold back for its other open slots."""
        return (
            mandatory_slots_remaining(team.squad_size, self.target_squad_size)
            * self.price_floor
        )

    def max_bid_for(self, team: TeamState) -> int:
        return max_allowable_bid(
            team.budget_remaining,
            team.squad_size,
            self.target_squad_size,
            self.price_floor,
        )
