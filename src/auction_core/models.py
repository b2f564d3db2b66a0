"""Auction data models - players, tiers, team state, sealed bids and rounds."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional


class PlayingRole(str, Enum):
    """Playing role of a cricketer."""

    BATSMAN = "BATSMAN"
    BOWLER = "BOWLER"
    ALL_ROUNDER = "ALL_ROUNDER"
    WICKETKEEPER = "WICKETKEEPER"


ALL_ROLES = tuple(PlayingRole)


class RoundStatus(str, Enum):
    """Lifecycle of a live round: PENDING -> OPEN -> CLOSED."""

    PENDING = "PENDING"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


@dataclass(frozen=True)
class Player:
    """A player up for auction. Never mutated after the pool is built."""

    name: str
    playing_role: PlayingRole
    tier: str
    base_price: int
    batting_style: Optional[str] = None
    bowling_style: Optional[str] = None
    player_id: Optional[str] = None

    def __post_init__(self):
        if self.base_price < 0:
            raise ValueError(
                f"base_price must be >= 0, got {self.base_price} for {self.name}"
            )

    @property
    def key(self) -> str:
        """Identifier used to match bid submissions to the round's player."""
        return self.player_id or self.name


@dataclass(frozen=True)
class Tier:
    """A price bracket with per-team acquisition limits."""

    name: str
    base_price: int
    label: str = ""
    min_per_team: int = 0
    max_per_team: Optional[int] = None
    color: Optional[str] = None

    def __post_init__(self):
        if self.base_price < 0:
            raise ValueError(f"Tier {self.name} base_price must be >= 0")
        if self.max_per_team is not None and self.max_per_team < self.min_per_team:
            raise ValueError(
                f"Tier {self.name} max_per_team ({self.max_per_team}) "
                f"is below min_per_team ({self.min_per_team})"
            )

    @property
    def display_name(self) -> str:
        return self.label or self.name


@dataclass
class PickedPlayer:
    """A squad entry: the player and what the team paid."""

    player: Player
    paid_price: int


@dataclass
class TeamState:
    """Budget and squad of one team for the lifetime of one auction."""

    team_id: int
    name: str
    original_budget: int
    budget_remaining: int
    strategy: Optional[str] = None
    squad: List[PickedPlayer] = field(default_factory=list)
    tier_counts: Dict[str, int] = field(default_factory=dict)
    sniper_targets: List[str] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        team_id: int,
        name: str,
        budget: int,
        strategy: Optional[str] = None,
        tier_names: Iterable[str] = (),
    ) -> "TeamState":
        """Factory for a team with a full budget and an empty squad."""
        if budget < 0:
            raise ValueError(f"Budget for {name} must be >= 0, got {budget}")
        return cls(
            team_id=team_id,
            name=name,
            original_budget=budget,
            budget_remaining=budget,
            strategy=strategy,
            tier_counts={tier: 0 for tier in tier_names},
        )

    @property
    def squad_size(self) -> int:
        return len(self.squad)

    @property
    def total_spent(self) -> int:
        return self.original_budget - self.budget_remaining

    def tier_count(self, tier: str) -> int:
        return self.tier_counts.get(tier, 0)

    def role_counts(self) -> Dict[PlayingRole, int]:
        """Number of squad players per playing role (every role present)."""
        counts = {role: 0 for role in ALL_ROLES}
        for picked in self.squad:
            counts[picked.player.playing_role] += 1
        return counts

    def add_player(self, player: Player, price: int) -> PickedPlayer:
        """Debit the budget and append the player to the squad.

        Raises:
            ValueError: If the price is negative or exceeds the remaining
                budget (cumulative spend can never pass the original budget).
        """
        if price < 0:
            raise ValueError(f"Price must be >= 0, got {price}")
        if price > self.budget_remaining:
            raise ValueError(
                f"{self.name} cannot pay {price} for {player.name} "
                f"(budget remaining {self.budget_remaining})"
            )
        picked = PickedPlayer(player=player, paid_price=price)
        self.budget_remaining -= price
        self.squad.append(picked)
        self.tier_counts[player.tier] = self.tier_count(player.tier) + 1
        return picked


@dataclass(frozen=True)
class SealedBid:
    """One team's hidden bid for the current player. 0 means abstain."""

    team_id: int
    amount: int

    @property
    def is_active(self) -> bool:
        return self.amount > 0


@dataclass
class BidResolution:
    """Outcome of one sealed-bid round."""

    player: Player
    winning_team_id: Optional[int]
    winning_bid: int
    all_bids: List[SealedBid]

    @property
    def is_sold(self) -> bool:
        return self.winning_team_id is not None


@dataclass
class Round:
    """A live round for a single player.

    While the round is OPEN only ``bid_count`` moves; ``highest_bid`` is
    filled in from the resolution when the round closes.
    """

    round_id: int
    player: Player
    tier: Tier
    status: RoundStatus = RoundStatus.PENDING
    time_remaining: Optional[float] = None
    highest_bid: int = 0
    bid_count: int = 0
    resolution: Optional[BidResolution] = None

    @property
    def is_open(self) -> bool:
        return self.status == RoundStatus.OPEN
