"""Data models for the simulation engine."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from src.auction_core.models import PickedPlayer, Player, PlayingRole, SealedBid, Tier


class Personality(str, Enum):
    """Captain bidding personality assigned to a simulated team."""

    AGGRESSIVE = "AGGRESSIVE"
    BALANCED = "BALANCED"
    SNIPER = "SNIPER"
    VALUE_HUNTER = "VALUE_HUNTER"


@dataclass(frozen=True)
class PoolTier:
    """A simulation tier and how many players it draws from the source roster.

    ``count=None`` takes every source player of ``source_tier``.
    """

    tier: Tier
    source_tier: str
    count: Optional[int] = None

    @property
    def name(self) -> str:
        return self.tier.name


@dataclass
class TeamResult:
    """Final composition and spend of one simulated team."""

    team_id: int
    name: str
    personality: str
    total_spent: int
    remaining_budget: int
    squad: List[PickedPlayer]
    tier_counts: Dict[str, int]
    role_counts: Dict[PlayingRole, int]

    @property
    def squad_size(self) -> int:
        return len(self.squad)


@dataclass
class AuctionLogEntry:
    """One resolved round of the simulated auction (sold or unsold)."""

    round: int
    player: Player
    bids: List[SealedBid]
    winner_id: Optional[int]
    winning_bid: int


@dataclass
class BalanceMetrics:
    """Sub-scores, each on a 0-100 scale."""

    player_count_variance: int
    top_tier_distribution: int
    spend_variance: int
    role_balance: int


@dataclass
class BalanceReport:
    """Fairness score of a finished auction and the data behind it."""

    overall_score: int
    metrics: BalanceMetrics
    tier_distributions: Dict[str, List[int]]
    spending: List[int]
    recommendations: List[str] = field(default_factory=list)


@dataclass
class SimulationResult:
    """Everything produced by one simulation run."""

    seed: int
    teams: List[TeamResult]
    auction_log: List[AuctionLogEntry]
    unsold_players: List[Player]
    balance_report: BalanceReport

    def to_dict(self) -> Dict:
        """JSON-serializable representation (enums become their values)."""
        return _plain(asdict(self))


def _plain(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {_plain(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
