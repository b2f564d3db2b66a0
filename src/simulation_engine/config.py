from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from src.auction_core.config import DEFAULT_BUDGET_PER_TEAM, DEFAULT_TARGET_SQUAD_SIZE
from src.auction_core.models import Tier
from src.simulation_engine.models import Personality, PoolTier

# Bundled source roster
PLAYER_POOL_FILE = Path(__file__).parent / "data" / "famous_cricketers.json"

DEFAULT_SEED = 42

# Reference dry-run tiers: 6 + 7 + 16 + 16 = 45 players for 4 teams x 11
SIM_TIERS: List[PoolTier] = [
    PoolTier(Tier("TIER_0", 150, label="Elite", max_per_team=2), "PLATINUM", count=6),
    PoolTier(Tier("TIER_1", 100, label="Gold", max_per_team=2), "GOLD", count=7),
    PoolTier(Tier("TIER_2", 50, label="Mid"), "SILVER"),
    PoolTier(Tier("TIER_3", 20, label="Base"), "BRONZE"),
]

PERSONALITIES: List[Personality] = [
    Personality.AGGRESSIVE,
    Personality.BALANCED,
    Personality.SNIPER,
    Personality.VALUE_HUNTER,
]

DEFAULT_TEAM_NAMES: Dict[Personality, str] = {
    Personality.AGGRESSIVE: "Chennai Chargers",
    Personality.BALANCED: "Mumbai Mavericks",
    Personality.SNIPER: "Delhi Dynamos",
    Personality.VALUE_HUNTER: "Kolkata Knights",
}

CAPTAIN_STYLES: Dict[Personality, Dict[str, str]] = {
    Personality.AGGRESSIVE: {
        "name": "Aggressive",
        "description": "Bids high on Platinum and Gold. Front-loads spending.",
        "strategy": "High bids on top tiers, often runs tight in later rounds",
    },
    Personality.BALANCED: {
        "name": "Balanced",
        "description": "Spreads budget evenly across all tiers.",
        "strategy": "Moderate bids above base price on all players",
    },
    Personality.SNIPER: {
        "name": "Sniper",
        "description": "Targets 2-3 players and bids very high on them.",
        "strategy": "Goes all-out on specific targets, base price on others",
    },
    Personality.VALUE_HUNTER: {
        "name": "Value Hunter",
        "description": "Rarely exceeds base price on top tiers, dominates lower tiers.",
        "strategy": "Saves budget for Gold and Silver rounds",
    },
}

# Bid multiplier ranges [min, max] applied to base price, indexed by tier rank
# (0 = highest base price). Tiers past the end use the last range.
BID_MULTIPLIERS: Dict[Personality, List[Tuple[float, float]]] = {
    Personality.AGGRESSIVE: [(1.5, 2.5), (1.3, 1.8), (1.0, 1.3), (1.0, 1.1)],
    Personality.BALANCED: [(1.2, 1.6), (1.2, 1.6), (1.2, 1.5), (1.1, 1.4)],
    Personality.SNIPER: [(1.0, 1.1), (1.0, 1.1), (1.05, 1.2), (1.05, 1.15)],
    Personality.VALUE_HUNTER: [(1.0, 1.2), (1.0, 1.3), (1.4, 2.0), (1.3, 1.8)],
}

# Sniper: multiplier on named targets, and how many targets per tier rank
SNIPER_TARGET_MULTIPLIER: List[Tuple[float, float]] = [
    (1.8, 2.5), (1.8, 2.5), (1.0, 1.0), (1.0, 1.0),
]
SNIPER_TARGET_COUNTS: Dict[int, int] = {0: 2, 1: 1}

# Late-auction desperation: triggers when fewer than DESPERATION_THRESHOLD
# spare players remain beyond a team's open slots
DESPERATION_MULTIPLIER: Tuple[float, float] = (1.3, 1.5)
DESPERATION_THRESHOLD = 5
DESPERATION_MIN_SLOTS = 2

# Teams this far below the average squad size bid up to catch up
SQUAD_DEFICIT_TRIGGER = 2
SQUAD_DEFICIT_STEP = 0.1

# Floor on the flexibility scale applied to bid premiums
MIN_FLEXIBILITY_SCALE = 0.2

# Balance scoring
BALANCE_WEIGHTS = {
    "player_count_variance": 0.25,
    "top_tier_distribution": 0.30,
    "spend_variance": 0.25,
    "role_balance": 0.20,
}
RECOMMENDATION_THRESHOLDS = {
    "player_count_variance": 80,
    "top_tier_distribution": 70,
    "spend_variance": 60,
    "role_balance": 70,
}
# Coefficient of variation at which the spend score reaches 0
MAX_SPEND_CV = 0.5
ROLE_POINTS_MULTIPLE = 25  # two or more players in a role
ROLE_POINTS_SINGLE = 20  # exactly one


@dataclass
class SimulationConfig:
    """Per-run simulation settings."""

    seed: int = DEFAULT_SEED
    budget_per_team: int = DEFAULT_BUDGET_PER_TEAM
    target_squad_size: int = DEFAULT_TARGET_SQUAD_SIZE
    tiers: List[PoolTier] = field(default_factory=lambda: list(SIM_TIERS))
    personalities: List[Personality] = field(default_factory=lambda: list(PERSONALITIES))
    team_names: Dict[Personality, str] = field(
        default_factory=lambda: dict(DEFAULT_TEAM_NAMES)
    )

    def __post_init__(self):
        if not self.tiers:
            raise ValueError("At least one tier is required")
        if not self.personalities:
            raise ValueError("At least one personality is required")
        if self.budget_per_team <= 0:
            raise ValueError(f"budget_per_team must be positive, got {self.budget_per_team}")
        if self.target_squad_size <= 0:
            raise ValueError(
                f"target_squad_size must be positive, got {self.target_squad_size}"
            )
        names = [pool_tier.name for pool_tier in self.tiers]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate tier names: {names}")

    @property
    def clearance_price(self) -> int:
        """Lowest tier base price; the reserve floor and fill-pass price."""
        return min(pool_tier.tier.base_price for pool_tier in self.tiers)

    @property
    def tier_map(self) -> Dict[str, Tier]:
        return {pool_tier.name: pool_tier.tier for pool_tier in self.tiers}

    @property
    def ranked_tiers(self) -> List[Tier]:
        """Tiers from highest to lowest base price (stable on ties)."""
        tiers = [pool_tier.tier for pool_tier in self.tiers]
        return sorted(tiers, key=lambda t: t.base_price, reverse=True)

    def tier_rank(self, tier_name: str) -> int:
        for rank, tier in enumerate(self.ranked_tiers):
            if tier.name == tier_name:
                return rank
        raise ValueError(f"Unknown tier {tier_name!r}")

    def team_name(self, personality: Personality, index: int) -> str:
        return self.team_names.get(personality, f"Team {index + 1}")
