"""Captain bidding strategies.

Each personality is one function with the signature::

    bid(team, player, remaining_pool, all_teams, rng, config) -> int

and :func:`generate_bid` dispatches on ``team.strategy`` through the
``STRATEGIES`` table. All four share :func:`_place_bid`, which handles
eligibility, premium shaping and clamping, so a returned amount is always
either 0 (abstain) or within ``[base_price, max_allowable_bid]``.
"""

import logging
from typing import Callable, Dict, List, Sequence, Tuple

from src.auction_core.models import Player, SealedBid, TeamState
from src.auction_core.reserve import max_allowable_bid
from src.auction_core.rng import SeededRandom
from src.simulation_engine.config import (
    BID_MULTIPLIERS,
    DESPERATION_MIN_SLOTS,
    DESPERATION_MULTIPLIER,
    DESPERATION_THRESHOLD,
    MIN_FLEXIBILITY_SCALE,
    SNIPER_TARGET_COUNTS,
    SNIPER_TARGET_MULTIPLIER,
    SQUAD_DEFICIT_STEP,
    SQUAD_DEFICIT_TRIGGER,
    SimulationConfig,
)
from src.simulation_engine.models import Personality

logger = logging.getLogger(__name__)

MultiplierRange = Tuple[float, float]


# ------------------------------------------------------------------
# Personalities
# ------------------------------------------------------------------


def aggressive_bid(
    team: TeamState,
    player: Player,
    remaining_pool: Sequence[Player],
    all_teams: Sequence[TeamState],
    rng: SeededRandom,
    config: SimulationConfig,
) -> int:
    """Well above base on the two top tiers, close to base further down."""
    return _place_bid(
        team, player, remaining_pool, all_teams, rng, config,
        _range_for(BID_MULTIPLIERS[Personality.AGGRESSIVE], player, config),
    )


def balanced_bid(
    team: TeamState,
    player: Player,
    remaining_pool: Sequence[Player],
    all_teams: Sequence[TeamState],
    rng: SeededRandom,
    config: SimulationConfig,
) -> int:
    """A moderate premium on every tier."""
    return _place_bid(
        team, player, remaining_pool, all_teams, rng, config,
        _range_for(BID_MULTIPLIERS[Personality.BALANCED], player, config),
    )


def sniper_bid(
    team: TeamState,
    player: Player,
    remaining_pool: Sequence[Player],
    all_teams: Sequence[TeamState],
    rng: SeededRandom,
    config: SimulationConfig,
) -> int:
    """Near-maximum on pre-selected targets, roughly base price otherwise."""
    if player.name in team.sniper_targets:
        multipliers = _range_for(SNIPER_TARGET_MULTIPLIER, player, config)
    else:
        multipliers = _range_for(BID_MULTIPLIERS[Personality.SNIPER], player, config)
    return _place_bid(team, player, remaining_pool, all_teams, rng, config, multipliers)


def value_hunter_bid(
    team: TeamState,
    player: Player,
    remaining_pool: Sequence[Player],
    all_teams: Sequence[TeamState],
    rng: SeededRandom,
    config: SimulationConfig,
) -> int:
    """Holds near base on the top tiers and competes hard on the bottom two."""
    return _place_bid(
        team, player, remaining_pool, all_teams, rng, config,
        _range_for(BID_MULTIPLIERS[Personality.VALUE_HUNTER], player, config),
    )


StrategyFn = Callable[
    [TeamState, Player, Sequence[Player], Sequence[TeamState], SeededRandom, SimulationConfig],
    int,
]

STRATEGIES: Dict[Personality, StrategyFn] = {
    Personality.AGGRESSIVE: aggressive_bid,
    Personality.BALANCED: balanced_bid,
    Personality.SNIPER: sniper_bid,
    Personality.VALUE_HUNTER: value_hunter_bid,
}


def generate_bid(
    team: TeamState,
    player: Player,
    remaining_pool: Sequence[Player],
    all_teams: Sequence[TeamState],
    rng: SeededRandom,
    config: SimulationConfig,
) -> SealedBid:
    """Produce the sealed bid of ``team``'s captain for ``player``."""
    try:
        strategy = STRATEGIES[Personality(team.strategy)]
    except ValueError:
        raise ValueError(f"Unknown strategy {team.strategy!r} for {team.name}") from None

    amount = strategy(team, player, remaining_pool, all_teams, rng, config)
    logger.debug("%s bids %d on %s", team.name, amount, player.name)
    return SealedBid(team_id=team.team_id, amount=amount)


def select_sniper_targets(
    pool: Sequence[Player], config: SimulationConfig, rng: SeededRandom
) -> List[str]:
    """Draw the sniper's named targets from the top tiers of the pool."""
    ranked = config.ranked_tiers
    targets: List[str] = []
    for rank, count in sorted(SNIPER_TARGET_COUNTS.items()):
        if rank >= len(ranked):
            continue
        tier_players = [p for p in pool if p.tier == ranked[rank].name]
        targets.extend(p.name for p in rng.sample(tier_players, count))
    return targets


# ------------------------------------------------------------------
# Shared bid shaping
# ------------------------------------------------------------------


def bid_ceiling(team: TeamState, player: Player, config: SimulationConfig) -> int:
    """Most the team may bid on ``player``, or 0 if it must abstain.

    Abstains when the squad is full, the base price is unaffordable, or the
    tier cap is reached. Otherwise returns the reserve-limited maximum.
    """
    if team.squad_size >= config.target_squad_size:
        return 0
    if team.budget_remaining < player.base_price:
        return 0

    tier = config.tier_map.get(player.tier)
    if tier is not None and tier.max_per_team is not None:
        if team.tier_count(player.tier) >= tier.max_per_team:
            return 0

    return max_allowable_bid(
        team.budget_remaining,
        team.squad_size,
        config.target_squad_size,
        config.clearance_price,
    )


def budget_flexibility(
    team: TeamState, remaining_pool: Sequence[Player], config: SimulationConfig
) -> float:
    """Share of the team's spendable surplus still left, in [0, 1].

    Formula::

        flexible = budget_remaining - cheapest_fill_cost
        original = original_budget - target_squad_size * clearance_price
        flexibility = clamp(flexible / original, 0, 1)
    """
    slots_needed = config.target_squad_size - team.squad_size
    if slots_needed <= 0:
        return 0.0

    cheapest = sorted(p.base_price for p in remaining_pool)[:slots_needed]
    flexible = team.budget_remaining - sum(cheapest)
    original = team.original_budget - config.target_squad_size * config.clearance_price
    if original <= 0:
        return 0.0
    return max(0.0, min(1.0, flexible / original))


def _place_bid(
    team: TeamState,
    player: Player,
    remaining_pool: Sequence[Player],
    all_teams: Sequence[TeamState],
    rng: SeededRandom,
    config: SimulationConfig,
    multipliers: MultiplierRange,
) -> int:
    ceiling = bid_ceiling(team, player, config)
    if ceiling == 0 or ceiling < player.base_price:
        return 0

    low, high = multipliers

    # Premium shrinks as the surplus is spent
    scale = max(MIN_FLEXIBILITY_SCALE, budget_flexibility(team, remaining_pool, config))
    low = 1 + (low - 1) * scale
    high = 1 + (high - 1) * scale

    # Catch up with the league when well behind on squad size
    average_size = sum(t.squad_size for t in all_teams) / len(all_teams)
    deficit = average_size - team.squad_size
    if deficit >= SQUAD_DEFICIT_TRIGGER:
        catch_up = 1 + deficit * SQUAD_DEFICIT_STEP
        low *= catch_up
        high *= catch_up

    slots_needed = config.target_squad_size - team.squad_size
    if (
        len(remaining_pool) - slots_needed < DESPERATION_THRESHOLD
        and slots_needed > DESPERATION_MIN_SLOTS
    ):
        low *= rng.uniform(*DESPERATION_MULTIPLIER)
        high *= rng.uniform(*DESPERATION_MULTIPLIER)

    amount = int(round(player.base_price * rng.uniform(low, high)))
    return max(player.base_price, min(amount, ceiling))


def _range_for(
    ranges: Sequence[MultiplierRange], player: Player, config: SimulationConfig
) -> MultiplierRange:
    rank = config.tier_rank(player.tier)
    return ranges[min(rank, len(ranges) - 1)]
