"""Closed-auction simulation engine.

A run moves through six steps::

    build pool -> shuffle order -> init teams -> per-round loop
        -> supplemental fill -> score and report

Every random draw goes through one :class:`SeededRandom`, so a given seed and
configuration always produce the same auction.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from src.auction_core.bid_resolver import BidResolver
from src.auction_core.models import Player, TeamState
from src.auction_core.rng import SeededRandom
from src.simulation_engine.balance_scorer import BalanceScorer
from src.simulation_engine.config import DEFAULT_SEED, SimulationConfig
from src.simulation_engine.models import (
    AuctionLogEntry,
    Personality,
    SimulationResult,
    TeamResult,
)
from src.simulation_engine.player_pool import PlayerPoolBuilder
from src.simulation_engine.strategies import generate_bid, select_sniper_targets

logger = logging.getLogger(__name__)


class SimulationEngine:
    """Runs complete sealed-bid auctions in memory.

    The engine holds configuration and collaborators only; all per-run state
    lives inside :meth:`run`, so one engine can run many seeds.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        pool_builder: Optional[PlayerPoolBuilder] = None,
        resolver: Optional[BidResolver] = None,
        scorer: Optional[BalanceScorer] = None,
    ):
        self.config = config or SimulationConfig()
        self.pool_builder = pool_builder or PlayerPoolBuilder()
        self.resolver = resolver or BidResolver()
        self.scorer = scorer or BalanceScorer(self.config.target_squad_size)

    def run(self, seed: Optional[int] = None) -> SimulationResult:
        """Run one simulated auction.

        Args:
            seed: Overrides ``config.seed`` when given.

        Returns:
            :class:`SimulationResult` with final teams, the per-round log,
            permanently unsold players and the balance report.
        """
        seed = self.config.seed if seed is None else seed
        rng = SeededRandom(seed)
        logger.info("Starting simulation (seed=%d)", seed)

        # 1. Build pool
        pool = self.pool_builder.build_pool(self.config.tiers, rng)

        # 2. Fix auction order
        rng.shuffle(pool)
        order: Tuple[Player, ...] = tuple(pool)

        # 3. Teams
        teams = self._init_teams(order, rng)

        # 4. Auction rounds
        auction_log, unsold = self._run_rounds(order, teams, rng)
        sold = len(order) - len(unsold)
        logger.info("Auction rounds complete: %d sold, %d unsold", sold, len(unsold))

        # 5. Supplemental fill
        unsold = self._supplemental_fill(teams, unsold)

        # 6. Score
        team_results = [self._team_result(team) for team in teams]
        report = self.scorer.score(team_results, self.config.tiers)
        logger.info("Simulation complete (seed=%d): balance score %d/100", seed, report.overall_score)

        return SimulationResult(
            seed=seed,
            teams=team_results,
            auction_log=auction_log,
            unsold_players=unsold,
            balance_report=report,
        )

    def _init_teams(self, order: Sequence[Player], rng: SeededRandom) -> List[TeamState]:
        tier_names = [pool_tier.name for pool_tier in self.config.tiers]
        teams = []
        for index, personality in enumerate(self.config.personalities):
            personality = Personality(personality)
            team = TeamState.create(
                team_id=index,
                name=self.config.team_name(personality, index),
                budget=self.config.budget_per_team,
                strategy=personality.value,
                tier_names=tier_names,
            )
            if personality == Personality.SNIPER:
                team.sniper_targets = select_sniper_targets(order, self.config, rng)
                logger.debug("%s targets: %s", team.name, ", ".join(team.sniper_targets))
            teams.append(team)

        logger.info(
            "Initialized %d teams with %d budget each", len(teams), self.config.budget_per_team
        )
        return teams

    def _run_rounds(
        self, order: Tuple[Player, ...], teams: List[TeamState], rng: SeededRandom
    ) -> Tuple[List[AuctionLogEntry], List[Player]]:
        """Auction every player once, in order.

        All captains bid against the same pre-round snapshot of budgets and
        squads; no team sees another's amount until resolution.
        """
        by_id = {team.team_id: team for team in teams}
        auction_log: List[AuctionLogEntry] = []
        unsold: List[Player] = []

        for cursor, player in enumerate(order):
            remaining_pool = order[cursor + 1:]

            bids = [
                generate_bid(team, player, remaining_pool, teams, rng, self.config)
                for team in teams
            ]
            budgets = {team.team_id: team.budget_remaining for team in teams}
            resolution = self.resolver.resolve(player, bids, budgets, rng)

            auction_log.append(
                AuctionLogEntry(
                    round=cursor + 1,
                    player=player,
                    bids=resolution.all_bids,
                    winner_id=resolution.winning_team_id,
                    winning_bid=resolution.winning_bid,
                )
            )

            if resolution.is_sold:
                winner = by_id[resolution.winning_team_id]
                winner.add_player(player, resolution.winning_bid)
                logger.debug(
                    "Round %d: %s -> %s for %d",
                    cursor + 1, player.name, winner.name, resolution.winning_bid,
                )
            else:
                unsold.append(player)
                logger.debug("Round %d: %s unsold", cursor + 1, player.name)

        return auction_log, unsold

    def _supplemental_fill(
        self, teams: List[TeamState], unsold: List[Player]
    ) -> List[Player]:
        """Hand unsold players to short squads at the clearance price.

        Each pass walks the needy teams smallest squad first and gives each
        one player, ignoring tier caps. Stops when a pass changes nothing.

        Returns:
            Players still unsold afterwards.
        """
        price = self.config.clearance_price
        target = self.config.target_squad_size
        leftover = list(unsold)
        filled = 0

        changed = True
        while changed and leftover:
            changed = False
            needy = sorted(
                (team for team in teams if team.squad_size < target),
                key=lambda team: team.squad_size,
            )
            for team in needy:
                if not leftover:
                    break
                if team.budget_remaining < price:
                    continue
                player = leftover.pop(0)
                team.add_player(player, price)
                filled += 1
                changed = True
                logger.debug("Fill: %s -> %s for %d", player.name, team.name, price)

        short = [team for team in teams if team.squad_size < target]
        if short:
            logger.warning(
                "Fill could not complete %d squad(s): %s (%d players left unsold)",
                len(short),
                ", ".join(f"{team.name}={team.squad_size}" for team in short),
                len(leftover),
            )
        logger.info("Supplemental fill assigned %d players at %d", filled, price)
        return leftover

    @staticmethod
    def _team_result(team: TeamState) -> TeamResult:
        return TeamResult(
            team_id=team.team_id,
            name=team.name,
            personality=team.strategy,
            total_spent=team.total_spent,
            remaining_budget=team.budget_remaining,
            squad=list(team.squad),
            tier_counts=dict(team.tier_counts),
            role_counts=team.role_counts(),
        )


def run_simulation(
    seed: int = DEFAULT_SEED, config: Optional[SimulationConfig] = None
) -> SimulationResult:
    """Convenience wrapper: one run with the given (or default) configuration."""
    return SimulationEngine(config).run(seed)
