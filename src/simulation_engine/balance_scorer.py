"""Fairness scoring of a finished auction.

The overall score is a weighted sum of four 0-100 sub-scores:

* **Player count variance** (25%) - do squads reach the target size?
* **Top-tier distribution** (30%) - are the two most expensive tiers spread
  evenly across teams?
* **Spend variance** (25%) - did teams spend roughly the same?
* **Role balance** (20%) - does every team cover all four playing roles?
"""

import logging
import math
from typing import Dict, List, Sequence

import numpy as np

from src.auction_core.models import ALL_ROLES, Tier
from src.simulation_engine.config import (
    BALANCE_WEIGHTS,
    MAX_SPEND_CV,
    RECOMMENDATION_THRESHOLDS,
    ROLE_POINTS_MULTIPLE,
    ROLE_POINTS_SINGLE,
)
from src.simulation_engine.models import BalanceMetrics, BalanceReport, PoolTier, TeamResult

logger = logging.getLogger(__name__)

EXCELLENT_BALANCE = "Excellent balance! Configuration produces fair teams."


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class BalanceScorer:
    """Score team compositions produced by an auction.

    Stateless apart from the target squad size: teams and tiers are passed
    in via :meth:`score`.
    """

    def __init__(self, target_squad_size: int):
        if target_squad_size <= 0:
            raise ValueError(
                f"target_squad_size must be positive, got {target_squad_size}"
            )
        self.target_squad_size = target_squad_size

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def score(self, teams: Sequence[TeamResult], tiers: Sequence[PoolTier]) -> BalanceReport:
        """Build the balance report for ``teams``.

        Args:
            teams: Final team compositions.
            tiers: The pool tiers the auction ran with. Tier ``count`` is
                the number of players that should have been spread; when a
                tier has no count the acquired total is used instead.

        Returns:
            :class:`BalanceReport` with the overall score, sub-scores, literal
            top-tier distributions, spend per team and recommendations.
        """
        top_tiers = sorted(tiers, key=lambda t: t.tier.base_price, reverse=True)[:2]
        distributions = {
            pool_tier.name: [team.tier_counts.get(pool_tier.name, 0) for team in teams]
            for pool_tier in top_tiers
        }
        spending = [team.total_spent for team in teams]

        if not teams:
            metrics = BalanceMetrics(100, 100, 100, 100)
        else:
            metrics = BalanceMetrics(
                player_count_variance=self.score_player_counts(teams),
                top_tier_distribution=self.score_top_tiers(distributions, top_tiers),
                spend_variance=self.score_spend(spending),
                role_balance=self.score_roles(teams),
            )

        overall = _round_half_up(
            sum(getattr(metrics, name) * weight for name, weight in BALANCE_WEIGHTS.items())
        )

        recommendations = self._recommendations(
            metrics, teams, tiers, top_tiers, distributions, spending
        )

        logger.debug(
            "Balance: overall=%d count=%d top=%d spend=%d role=%d",
            overall,
            metrics.player_count_variance,
            metrics.top_tier_distribution,
            metrics.spend_variance,
            metrics.role_balance,
        )

        return BalanceReport(
            overall_score=overall,
            metrics=metrics,
            tier_distributions=distributions,
            spending=spending,
            recommendations=recommendations,
        )

    def score_player_counts(self, teams: Sequence[TeamResult]) -> int:
        """100 minus total deviation from the target size, as a share of the
        worst case (every team empty)."""
        counts = np.array([team.squad_size for team in teams], dtype=float)
        total_deviation = np.abs(counts - self.target_squad_size).sum()
        worst = self.target_squad_size * len(teams)
        return _round_half_up(max(0.0, 100 - total_deviation / worst * 100))

    def score_top_tiers(
        self, distributions: Dict[str, List[int]], top_tiers: Sequence[PoolTier]
    ) -> int:
        """Average evenness of the top tiers' spread across teams."""
        if not top_tiers:
            return 100
        scores = []
        for pool_tier in top_tiers:
            counts = distributions[pool_tier.name]
            total = pool_tier.count if pool_tier.count is not None else sum(counts)
            scores.append(self.score_distribution(counts, total))
        return _round_half_up(float(np.mean(scores)))

    @staticmethod
    def score_distribution(counts: Sequence[int], total: int) -> float:
        """Evenness of one tier.

        Formula::

            ideal = total / n_teams
            score = max(0, 100 - sum(|count - ideal|) / total * 100)

        ``total`` is the worst-case deviation (every player on one team).
        """
        if total <= 0 or not counts:
            return 100.0
        values = np.array(counts, dtype=float)
        ideal = total / len(values)
        deviation = np.abs(values - ideal).sum()
        return max(0.0, 100 - deviation / total * 100)

    @staticmethod
    def score_spend(spending: Sequence[int]) -> int:
        """Coefficient of variation mapped so 0 -> 100 and >= 0.5 -> 0."""
        spends = np.array(spending, dtype=float)
        average = spends.mean()
        if average == 0:
            return 100
        cv = spends.std() / average
        return _round_half_up(max(0.0, 100 - cv / MAX_SPEND_CV * 100))

    @staticmethod
    def score_roles(teams: Sequence[TeamResult]) -> int:
        """Per team: 25 per role with 2+ players, 20 for exactly one, 0 when
        missing; averaged over teams."""
        team_scores = []
        for team in teams:
            points = 0
            for role in ALL_ROLES:
                count = team.role_counts.get(role, 0)
                if count >= 2:
                    points += ROLE_POINTS_MULTIPLE
                elif count == 1:
                    points += ROLE_POINTS_SINGLE
            team_scores.append(points)
        return _round_half_up(float(np.mean(team_scores)))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _recommendations(
        self,
        metrics: BalanceMetrics,
        teams: Sequence[TeamResult],
        tiers: Sequence[PoolTier],
        top_tiers: Sequence[PoolTier],
        distributions: Dict[str, List[int]],
        spending: Sequence[int],
    ) -> List[str]:
        recs: List[str] = []

        if metrics.player_count_variance < RECOMMENDATION_THRESHOLDS["player_count_variance"]:
            counts = "-".join(str(team.squad_size) for team in teams)
            recs.append(f"Uneven squad sizes: {counts}. Consider adjusting pool size.")

        if metrics.top_tier_distribution < RECOMMENDATION_THRESHOLDS["top_tier_distribution"]:
            spread = ", ".join(
                f"{pool_tier.tier.display_name}: "
                + "-".join(str(c) for c in distributions[pool_tier.name])
                for pool_tier in top_tiers
            )
            recs.append(
                f"Top-tier distribution is skewed ({spread}). "
                "Consider tighter max-per-team caps."
            )

        if metrics.spend_variance < RECOMMENDATION_THRESHOLDS["spend_variance"]:
            recs.append(
                f"Spending gap: highest {max(spending)} vs lowest {min(spending)}. "
                "Consider adjusting base prices to reduce variance."
            )

        if metrics.role_balance < RECOMMENDATION_THRESHOLDS["role_balance"]:
            for team in teams:
                missing = [
                    role.value for role in ALL_ROLES if team.role_counts.get(role, 0) == 0
                ]
                if missing:
                    recs.append(f"{team.name} is missing: {', '.join(missing)}.")

        recs.extend(self._tier_minimum_shortfalls(teams, [t.tier for t in tiers]))

        if not recs:
            recs.append(EXCELLENT_BALANCE)
        return recs

    @staticmethod
    def _tier_minimum_shortfalls(
        teams: Sequence[TeamResult], tiers: Sequence[Tier]
    ) -> List[str]:
        recs = []
        for tier in tiers:
            if tier.min_per_team <= 0:
                continue
            for team in teams:
                have = team.tier_counts.get(tier.name, 0)
                if have < tier.min_per_team:
                    recs.append(
                        f"{team.name} has {have} {tier.display_name} player(s), "
                        f"below the minimum of {tier.min_per_team}."
                    )
        return recs
