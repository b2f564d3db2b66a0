"""Player pool construction - builds the auction pool from the source roster."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from src.auction_core.models import Player, PlayingRole
from src.auction_core.rng import SeededRandom
from src.simulation_engine.config import PLAYER_POOL_FILE
from src.simulation_engine.models import PoolTier

logger = logging.getLogger(__name__)


class PlayerPoolBuilder:
    """Loads source cricketers and draws the tiered pool for one run."""

    REQUIRED_FIELDS = {"name", "playing_role", "tier"}

    def __init__(self, pool_file: Optional[Path] = None):
        self.pool_file = pool_file or PLAYER_POOL_FILE
        self._source: Optional[Dict[str, List[Dict]]] = None

    def build_pool(self, tiers: Sequence[PoolTier], rng: SeededRandom) -> List[Player]:
        """
        Draw the auction pool, tier by tier, in configuration order.

        Tiers with a ``count`` are sampled with ``rng``; tiers without one
        take every source player in roster order.

        Raises:
            ValueError: If a tier asks for more players than the source
                roster holds (raised by ``rng.sample``).
        """
        source = self.load_source_players()
        pool: List[Player] = []

        for pool_tier in tiers:
            candidates = source.get(pool_tier.source_tier, [])
            if pool_tier.count is None:
                selected = list(candidates)
            else:
                selected = rng.sample(candidates, pool_tier.count)

            pool.extend(self._to_player(entry, pool_tier) for entry in selected)
            logger.debug(
                "Tier %s: %d of %d %s players",
                pool_tier.name, len(selected), len(candidates), pool_tier.source_tier,
            )

        logger.info("Built player pool: %d players across %d tiers", len(pool), len(tiers))
        return pool

    def load_source_players(self) -> Dict[str, List[Dict]]:
        """Source roster grouped by source tier, loaded once per builder."""
        if self._source is None:
            self._source = self._read_pool_file()
        return self._source

    def _read_pool_file(self) -> Dict[str, List[Dict]]:
        if not self.pool_file.exists():
            raise FileNotFoundError(f"Player pool file not found: {self.pool_file}")

        with open(self.pool_file, "r", encoding="utf-8") as f:
            data = json.load(f)

        try:
            entries = data["players"]
        except KeyError as e:
            raise ValueError(
                f"Malformed player pool file {self.pool_file}: missing key {e}"
            ) from e

        grouped: Dict[str, List[Dict]] = {}
        for entry in entries:
            missing = self.REQUIRED_FIELDS - entry.keys()
            if missing:
                raise ValueError(
                    f"Player entry {entry.get('name', entry)!r} missing fields: {missing}"
                )
            grouped.setdefault(entry["tier"], []).append(entry)

        logger.info("Loaded %d source players from %s", len(entries), self.pool_file.name)
        return grouped

    @staticmethod
    def _to_player(entry: Dict, pool_tier: PoolTier) -> Player:
        return Player(
            name=entry["name"],
            playing_role=PlayingRole(entry["playing_role"]),
            tier=pool_tier.name,
            base_price=pool_tier.tier.base_price,
            batting_style=entry.get("batting_style"),
            bowling_style=entry.get("bowling_style"),
        )
