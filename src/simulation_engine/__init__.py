from src.simulation_engine.balance_scorer import BalanceScorer
from src.simulation_engine.config import SimulationConfig
from src.simulation_engine.engine import SimulationEngine, run_simulation
from src.simulation_engine.models import (
    AuctionLogEntry,
    BalanceMetrics,
    BalanceReport,
    Personality,
    PoolTier,
    SimulationResult,
    TeamResult,
)
from src.simulation_engine.player_pool import PlayerPoolBuilder

__all__ = [
    "AuctionLogEntry",
    "BalanceMetrics",
    "BalanceReport",
    "BalanceScorer",
    "Personality",
    "PlayerPoolBuilder",
    "PoolTier",
    "SimulationConfig",
    "SimulationEngine",
    "SimulationResult",
    "TeamResult",
    "run_simulation",
]
