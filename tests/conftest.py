"""Shared fixtures for the auction test suite."""

import pytest

from src.simulation_engine.config import SimulationConfig
from src.simulation_engine.engine import SimulationEngine
from src.simulation_engine.player_pool import PlayerPoolBuilder


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def sim_config():
    return SimulationConfig()


# ------------------------------------------------------------------
# Simulation fixtures – a full run, reused across a session
# ------------------------------------------------------------------

@pytest.fixture(scope="session")
def pool_builder():
    """Builder reading the bundled cricketer roster."""
    return PlayerPoolBuilder()


@pytest.fixture(scope="session")
def reference_result(pool_builder):
    """The default 4-team dry run at seed 42."""
    return SimulationEngine(SimulationConfig(), pool_builder=pool_builder).run(42)
