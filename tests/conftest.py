"""
Pytest configuration and shared fixtures.

Sets a consistent random seed before each test for reproducibility and
resets the cached TOML config so tests never see each other's files.
"""
import pytest

from cognitive_grid.action_space import Position
from cognitive_grid.configs.default_config import CognitiveConfig, GridConfig
from cognitive_grid.utils.seed import set_seed


@pytest.fixture(autouse=True)
def seed_tests():
    """Set a consistent seed before each test for reproducibility."""
    set_seed(42)
    yield


@pytest.fixture(autouse=True)
def reset_config():
    """Reset config cache before and after each test."""
    from cognitive_grid import config
    config._config = None
    config._config_path = None
    yield
    config._config = None
    config._config_path = None


@pytest.fixture
def open_5x5() -> GridConfig:
    """Obstacle-free 5x5 grid, start (0, 0), goal (4, 4)."""
    return GridConfig(width=5, height=5, start=(0, 0), goal=(4, 4))


@pytest.fixture
def no_cognition() -> CognitiveConfig:
    """noise=0, memory=0, decay=1.0, unlimited planning."""
    return CognitiveConfig(noise=0.0, planning_limit=None, memory_capacity=0, decay_rate=1.0)


@pytest.fixture
def goal_5x5() -> Position:
    return Position(4, 4)
