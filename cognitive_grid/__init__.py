"""
Cognitive Grid: a testbed for comparing agent decision architectures.

Three controllers navigate the same kind of 2D grid toward a goal cell under
identical cognitive constraints (decision noise, bounded spatial memory and
decaying exploration noise), so their behavior can be compared fairly.

Key Modules
-----------
environments
    Grid (static map of free/obstacle cells), World tick loop, episode
    construction and lock-step comparison runs.
cognition
    Decision noise, spatial memory and exploration decay, composed per agent.
agents
    Finite State Machine, bounded A* planner and Behavior Tree controllers.
algorithms
    Resource-bounded A* search with partial-path fallback.
evaluation
    Batch experiments, aggregate statistics and flat CSV export.
configs
    Typed configuration built from the TOML config file.
utils
    Logging and seeding helpers.

Quick Start
-----------
Single episode::

    from cognitive_grid import GridConfig, CognitiveConfig, World, new_episode

    grid, agent = new_episode(GridConfig(10, 10), 'astar', CognitiveConfig(), seed=42)
    world = World(grid, agent, max_steps=200)
    outcome = world.run()

Batch experiments::

    python main.py experiments --episodes 50 --density 0.2
"""
from cognitive_grid.configs.default_config import (
    AgentConfig,
    CognitiveConfig,
    ConfigurationError,
    GridConfig,
)
from cognitive_grid.environments import (
    ComparisonRun,
    Grid,
    Position,
    Telemetry,
    TickOutcome,
    World,
    new_episode,
)

__all__ = [
    'AgentConfig',
    'CognitiveConfig',
    'ConfigurationError',
    'GridConfig',
    'ComparisonRun',
    'Grid',
    'Position',
    'Telemetry',
    'TickOutcome',
    'World',
    'new_episode',
]
