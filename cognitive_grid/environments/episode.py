"""
Episode construction.

new_episode() is the single entry point for building a (Grid, Agent) pair.
All validation happens here, before any tick runs.
"""
from cognitive_grid.agents import Agent, get_agent_class
from cognitive_grid.configs.default_config import (
    AgentConfig,
    CognitiveConfig,
    ConfigurationError,
    GridConfig,
)
from cognitive_grid.environments.grid import Grid
from cognitive_grid.utils.seed import spawn_generators


def new_episode(
    grid_config: GridConfig,
    agent_type: str,
    cognitive_config: CognitiveConfig,
    seed: int | None,
    agent_config: AgentConfig | None = None,
) -> tuple[Grid, Agent]:
    """
    Build the grid and agent for one episode.

    One SeedSequence(seed) spawns two independent generators: the first
    scatters obstacles, the second drives the agent's noise and wandering.
    Identical arguments therefore reproduce an identical episode.

    Args:
        grid_config: Map layout
        agent_type: Registry key ('fsm', 'astar', 'behavior_tree')
        cognitive_config: Noise, memory, decay and planning budget
        seed: Episode seed; None draws fresh entropy
        agent_config: Energy economy (defaults to AgentConfig())

    Raises:
        ConfigurationError: Unknown agent type or invalid configuration
    """
    if not isinstance(grid_config, GridConfig):
        raise ConfigurationError(f"grid_config must be a GridConfig, got {type(grid_config).__name__}")
    if not isinstance(cognitive_config, CognitiveConfig):
        raise ConfigurationError(
            f"cognitive_config must be a CognitiveConfig, got {type(cognitive_config).__name__}"
        )
    try:
        agent_cls = get_agent_class(agent_type)
    except ValueError as e:
        raise ConfigurationError(str(e)) from None

    grid_rng, agent_rng = spawn_generators(seed, 2)
    grid = Grid.from_config(grid_config, grid_rng)
    agent = agent_cls(
        grid.start,
        cognitive_config=cognitive_config,
        agent_config=agent_config or AgentConfig(),
        rng=agent_rng,
    )
    return grid, agent
