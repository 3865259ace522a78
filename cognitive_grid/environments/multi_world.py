"""
Lock-step comparison of several agent architectures on identical grids.

Each agent gets its own World built from the same grid config and seed, so
the maps are identical but nothing mutable is shared between agents.
"""
from dataclasses import dataclass

from cognitive_grid.configs.default_config import AgentConfig, CognitiveConfig, GridConfig
from cognitive_grid.environments.episode import new_episode
from cognitive_grid.environments.grid import Grid
from cognitive_grid.environments.world import TickOutcome, World
from cognitive_grid.utils.logging_config import get_logger

logger = get_logger("environments.multi_world")

DEFAULT_AGENT_TYPES = ('fsm', 'astar', 'behavior_tree')


@dataclass(frozen=True)
class ComparisonResult:
    """Final state of one agent in a comparison run."""
    agent_type: str
    success: bool
    steps: int
    finish_step: int | None
    energy: float
    termination_reason: str | None


class ComparisonRun:
    """
    Independent Worlds ticked together, one per agent type.

    Args:
        grid_config: Shared map layout
        cognitive_config: Default cognitive constraints for every agent
        seed: Shared episode seed (same seed -> same obstacles for every agent)
        agent_types: Architectures to compare, in display order
        max_steps: Step cap applied to each World
        agent_config: Shared energy economy
        cognitive_overrides: Per-agent-type CognitiveConfig replacing the default
    """

    def __init__(
        self,
        grid_config: GridConfig,
        cognitive_config: CognitiveConfig,
        seed: int | None,
        agent_types=DEFAULT_AGENT_TYPES,
        max_steps: int = 500,
        agent_config: AgentConfig | None = None,
        cognitive_overrides: dict[str, CognitiveConfig] | None = None,
    ):
        cognitive_overrides = cognitive_overrides or {}
        self.agent_types: tuple[str, ...] = tuple(agent_types)
        self.max_steps = max_steps
        self.step: int = 0
        self.finish_steps: dict[str, int | None] = {t: None for t in self.agent_types}

        self.worlds: dict[str, World] = {}
        for agent_type in self.agent_types:
            grid, agent = new_episode(
                grid_config,
                agent_type,
                cognitive_overrides.get(agent_type, cognitive_config),
                seed,
                agent_config,
            )
            self.worlds[agent_type] = World(grid, agent, max_steps)

    @property
    def grid(self) -> Grid:
        """The shared map layout (each World holds its own identical copy)."""
        return self.worlds[self.agent_types[0]].grid

    def done_count(self) -> int:
        return sum(1 for w in self.worlds.values() if w.success)

    def all_done(self) -> bool:
        return all(w.done for w in self.worlds.values())

    def tick(self) -> dict[str, TickOutcome]:
        """Advance every unfinished World by one tick."""
        outcomes = {}
        for agent_type, world in self.worlds.items():
            if world.done:
                outcomes[agent_type] = world.outcome
                continue
            outcome = world.tick()
            outcomes[agent_type] = outcome
            if outcome is TickOutcome.REACHED_GOAL and self.finish_steps[agent_type] is None:
                self.finish_steps[agent_type] = world.ticks
                logger.info("%s reached goal at step %d", agent_type, world.ticks)
        self.step += 1
        return outcomes

    def run(self) -> list[ComparisonResult]:
        while not self.all_done():
            self.tick()
        return self.results()

    def results(self) -> list[ComparisonResult]:
        return [
            ComparisonResult(
                agent_type=agent_type,
                success=world.success,
                steps=world.ticks,
                finish_step=self.finish_steps[agent_type],
                energy=world.agent.energy,
                termination_reason=world.termination_reason,
            )
            for agent_type, world in self.worlds.items()
        ]

    def render(self) -> str:
        """Draw every agent on the shared map using each agent's glyph."""
        agents = {}
        for world in self.worlds.values():
            agents[world.agent.glyph] = world.agent.position
        return self.grid.render(agents)
