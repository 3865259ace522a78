"""
Typed configuration and simulation config builder.

Every episode is described by three frozen dataclasses:

    GridConfig       # map size, obstacle density, start/goal cells
    AgentConfig      # energy economy shared by all agent architectures
    CognitiveConfig  # noise, memory, decay and planning budget

All validation happens in __post_init__, so an invalid configuration fails
with ConfigurationError before any world is built or any tick runs.

get_simulation_config() bridges the TOML file to these dataclasses.
"""
from dataclasses import dataclass, field
from enum import Enum
from numbers import Integral


class ConfigurationError(ValueError):
    """Raised when an episode is configured with invalid parameters."""


class ReplanPolicy(Enum):
    """When a noise-overridden move invalidates the rest of an A* plan."""

    DEVIATION = 'deviation'   # only if the executed move differs from the planned one
    ANY_NOISE = 'any_noise'   # whenever noise fires, even if it re-picked the plan

    @classmethod
    def parse(cls, value: 'ReplanPolicy | str') -> 'ReplanPolicy':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ', '.join(p.value for p in cls)
            raise ConfigurationError(
                f"Unknown replan policy: '{value}'. Must be one of: {valid}"
            ) from None


def _require_int(name: str, value) -> None:
    # bool is an Integral subclass; 10.0 from TOML is not
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def _as_cell(value, name: str) -> tuple[int, int]:
    try:
        x, y = value
        return int(x), int(y)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an (x, y) pair, got {value!r}") from None


@dataclass(frozen=True)
class GridConfig:
    """
    Map layout for one episode.

    Attributes:
        width, height: Grid dimensions in cells (both must be positive)
        obstacle_density: Probability that a cell other than start/goal is blocked
        start: Agent spawn cell
        goal: Goal cell; None means the bottom-right corner
        obstacles: Explicit obstacle cells, placed in addition to random ones
    """
    width: int
    height: int
    obstacle_density: float = 0.0
    start: tuple[int, int] = (0, 0)
    goal: tuple[int, int] | None = None
    obstacles: tuple[tuple[int, int], ...] = ()

    def __post_init__(self) -> None:
        _require_int('width', self.width)
        _require_int('height', self.height)
        if self.width < 1 or self.height < 1:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 <= self.obstacle_density <= 1.0:
            raise ConfigurationError(
                f"obstacle_density must be in [0, 1], got {self.obstacle_density}"
            )

        start = _as_cell(self.start, 'start')
        goal = _as_cell(self.goal, 'goal') if self.goal is not None else (self.width - 1, self.height - 1)
        obstacles = tuple(_as_cell(c, 'obstacle') for c in self.obstacles)
        # Normalize so equality and hashing work on plain int tuples
        object.__setattr__(self, 'start', start)
        object.__setattr__(self, 'goal', goal)
        object.__setattr__(self, 'obstacles', obstacles)

        for name, (x, y) in (('start', start), ('goal', goal)):
            if not (0 <= x < self.width and 0 <= y < self.height):
                raise ConfigurationError(
                    f"{name} {(x, y)} is outside the {self.width}x{self.height} grid"
                )
        if goal in obstacles:
            raise ConfigurationError(f"goal {goal} must be passable but is listed as an obstacle")
        if start in obstacles:
            raise ConfigurationError(f"start {start} must be passable but is listed as an obstacle")


@dataclass(frozen=True)
class AgentConfig:
    """
    Energy economy. Energy is clamped to [0, max_energy].

    move_cost is paid for every applied move by every agent type. The rest
    parameters only matter to the FSM, which stops to regenerate.
    """
    initial_energy: float = 100.0
    max_energy: float = 100.0
    move_cost: float = 1.0
    rest_regen: float = 10.0
    rest_threshold: float = 10.0
    wake_threshold: float = 100.0

    def __post_init__(self) -> None:
        if self.max_energy <= 0:
            raise ConfigurationError(f"max_energy must be > 0, got {self.max_energy}")
        if not 0.0 <= self.initial_energy <= self.max_energy:
            raise ConfigurationError(
                f"initial_energy must be in [0, {self.max_energy}], got {self.initial_energy}"
            )
        for name in ('move_cost', 'rest_regen', 'rest_threshold'):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.wake_threshold > self.max_energy:
            raise ConfigurationError(
                f"wake_threshold ({self.wake_threshold}) exceeds max_energy ({self.max_energy})"
            )
        if self.rest_threshold > self.wake_threshold:
            raise ConfigurationError(
                f"rest_threshold ({self.rest_threshold}) exceeds wake_threshold ({self.wake_threshold})"
            )


@dataclass(frozen=True)
class CognitiveConfig:
    """
    Cognitive constraints, applied identically to every agent architecture.

    Attributes:
        noise: Initial probability of replacing the chosen move with a random legal one
        planning_limit: A* node-expansion budget; None searches exhaustively
        memory_capacity: Ring-buffer size for visited cells; 0 disables memory
        decay_rate: Per-tick multiplier applied to the noise probability
        memory_repulsion: Score penalty per remembered visit of a candidate cell
        replan_policy: Which noise events force an A* replan
    """
    noise: float = 0.0
    planning_limit: int | None = None
    memory_capacity: int = 0
    decay_rate: float = 1.0
    memory_repulsion: float = 1.0
    replan_policy: ReplanPolicy = ReplanPolicy.DEVIATION

    def __post_init__(self) -> None:
        if not 0.0 <= self.noise <= 1.0:
            raise ConfigurationError(f"noise must be in [0, 1], got {self.noise}")
        if not 0.0 < self.decay_rate <= 1.0:
            raise ConfigurationError(f"decay_rate must be in (0, 1], got {self.decay_rate}")
        _require_int('memory_capacity', self.memory_capacity)
        if self.memory_capacity < 0:
            raise ConfigurationError(f"memory_capacity must be >= 0, got {self.memory_capacity}")
        if self.planning_limit is not None:
            _require_int('planning_limit', self.planning_limit)
            if self.planning_limit < 1:
                raise ConfigurationError(
                    f"planning_limit must be a positive integer or None, got {self.planning_limit}"
                )
        if self.memory_repulsion < 0:
            raise ConfigurationError(f"memory_repulsion must be >= 0, got {self.memory_repulsion}")
        object.__setattr__(self, 'replan_policy', ReplanPolicy.parse(self.replan_policy))


@dataclass(frozen=True)
class SimulationConfig:
    """Everything needed to build and run one episode, minus the agent type."""
    grid: GridConfig
    agent: AgentConfig = field(default_factory=AgentConfig)
    cognitive: CognitiveConfig = field(default_factory=CognitiveConfig)
    max_steps: int = 500
    seed: int | None = None

    def __post_init__(self) -> None:
        _require_int('max_steps', self.max_steps)
        if self.max_steps < 1:
            raise ConfigurationError(f"max_steps must be >= 1, got {self.max_steps}")


# =============================================================================
# TOML BRIDGE
# =============================================================================

def grid_config_from_dict(world: dict) -> GridConfig:
    """Build GridConfig from a [world] section as returned by get_world_config()."""
    return GridConfig(
        width=world['width'],
        height=world['height'],
        obstacle_density=world['obstacle_density'],
        start=tuple(world['start']),
        goal=tuple(world['goal']) if world.get('goal') is not None else None,
        obstacles=tuple(tuple(c) for c in world['obstacles']),
    )


def agent_config_from_dict(agent: dict) -> AgentConfig:
    """Build AgentConfig from an [agent] section; missing keys use field defaults."""
    known = AgentConfig.__dataclass_fields__
    return AgentConfig(**{k: float(v) for k, v in agent.items() if k in known})


def cognitive_config_from_dict(cognition: dict) -> CognitiveConfig:
    """
    Build CognitiveConfig from a [cognition] section.

    TOML has no null, so planning_limit = 0 means unlimited.
    """
    return CognitiveConfig(
        noise=cognition['noise'],
        planning_limit=cognition['planning_limit'] or None,
        memory_capacity=cognition['memory_capacity'],
        decay_rate=cognition['decay_rate'],
        memory_repulsion=cognition['memory_repulsion'],
        replan_policy=cognition['replan_policy'],
    )


def get_simulation_config(config_path: str | None = None) -> SimulationConfig:
    """
    Build a typed SimulationConfig from the TOML config file.

    Args:
        config_path: Optional path to specific config file.
                     If None, uses auto-detection (config.toml > config.default.toml)

    Raises:
        KeyError: If [world] lacks width or height.
        ConfigurationError: If any value is out of range or of the wrong type.
    """
    from cognitive_grid import config as toml_config

    if config_path:
        toml_config.load_config(config_path)

    world = toml_config.get_world_config()
    return SimulationConfig(
        grid=grid_config_from_dict(world),
        agent=agent_config_from_dict(toml_config.get_agent_config()),
        cognitive=cognitive_config_from_dict(toml_config.get_cognition_config()),
        max_steps=world['max_steps'],
        seed=world['seed'],
    )
