"""
Batch experiment runner.

Runs N seeded episodes of one agent type and collects flat logs:

    config = ExperimentConfig.from_config(agent_type='astar', episodes=20)
    result = run_batch(config)
    print(result.summary.success_rate)

run_batch_and_save() additionally writes
<output_dir>/<timestamp>_<agent_type>_results.csv.
"""
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import numpy as np

from cognitive_grid.configs.default_config import (
    AgentConfig,
    CognitiveConfig,
    ConfigurationError,
    GridConfig,
    get_simulation_config,
)
from cognitive_grid.environments import World, new_episode
from cognitive_grid.evaluation.aggregation import BatchSummary, summarize
from cognitive_grid.evaluation.export import write_episode_logs_csv, write_step_logs_csv
from cognitive_grid.evaluation.logs import EpisodeLog, StepLog
from cognitive_grid.utils.logging_config import get_logger

logger = get_logger("evaluation.runner")


@dataclass
class ExperimentConfig:
    """
    Configuration for a batch of episodes.

    Use ExperimentConfig.from_config() to load defaults from config.toml,
    with CLI arguments as optional overrides.
    """
    agent_type: str = 'astar'
    episodes: int = 50
    grid: GridConfig = field(default_factory=lambda: GridConfig(10, 5))
    cognitive: CognitiveConfig = field(default_factory=CognitiveConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)
    max_steps: int = 500
    base_seed: Optional[int] = 42
    output_dir: str = 'experiments/data'
    record_steps: bool = False  # also collect one StepLog per tick

    def __post_init__(self) -> None:
        if self.episodes < 1:
            raise ConfigurationError(f"episodes must be >= 1, got {self.episodes}")
        if self.max_steps < 1:
            raise ConfigurationError(f"max_steps must be >= 1, got {self.max_steps}")

    @classmethod
    def from_config(cls, agent_type: str = 'astar', config_path: str | None = None,
                    **overrides) -> 'ExperimentConfig':
        """
        Create ExperimentConfig from config.toml with optional overrides.

        CLI args take precedence over TOML values; None overrides are ignored.

        Args:
            agent_type: Registry key of the agent to run
            config_path: Optional explicit TOML file
            **overrides: Any ExperimentConfig fields to override

        Returns:
            ExperimentConfig instance
        """
        from cognitive_grid.config import get_experiments_config

        # Loads (and caches) the file that get_experiments_config() reads
        sim = get_simulation_config(config_path)
        exp_cfg = get_experiments_config()

        config_values = {
            'agent_type': agent_type,
            'episodes': exp_cfg['episodes'],
            'grid': sim.grid,
            'cognitive': sim.cognitive,
            'agent': sim.agent,
            # [experiments].max_steps wins over [world].max_steps
            'max_steps': exp_cfg.get('max_steps', sim.max_steps),
            'base_seed': exp_cfg['base_seed'],
            'output_dir': exp_cfg['output_dir'],
        }

        for key, value in overrides.items():
            if value is not None:
                config_values[key] = value

        return cls(**config_values)


@dataclass
class BatchResult:
    """Logs from one batch, plus the seeds that produced them."""
    config: ExperimentConfig
    seeds: list[int]
    episodes: list[EpisodeLog]
    steps: list[StepLog] = field(default_factory=list)

    @property
    def summary(self) -> BatchSummary:
        return summarize(self.episodes)


def generate_seeds(n_episodes: int, base_seed: Optional[int] = None) -> list[int]:
    """
    Generate reproducible list of per-episode seeds.

    If base_seed is provided, generates deterministic seeds for reproducibility.
    Otherwise uses random seeds (but still records them).
    """
    if base_seed is not None:
        rng = np.random.default_rng(base_seed)
        return [int(rng.integers(0, 2**31)) for _ in range(n_episodes)]
    else:
        return [int(np.random.randint(0, 2**31)) for _ in range(n_episodes)]


def run_episode(
    config: ExperimentConfig,
    episode: int,
    seed: int,
) -> tuple[EpisodeLog, list[StepLog]]:
    """
    Run one seeded episode to completion.

    Returns:
        (episode log, step logs). Step logs are empty unless
        config.record_steps is set.
    """
    grid, agent = new_episode(config.grid, config.agent_type, config.cognitive, seed, config.agent)
    world = World(grid, agent, config.max_steps, record=config.record_steps)
    outcome = world.run()

    log = EpisodeLog(
        episode=episode,
        agent_type=config.agent_type,
        seed=seed,
        steps=world.ticks,
        moves=agent.state.moves,
        success=world.success,
        outcome=outcome.value,
        termination_reason=world.termination_reason,
        energy_remaining=agent.energy,
        noise_overrides=agent.cognition.noise_events,
        replans=getattr(agent, 'replans', 0),
    )
    step_logs = [
        StepLog(
            episode=episode,
            step=t.tick,
            x=t.position.x,
            y=t.position.y,
            energy=t.energy,
            noise_overridden=t.noise_overridden,
            plan_length=t.plan_length,
        )
        for t in world.history
    ]
    return log, step_logs


def run_batch(config: ExperimentConfig, seeds: Optional[list[int]] = None) -> BatchResult:
    """
    Run config.episodes episodes sequentially.

    Args:
        config: Batch configuration
        seeds: Explicit per-episode seeds (overrides episodes and base_seed)
    """
    if seeds is None:
        seeds = generate_seeds(config.episodes, config.base_seed)

    logger.info("Running %d %s episodes on %dx%d grid (density=%.2f)",
                len(seeds), config.agent_type, config.grid.width, config.grid.height,
                config.grid.obstacle_density)

    episodes, steps = [], []
    for i, seed in enumerate(seeds):
        log, step_logs = run_episode(config, i, seed)
        episodes.append(log)
        steps.extend(step_logs)

    result = BatchResult(config=config, seeds=list(seeds), episodes=episodes, steps=steps)
    summary = result.summary
    logger.info("%s: success %.1f%%, steps %.1f ± %.1f",
                config.agent_type, summary.success_rate * 100, summary.steps_mean, summary.steps_std)
    return result


def run_batch_and_save(
    config: ExperimentConfig,
    output_dir: str | Path | None = None,
) -> tuple[BatchResult, Path]:
    """
    Run a batch and write <timestamp>_<agent_type>_results.csv.

    With config.record_steps, a sibling <timestamp>_<agent_type>_steps.csv
    holds the per-tick logs.

    Returns:
        (batch result, path of the episode CSV)
    """
    result = run_batch(config)

    out = Path(output_dir if output_dir is not None else config.output_dir)
    timestamp = time.strftime('%Y%m%d_%H%M%S')
    path = write_episode_logs_csv(out / f"{timestamp}_{config.agent_type}_results.csv", result.episodes)
    logger.info("Saved episode logs to %s", path)

    if config.record_steps:
        steps_path = write_step_logs_csv(out / f"{timestamp}_{config.agent_type}_steps.csv", result.steps)
        logger.info("Saved step logs to %s", steps_path)

    return result, path
