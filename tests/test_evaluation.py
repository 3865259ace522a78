"""
Tests for batch experiments, aggregation and CSV export.

Batches use small open grids so that noise-free outcomes are known exactly.
"""
import csv

import numpy as np
import pytest

from cognitive_grid.configs.default_config import CognitiveConfig, ConfigurationError, GridConfig
from cognitive_grid.evaluation import (
    AgentComparison,
    EpisodeLog,
    ExperimentConfig,
    compute_confidence_interval,
    generate_seeds,
    read_episode_logs_csv,
    run_batch,
    run_batch_and_save,
    run_episode,
    summarize,
    write_episode_logs_csv,
)


def make_log(episode=0, agent_type='astar', steps=10, success=True, **kwargs) -> EpisodeLog:
    """Create an EpisodeLog for aggregation tests."""
    values = dict(
        episode=episode,
        agent_type=agent_type,
        seed=episode,
        steps=steps,
        moves=steps,
        success=success,
        outcome='reached_goal' if success else 'step_cap_exceeded',
        termination_reason='goal' if success else 'step_cap',
        energy_remaining=100.0 - steps,
        noise_overrides=0,
        replans=1,
    )
    values.update(kwargs)
    return EpisodeLog(**values)


@pytest.fixture
def open_config() -> ExperimentConfig:
    return ExperimentConfig(
        agent_type='astar',
        episodes=3,
        grid=GridConfig(5, 5),
        cognitive=CognitiveConfig(),
        max_steps=50,
        base_seed=42,
    )


# =============================================================================
# SEEDS AND CONFIG
# =============================================================================

class TestGenerateSeeds:
    """Tests for per-episode seed derivation."""

    def test_deterministic_with_base_seed(self):
        assert generate_seeds(5, base_seed=42) == generate_seeds(5, base_seed=42)

    def test_length_and_range(self):
        seeds = generate_seeds(20, base_seed=1)
        assert len(seeds) == 20
        assert all(0 <= s < 2**31 for s in seeds)

    def test_different_base_seeds_differ(self):
        assert generate_seeds(5, base_seed=1) != generate_seeds(5, base_seed=2)

    def test_random_when_no_base_seed(self):
        assert len(generate_seeds(3)) == 3


class TestExperimentConfig:
    """Tests for ExperimentConfig construction."""

    def test_from_config_uses_toml_defaults(self):
        config = ExperimentConfig.from_config(agent_type='fsm')
        assert config.agent_type == 'fsm'
        assert config.episodes == 50
        assert config.grid.width == 10
        assert config.base_seed == 42

    def test_overrides_take_precedence(self):
        config = ExperimentConfig.from_config(agent_type='astar', episodes=3, max_steps=None)
        assert config.episodes == 3
        # None overrides are ignored
        assert config.max_steps == 500

    def test_invalid_episode_count(self):
        with pytest.raises(ConfigurationError):
            ExperimentConfig(episodes=0)

    def test_world_step_cap_used_when_experiments_unset(self, tmp_path):
        path = tmp_path / 'config.toml'
        path.write_text("[world]\nwidth = 5\nheight = 5\nmax_steps = 77\n\n[experiments]\nepisodes = 2\n")
        config = ExperimentConfig.from_config(config_path=str(path))
        assert config.max_steps == 77
        assert config.episodes == 2

    def test_experiments_step_cap_wins(self, tmp_path):
        path = tmp_path / 'config.toml'
        path.write_text("[world]\nwidth = 5\nheight = 5\nmax_steps = 77\n\n[experiments]\nmax_steps = 30\n")
        assert ExperimentConfig.from_config(config_path=str(path)).max_steps == 30


# =============================================================================
# RUNNER
# =============================================================================

class TestRunner:
    """Tests for run_episode / run_batch / run_batch_and_save."""

    def test_run_episode_open_grid(self, open_config):
        log, steps = run_episode(open_config, episode=0, seed=123)
        assert log.success
        assert log.steps == 8
        assert log.moves == 8
        assert log.outcome == 'reached_goal'
        assert log.termination_reason == 'goal'
        assert log.energy_remaining == 92.0
        assert log.replans == 1
        assert steps == []

    def test_run_episode_records_steps(self, open_config):
        open_config.record_steps = True
        log, steps = run_episode(open_config, episode=2, seed=123)
        assert len(steps) == log.steps
        assert (steps[-1].x, steps[-1].y) == (4, 4)
        assert all(s.episode == 2 for s in steps)

    def test_run_batch(self, open_config):
        result = run_batch(open_config)
        assert len(result.episodes) == 3
        assert result.seeds == generate_seeds(3, 42)
        assert [e.episode for e in result.episodes] == [0, 1, 2]
        assert result.summary.success_rate == 1.0

    def test_run_batch_explicit_seeds(self, open_config):
        result = run_batch(open_config, seeds=[5, 6])
        assert [e.seed for e in result.episodes] == [5, 6]

    def test_batch_reproducible(self):
        config = ExperimentConfig(
            agent_type='behavior_tree', episodes=4,
            grid=GridConfig(8, 8, obstacle_density=0.2),
            cognitive=CognitiveConfig(noise=0.2, memory_capacity=4, decay_rate=0.99),
            max_steps=100, base_seed=3,
        )
        assert run_batch(config).episodes == run_batch(config).episodes

    def test_run_batch_and_save(self, open_config, tmp_path):
        result, path = run_batch_and_save(open_config, tmp_path)
        assert path.parent == tmp_path
        assert path.name.endswith('_astar_results.csv')

        with open(path, newline='') as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 3
        assert rows[0]['agent_type'] == 'astar'
        assert rows[0]['success'] == 'True'

    def test_save_step_logs(self, open_config, tmp_path):
        open_config.record_steps = True
        result, path = run_batch_and_save(open_config, tmp_path)
        steps_files = list(tmp_path.glob('*_astar_steps.csv'))
        assert len(steps_files) == 1
        with open(steps_files[0], newline='') as f:
            assert len(list(csv.DictReader(f))) == len(result.steps)


class TestExport:
    """Tests for CSV export and re-import."""

    def test_episode_logs_roundtrip(self, tmp_path):
        logs = [make_log(0), make_log(1, success=False, steps=50, termination_reason='stuck')]
        path = write_episode_logs_csv(tmp_path / 'nested' / 'out.csv', logs)
        assert path.exists()
        assert read_episode_logs_csv(path) == logs

    def test_header_follows_field_order(self, tmp_path):
        path = write_episode_logs_csv(tmp_path / 'out.csv', [make_log()])
        header = path.read_text().splitlines()[0]
        assert header.startswith('episode,agent_type,seed,steps,moves,success')


# =============================================================================
# AGGREGATION
# =============================================================================

class TestConfidenceInterval:
    """Tests for compute_confidence_interval."""

    def test_empty(self):
        assert compute_confidence_interval([]) == (0.0, 0.0, 0.0, 0.0)

    def test_single_value(self):
        assert compute_confidence_interval([3.0]) == (3.0, 0.0, 3.0, 3.0)

    def test_contains_mean(self):
        mean, std, lo, hi = compute_confidence_interval([1.0, 2.0, 3.0, 4.0, 5.0])
        assert mean == 3.0
        assert std == pytest.approx(np.std([1, 2, 3, 4, 5], ddof=1))
        assert lo < mean < hi
        # t(0.975, 4) = 2.776
        assert hi - mean == pytest.approx(2.776 * std / np.sqrt(5), rel=1e-3)


class TestSummarize:
    """Tests for summarize() and AgentComparison."""

    def test_summary_values(self):
        logs = [make_log(0, steps=8), make_log(1, steps=12), make_log(2, steps=50, success=False)]
        s = summarize(logs)
        assert s.n_episodes == 3
        assert s.n_success == 2
        assert s.success_rate == pytest.approx(2 / 3)
        assert s.steps_mean == pytest.approx(70 / 3)
        assert s.success_steps_mean == 10.0
        assert s.termination_counts == {'goal': 2, 'step_cap': 1}
        assert 'episodes' not in s.to_dict()

    def test_no_successes(self):
        s = summarize([make_log(success=False)])
        assert s.success_rate == 0.0
        assert s.success_steps_mean == 0.0

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            summarize([])

    def test_mixed_agent_types_rejected(self):
        with pytest.raises(ValueError):
            summarize([make_log(agent_type='fsm'), make_log(agent_type='astar')])

    def test_comparison_detects_difference(self):
        fast = summarize([make_log(i, agent_type='astar', steps=8 + i % 2) for i in range(20)])
        slow = summarize([make_log(i, agent_type='fsm', steps=30 + i % 3) for i in range(20)])
        cmp = AgentComparison.from_summaries(fast, slow)
        assert cmp.steps_diff < 0
        assert cmp.significant
        assert cmp.stars == '***'
        assert cmp.cohens_d < 0

    def test_comparison_identical_constant_steps(self):
        a = summarize([make_log(i, agent_type='astar', steps=8) for i in range(5)])
        b = summarize([make_log(i, agent_type='fsm', steps=8) for i in range(5)])
        cmp = AgentComparison.from_summaries(a, b)
        assert cmp.p_value == 1.0
        assert not cmp.significant
        assert cmp.stars == 'ns'
