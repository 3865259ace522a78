"""
Batch experiments, aggregate statistics and flat CSV export.
"""
from cognitive_grid.evaluation.aggregation import (
    AgentComparison,
    BatchSummary,
    compute_confidence_interval,
    summarize,
)
from cognitive_grid.evaluation.export import (
    read_episode_logs_csv,
    write_episode_logs_csv,
    write_step_logs_csv,
)
from cognitive_grid.evaluation.logs import EpisodeLog, StepLog
from cognitive_grid.evaluation.runner import (
    BatchResult,
    ExperimentConfig,
    generate_seeds,
    run_batch,
    run_batch_and_save,
    run_episode,
)

__all__ = [
    'AgentComparison',
    'BatchResult',
    'BatchSummary',
    'EpisodeLog',
    'ExperimentConfig',
    'StepLog',
    'compute_confidence_interval',
    'generate_seeds',
    'read_episode_logs_csv',
    'run_batch',
    'run_batch_and_save',
    'run_episode',
    'summarize',
    'write_episode_logs_csv',
    'write_step_logs_csv',
]
