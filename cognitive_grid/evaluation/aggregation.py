"""
Aggregate statistics over batches of episodes.

Per-agent summaries report success rate and steps-to-finish with a
t-distribution confidence interval (appropriate for small batches).
Pairs of agents are compared with Welch's t-test on steps per episode.
"""
from dataclasses import asdict, dataclass, field

import numpy as np
from scipy import stats

from cognitive_grid.evaluation.logs import EpisodeLog


# -----------------------------------------------------------------------------
# Statistical helper functions
# -----------------------------------------------------------------------------

def compute_confidence_interval(
    values: list[float],
    confidence: float = 0.95
) -> tuple[float, float, float, float]:
    """
    Compute confidence interval for a list of values using t-distribution.

    Args:
        values: List of measurements (one per episode)
        confidence: Confidence level (default 0.95 for 95% CI)

    Returns:
        (mean, std, ci_low, ci_high)
    """
    n = len(values)
    if n == 0:
        return 0.0, 0.0, 0.0, 0.0
    if n == 1:
        return float(values[0]), 0.0, float(values[0]), float(values[0])

    mean = float(np.mean(values))
    std = float(np.std(values, ddof=1))  # Sample std (Bessel's correction)

    alpha = 1 - confidence
    t_crit = stats.t.ppf(1 - alpha/2, df=n-1)
    margin = t_crit * std / np.sqrt(n)

    return mean, std, float(mean - margin), float(mean + margin)


def _cohens_d(a: list[float], b: list[float]) -> float:
    """Compute Cohen's d effect size (pooled std denominator)."""
    na, nb = len(a), len(b)
    if na < 2 or nb < 2:
        return 0.0

    var_a, var_b = np.var(a, ddof=1), np.var(b, ddof=1)
    pooled_std = np.sqrt(((na - 1) * var_a + (nb - 1) * var_b) / (na + nb - 2))
    if pooled_std == 0:
        return 0.0
    return float((np.mean(a) - np.mean(b)) / pooled_std)


def _significance_stars(p: float) -> str:
    """Return significance stars for p-value."""
    if p < 0.001:
        return '***'
    elif p < 0.01:
        return '**'
    elif p < 0.05:
        return '*'
    return 'ns'


# -----------------------------------------------------------------------------
# Summaries
# -----------------------------------------------------------------------------

@dataclass
class BatchSummary:
    """Cross-episode statistics for one agent type."""
    agent_type: str
    n_episodes: int
    n_success: int
    success_rate: float

    # Steps over all episodes (failures count their full length)
    steps_mean: float
    steps_std: float
    steps_ci_low: float
    steps_ci_high: float

    # Steps over successful episodes only; 0.0 when none succeeded
    success_steps_mean: float

    noise_overrides_mean: float
    replans_mean: float
    energy_mean: float

    termination_counts: dict[str, int] = field(default_factory=dict)
    episodes: list[EpisodeLog] = field(default_factory=list, repr=False)

    def to_dict(self) -> dict:
        """Flat dict without the per-episode logs (for CSV / printing)."""
        d = asdict(self)
        d.pop('episodes')
        return d


def summarize(logs: list[EpisodeLog]) -> BatchSummary:
    """
    Aggregate episode logs of a single agent type.

    Raises:
        ValueError: If logs is empty or mixes agent types
    """
    if not logs:
        raise ValueError("Cannot summarize zero episodes")
    agent_types = {log.agent_type for log in logs}
    if len(agent_types) > 1:
        raise ValueError(f"Cannot summarize mixed agent types: {sorted(agent_types)}")

    steps = [log.steps for log in logs]
    steps_mean, steps_std, ci_low, ci_high = compute_confidence_interval(steps)
    successes = [log for log in logs if log.success]

    counts: dict[str, int] = {}
    for log in logs:
        reason = log.termination_reason or 'none'
        counts[reason] = counts.get(reason, 0) + 1

    return BatchSummary(
        agent_type=logs[0].agent_type,
        n_episodes=len(logs),
        n_success=len(successes),
        success_rate=len(successes) / len(logs),
        steps_mean=steps_mean,
        steps_std=steps_std,
        steps_ci_low=ci_low,
        steps_ci_high=ci_high,
        success_steps_mean=float(np.mean([s.steps for s in successes])) if successes else 0.0,
        noise_overrides_mean=float(np.mean([log.noise_overrides for log in logs])),
        replans_mean=float(np.mean([log.replans for log in logs])),
        energy_mean=float(np.mean([log.energy_remaining for log in logs])),
        termination_counts=counts,
        episodes=list(logs),
    )


@dataclass
class AgentComparison:
    """
    Welch's t-test (unpaired, unequal variances) on steps per episode.

    A negative steps_diff means agent_a needed fewer steps.
    """
    agent_a: str
    agent_b: str
    steps_mean_a: float
    steps_mean_b: float
    steps_diff: float
    t_stat: float
    p_value: float
    cohens_d: float
    significant: bool
    success_rate_diff: float

    @classmethod
    def from_summaries(
        cls,
        a: BatchSummary,
        b: BatchSummary,
        alpha: float = 0.05
    ) -> 'AgentComparison':
        steps_a = [log.steps for log in a.episodes]
        steps_b = [log.steps for log in b.episodes]

        if len(steps_a) < 2 or len(steps_b) < 2:
            t_stat, p_value = 0.0, 1.0
        else:
            t_stat, p_value = stats.ttest_ind(steps_a, steps_b, equal_var=False)
            # Zero variance in both groups yields nan
            if np.isnan(p_value):
                t_stat, p_value = 0.0, 1.0

        return cls(
            agent_a=a.agent_type,
            agent_b=b.agent_type,
            steps_mean_a=a.steps_mean,
            steps_mean_b=b.steps_mean,
            steps_diff=a.steps_mean - b.steps_mean,
            t_stat=float(t_stat),
            p_value=float(p_value),
            cohens_d=_cohens_d(steps_a, steps_b),
            significant=bool(p_value < alpha),
            success_rate_diff=a.success_rate - b.success_rate,
        )

    @property
    def stars(self) -> str:
        return _significance_stars(self.p_value)
