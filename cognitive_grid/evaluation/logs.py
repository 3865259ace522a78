"""Flat per-episode and per-step records produced by experiment runs."""
from dataclasses import dataclass


@dataclass
class EpisodeLog:
    """
    Summary of one episode.

    steps counts ticks taken; moves counts ticks on which the agent actually
    changed cell. replans is 0 for agents that never plan.
    """
    episode: int
    agent_type: str
    seed: int
    steps: int
    moves: int
    success: bool
    outcome: str
    termination_reason: str | None
    energy_remaining: float
    noise_overrides: int
    replans: int = 0


@dataclass
class StepLog:
    """One tick of one episode, flattened from Telemetry."""
    episode: int
    step: int
    x: int
    y: int
    energy: float
    noise_overridden: bool
    plan_length: int | None
