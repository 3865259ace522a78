"""
Per-agent composition of the three cognitive policies.

Every agent architecture owns one CognitiveLayer and talks to it through the
same four calls, which is what makes comparisons across architectures fair:

    begin_tick()            # exploration decay, once per tick
    perturb(chosen, legal)  # decision noise, on every tick that produces a move
    record(pos)             # spatial memory, after a move is applied
    repulsion(pos)          # soft penalty used by greedy move scoring
"""
from typing import Sequence

import numpy as np

from cognitive_grid.action_space import Action
from cognitive_grid.cognition.decay import ExplorationDecay
from cognitive_grid.cognition.memory import SpatialMemory
from cognitive_grid.cognition.noise import DecisionNoise
from cognitive_grid.configs.default_config import CognitiveConfig


class CognitiveLayer:
    """Decision noise + spatial memory + exploration decay for one agent."""

    def __init__(self, config: CognitiveConfig, rng: np.random.Generator):
        self.config: CognitiveConfig = config
        self.decay = ExplorationDecay(config.noise, config.decay_rate)
        self.memory = SpatialMemory(config.memory_capacity)
        self.noise = DecisionNoise(rng)
        self.noise_events: int = 0

    @property
    def noise_probability(self) -> float:
        return self.decay.current

    def begin_tick(self) -> float:
        return self.decay.advance()

    def perturb(self, chosen: Action, legal: Sequence[Action]) -> tuple[Action, bool]:
        action, triggered = self.noise.apply(chosen, legal, self.decay.current)
        if triggered:
            self.noise_events += 1
        return action, triggered

    def record(self, pos) -> None:
        self.memory.record(pos)

    def repulsion(self, pos) -> float:
        """Penalty for revisiting `pos`; always 0 when memory is disabled."""
        if self.memory.capacity == 0:
            return 0.0
        return self.config.memory_repulsion * self.memory.visit_count(pos)
