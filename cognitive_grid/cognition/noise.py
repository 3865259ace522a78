"""Decision noise: occasionally replace the chosen move with a random legal one."""
from typing import Sequence

import numpy as np

from cognitive_grid.action_space import Action


class DecisionNoise:
    """
    Epsilon-style action perturbation.

    The probability is supplied per call (it is owned by ExplorationDecay),
    so this object only holds the agent's random generator.
    """

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    def apply(
        self,
        chosen: Action,
        legal: Sequence[Action],
        probability: float,
    ) -> tuple[Action, bool]:
        """
        Perturb a chosen action.

        Args:
            chosen: The action the agent's architecture decided on
            legal: Legal moves from the current cell (fixed N, E, S, W order)
            probability: Current noise probability

        Returns:
            (action, triggered) where triggered is True when the random
            substitute was drawn. The substitute may equal `chosen`.
        """
        if probability <= 0.0 or not legal:
            return chosen, False
        if self.rng.random() >= probability:
            return chosen, False
        idx = int(self.rng.integers(len(legal)))
        return legal[idx], True
