"""Exploration decay: persistent, cumulative shrinkage of the noise probability."""


class ExplorationDecay:
    """
    Tracks the decayed noise probability for one agent.

    advance() is called once at the start of every tick and multiplies the
    *current* probability by the decay rate, so after t ticks the value is
    initial * decay_rate ** t. A decay rate of 1.0 keeps it constant.
    """

    def __init__(self, initial: float, decay_rate: float = 1.0):
        self.initial: float = initial
        self.decay_rate: float = decay_rate
        self.current: float = initial
        self.tick: int = 0

    def advance(self) -> float:
        """Apply one tick of decay and return the probability to use this tick."""
        self.tick += 1
        self.current *= self.decay_rate
        return self.current

    def __repr__(self) -> str:
        return f"ExplorationDecay(current={self.current:.4f}, rate={self.decay_rate}, tick={self.tick})"
