"""
Cognitive constraints shared by all agent architectures.

- DecisionNoise: with probability epsilon, substitute a uniformly random legal move
- SpatialMemory: bounded FIFO of visited cells, used to discourage revisits
- ExplorationDecay: epsilon shrinks by a constant factor every tick
- CognitiveLayer: the per-agent composition of the three
"""
from cognitive_grid.cognition.decay import ExplorationDecay
from cognitive_grid.cognition.layer import CognitiveLayer
from cognitive_grid.cognition.memory import SpatialMemory
from cognitive_grid.cognition.noise import DecisionNoise

__all__ = [
    'CognitiveLayer',
    'DecisionNoise',
    'ExplorationDecay',
    'SpatialMemory',
]
