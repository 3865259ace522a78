"""
Utility functions shared by the reactive agents.

The FSM's Exploring state and the behavior tree's "move toward goal" action
use the exact same greedy scoring, so it lives here rather than in either agent.
"""
from typing import TYPE_CHECKING

import numpy as np

from cognitive_grid.action_space import Action, apply_action, manhattan

if TYPE_CHECKING:
    from cognitive_grid.agents.base import Agent
    from cognitive_grid.environments.grid import Grid


def greedy_action(agent: 'Agent', grid: 'Grid') -> Action:
    """
    Pick the legal move minimizing Manhattan distance to goal plus memory repulsion.

    score(n) = manhattan(n, goal) + repulsion(n)

    Ties keep the first candidate in N, E, S, W order.

    Returns:
        The best move, or Action.STAY when no move is legal
    """
    best_action = Action.STAY
    best_score = float('inf')
    for action in grid.legal_actions(agent.position):
        nxt = apply_action(agent.position, action)
        score = manhattan(nxt, grid.goal) + agent.cognition.repulsion(nxt)
        if score < best_score:
            best_score = score
            best_action = action
    return best_action


def random_legal_action(rng: np.random.Generator, grid: 'Grid', pos) -> Action:
    """Uniformly random legal move from `pos`; STAY if boxed in."""
    legal = grid.legal_actions(pos)
    if not legal:
        return Action.STAY
    return legal[int(rng.integers(len(legal)))]


def improving_actions(grid: 'Grid', pos) -> list[Action]:
    """Legal moves that strictly reduce the Manhattan distance to the goal."""
    current = manhattan(pos, grid.goal)
    return [
        a for a in grid.legal_actions(pos)
        if manhattan(apply_action(pos, a), grid.goal) < current
    ]
