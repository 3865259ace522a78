"""
Centralized action space definitions.

This is the SINGLE SOURCE OF TRUTH for positions, moves and move ordering.
All components (grid neighbours, greedy scoring, A* expansion, noise) import
from here so that tie-breaking is identical everywhere.

Coordinates: x grows to the east, y grows to the south. (0, 0) is top-left.
"""
from enum import Enum
from typing import NamedTuple


class Position(NamedTuple):
    """Integer grid coordinate. Value type, hashable and ordered."""
    x: int
    y: int


class Action(Enum):
    """
    One-tick agent action: a unit orthogonal move or staying put.

    Values are (dx, dy) deltas.
    """
    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)
    STAY = (0, 0)

    @property
    def delta(self) -> tuple[int, int]:
        return self.value

    @property
    def is_move(self) -> bool:
        return self is not Action.STAY


# Deterministic neighbour order used for every tie-break: N, E, S, W
MOVE_ACTIONS: tuple[Action, ...] = (Action.NORTH, Action.EAST, Action.SOUTH, Action.WEST)


def apply_action(pos: Position, action: Action) -> Position:
    """Return the cell reached by taking `action` from `pos` (no bounds check)."""
    dx, dy = action.delta
    return Position(pos[0] + dx, pos[1] + dy)


def action_between(src: Position, dst: Position) -> Action:
    """
    Convert a unit step between adjacent cells into its Action.

    Identical cells map to Action.STAY.

    Raises:
        ValueError: If the cells are neither identical nor orthogonally adjacent.
    """
    delta = (dst[0] - src[0], dst[1] - src[1])
    for action in MOVE_ACTIONS:
        if action.delta == delta:
            return action
    if delta == (0, 0):
        return Action.STAY
    raise ValueError(f"{tuple(src)} -> {tuple(dst)} is not a unit orthogonal step")


def manhattan(a: Position | tuple[int, int], b: Position | tuple[int, int]) -> int:
    """Manhattan (L1) distance between two cells."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
