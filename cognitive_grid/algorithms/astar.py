"""
Resource-bounded A* search on the grid.

Standard A* over 4-connected cells with f(n) = g(n) + h(n), h = Manhattan
distance to the goal. The open set is a binary heap keyed by
(f, h, insertion_index), so expansion order is fully deterministic for
identical inputs.

Bounded rationality: with a planning_limit, the search stops after that many
node expansions. It then returns a partial path to the best node reached so
far: lowest h, then lowest g, then earliest discovery. The same fallback
applies when the open set runs dry (goal unreachable), so a path is always
returned, possibly just [start].
"""
import heapq
import itertools
from dataclasses import dataclass

from cognitive_grid.action_space import Position, manhattan


@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of one search.

    Attributes:
        path: Cells from start to target, both included
        expansions: Number of nodes expanded (never exceeds the planning limit)
        reached_goal: True if target is the goal, False for partial paths
    """
    path: tuple[Position, ...]
    expansions: int
    reached_goal: bool

    @property
    def partial(self) -> bool:
        return not self.reached_goal

    @property
    def target(self) -> Position:
        return self.path[-1]

    @property
    def steps(self) -> int:
        return len(self.path) - 1


def find_path(start, goal, grid, planning_limit: int | None = None) -> SearchResult:
    """
    A* from `start` to `goal` on `grid`.

    An expansion pops an unclosed node and generates its passable neighbours.
    Popping the goal returns the complete path immediately.

    The partial fallback ranks every reached node, meaning every node that
    was generated and given a g score, not only the nodes already popped.
    With planning_limit=1 the start is the only popped node, so ranking
    popped nodes alone could never take a step.

    Args:
        start: Start cell (must be passable)
        goal: Goal cell
        grid: Anything with neighbors(pos) -> list of passable cells in N, E, S, W order
        planning_limit: Maximum expansions; None searches exhaustively

    Returns:
        SearchResult with a complete or partial path
    """
    start = Position(*start)
    goal = Position(*goal)

    if start == goal:
        return SearchResult((start,), 0, True)

    counter = itertools.count()
    h_start = manhattan(start, goal)

    open_heap: list[tuple[int, int, int, Position]] = []
    heapq.heappush(open_heap, (h_start, h_start, next(counter), start))

    g_score: dict[Position, int] = {start: 0}
    discovered: dict[Position, int] = {start: 0}
    came_from: dict[Position, Position] = {}
    closed: set[Position] = set()
    expansions = 0

    while open_heap:
        _, _, _, current = heapq.heappop(open_heap)

        if current in closed:
            continue
        if current == goal:
            return SearchResult(_reconstruct_path(came_from, current), expansions, True)

        closed.add(current)
        current_g = g_score[current]

        for neighbor in grid.neighbors(current):
            if neighbor in closed:
                continue
            tentative_g = current_g + 1
            if tentative_g < g_score.get(neighbor, tentative_g + 1):
                g_score[neighbor] = tentative_g
                came_from[neighbor] = current
                index = next(counter)
                discovered.setdefault(neighbor, index)
                h = manhattan(neighbor, goal)
                heapq.heappush(open_heap, (tentative_g + h, h, index, neighbor))

        expansions += 1
        if planning_limit is not None and expansions >= planning_limit:
            break

    target = best_reached_node(g_score, discovered, goal)
    return SearchResult(_reconstruct_path(came_from, target), expansions, target == goal)


def best_reached_node(
    g_score: dict[Position, int],
    discovered: dict[Position, int],
    goal: Position,
) -> Position:
    """Lowest h, ties broken by lowest g, then by earliest discovery."""
    return min(g_score, key=lambda p: (manhattan(p, goal), g_score[p], discovered[p]))


def _reconstruct_path(came_from: dict[Position, Position], end: Position) -> tuple[Position, ...]:
    path = [end]
    while path[-1] in came_from:
        path.append(came_from[path[-1]])
    path.reverse()
    return tuple(path)
