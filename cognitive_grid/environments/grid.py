"""
Static grid map: free/obstacle cells plus a start and a goal cell.

Cells are stored in a (height, width) int8 numpy array indexed [y, x].
Out-of-bounds cells are never passable. Start and goal are always free.
"""
from enum import IntEnum

import numpy as np

from cognitive_grid.action_space import MOVE_ACTIONS, Action, Position, apply_action
from cognitive_grid.configs.default_config import ConfigurationError, GridConfig


class CellKind(IntEnum):
    FREE = 0
    OBSTACLE = 1


# ASCII glyphs used by from_ascii() and render()
GLYPH_FREE = '.'
GLYPH_OBSTACLE = '#'
GLYPH_START = 'S'
GLYPH_GOAL = 'G'
GLYPH_AGENT = 'A'
GLYPH_SHARED = '*'  # several agents on one cell


class Grid:
    """
    2D map of passable/obstacle cells with a designated goal.

    Read-only once an episode starts; all queries are side-effect free.
    """

    def __init__(
        self,
        width: int,
        height: int,
        goal: tuple[int, int],
        obstacles=(),
        start: tuple[int, int] = (0, 0),
    ):
        self.width: int = width
        self.height: int = height
        self.start: Position = Position(*start)
        self.goal: Position = Position(*goal)
        self.cells: np.ndarray = np.full((height, width), CellKind.FREE, dtype=np.int8)

        for x, y in obstacles:
            self._block(Position(x, y))

    @classmethod
    def from_config(cls, config: GridConfig, rng: np.random.Generator | None = None) -> 'Grid':
        """
        Build the grid for an episode.

        Explicit obstacles from the config are placed first; random obstacles
        are then scattered with probability obstacle_density. This is the only
        randomized setup step, so `rng` is required when density > 0.
        """
        grid = cls(config.width, config.height, config.goal, config.obstacles, config.start)
        if config.obstacle_density > 0:
            if rng is None:
                raise ConfigurationError("A random generator is required when obstacle_density > 0")
            grid.scatter_obstacles(config.obstacle_density, rng)
        return grid

    @classmethod
    def from_ascii(cls, rows: list[str] | str) -> 'Grid':
        """
        Parse a text map: '#' obstacle, '.' free, 'S' start, 'G' goal.

        Start defaults to (0, 0) and goal to the bottom-right corner when the
        map does not mark them.
        """
        if isinstance(rows, str):
            rows = [line.strip() for line in rows.strip().splitlines()]
        height = len(rows)
        width = len(rows[0]) if rows else 0
        if height == 0 or width == 0 or any(len(r) != width for r in rows):
            raise ConfigurationError("ASCII map must be a non-empty rectangle")

        start, goal, obstacles = (0, 0), (width - 1, height - 1), []
        for y, row in enumerate(rows):
            for x, glyph in enumerate(row):
                if glyph == GLYPH_OBSTACLE:
                    obstacles.append((x, y))
                elif glyph == GLYPH_START:
                    start = (x, y)
                elif glyph == GLYPH_GOAL:
                    goal = (x, y)
                elif glyph != GLYPH_FREE:
                    raise ConfigurationError(f"Unknown map glyph {glyph!r} at {(x, y)}")
        return cls(width, height, goal, obstacles, start)

    def _block(self, pos: Position) -> None:
        if self.in_bounds(pos) and pos != self.start and pos != self.goal:
            self.cells[pos[1], pos[0]] = CellKind.OBSTACLE

    def scatter_obstacles(self, density: float, rng: np.random.Generator) -> None:
        """Block each cell independently with probability `density`, sparing start and goal."""
        mask = rng.random((self.height, self.width)) < density
        mask[self.start.y, self.start.x] = False
        mask[self.goal.y, self.goal.x] = False
        self.cells[mask] = CellKind.OBSTACLE

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def in_bounds(self, pos) -> bool:
        return 0 <= pos[0] < self.width and 0 <= pos[1] < self.height

    def is_passable(self, pos) -> bool:
        """In bounds and not an obstacle."""
        if not self.in_bounds(pos):
            return False
        return self.cells[pos[1], pos[0]] == CellKind.FREE

    def is_goal(self, pos) -> bool:
        return pos[0] == self.goal.x and pos[1] == self.goal.y

    def neighbors(self, pos) -> list[Position]:
        """Passable orthogonal neighbours in N, E, S, W order."""
        pos = Position(*pos)
        result = []
        for action in MOVE_ACTIONS:
            nxt = apply_action(pos, action)
            if self.is_passable(nxt):
                result.append(nxt)
        return result

    def legal_actions(self, pos) -> list[Action]:
        """Moves from `pos` that land on a passable cell, in N, E, S, W order."""
        pos = Position(*pos)
        return [a for a in MOVE_ACTIONS if self.is_passable(apply_action(pos, a))]

    def obstacle_positions(self) -> list[Position]:
        ys, xs = np.nonzero(self.cells == CellKind.OBSTACLE)
        return sorted(Position(int(x), int(y)) for x, y in zip(xs, ys))

    @property
    def obstacle_count(self) -> int:
        return int(np.count_nonzero(self.cells == CellKind.OBSTACLE))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.start == other.start
            and self.goal == other.goal
            and np.array_equal(self.cells, other.cells)
        )

    __hash__ = None

    def render(self, agents: dict[str, Position] | Position | None = None) -> str:
        """
        ASCII rendering, one row per line.

        Args:
            agents: A single agent position (drawn as 'A') or a mapping of
                    glyph -> position for several agents. Cells holding more than
                    one agent are drawn as '*'.
        """
        if agents is None:
            agents = {}
        elif not isinstance(agents, dict):
            agents = {GLYPH_AGENT: agents}
        by_cell = {}
        for glyph, p in agents.items():
            cell = (int(p[0]), int(p[1]))
            by_cell[cell] = GLYPH_SHARED if cell in by_cell else glyph

        lines = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if (x, y) in by_cell:
                    row.append(by_cell[(x, y)])
                elif self.is_goal((x, y)):
                    row.append(GLYPH_GOAL)
                elif self.cells[y, x] == CellKind.OBSTACLE:
                    row.append(GLYPH_OBSTACLE)
                else:
                    row.append(GLYPH_FREE)
            lines.append(' '.join(row))
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return (f"Grid({self.width}x{self.height}, start={tuple(self.start)}, "
                f"goal={tuple(self.goal)}, obstacles={self.obstacle_count})")
