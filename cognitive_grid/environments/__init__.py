"""
Grid world engine: the map, the tick loop and episode construction.
"""
from cognitive_grid.action_space import Position
from cognitive_grid.environments.grid import CellKind, Grid
from cognitive_grid.environments.world import Telemetry, TickOutcome, World
from cognitive_grid.environments.episode import new_episode
from cognitive_grid.environments.multi_world import ComparisonResult, ComparisonRun

__all__ = [
    'CellKind',
    'ComparisonResult',
    'ComparisonRun',
    'Grid',
    'Position',
    'Telemetry',
    'TickOutcome',
    'World',
    'new_episode',
]
