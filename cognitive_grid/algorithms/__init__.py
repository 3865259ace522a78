"""Search algorithms used by deliberative agents."""
from cognitive_grid.algorithms.astar import SearchResult, find_path

__all__ = ['SearchResult', 'find_path']
