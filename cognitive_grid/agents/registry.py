"""
Agent auto-discovery registry.

Scans the agents package for Agent subclasses that declare an agent_type.
No manual registration needed: a new module defining such a class is picked
up by get_agent_class().
"""
import importlib
import pkgutil
from pathlib import Path
from typing import Type

from cognitive_grid.agents.base import Agent


_REGISTRY: dict[str, Type[Agent]] = {}
_DISCOVERED = False


def _register_from_module(module) -> None:
    """Register all concrete Agent subclasses from a module."""
    for name in dir(module):
        if name.startswith('_'):
            continue
        obj = getattr(module, name)
        if (isinstance(obj, type) and
                issubclass(obj, Agent) and
                obj is not Agent and
                obj.agent_type):
            _REGISTRY[obj.agent_type] = obj


def _discover_agents() -> None:
    """Import every agents submodule once and collect its agent classes."""
    global _DISCOVERED
    if _DISCOVERED:
        return

    agents_path = Path(__file__).parent
    skip_modules = {'base', 'registry', 'utils'}

    for _, name, _ in pkgutil.iter_modules([str(agents_path)]):
        if name.startswith('_') or name in skip_modules:
            continue
        module = importlib.import_module(f'cognitive_grid.agents.{name}')
        _register_from_module(module)

    _DISCOVERED = True


def get_agent_class(name: str) -> Type[Agent]:
    """
    Get an agent class by its agent_type.

    Args:
        name: Registry key (e.g., 'astar')

    Returns:
        The agent class

    Raises:
        ValueError: If no agent declares this agent_type
    """
    _discover_agents()
    if name not in _REGISTRY:
        available = ', '.join(sorted(_REGISTRY.keys()))
        raise ValueError(f"Unknown agent type: '{name}'. Available: [{available}]")
    return _REGISTRY[name]


def get_all_agents() -> dict[str, Type[Agent]]:
    """Get all registered agent classes keyed by agent_type."""
    _discover_agents()
    return _REGISTRY.copy()


def list_agent_types() -> list[str]:
    """List all registered agent types."""
    _discover_agents()
    return sorted(_REGISTRY.keys())
