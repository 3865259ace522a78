"""Tests for agent auto-discovery."""
import pytest

from cognitive_grid.agents import AStarAgent, BehaviorTreeAgent, FSMAgent
from cognitive_grid.agents.registry import get_agent_class, get_all_agents, list_agent_types


class TestRegistry:
    """Tests for the agent registry."""

    def test_all_architectures_discovered(self):
        assert list_agent_types() == ['astar', 'behavior_tree', 'fsm']

    def test_lookup_by_type(self):
        assert get_agent_class('fsm') is FSMAgent
        assert get_agent_class('astar') is AStarAgent
        assert get_agent_class('behavior_tree') is BehaviorTreeAgent

    def test_unknown_type_lists_available(self):
        with pytest.raises(ValueError, match='Available'):
            get_agent_class('random_walker')

    def test_get_all_agents_returns_copy(self):
        agents = get_all_agents()
        agents.pop('fsm')
        assert 'fsm' in get_all_agents()
