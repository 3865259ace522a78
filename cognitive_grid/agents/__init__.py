"""
Agent decision architectures.

All agents share the Agent base class and its CognitiveLayer, so noise,
memory and decay behave identically whichever architecture is active:

- FSMAgent: energy-driven reactive state machine
- AStarAgent: resource-bounded A* planner with partial plans
- BehaviorTreeAgent: fixed Selector/Sequence tree evaluated each tick
"""
from cognitive_grid.agents.base import Agent, AgentState, Decision
from cognitive_grid.agents.astar import AStarAgent, PlannerState
from cognitive_grid.agents.behavior_tree import BehaviorTreeAgent, Status, build_default_tree
from cognitive_grid.agents.fsm import FSMAgent, FSMState
from cognitive_grid.agents.registry import get_agent_class, get_all_agents, list_agent_types

__all__ = [
    'Agent',
    'AgentState',
    'Decision',
    'AStarAgent',
    'PlannerState',
    'BehaviorTreeAgent',
    'Status',
    'build_default_tree',
    'FSMAgent',
    'FSMState',
    'get_agent_class',
    'get_all_agents',
    'list_agent_types',
]
