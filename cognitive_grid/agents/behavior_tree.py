"""
Behavior-tree agent.

A static tree of Selector / Sequence / Condition / Action nodes is evaluated
top-down once per tick. Every node resolves within the tick; RUNNING exists
for completeness but no node in this package returns it.

Reference tree (build_default_tree):

    Selector
    ├── Sequence
    │   ├── Condition(has_energy)
    │   ├── Condition(path_clear)
    │   └── Action(move_toward_goal)
    └── Action(wander)
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Callable

from cognitive_grid.action_space import Action
from cognitive_grid.agents.base import Agent
from cognitive_grid.agents.utils import greedy_action, improving_actions, random_legal_action
from cognitive_grid.utils.logging_config import get_logger

if TYPE_CHECKING:
    from cognitive_grid.environments.grid import Grid

logger = get_logger("agents.behavior_tree")


class Status(Enum):
    SUCCESS = 'Success'
    FAILURE = 'Failure'
    RUNNING = 'Running'


# =============================================================================
# NODES
# =============================================================================

class BehaviorNode(ABC):
    """A tree node. Nodes are immutable once built."""

    name: str = ''

    @abstractmethod
    def tick(self, agent: 'BehaviorTreeAgent', grid: 'Grid') -> Status:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class _Composite(BehaviorNode):
    def __init__(self, *children: BehaviorNode, name: str = ''):
        if not children:
            raise ValueError(f"{type(self).__name__} needs at least one child")
        self.children: tuple[BehaviorNode, ...] = tuple(children)
        self.name = name

    def __repr__(self) -> str:
        inner = ', '.join(repr(c) for c in self.children)
        return f"{type(self).__name__}({inner})"


class Selector(_Composite):
    """Returns the first non-FAILURE child result; FAILURE if every child fails."""

    def tick(self, agent, grid) -> Status:
        for child in self.children:
            status = child.tick(agent, grid)
            if status is not Status.FAILURE:
                return status
        return Status.FAILURE


class Sequence(_Composite):
    """Returns the first non-SUCCESS child result; SUCCESS if every child succeeds."""

    def tick(self, agent, grid) -> Status:
        for child in self.children:
            status = child.tick(agent, grid)
            if status is not Status.SUCCESS:
                return status
        return Status.SUCCESS


class Condition(BehaviorNode):
    """Side-effect-free predicate over the agent and grid."""

    def __init__(self, predicate: Callable[['BehaviorTreeAgent', 'Grid'], bool], name: str = ''):
        self.predicate = predicate
        self.name = name or predicate.__name__

    def tick(self, agent, grid) -> Status:
        return Status.SUCCESS if self.predicate(agent, grid) else Status.FAILURE


class ActionNode(BehaviorNode):
    """
    Leaf that selects the agent's move for this tick.

    The effect returns an Action; the node stores it as the agent's intent and
    always reports SUCCESS.
    """

    def __init__(self, effect: Callable[['BehaviorTreeAgent', 'Grid'], Action], name: str = ''):
        self.effect = effect
        self.name = name or effect.__name__

    def tick(self, agent, grid) -> Status:
        agent.intent = self.effect(agent, grid)
        agent.active_action = self.name
        return Status.SUCCESS


# =============================================================================
# CONDITIONS AND ACTIONS
# =============================================================================

def has_energy(agent: 'BehaviorTreeAgent', grid: 'Grid') -> bool:
    return agent.energy > 0


def path_clear(agent: 'BehaviorTreeAgent', grid: 'Grid') -> bool:
    """Some legal move strictly reduces the Manhattan distance to the goal."""
    return bool(improving_actions(grid, agent.position))


def move_toward_goal(agent: 'BehaviorTreeAgent', grid: 'Grid') -> Action:
    """Greedy move with memory repulsion, identical to the FSM's Exploring move."""
    return greedy_action(agent, grid)


def wander(agent: 'BehaviorTreeAgent', grid: 'Grid') -> Action:
    """Uniformly random legal move drawn from the agent's own generator."""
    return random_legal_action(agent.rng, grid, agent.position)


def build_default_tree() -> BehaviorNode:
    """Pursue the goal while able, else wander."""
    return Selector(
        Sequence(
            Condition(has_energy),
            Condition(path_clear),
            ActionNode(move_toward_goal),
        ),
        ActionNode(wander),
    )


# =============================================================================
# AGENT
# =============================================================================

class BehaviorTreeAgent(Agent):
    """
    Agent whose decision is one evaluation of a fixed behavior tree.

    The tree holds no per-tick state; the selected move is written to
    `intent` by whichever action leaf fires.
    """

    agent_type = 'behavior_tree'
    glyph = 'B'

    def __init__(self, *args, tree: BehaviorNode | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.tree: BehaviorNode = tree if tree is not None else build_default_tree()
        self.intent: Action = Action.STAY
        self.active_action: str = ''
        self.last_status: Status | None = None

    @property
    def status(self) -> str:
        if self.last_status is None:
            return 'Idle'
        return self.active_action or self.last_status.value

    def decide(self, grid: 'Grid') -> Action:
        if grid.is_goal(self.position):
            self.active_action = 'at_goal'
            return Action.STAY

        self.intent = Action.STAY
        self.active_action = ''
        self.last_status = self.tree.tick(self, grid)
        logger.debug("BT tick %d -> %s via %s at %s",
                     self.state.steps, self.last_status.value,
                     self.active_action or '-', tuple(self.position))
        return self.intent
