"""
Reactive finite-state-machine agent driven by an energy scalar.

States:
    EXPLORING  -> greedy move toward the goal, paying move_cost per move
    RESTING    -> stay put, regenerating rest_regen energy per tick
    FOUND_GOAL -> terminal, no further moves

Transitions are evaluated at the start of every tick, before action selection.
"""
from enum import Enum
from typing import TYPE_CHECKING

from cognitive_grid.action_space import Action
from cognitive_grid.agents.base import Agent
from cognitive_grid.agents.utils import greedy_action
from cognitive_grid.utils.logging_config import get_logger

if TYPE_CHECKING:
    from cognitive_grid.environments.grid import Grid

logger = get_logger("agents.fsm")


class FSMState(Enum):
    EXPLORING = 'Exploring'
    RESTING = 'Resting'
    FOUND_GOAL = 'FoundGoal'


class FSMAgent(Agent):
    """
    Energy-driven state machine.

    Exploring switches to Resting when energy drops below rest_threshold,
    and Resting switches back once energy reaches wake_threshold.
    """

    agent_type = 'fsm'
    glyph = 'F'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fsm_state: FSMState = FSMState.EXPLORING

    @property
    def status(self) -> str:
        return self.fsm_state.value

    def _transition(self, new_state: FSMState) -> None:
        logger.debug("FSM %s -> %s at %s (energy=%.1f)",
                     self.fsm_state.value, new_state.value,
                     tuple(self.position), self.energy)
        self.fsm_state = new_state

    def update_state(self, grid: 'Grid') -> FSMState:
        """Apply the start-of-tick transition rules and return the new state."""
        if self.fsm_state is FSMState.FOUND_GOAL:
            return self.fsm_state
        if grid.is_goal(self.position):
            self._transition(FSMState.FOUND_GOAL)
        elif self.fsm_state is FSMState.EXPLORING and self.energy < self.config.rest_threshold:
            self._transition(FSMState.RESTING)
        elif self.fsm_state is FSMState.RESTING and self.energy >= self.config.wake_threshold:
            self._transition(FSMState.EXPLORING)
        return self.fsm_state

    def decide(self, grid: 'Grid') -> Action:
        state = self.update_state(grid)

        if state is FSMState.RESTING:
            self.state.regenerate(self.config.rest_regen)
            return Action.STAY
        if state is FSMState.FOUND_GOAL:
            return Action.STAY
        return greedy_action(self, grid)

    def on_moved(self, grid: 'Grid') -> None:
        if grid.is_goal(self.position) and self.fsm_state is not FSMState.FOUND_GOAL:
            self._transition(FSMState.FOUND_GOAL)
