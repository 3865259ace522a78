"""
Deliberative agent following resource-bounded A* plans.

Planner states:
    NO_PLAN     -> nothing computed yet
    FOLLOWING   -> walking the current (possibly partial) plan
    REPLANNING  -> plan invalidated; a fresh search runs on the next decision
    FOUND_GOAL  -> terminal

A plan is replaced wholesale on every replan, never patched.
"""
from enum import Enum
from typing import TYPE_CHECKING

from cognitive_grid.action_space import Action, Position, action_between, manhattan
from cognitive_grid.agents.base import Agent, Decision
from cognitive_grid.algorithms.astar import SearchResult, find_path
from cognitive_grid.configs.default_config import ReplanPolicy
from cognitive_grid.utils.logging_config import get_logger

if TYPE_CHECKING:
    from cognitive_grid.environments.grid import Grid

logger = get_logger("agents.astar")


class PlannerState(Enum):
    NO_PLAN = 'NoPlan'
    FOLLOWING = 'Following'
    REPLANNING = 'Replanning'
    FOUND_GOAL = 'FoundGoal'


class AStarAgent(Agent):
    """
    Bounded A* planner.

    Replans when the plan is exhausted, when noise moves the agent off the
    plan (or whenever noise fires, under ReplanPolicy.ANY_NOISE), and when
    the next planned cell is no longer a passable neighbour.
    """

    agent_type = 'astar'
    glyph = 'P'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.planner_state: PlannerState = PlannerState.NO_PLAN
        # Remaining cells to visit, current position excluded
        self.plan: tuple[Position, ...] = ()
        self.replan_needed: bool = True
        self.replans: int = 0
        self.last_search: SearchResult | None = None
        self._stuck: bool = False

    @property
    def status(self) -> str:
        return self.planner_state.value

    @property
    def plan_length(self) -> int:
        return len(self.plan)

    @property
    def planning_limit(self) -> int | None:
        return self.cognition.config.planning_limit

    # -------------------------------------------------------------------------
    # Planning
    # -------------------------------------------------------------------------

    def replan(self, grid: 'Grid') -> SearchResult:
        """Discard the current plan and search again from the current cell."""
        result = find_path(self.position, grid.goal, grid, self.planning_limit)
        self.replans += 1
        self.last_search = result
        self.plan = result.path[1:]
        self.replan_needed = False
        self._stuck = not self.plan and not grid.is_goal(self.position)

        logger.debug("A* replan #%d from %s: %d steps, %d expansions%s",
                     self.replans, tuple(self.position), result.steps,
                     result.expansions, " (partial)" if result.partial else "")
        if self._stuck:
            logger.debug("A* stuck at %s: search produced no step", tuple(self.position))
        self.planner_state = PlannerState.FOLLOWING
        return result

    def _next_step_valid(self, grid: 'Grid') -> bool:
        if not self.plan:
            return False
        nxt = self.plan[0]
        return manhattan(nxt, self.position) == 1 and grid.is_passable(nxt)

    # -------------------------------------------------------------------------
    # Agent interface
    # -------------------------------------------------------------------------

    def decide(self, grid: 'Grid') -> Action:
        if grid.is_goal(self.position):
            self.planner_state = PlannerState.FOUND_GOAL
            return Action.STAY

        if self.replan_needed or not self._next_step_valid(grid):
            self.replan(grid)

        if not self.plan:
            return Action.STAY
        return action_between(self.position, self.plan[0])

    def on_decision(self, decision: Decision, grid: 'Grid') -> None:
        if not decision.intended.is_move:
            return

        # The planned cell is consumed whether or not noise overrode it
        self.plan = self.plan[1:]

        policy = self.cognition.config.replan_policy
        if decision.deviated or (policy is ReplanPolicy.ANY_NOISE and decision.noise_triggered):
            self.replan_needed = True
            self.planner_state = PlannerState.REPLANNING
            logger.debug("A* plan invalidated by noise at tick %d (%s -> %s)",
                         self.state.steps, decision.intended.name, decision.action.name)

    def on_moved(self, grid: 'Grid') -> None:
        if grid.is_goal(self.position):
            self.planner_state = PlannerState.FOUND_GOAL
            self.plan = ()
        elif not self.plan and not self.replan_needed:
            self.replan_needed = True
            self.planner_state = PlannerState.REPLANNING

    def is_stuck(self, grid: 'Grid') -> bool:
        if self.is_done(grid):
            return False
        return self._stuck or super().is_stuck(grid)
