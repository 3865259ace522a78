"""
Single-agent world and its tick loop.

A World owns one Grid and one agent. Each tick is one atomic transition:

    1. agent.step(grid)      -> decay, decide, noise
    2. grid physics           -> move applied only onto a passable cell
    3. terminal checks        -> goal, step cap, boxed in / stuck

Boxed-in and stuck agents are reported as STEP_CAP_EXCEEDED with a
termination_reason, never raised as errors.
"""
from dataclasses import dataclass
from enum import Enum

from cognitive_grid.action_space import Position, apply_action
from cognitive_grid.agents.base import Agent
from cognitive_grid.configs.default_config import ConfigurationError
from cognitive_grid.environments.grid import Grid
from cognitive_grid.utils.logging_config import get_logger

logger = get_logger("environments.world")


class TickOutcome(Enum):
    CONTINUED = 'continued'
    REACHED_GOAL = 'reached_goal'
    STEP_CAP_EXCEEDED = 'step_cap_exceeded'

    @property
    def is_terminal(self) -> bool:
        return self is not TickOutcome.CONTINUED


# termination_reason values
REASON_GOAL = 'goal'
REASON_STEP_CAP = 'step_cap'
REASON_BOXED_IN = 'boxed_in'
REASON_STUCK = 'stuck'


@dataclass(frozen=True)
class Telemetry:
    """
    Read-only snapshot of the agent after a tick.

    Consumers (CSV export, rendering, comparisons) only read this; nothing
    flows back into decision logic.
    """
    tick: int
    position: Position
    energy: float
    steps: int
    moves: int
    noise_overridden: bool
    noise_probability: float
    plan_length: int | None
    agent_status: str
    memory_size: int


class World:
    """
    Drives one agent on one grid until it reaches the goal or the step cap.

    Args:
        grid: The episode map (treated as read-only)
        agent: Any Agent subclass
        max_steps: Step cap enforced by the world
        record: Keep a Telemetry snapshot per tick in `history`
    """

    def __init__(self, grid: Grid, agent: Agent, max_steps: int = 500, record: bool = False):
        if max_steps < 1:
            raise ConfigurationError(f"max_steps must be >= 1, got {max_steps}")
        if not grid.is_passable(agent.position):
            raise ConfigurationError(f"Agent starts on impassable cell {tuple(agent.position)}")

        self.grid = grid
        self.agent = agent
        self.max_steps = max_steps
        self.record = record

        self.ticks: int = 0
        self.outcome: TickOutcome = TickOutcome.CONTINUED
        self.termination_reason: str | None = None
        self.history: list[Telemetry] = []
        self.trajectory: list[Position] = [agent.position]

    @property
    def done(self) -> bool:
        return self.outcome.is_terminal

    @property
    def success(self) -> bool:
        return self.outcome is TickOutcome.REACHED_GOAL

    def _finish(self, outcome: TickOutcome, reason: str) -> TickOutcome:
        self.outcome = outcome
        self.termination_reason = reason
        logger.info("%s finished after %d ticks: %s (%s) at %s",
                    self.agent.agent_type, self.ticks, outcome.value, reason,
                    tuple(self.agent.position))
        return outcome

    def tick(self) -> TickOutcome:
        """Advance one tick. Calling tick() after termination is a no-op."""
        if self.done:
            return self.outcome

        if self.agent.is_done(self.grid):
            return self._finish(TickOutcome.REACHED_GOAL, REASON_GOAL)

        decision = self.agent.step(self.grid)
        if decision.action.is_move:
            destination = apply_action(self.agent.position, decision.action)
            if self.grid.is_passable(destination):
                self.agent.apply_move(destination, self.grid)
        self.ticks += 1
        self.trajectory.append(self.agent.position)

        if self.record:
            self.history.append(self.telemetry())

        if self.agent.is_done(self.grid):
            return self._finish(TickOutcome.REACHED_GOAL, REASON_GOAL)
        if self.ticks >= self.max_steps:
            return self._finish(TickOutcome.STEP_CAP_EXCEEDED, REASON_STEP_CAP)
        if self.agent.is_stuck(self.grid):
            reason = REASON_BOXED_IN if not self.grid.legal_actions(self.agent.position) else REASON_STUCK
            return self._finish(TickOutcome.STEP_CAP_EXCEEDED, reason)
        return TickOutcome.CONTINUED

    def run(self) -> TickOutcome:
        """Tick until a terminal outcome and return it."""
        while not self.done:
            self.tick()
        return self.outcome

    def telemetry(self) -> Telemetry:
        agent = self.agent
        decision = agent.last_decision
        return Telemetry(
            tick=self.ticks,
            position=agent.position,
            energy=agent.energy,
            steps=agent.state.steps,
            moves=agent.state.moves,
            noise_overridden=bool(decision and decision.noise_triggered),
            noise_probability=agent.cognition.noise_probability,
            plan_length=agent.plan_length,
            agent_status=agent.status,
            memory_size=len(agent.cognition.memory),
        )

    def render(self) -> str:
        return self.grid.render(self.agent.position)

    def __repr__(self) -> str:
        return f"World(tick={self.ticks}, outcome={self.outcome.value}, agent={self.agent!r})"
