from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from cognitive_grid.action_space import Action, Position
from cognitive_grid.cognition import CognitiveLayer
from cognitive_grid.configs.default_config import AgentConfig, CognitiveConfig

if TYPE_CHECKING:
    from cognitive_grid.environments.grid import Grid


@dataclass
class AgentState:
    """
    Per-agent mutable record. Owned by exactly one agent, never shared.

    Energy is clamped to [0, max_energy].
    """
    position: Position
    energy: float
    max_energy: float
    steps: int = 0   # ticks consumed
    moves: int = 0   # moves actually applied

    def spend(self, amount: float) -> None:
        self.energy = max(0.0, self.energy - amount)

    def regenerate(self, amount: float) -> None:
        self.energy = min(self.max_energy, self.energy + amount)


@dataclass(frozen=True)
class Decision:
    """What an agent wanted to do this tick and what it ends up doing."""
    intended: Action
    action: Action
    noise_triggered: bool = False

    @property
    def deviated(self) -> bool:
        """True if noise replaced the intended move with a different one."""
        return self.action is not self.intended


class Agent(ABC):
    """Base class for agent decision architectures.

    Subclasses implement decide(); everything cognitive happens here so that
    all architectures see identical noise, memory and decay semantics:

        step(grid)           -> decay, decide, noise, on_decision hook
        apply_move(dst, grid) -> position, energy, memory, on_moved hook

    The World calls step(), checks the resulting move against the grid and
    then calls apply_move() for legal moves.
    """

    # Registry key, e.g. 'fsm'. Empty for abstract classes.
    agent_type: str = ''
    # Glyph used when several agents are drawn on one map
    glyph: str = 'A'

    def __init__(
        self,
        start: tuple[int, int],
        cognitive_config: CognitiveConfig | None = None,
        agent_config: AgentConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.config: AgentConfig = agent_config or AgentConfig()
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng()
        self.cognition = CognitiveLayer(cognitive_config or CognitiveConfig(), self.rng)
        self.state = AgentState(
            position=Position(*start),
            energy=float(self.config.initial_energy),
            max_energy=float(self.config.max_energy),
        )
        self.last_decision: Decision | None = None

    # -------------------------------------------------------------------------
    # Architecture interface
    # -------------------------------------------------------------------------

    @abstractmethod
    def decide(self, grid: 'Grid') -> Action:
        """
        Choose this tick's action before cognitive perturbation.

        Must only return moves that are legal from the current cell, or STAY.
        """
        pass

    @property
    @abstractmethod
    def status(self) -> str:
        """Name of the architecture-specific state (for telemetry)."""
        pass

    def on_decision(self, decision: Decision, grid: 'Grid') -> None:
        """Hook called after noise has been applied, before the move."""

    def on_moved(self, grid: 'Grid') -> None:
        """Hook called after a move has been applied and recorded."""

    @property
    def plan_length(self) -> int | None:
        """Remaining planned steps, for planners. None for reactive agents."""
        return None

    # -------------------------------------------------------------------------
    # Tick protocol
    # -------------------------------------------------------------------------

    def step(self, grid: 'Grid') -> Decision:
        """Run one decision cycle and return the action to apply."""
        self.state.steps += 1
        self.cognition.begin_tick()

        intended = self.decide(grid)
        if intended.is_move:
            legal = grid.legal_actions(self.state.position)
            action, triggered = self.cognition.perturb(intended, legal)
        else:
            action, triggered = intended, False

        decision = Decision(intended=intended, action=action, noise_triggered=triggered)
        self.on_decision(decision, grid)
        self.last_decision = decision
        return decision

    def apply_move(self, destination, grid: 'Grid') -> None:
        """Commit a legal move chosen by step()."""
        self.state.position = Position(*destination)
        self.state.moves += 1
        self.state.spend(self.config.move_cost)
        self.cognition.record(self.state.position)
        self.on_moved(grid)

    # -------------------------------------------------------------------------
    # Read-only surface
    # -------------------------------------------------------------------------

    @property
    def position(self) -> Position:
        return self.state.position

    @property
    def energy(self) -> float:
        return self.state.energy

    def is_done(self, grid: 'Grid') -> bool:
        return grid.is_goal(self.state.position)

    def is_stuck(self, grid: 'Grid') -> bool:
        """True when the agent can never move again (boxed in)."""
        return not self.is_done(grid) and not grid.legal_actions(self.state.position)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(pos={tuple(self.position)}, "
                f"energy={self.energy:.1f}, status={self.status})")
