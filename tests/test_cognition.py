"""
Tests for the cognitive layer.

Covers the three policies independently (noise, memory, decay) and their
composition, including the degenerate no-op parameter values.
"""
import numpy as np
import pytest

from cognitive_grid.action_space import Action, Position
from cognitive_grid.cognition import CognitiveLayer, DecisionNoise, ExplorationDecay, SpatialMemory
from cognitive_grid.configs.default_config import CognitiveConfig


class ScriptedRng:
    """Stand-in generator returning scripted draws and counting calls."""

    def __init__(self, uniforms=(), choices=()):
        self.uniforms = list(uniforms)
        self.choices = list(choices)
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.uniforms.pop(0)

    def integers(self, n):
        self.calls += 1
        return self.choices.pop(0) % n


LEGAL = [Action.NORTH, Action.EAST, Action.SOUTH, Action.WEST]


class TestDecisionNoise:
    """Tests for DecisionNoise.apply."""

    def test_zero_probability_draws_nothing(self):
        rng = ScriptedRng()
        action, triggered = DecisionNoise(rng).apply(Action.EAST, LEGAL, 0.0)
        assert action is Action.EAST
        assert not triggered
        assert rng.calls == 0

    def test_no_legal_moves_keeps_choice(self):
        rng = ScriptedRng()
        action, triggered = DecisionNoise(rng).apply(Action.EAST, [], 1.0)
        assert action is Action.EAST
        assert not triggered
        assert rng.calls == 0

    def test_draw_above_probability_keeps_choice(self):
        rng = ScriptedRng(uniforms=[0.5])
        action, triggered = DecisionNoise(rng).apply(Action.EAST, LEGAL, 0.2)
        assert action is Action.EAST
        assert not triggered
        assert rng.calls == 1

    def test_draw_below_probability_substitutes_legal_move(self):
        rng = ScriptedRng(uniforms=[0.1], choices=[3])
        action, triggered = DecisionNoise(rng).apply(Action.EAST, LEGAL, 0.2)
        assert action is Action.WEST
        assert triggered

    def test_substitute_may_equal_choice(self):
        """Noise firing is reported even when it re-picks the same move."""
        rng = ScriptedRng(uniforms=[0.0], choices=[1])
        action, triggered = DecisionNoise(rng).apply(Action.EAST, LEGAL, 0.5)
        assert action is Action.EAST
        assert triggered

    def test_full_noise_only_returns_legal_moves(self):
        noise = DecisionNoise(np.random.default_rng(7))
        legal = [Action.SOUTH, Action.WEST]
        for _ in range(200):
            action, triggered = noise.apply(Action.SOUTH, legal, 1.0)
            assert triggered
            assert action in legal

    def test_full_noise_is_roughly_uniform(self):
        noise = DecisionNoise(np.random.default_rng(11))
        counts = {a: 0 for a in LEGAL}
        for _ in range(4000):
            action, _ = noise.apply(Action.NORTH, LEGAL, 1.0)
            counts[action] += 1
        for count in counts.values():
            assert 800 < count < 1200


class TestSpatialMemory:
    """Tests for the FIFO ring buffer."""

    def test_never_exceeds_capacity(self):
        memory = SpatialMemory(3)
        for i in range(10):
            memory.record((i, 0))
            assert len(memory) <= 3
        assert memory.entries() == [Position(7, 0), Position(8, 0), Position(9, 0)]

    def test_capacity_one_holds_most_recent(self):
        memory = SpatialMemory(1)
        for pos in [(0, 0), (1, 0), (1, 1)]:
            memory.record(pos)
            assert memory.entries() == [Position(*pos)]

    def test_zero_capacity_remembers_nothing(self):
        memory = SpatialMemory(0)
        memory.record((1, 1))
        assert len(memory) == 0
        assert memory.visit_count((1, 1)) == 0
        assert not memory.contains((1, 1))

    def test_visit_count_counts_duplicates(self):
        memory = SpatialMemory(5)
        for pos in [(0, 0), (1, 0), (0, 0), (0, 0)]:
            memory.record(pos)
        assert memory.visit_count((0, 0)) == 3
        assert memory.visit_count(Position(1, 0)) == 1
        assert memory.visit_count((5, 5)) == 0

    def test_oldest_evicted_first(self):
        memory = SpatialMemory(2)
        memory.record((0, 0))
        memory.record((1, 0))
        memory.record((2, 0))
        assert not memory.contains((0, 0))
        assert memory.contains((1, 0))

    def test_negative_capacity_rejected(self):
        with pytest.raises(ValueError):
            SpatialMemory(-1)


class TestExplorationDecay:
    """Tests for persistent multiplicative decay."""

    def test_geometric_schedule(self):
        decay = ExplorationDecay(0.5, 0.9)
        values = [decay.advance() for _ in range(5)]
        expected = [0.5 * 0.9 ** t for t in range(1, 6)]
        np.testing.assert_allclose(values, expected)
        assert decay.tick == 5

    def test_non_increasing_when_rate_below_one(self):
        decay = ExplorationDecay(0.3, 0.99)
        previous = decay.current
        for _ in range(100):
            current = decay.advance()
            assert current <= previous
            previous = current

    def test_constant_when_rate_is_one(self):
        decay = ExplorationDecay(0.3, 1.0)
        assert all(decay.advance() == 0.3 for _ in range(50))


class TestCognitiveLayer:
    """Tests for the per-agent composition."""

    def test_repulsion_scales_with_visits(self):
        layer = CognitiveLayer(
            CognitiveConfig(memory_capacity=4, memory_repulsion=2.0),
            np.random.default_rng(0),
        )
        layer.record((1, 1))
        layer.record((1, 1))
        assert layer.repulsion((1, 1)) == 4.0
        assert layer.repulsion((0, 0)) == 0.0

    def test_zero_capacity_means_no_repulsion(self):
        layer = CognitiveLayer(CognitiveConfig(memory_capacity=0), np.random.default_rng(0))
        layer.record((1, 1))
        assert layer.repulsion((1, 1)) == 0.0

    def test_begin_tick_decays_before_use(self):
        layer = CognitiveLayer(CognitiveConfig(noise=0.4, decay_rate=0.5), np.random.default_rng(0))
        assert layer.noise_probability == 0.4
        layer.begin_tick()
        assert layer.noise_probability == pytest.approx(0.2)

    def test_noise_events_counted(self):
        layer = CognitiveLayer(CognitiveConfig(noise=1.0), np.random.default_rng(0))
        layer.begin_tick()
        for _ in range(3):
            layer.perturb(Action.EAST, LEGAL)
        assert layer.noise_events == 3
