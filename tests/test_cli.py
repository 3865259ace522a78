"""Smoke tests for the command-line entry points."""
import pytest

from cognitive_grid.cli import experiments, headless


class TestExperimentsCLI:
    """Tests for cognitive-grid-experiments."""

    def test_runs_and_writes_csv(self, tmp_path, capsys):
        code = experiments.main([
            '--agents', 'astar,fsm', '--episodes', '2', '--density', '0',
            '--noise', '0', '-o', str(tmp_path),
        ])
        assert code == 0
        assert len(list(tmp_path.glob('*_astar_results.csv'))) == 1
        assert len(list(tmp_path.glob('*_fsm_results.csv'))) == 1
        out = capsys.readouterr().out
        assert 'AGENT COMPARISON' in out
        assert "Welch's t-test" in out

    def test_invalid_agent_type_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            experiments.main(['--agents', 'nope', '-o', str(tmp_path)])

    def test_float_memory_in_config_exits(self, tmp_path):
        path = tmp_path / 'config.toml'
        path.write_text("[world]\nwidth = 5\nheight = 5\n\n[cognition]\nmemory_capacity = 2.0\n")
        with pytest.raises(SystemExit):
            experiments.main(['--agents', 'astar', '--config', str(path), '-o', str(tmp_path)])

    def test_parse_agent_types_all(self):
        assert experiments.parse_agent_types('all') == ['astar', 'behavior_tree', 'fsm']


class TestHeadlessCLI:
    """Tests for cognitive-grid-headless."""

    def test_open_grid_comparison(self, capsys):
        code = headless.main(['--density', '0', '--noise', '0'])
        assert code == 0
        out = capsys.readouterr().out
        assert 'Multi-Agent Headless Runner' in out
        for agent_type in ('fsm', 'astar', 'behavior_tree'):
            assert agent_type in out

    def test_invalid_density_exits(self):
        with pytest.raises(SystemExit):
            headless.main(['--density', '2.0'])

    def test_zero_max_steps_exits(self):
        with pytest.raises(SystemExit):
            headless.main(['--max-steps', '0'])

    def test_float_width_in_config_exits(self, tmp_path):
        path = tmp_path / 'config.toml'
        path.write_text("[world]\nwidth = 10.0\nheight = 5\n")
        with pytest.raises(SystemExit):
            headless.main(['--config', str(path)])


class TestDispatcher:
    """Tests for the root main.py dispatcher."""

    def test_help(self, capsys):
        import main
        assert main.main([]) == 0
        assert 'experiments' in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        import main
        assert main.main(['train']) == 2
        assert 'Unknown command' in capsys.readouterr().out

    def test_dispatches_headless(self, capsys):
        import main
        assert main.main(['headless', '--density', '0', '--noise', '0']) == 0
