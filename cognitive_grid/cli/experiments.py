"""
Batch experiments: run N seeded episodes per agent type and save CSV logs.

For every agent type one <timestamp>_<agent_type>_results.csv is written to
the output directory, then a summary table and pairwise Welch t-tests on
steps per episode are printed.

Usage:
    python main.py experiments --episodes 100 --density 0.2
    python main.py experiments --agents astar --planning-limit 5 --noise 0.0
    cognitive-grid-experiments --base-seed 7 --record-steps
"""
import argparse
from dataclasses import replace
from itertools import combinations

from cognitive_grid.agents import list_agent_types
from cognitive_grid.config import get_experiments_config, get_logging_config
from cognitive_grid.configs.default_config import ConfigurationError
from cognitive_grid.evaluation import (
    AgentComparison,
    BatchSummary,
    ExperimentConfig,
    run_batch_and_save,
)
from cognitive_grid.utils.logging_config import setup_logging


def build_parser(defaults: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Batch experiments comparing agent architectures.',
        epilog='Config precedence: CLI args > config.toml > config.default.toml',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    scope = parser.add_argument_group('Scope')
    scope.add_argument('-a', '--agents', default=','.join(defaults['agents']), metavar='LIST',
                       help='Comma-separated agent types or "all" (default: from config)')
    scope.add_argument('-n', '--episodes', type=int, default=None, metavar='N',
                       help=f"Episodes per agent (default: {defaults['episodes']})")
    max_steps_default = defaults.get('max_steps', '[world].max_steps')
    scope.add_argument('--max-steps', type=int, default=None, metavar='N',
                       help=f"Step cap per episode (default: {max_steps_default})")
    scope.add_argument('--base-seed', type=int, default=None, metavar='N',
                       help=f"Base seed for per-episode seeds (default: {defaults['base_seed']})")

    world = parser.add_argument_group('World')
    world.add_argument('--width', type=int, default=None, metavar='W')
    world.add_argument('--height', type=int, default=None, metavar='H')
    world.add_argument('--density', type=float, default=None, metavar='P',
                       help='Obstacle density in [0, 1]')

    cognition = parser.add_argument_group('Cognition')
    cognition.add_argument('--noise', type=float, default=None, metavar='EPS')
    cognition.add_argument('--decay', type=float, default=None, metavar='GAMMA')
    cognition.add_argument('--memory', type=int, default=None, metavar='K',
                           help='Spatial memory capacity (0 disables)')
    cognition.add_argument('--planning-limit', type=int, default=None, metavar='N',
                           help='A* expansion budget (0 = unlimited)')

    output = parser.add_argument_group('Output')
    output.add_argument('-o', '--output-dir', default=None, metavar='DIR',
                        help=f"CSV directory (default: {defaults['output_dir']})")
    output.add_argument('--record-steps', action='store_true',
                        help='Also write per-tick step logs')
    output.add_argument('--config', default=None, metavar='PATH',
                        help='Explicit TOML config file')
    output.add_argument('-v', '--verbose', action='store_true',
                        help='DEBUG logging')
    return parser


def parse_agent_types(value: str) -> list[str]:
    available = list_agent_types()
    if value == 'all':
        return available
    types = [t.strip() for t in value.split(',') if t.strip()]
    invalid = [t for t in types if t not in available]
    if invalid:
        raise ConfigurationError(
            f"Invalid agent type(s): {', '.join(invalid)}. Valid: {', '.join(available)}, or 'all'"
        )
    return types


def apply_overrides(config: ExperimentConfig, args: argparse.Namespace) -> ExperimentConfig:
    """Fold world/cognition CLI flags into the typed configs."""
    grid_changes = {
        'width': args.width,
        'height': args.height,
        'obstacle_density': args.density,
    }
    grid_changes = {k: v for k, v in grid_changes.items() if v is not None}
    if grid_changes:
        # Re-derive the default goal when the grid is resized
        if 'width' in grid_changes or 'height' in grid_changes:
            grid_changes['goal'] = None
        config = replace(config, grid=replace(config.grid, **grid_changes))

    cognitive_changes = {
        'noise': args.noise,
        'decay_rate': args.decay,
        'memory_capacity': args.memory,
    }
    cognitive_changes = {k: v for k, v in cognitive_changes.items() if v is not None}
    if args.planning_limit is not None:
        # 0 means unlimited, as in the TOML file
        cognitive_changes['planning_limit'] = args.planning_limit or None
    if cognitive_changes:
        config = replace(config, cognitive=replace(config.cognitive, **cognitive_changes))
    return config


def print_summary(summaries: dict[str, BatchSummary]) -> None:
    """Print formatted summary of results."""
    print("\n" + "="*80)
    print("AGENT COMPARISON")
    print("="*80)

    print("\n{:<15} {:>9} {:>9} {:>10} {:>19} {:>8} {:>8}".format(
        "Agent", "Episodes", "Success", "Steps", "95% CI", "Noise", "Replans"
    ))
    print("-"*80)
    for agent_type, s in summaries.items():
        ci = f"[{s.steps_ci_low:.1f}, {s.steps_ci_high:.1f}]"
        print("{:<15} {:>9} {:>8.1%} {:>10.1f} {:>19} {:>8.1f} {:>8.1f}".format(
            agent_type, s.n_episodes, s.success_rate, s.steps_mean, ci,
            s.noise_overrides_mean, s.replans_mean
        ))
    print("-"*80)

    if len(summaries) > 1:
        print("\nWelch's t-test on steps per episode")
        print("-"*80)
        for a, b in combinations(summaries.values(), 2):
            cmp = AgentComparison.from_summaries(a, b)
            print(f"  {cmp.agent_a} vs {cmp.agent_b:<15}: diff={cmp.steps_diff:+.2f}, "
                  f"p={cmp.p_value:.4f} {cmp.stars}, d={cmp.cohens_d:.2f}")
    print("\n" + "="*80)


def main(argv: list[str] | None = None) -> int:
    defaults = get_experiments_config()
    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    log_cfg = get_logging_config()
    setup_logging(log_file=log_cfg.get('file') or None,
                  level='DEBUG' if args.verbose else log_cfg.get('level', 'INFO'))

    try:
        agent_types = parse_agent_types(args.agents)
        summaries = {}
        paths = {}
        for agent_type in agent_types:
            config = ExperimentConfig.from_config(
                agent_type=agent_type,
                config_path=args.config,
                episodes=args.episodes,
                max_steps=args.max_steps,
                base_seed=args.base_seed,
                output_dir=args.output_dir,
                record_steps=args.record_steps,
            )
            config = apply_overrides(config, args)
            result, path = run_batch_and_save(config)
            summaries[agent_type] = result.summary
            paths[agent_type] = path
    except ConfigurationError as e:
        parser.error(str(e))

    print_summary(summaries)
    for agent_type, path in paths.items():
        print(f"Saved {agent_type} results to {path}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
