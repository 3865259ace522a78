"""
Headless lock-step comparison of agent architectures on one grid.

Every agent runs in its own World built from the same grid config and seed,
so all of them face the identical map. Prints the map, optional snapshots
while running, and a finishing table.

Usage:
    python main.py headless
    python main.py headless --seed 3 --density 0.25 --show-every 5
    cognitive-grid-headless --agents fsm,astar --noise 0.0
"""
import argparse
from dataclasses import replace

from cognitive_grid.config import get_logging_config
from cognitive_grid.configs.default_config import ConfigurationError, get_simulation_config
from cognitive_grid.environments import ComparisonRun
from cognitive_grid.utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Lock-step comparison of agents on a shared grid.',
        epilog='Config precedence: CLI args > config.toml > config.default.toml',
    )
    parser.add_argument('-a', '--agents', default='fsm,astar,behavior_tree', metavar='LIST',
                        help='Comma-separated agent types (default: all three)')
    parser.add_argument('--seed', type=int, default=None, metavar='N',
                        help='Episode seed (default: [world].seed)')
    parser.add_argument('--max-steps', type=int, default=None, metavar='N')
    parser.add_argument('--density', type=float, default=None, metavar='P')
    parser.add_argument('--noise', type=float, default=None, metavar='EPS')
    parser.add_argument('--planning-limit', type=int, default=None, metavar='N',
                        help='A* expansion budget (0 = unlimited)')
    parser.add_argument('--show-every', type=int, default=0, metavar='N',
                        help='Render the map every N ticks (0 = only start and end)')
    parser.add_argument('--config', default=None, metavar='PATH',
                        help='Explicit TOML config file')
    parser.add_argument('-v', '--verbose', action='store_true', help='DEBUG logging')
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_cfg = get_logging_config()
    setup_logging(log_file=log_cfg.get('file') or None,
                  level='DEBUG' if args.verbose else log_cfg.get('level', 'INFO'))

    try:
        sim = get_simulation_config(args.config)
        grid_config = sim.grid
        if args.density is not None:
            grid_config = replace(grid_config, obstacle_density=args.density)
        cognitive = sim.cognitive
        if args.noise is not None:
            cognitive = replace(cognitive, noise=args.noise)
        if args.planning_limit is not None:
            cognitive = replace(cognitive, planning_limit=args.planning_limit or None)

        run = ComparisonRun(
            grid_config,
            cognitive,
            seed=args.seed if args.seed is not None else sim.seed,
            agent_types=[t.strip() for t in args.agents.split(',') if t.strip()],
            max_steps=args.max_steps if args.max_steps is not None else sim.max_steps,
            agent_config=sim.agent,
        )
    except ConfigurationError as e:
        parser.error(str(e))

    grid = run.grid
    legend = ', '.join(f"{w.agent.glyph}={t}" for t, w in run.worlds.items())
    print("Cognitive Grid - Multi-Agent Headless Runner")
    print(f"Grid: {grid.width}x{grid.height} | Obstacles: {grid.obstacle_count} | "
          f"Max steps: {run.max_steps}")
    print(f"Agents: {legend}")
    print("="*55)
    print(run.render())

    while not run.all_done():
        run.tick()
        if args.show_every and run.step % args.show_every == 0:
            print(f"\n-- step {run.step} --")
            print(run.render())

    print("\n" + run.render())
    print("="*55)
    print("{:<15} {:>6} {:>8} {:>8} {:>12}".format("Agent", "Steps", "Success", "Energy", "Reason"))
    print("-"*55)
    for r in run.results():
        print("{:<15} {:>6} {:>8} {:>8.1f} {:>12}".format(
            r.agent_type, r.steps, str(r.success), r.energy, r.termination_reason or '-'
        ))
    print("="*55)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
