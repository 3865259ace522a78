#!/usr/bin/env python3
"""
Cognitive Grid - Entry Point

Dispatcher to the command-line tools.

Usage:
    python main.py experiments --episodes 50     # Batch runs + CSV + summary
    python main.py headless --seed 3             # Lock-step agent comparison
    python main.py --help                        # Show all options
"""
import sys


COMMANDS = {
    'experiments': 'Seeded batch runs per agent type with CSV output',
    'headless': 'Lock-step comparison of all agents on one grid',
}


def print_help() -> None:
    print()
    print("=" * 60)
    print("  COGNITIVE GRID")
    print("  FSM vs bounded A* vs Behavior Tree under noise,")
    print("  limited memory and decaying exploration.")
    print("=" * 60)
    print()
    print("Commands:")
    print()
    for name, desc in COMMANDS.items():
        print(f"  {name:<14}{desc}")
    print()
    print("Examples:")
    print("  python main.py experiments --episodes 100 --density 0.2")
    print("  python main.py experiments --agents astar --planning-limit 5")
    print("  python main.py headless --seed 3 --show-every 5")
    print()
    print("Use 'python main.py <command> --help' for command options.")
    print()


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] in ('-h', '--help'):
        print_help()
        return 0

    command, rest = argv[0], argv[1:]
    if command == 'experiments':
        from cognitive_grid.cli.experiments import main as run
    elif command == 'headless':
        from cognitive_grid.cli.headless import main as run
    else:
        print(f"Unknown command: {command}. Choose from: {', '.join(COMMANDS)}")
        return 2
    return run(rest)


if __name__ == '__main__':
    sys.exit(main())
