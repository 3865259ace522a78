"""
Command-line interface tools for the cognitive grid testbed.

Subcommands:
- experiments: Seeded batch runs per agent type with CSV output
- headless: Lock-step comparison of all agents on one grid
"""
