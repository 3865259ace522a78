"""
Utility functions for the cognitive grid testbed.

Provides logging and seeding helpers.
"""

from .logging_config import get_logger, setup_logging
from .seed import set_seed, get_random_seed, spawn_generators

__all__ = [
    # Logging
    'get_logger',
    'setup_logging',
    # Reproducibility
    'set_seed',
    'get_random_seed',
    'spawn_generators',
]
