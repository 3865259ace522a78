"""
Seed management for reproducible experiments.

Two layers of randomness are used:

- Global state (Python `random`, NumPy legacy global) is seeded by set_seed()
  for scripts and tests that rely on it.
- Episodes never touch global state. new_episode() derives independent
  numpy Generators from one seed with spawn_generators(), so a fixed seed
  reproduces a run bit-for-bit regardless of what else ran before.

Usage:
    from cognitive_grid.utils.seed import set_seed, spawn_generators

    seed = set_seed(42)
    grid_rng, agent_rng = spawn_generators(seed, 2)
"""
import os
import random
import time
from typing import Optional

import numpy as np


def get_random_seed() -> int:
    """
    Generate a random seed from system entropy.

    Uses os.urandom for cryptographic randomness, falling back to
    time-based seed if unavailable.

    Returns:
        Random integer suitable for seeding
    """
    try:
        # Use 4 bytes of system entropy (gives us a 32-bit seed)
        return int.from_bytes(os.urandom(4), byteorder='little')
    except NotImplementedError:
        # Fallback for systems without os.urandom
        return int(time.time() * 1000) % (2**32)


def set_seed(seed: Optional[int] = None, verbose: bool = False) -> int:
    """
    Set random seeds for the global random sources (Python and NumPy).

    Args:
        seed: Seed value. If None, generates a random seed.
        verbose: If True, print the seed being used.

    Returns:
        The seed that was used (useful when seed=None)
    """
    if seed is None:
        seed = get_random_seed()

    if verbose:
        print(f"[Seed] Using seed: {seed}")

    random.seed(seed)
    np.random.seed(seed)

    return seed


def spawn_generators(seed: Optional[int], n: int) -> list[np.random.Generator]:
    """
    Derive `n` statistically independent generators from a single seed.

    The i-th generator depends only on (seed, i), so adding a consumer at the
    end never changes the streams of the existing ones.
    """
    children = np.random.SeedSequence(seed).spawn(n)
    return [np.random.default_rng(child) for child in children]
