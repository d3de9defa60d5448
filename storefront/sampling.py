"""Seeded sampling of catalog indices without replacement."""

from __future__ import annotations

import logging
import random

logger = logging.getLogger(__name__)

SEED_BITS = 32


def make_rng(seed: int | None = None) -> random.Random:
    """
    Build a ``random.Random`` for catalog sampling.

    When ``seed`` is None a fresh seed is drawn and logged, so any run
    can be replayed by exporting ``SAMPLE_SEED``.

    Args:
        seed: Explicit seed, or None to draw one.

    Returns:
        Seeded random generator.
    """
    if seed is None:
        seed = random.SystemRandom().getrandbits(SEED_BITS)
        logger.info("Catalog sampling seed drawn: %s (set SAMPLE_SEED=%s to replay)", seed, seed)
    else:
        logger.info("Catalog sampling seed: %s", seed)
    return random.Random(seed)


def sample_indices(population_size: int, count: int, rng: random.Random) -> list[int]:
    """
    Choose ``count`` distinct indices from ``range(population_size)``.

    Args:
        population_size: Number of items available.
        count: Number of distinct indices requested.
        rng: Random generator to draw from.

    Returns:
        Distinct indices in draw order.

    Raises:
        ValueError: If ``count`` is negative or exceeds ``population_size``.
    """
    if population_size < 0:
        raise ValueError(f"population_size must be >= 0, got {population_size}")
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if count > population_size:
        raise ValueError(
            f"Requested {count} distinct items but only {population_size} are available"
        )
    indices = rng.sample(range(population_size), count)
    logger.debug("Sampled indices %s from %d items", indices, population_size)
    return indices
