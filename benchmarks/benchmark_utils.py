"""
Benchmarking utilities for AVL sets.

Reproducibility:
    All random data generation uses deterministic seeds by default.
    The default seed can be overridden via the BENCHMARK_SEED environment variable.

Logging:
    Benchmarks should be run with logging at INFO level or higher to avoid
    performance contamination from verbose debug output.
"""

import logging
import os
import random
from typing import List, Tuple

import numpy as np

# Default seed for deterministic benchmarking - can be overridden via environment variable
DEFAULT_BENCHMARK_SEED = int(os.environ.get('BENCHMARK_SEED', '42'))


class BenchmarkUtils:
    """Deterministic data generation and sanity checks for benchmark runs."""

    @staticmethod
    def check_logging_level():
        """
        Raise if the library logs at DEBUG, which would dominate the timings.
        """
        lib_logger = logging.getLogger("avl_sets")
        effective_level = lib_logger.getEffectiveLevel()
        if effective_level <= logging.DEBUG:
            raise ValueError(
                f"Logging level is set to {logging.getLevelName(effective_level)}. "
                "Benchmarks require logging to be at INFO level or higher to avoid "
                "performance contamination from verbose debug output."
            )

    @staticmethod
    def generate_deterministic_keys(size: int,
                                    seed: int = None,
                                    key_range: Tuple[int, int] = (1, 1000000),
                                    distribution: str = 'uniform') -> List[int]:
        """
        Generate deterministic, duplicate-free keys.

        Args:
            size: Number of keys to generate
            seed: Random seed for reproducibility. If None, uses DEFAULT_BENCHMARK_SEED.
            key_range: Range of key values (min, max)
            distribution: 'uniform', 'clustered' or 'sequential'
        """
        if seed is None:
            seed = DEFAULT_BENCHMARK_SEED
        rng = np.random.default_rng(seed)

        min_key, max_key = key_range
        if size > max_key - min_key + 1:
            raise ValueError("Not enough unique keys available to generate desired size")

        if distribution == 'uniform':
            population = np.arange(min_key, max_key + 1)
            return rng.choice(population, size=size, replace=False).tolist()
        elif distribution == 'clustered':
            cluster_centers = np.linspace(min_key, max_key, 5, dtype=int)
            spread = max(1, (max_key - min_key) // 20)
            keys = np.concatenate([
                np.clip(rng.normal(center, spread, size), min_key, max_key).astype(int)
                for center in cluster_centers
            ])
            unique_keys = np.unique(keys)
            if len(unique_keys) >= size:
                return rng.permutation(unique_keys)[:size].tolist()
            remaining = np.setdiff1d(np.arange(min_key, max_key + 1), unique_keys)
            pad = rng.choice(remaining, size=size - len(unique_keys), replace=False)
            return rng.permutation(np.concatenate([unique_keys, pad])).tolist()
        elif distribution == 'sequential':
            return list(range(min_key, min_key + size))
        else:
            raise ValueError(f"Unknown distribution: {distribution}")

    @staticmethod
    def create_lookup_keys(insert_keys: List[int],
                           hit_ratio: float = 0.8,
                           seed: int = None,
                           num_lookups: int = 1000) -> List[int]:
        """Create lookup keys of which roughly ``hit_ratio`` are present in ``insert_keys``."""
        if seed is None:
            seed = DEFAULT_BENCHMARK_SEED
        rng = random.Random(seed)

        if not insert_keys:
            return [rng.randint(1, 1000000) for _ in range(num_lookups)]

        num_hits = int(num_lookups * hit_ratio)
        hit_keys = rng.choices(insert_keys, k=num_hits)

        present = set(insert_keys)
        hi = max(insert_keys) * 2 + 1
        miss_keys = []
        while len(miss_keys) < num_lookups - num_hits:
            key = rng.randint(min(insert_keys), hi)
            if key not in present:
                miss_keys.append(key)

        lookup_keys = hit_keys + miss_keys
        rng.shuffle(lookup_keys)
        return lookup_keys
