"""Shape statistics for AVL sets built by repeated insertion."""

import argparse
import logging
import math
import os
import time
from datetime import datetime

import numpy as np

from avl_sets import IntSet
from avl_sets.invariants import assert_tree_invariants_raise
from avl_sets.tree_stats import tree_stats_

logger = logging.getLogger(__name__)


def random_set_of_size(n: int, rng: np.random.Generator) -> IntSet:
    """Insert ``n`` distinct random keys one by one, in random order."""
    space = 1 << 24
    if space <= n:
        raise ValueError(f"Key-space too small! Required: {n}, Available: {space}")
    keys = rng.choice(space, size=n, replace=False).tolist()
    s = IntSet.empty()
    add = IntSet.add
    for k in keys:
        s = add(s, k)
    return s


def repeated_experiment(size: int, repetitions: int, rng: np.random.Generator) -> None:
    """
    Repeatedly build random sets of ``size`` elements and report their height
    and leaf count against the perfectly balanced height ``ceil(log2(n + 1))``.
    """
    t_all_0 = time.perf_counter()

    heights, leaves = [], []
    times_build, times_stats = [], []

    for _ in range(repetitions):
        t0 = time.perf_counter()
        s = random_set_of_size(size, rng)
        times_build.append(time.perf_counter() - t0)

        t0 = time.perf_counter()
        stats = tree_stats_(s.root, IntSet.CMP)
        times_stats.append(time.perf_counter() - t0)

        assert_tree_invariants_raise(s.root, stats)
        heights.append(stats.height)
        leaves.append(stats.leaf_count)

    heights = np.array(heights, dtype=float)
    leaves = np.array(leaves, dtype=float)
    perfect_height = math.ceil(math.log2(size + 1)) if size > 0 else 0
    height_amp = heights / perfect_height if perfect_height else np.zeros_like(heights)

    rows = [
        ("Item count", float(size), None),
        ("Leaf count", leaves.mean(), leaves.var()),
        ("Actual height", heights.mean(), heights.var()),
        ("Max height", heights.max(), None),
        ("Perfect height", perfect_height, None),
        ("Height amplification", height_amp.mean(), height_amp.var()),
    ]

    header = f"{'Metric':<20} {'Avg':>15} {'(Var)':>15}"
    sep_line = "-" * len(header)
    logger.info(header)
    logger.info(sep_line)
    for name, avg, var in rows:
        if var is None:
            logger.info(f"{name:<20} {avg:>15}")
        else:
            var_str = f"({var:.2f})"
            logger.info(f"{name:<20} {avg:15.2f} {var_str:>15}")

    build = np.array(times_build)
    stats_t = np.array(times_stats)
    total_sum = build.sum() + stats_t.sum()

    header = f"{'Metric':<20}{'Avg(s)':>13}{'Var(s)':>13}{'Total(s)':>13}{'%Total':>10}"
    sep = "-" * len(header)
    logger.info("")
    logger.info("Performance summary:")
    logger.info(header)
    logger.info(sep)
    for name, arr in (("Build time (s)", build), ("Stats time (s)", stats_t)):
        pct = (arr.sum() / total_sum * 100) if total_sum else 0
        logger.info(f"{name:<20}{arr.mean():13.6f}{arr.var():13.6f}{arr.sum():13.6f}{pct:10.2f}%")
    logger.info(sep)
    logger.info("Execution time: %.3f seconds", time.perf_counter() - t_all_0)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run shape statistics experiments for AVL sets.")
    parser.add_argument(
        "--sizes", type=int, nargs="+", default=[10, 100, 1000, 10_000, 100_000], help="List of set sizes to test."
    )
    parser.add_argument("--repetitions", type=int, default=1, help="Number of repetitions for each experiment.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)",
    )
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)

    log_dir = os.path.join(os.getcwd(), "stats/logs/avl_set_logs")
    os.makedirs(log_dir, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"run_{ts}.log")

    log_level = getattr(logging, args.log_level)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="w"),
            logging.StreamHandler(),
        ],
        force=True,
    )
    logging.getLogger("avl_sets").setLevel(log_level)

    for n in args.sizes:
        logger.info("")
        logger.info(f"---------------- NOW RUNNING EXPERIMENT: n = {n}, repetitions = {args.repetitions} ----------------")
        t0 = time.perf_counter()
        repeated_experiment(size=n, repetitions=args.repetitions, rng=rng)
        logger.info(f"Total experiment time: {time.perf_counter() - t0:.3f} seconds")
