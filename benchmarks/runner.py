"""Core benchmark runner for AVL set performance measurements.

Run with ``python -m benchmarks.runner``; the configuration is read from the
environment (see :meth:`BenchmarkConfig.from_env`).
"""

import logging
import os
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

import numpy as np
from tqdm import tqdm

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from avl_sets import IntSet  # noqa: E402
from avl_sets.invariants import InvariantError  # noqa: E402

from .benchmark_utils import BenchmarkUtils  # noqa: E402
from .config import BenchmarkConfig, BenchmarkMetadata, get_git_commit_hash  # noqa: E402


@dataclass
class BenchmarkInput:
    """Pre-generated data for one repetition (not timed)."""
    keys: List[int]
    other_keys: List[int]
    lookup_keys: List[int]
    base: IntSet
    other: IntSet


@dataclass
class BenchmarkResult:
    """Timings of a single repetition, keyed by operation name."""
    timings: Dict[str, float] = field(default_factory=dict)
    height: int = 0


def _timed(fn: Callable[[], object]) -> Tuple[object, float]:
    t0 = time.perf_counter()
    out = fn()
    return out, time.perf_counter() - t0


class BenchmarkRunner:
    """
    Manages the benchmark lifecycle with proper phase separation.

    Phases:
    1. Setup (not timed): Configuration and data generation
    2. Warmup (not timed): Optional warmup iterations
    3. Run (timed): Actual measurement
    4. Verify (not timed): Invariant checks
    """

    OPERATIONS = ("of_list", "add_each", "mem", "union", "inter", "diff", "split", "remove_each")

    def __init__(self, config: BenchmarkConfig):
        self.config = config
        BenchmarkUtils.check_logging_level()

    def setup(self, size: int, repetitions: int) -> List[BenchmarkInput]:
        inputs = []
        for i in range(repetitions):
            seed = self.config.seed + i
            keys = BenchmarkUtils.generate_deterministic_keys(size, seed=seed)
            other_keys = BenchmarkUtils.generate_deterministic_keys(
                size, seed=seed + 10_000, distribution='clustered'
            )
            lookup_keys = BenchmarkUtils.create_lookup_keys(keys, seed=seed)
            inputs.append(BenchmarkInput(
                keys=keys,
                other_keys=other_keys,
                lookup_keys=lookup_keys,
                base=IntSet.of_list(keys),
                other=IntSet.of_list(other_keys),
            ))
        return inputs

    def warmup(self, inputs: List[BenchmarkInput]) -> None:
        if self.config.skip_warmup:
            return
        for inp in inputs[:3]:
            _ = inp.base.union(inp.other)
            _ = [inp.base.mem(k) for k in inp.lookup_keys[:100]]

    def run_single(self, inp: BenchmarkInput) -> BenchmarkResult:
        result = BenchmarkResult()
        t = result.timings

        _, t["of_list"] = _timed(lambda: IntSet.of_list(inp.keys))

        def add_each():
            s = IntSet.empty()
            for k in inp.keys:
                s = s.add(k)
            return s

        built, t["add_each"] = _timed(add_each)
        _, t["mem"] = _timed(lambda: [inp.base.mem(k) for k in inp.lookup_keys])
        _, t["union"] = _timed(lambda: inp.base.union(inp.other))
        _, t["inter"] = _timed(lambda: inp.base.inter(inp.other))
        _, t["diff"] = _timed(lambda: inp.base.diff(inp.other))
        _, t["split"] = _timed(lambda: [inp.base.split(k) for k in inp.lookup_keys[:100]])

        def remove_each():
            s = built
            for k in inp.keys:
                s = s.remove(k)
            return s

        _, t["remove_each"] = _timed(remove_each)
        result.height = built.root.height if built.root is not None else 0
        return result

    def verify(self, inp: BenchmarkInput) -> bool:
        try:
            for s in (inp.base, inp.other, inp.base.union(inp.other), inp.base.diff(inp.other)):
                s.check_invariants()
        except InvariantError as e:
            logging.error("Invariant check failed: %s", e)
            return False
        return True

    def run_benchmark(self, size: int, repetitions: int) -> Tuple[List[BenchmarkResult], BenchmarkMetadata]:
        metadata = BenchmarkMetadata(
            commit_hash=get_git_commit_hash(),
            config=self.config,
            size=size,
            repetitions=repetitions,
        )

        # === SETUP PHASE (not timed) ===
        logging.debug("Setup: Generating %d inputs...", repetitions)
        inputs = self.setup(size, repetitions)

        # === WARMUP PHASE (not timed) ===
        self.warmup(inputs)

        # === MEASUREMENT PHASE (timed) ===
        results = []
        all_verified = True
        for inp in tqdm(inputs, desc=f"n={size}", unit="rep"):
            if not self.config.verify_only:
                results.append(self.run_single(inp))
            # === VERIFY PHASE (not timed) ===
            if self.config.verify_only and not self.verify(inp):
                all_verified = False

        if self.config.verify_only:
            if all_verified:
                logging.info("✓ All verifications passed for n=%d", size)
            else:
                logging.error("✗ Some verifications failed for n=%d", size)

        return results, metadata

    def aggregate_and_report(self, results: List[BenchmarkResult], metadata: BenchmarkMetadata) -> None:
        if not results:
            return

        logging.info("")
        logging.info("=== METADATA ===")
        for line in str(metadata).split('\n'):
            logging.info(line)

        heights = np.array([r.height for r in results], dtype=float)
        logging.info("")
        logging.info("=== SHAPE ===")
        logging.info(f"Height (avg/max)     {heights.mean():10.2f} {heights.max():10.0f}")
        logging.info(f"log2(n + 1)          {np.log2(metadata.size + 1):10.2f}")

        header = f"{'Operation':<20}{'Avg(s)':>13}{'Var(s)':>13}{'Total(s)':>13}{'%Total':>10}"
        sep = "-" * len(header)
        totals = {op: np.array([r.timings[op] for r in results]) for op in self.OPERATIONS}
        grand_total = sum(v.sum() for v in totals.values())

        logging.info("")
        logging.info("=== PERFORMANCE ===")
        logging.info(header)
        logging.info(sep)
        for op in self.OPERATIONS:
            v = totals[op]
            pct = (v.sum() / grand_total * 100) if grand_total else 0
            logging.info(f"{op:<20}{v.mean():13.6f}{v.var():13.6f}{v.sum():13.6f}{pct:10.2f}%")
        logging.info(sep)


def main():
    config = BenchmarkConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        force=True,
    )
    runner = BenchmarkRunner(config)
    for size in config.sizes:
        results, metadata = runner.run_benchmark(size, config.repetitions)
        runner.aggregate_and_report(results, metadata)


if __name__ == "__main__":
    main()
