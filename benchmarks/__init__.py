"""
Benchmarks package for AVL sets.

Times construction, lookups, updates and the split/join based set algebra
on deterministic data, and verifies tree invariants on request.
"""

from .benchmark_utils import BenchmarkUtils
from .config import BenchmarkConfig

__all__ = ["BenchmarkConfig", "BenchmarkUtils"]
