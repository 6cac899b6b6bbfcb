"""
Solution runners.

Available implementations:
- Executor: runs a solution once and prints the result
- Benchmarker: runs a solution repeatedly under a BenchmarkBudget
"""

from .benchmarker import Benchmarker, BenchmarkBudget
from .executor import Executor

__all__ = ["Benchmarker", "BenchmarkBudget", "Executor"]
