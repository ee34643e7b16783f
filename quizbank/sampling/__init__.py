"""
Sampling module for criteria-based question selection.

This module provides:
- QuizCriteria: Normalized filter parameters and their canonical keys
- CyclicSamplingPool: Per-criteria pools that serve every matching
  question once before reshuffling
"""

from .criteria import QuizCriteria
from .cyclic_pool import (
    CyclicSamplingPool,
    DrawResult,
    PoolSnapshot,
    create_seed,
)

__all__ = [
    "QuizCriteria",
    "CyclicSamplingPool",
    "DrawResult",
    "PoolSnapshot",
    "create_seed",
]
