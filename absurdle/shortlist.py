"""
Shortlist policies for the heuristic guess proposer.

A policy receives the unguessed dictionary indices already ranked best first
and returns the (bounded) subset to evaluate, in evaluation order.
"""

from typing import Optional

import numpy as np


class ShortlistPolicy:
    """Base policy; subclasses choose at most `size` words from the ranking."""

    def __init__(self, size: int = 50):
        if size < 1:
            raise ValueError(f"Shortlist size must be positive, got {size}")
        self.size = size

    def select(self, ranked: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}(size={self.size})"


class TopScoreShortlist(ShortlistPolicy):
    """Deterministic top-K cut of the coverage ranking."""

    def select(self, ranked: np.ndarray) -> np.ndarray:
        return ranked[:self.size]


class RandomShortlist(ShortlistPolicy):
    """
    Uniform random sample of the unguessed words, kept in ranking order.

    Pass a seed for reproducible searches. The generator lives on the policy,
    so repeated proposals in one search draw different samples.
    """

    def __init__(self, size: int = 50, seed: Optional[int] = None):
        super().__init__(size)
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def select(self, ranked: np.ndarray) -> np.ndarray:
        if len(ranked) <= self.size:
            return ranked
        picked = self.rng.choice(len(ranked), size=self.size, replace=False)
        picked.sort()
        return ranked[picked]

    def __repr__(self):
        return f"RandomShortlist(size={self.size}, seed={self.seed})"
