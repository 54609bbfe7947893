"""
Search Driver
=============

Repeats guess -> adversarial response -> filter cycles until the target is
the reported answer, backtracking over guesses when a path dead-ends.

Backtracking pops the last (guess, pattern) from the history and rebuilds the
solver from scratch, replaying the remaining history. Every guess ever tried
stays excluded, so the search always terminates.
"""

import logging
import time
from collections import Counter
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from .dictionary import normalize_word, normalize_words
from .errors import ConfigurationError, Contradiction, SolverError
from .feedback import is_solved
from .shortlist import ShortlistPolicy
from .solver import HEURISTIC_THRESHOLD, AbsurdleSolver

logger = logging.getLogger(__name__)

History = List[Tuple[str, str]]


class SearchStatus(Enum):
    SEARCHING = 'searching'
    SOLVED = 'solved'
    EXHAUSTED = 'exhausted'
    CANCELLED = 'cancelled'


class SearchResult(NamedTuple):
    status: SearchStatus
    target: str
    history: History
    steps: int
    elapsed: float  # seconds

    @property
    def solved(self) -> bool:
        return self.status is SearchStatus.SOLVED


class SearchDriver:
    """
    Incremental solution search for one target word.

    Call step() for one guess cycle at a time, or run() to loop until the
    search ends or a step / time budget runs out.
    """

    def __init__(self, dictionary: Iterable[str], target: str,
                 heuristic_threshold: int = HEURISTIC_THRESHOLD,
                 shortlist: Optional[ShortlistPolicy] = None):
        self.dictionary = list(dictionary)
        self.target = normalize_word(target)
        self.heuristic_threshold = heuristic_threshold
        self.shortlist = shortlist

        # Raises ConfigurationError before any search happens
        self.solver = self._new_solver()

        self.history: History = []
        self.tried_guesses = set()
        self.status = SearchStatus.SEARCHING
        self.steps = 0
        self.backtracks = 0
        self.elapsed = 0.0

    def _new_solver(self) -> AbsurdleSolver:
        return AbsurdleSolver(self.dictionary, self.target,
                              heuristic_threshold=self.heuristic_threshold,
                              shortlist=self.shortlist)

    def step(self) -> SearchStatus:
        """Run one guess cycle and return the resulting status."""
        if self.status is not SearchStatus.SEARCHING:
            return self.status
        self.steps += 1

        guess = self.solver.make_guess()
        if guess is None or guess in self.tried_guesses:
            self._backtrack()
            return self.status

        self.tried_guesses.add(guess)
        pattern = self.solver.predict_pattern(guess)
        if pattern is None:
            logger.debug("No adversarial pattern keeps %s alive after %s", self.target, guess)
            return self.status

        result = self.solver.update_possible_words(guess, pattern)
        if isinstance(result, Contradiction):
            logger.debug("%s", result)
            return self.status

        self.history.append((guess, pattern))
        logger.debug("Accepted %s -> %s, %d candidates left", guess, pattern, result.remaining)

        if is_solved(pattern):
            self.status = SearchStatus.SOLVED
            logger.info("Solved %s in %d guesses (%d cycles, %d backtracks)",
                        self.target, len(self.history), self.steps, self.backtracks)
        return self.status

    def _backtrack(self):
        if not self.history:
            self.status = SearchStatus.EXHAUSTED
            logger.info("No solution for %s after %d cycles", self.target, self.steps)
            return

        last_guess, last_pattern = self.history.pop()
        self.backtracks += 1
        logger.debug("Backtracking over %s -> %s", last_guess, last_pattern)

        self.solver = self._new_solver()
        self.solver.guessed_words = set(self.tried_guesses)
        for guess, pattern in self.history:
            result = self.solver.update_possible_words(guess, pattern)
            if isinstance(result, Contradiction):
                raise SolverError(f"History replay failed: {result}")

    def run(self, max_steps: Optional[int] = None, timeout: Optional[float] = None) -> SearchResult:
        """
        Step until solved or exhausted.

        Args:
            max_steps: Stop after this many cycles (None: no limit)
            timeout: Stop after this many seconds (None: no limit)

        Returns:
            SearchResult; status CANCELLED when a budget ran out. The driver
            itself keeps searching state, so run() can be called again.
        """
        start = time.monotonic()
        deadline = start + timeout if timeout is not None else None
        taken = 0
        status = self.status

        while self.status is SearchStatus.SEARCHING:
            if max_steps is not None and taken >= max_steps:
                status = SearchStatus.CANCELLED
                break
            if deadline is not None and time.monotonic() >= deadline:
                status = SearchStatus.CANCELLED
                break
            status = self.step()
            taken += 1

        self.elapsed += time.monotonic() - start
        if status is SearchStatus.CANCELLED:
            logger.info("Search for %s cancelled after %d cycles", self.target, self.steps)
        return self.result(status)

    def result(self, status: Optional[SearchStatus] = None) -> SearchResult:
        return SearchResult(status or self.status, self.target, list(self.history), self.steps, self.elapsed)


def find_solution_path(dictionary: Iterable[str], target: str, **options) -> Optional[History]:
    """
    Guess/pattern sequence forcing the target, or None if there is none.

    Raises ConfigurationError for an unusable target or dictionary.
    """
    result = SearchDriver(dictionary, target, **options).run()
    return result.history if result.solved else None


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def benchmark(dictionary: Iterable[str], targets: Optional[Iterable[str]] = None,
              verbose: bool = True, max_steps: Optional[int] = None,
              timeout: Optional[float] = None, **options) -> Dict:
    """
    Search for many targets.

    Args:
        dictionary: Word list shared by every search
        targets: Words to force (default: the whole dictionary)
        verbose: Print progress
        max_steps, timeout: Per-target budgets passed to SearchDriver.run

    Returns:
        Dict with results
    """
    words = normalize_words(dictionary)
    targets = words if targets is None else list(targets)

    lengths = []
    dist = Counter()
    failures = []
    invalid = []

    start = time.time()
    for i, word in enumerate(targets):
        if verbose and i % 100 == 0:
            elapsed = time.time() - start
            rate = (i + 1) / elapsed if elapsed > 0 else 0
            avg = sum(lengths) / len(lengths) if lengths else 0
            print(f"[{i}/{len(targets)}] {rate:.1f} w/s, avg={avg:.4f}")

        try:
            driver = SearchDriver(words, word, **options)
        except ConfigurationError as e:
            logger.warning("Skipping %s: %s", word, e)
            invalid.append(word)
            continue

        result = driver.run(max_steps=max_steps, timeout=timeout)
        if result.solved:
            lengths.append(len(result.history))
            dist[len(result.history)] += 1
        else:
            failures.append(word)

    elapsed = time.time() - start

    return {
        'total': len(targets),
        'solved': len(lengths),
        'average': sum(lengths) / len(lengths) if lengths else 0.0,
        'distribution': dict(sorted(dist.items())),
        'failures': len(failures),
        'failed_words': failures[:20],
        'invalid': len(invalid),
        'time': elapsed,
        'rate': len(targets) / elapsed if elapsed > 0 else 0.0,
    }


def print_results(results: Dict):
    """Pretty print benchmark results."""
    total = results['total'] or 1
    print("\n" + "=" * 50)
    print("BENCHMARK RESULTS")
    print("=" * 50)
    print(f"Words tested: {results['total']}")
    print(f"Solved: {results['solved']}")
    print(f"Average guesses: {results['average']:.4f}")
    print(f"Unsolved: {results['failures']} ({100 * results['failures'] / total:.2f}%)")
    if results['invalid']:
        print(f"Invalid targets: {results['invalid']}")
    print(f"Time: {results['time']:.1f}s ({results['rate']:.1f} words/sec)")
    print("\nDistribution:")
    for n, count in results['distribution'].items():
        pct = 100 * count / total
        bar = "█" * int(pct / 2)
        print(f"  {n}: {count:5d} ({pct:5.2f}%) {bar}")
    if results['failed_words']:
        print(f"\nUnsolved words: {results['failed_words']}")
    print("=" * 50)
