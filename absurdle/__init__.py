"""
Absurdle Solver
===============

Finds a sequence of guesses that forces Absurdle, the adversarial Wordle
variant, to reveal a chosen target word.
"""

__version__ = "1.0.0"

from .dictionary import load_words, normalize_words
from .errors import (ConfigurationError, Contradiction, EmptyDictionaryError, Filtered,
                     InvalidTargetError, SolverError)
from .feedback import entropy_loss, feedback, partition_candidates, pattern_to_string, string_to_pattern
from .search import SearchDriver, SearchResult, SearchStatus, benchmark, find_solution_path, print_results
from .shortlist import RandomShortlist, ShortlistPolicy, TopScoreShortlist
from .solver import AbsurdleSolver
