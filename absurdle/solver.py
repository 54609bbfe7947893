"""
Absurdle Solver
===============

Solver state for forcing an adversarial Wordle (Absurdle) onto a chosen
target word.

Absurdle never commits to an answer. After every guess it splits the words
still in play by feedback pattern and reports the pattern of the largest
bucket, breaking size ties with a fixed ordering over patterns. To reach a
target we therefore need guesses whose adversarial bucket keeps the target
alive, until the target is the only word left.

Guess selection:
- One candidate left: guess it
- Large pools (> HEURISTIC_THRESHOLD): rank the dictionary by letter coverage,
  then scan a shortlist for a guess the adversary answers with the target's
  bucket
- Small pools: exhaustively score every dictionary word by the size of the
  largest bucket (smaller is better) and its overlap with the target letters
"""

import logging
from typing import Dict, FrozenSet, Iterable, Optional, Set, Tuple, Union

import numpy as np

from .dictionary import normalize_word, normalize_words
from .errors import Contradiction, EmptyDictionaryError, Filtered, InvalidTargetError
from .feedback import MAX_WORD_LENGTH, compute_feedback_row, entropy_loss, pattern_to_string, string_to_pattern
from .shortlist import ShortlistPolicy, TopScoreShortlist

logger = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

HEURISTIC_THRESHOLD = 100  # above this many candidates, use the heuristic proposer
SHORTLIST_SIZE = 50


# ============================================================================
# SOLVER CLASS
# ============================================================================

class AbsurdleSolver:
    """
    Candidate tracking, partitioning and guess selection for one target word.

    The dictionary is filtered to words of the target's length and sorted;
    words are referred to by their index in that list.
    """

    def __init__(self, dictionary: Iterable[str], target: str,
                 heuristic_threshold: int = HEURISTIC_THRESHOLD,
                 shortlist: Optional[ShortlistPolicy] = None):
        """
        Initialize solver.

        Args:
            dictionary: Words the game accepts (any case, surrounding whitespace ok)
            target: The word to force
            heuristic_threshold: Candidate count above which guesses are
                chosen heuristically instead of exhaustively
            shortlist: Policy bounding the heuristic scan (default: top 50)

        Raises:
            InvalidTargetError: target empty, not alphabetic, too long or not
                in the dictionary
            EmptyDictionaryError: no dictionary word has the target's length
        """
        self.target_word = normalize_word(target)
        self.word_length = len(self.target_word)
        self._validate_target()

        words = sorted(w for w in normalize_words(dictionary) if len(w) == self.word_length)
        if not words:
            raise EmptyDictionaryError(f"No dictionary words of length {self.word_length}")
        self.all_words: Tuple[str, ...] = tuple(words)
        self.word_to_idx = {w: i for i, w in enumerate(self.all_words)}
        if self.target_word not in self.word_to_idx:
            raise InvalidTargetError(f"Target word '{self.target_word}' not in dictionary")

        self.n_words = len(self.all_words)
        self.target_idx = self.word_to_idx[self.target_word]
        self.heuristic_threshold = heuristic_threshold
        self.shortlist = shortlist if shortlist is not None else TopScoreShortlist(SHORTLIST_SIZE)

        # Convert words to letter-code arrays for numba
        self.alphabet = sorted(set(''.join(self.all_words)))
        self.letter_to_idx = {c: i for i, c in enumerate(self.alphabet)}
        self.n_letters = len(self.alphabet)
        self.chars = self._words_to_chars(self.all_words)

        # letter_presence[w, c] == 1 when word w contains letter c at least once
        self.letter_presence = np.zeros((self.n_words, self.n_letters), dtype=np.int64)
        self.letter_presence[np.arange(self.n_words)[:, None], self.chars] = 1
        # Positions of each word holding one of the target's letters
        target_letters = np.unique(self.chars[self.target_idx])
        self.target_overlap = np.isin(self.chars, target_letters).sum(axis=1)

        self.possible = np.arange(self.n_words, dtype=np.int64)
        self.guessed_words: Set[str] = set()

        # guess index -> (candidate indices, pattern codes against them)
        self._pattern_cache: Dict[int, Tuple[np.ndarray, np.ndarray]] = {}
        self._letter_freq = np.zeros(self.n_letters, dtype=np.int64)
        self._calculate_letter_frequencies()

    def _validate_target(self):
        if self.word_length == 0:
            raise InvalidTargetError("Target word is empty")
        if not self.target_word.isalpha():
            raise InvalidTargetError(f"Target word '{self.target_word}' must contain only letters")
        if self.word_length > MAX_WORD_LENGTH:
            raise InvalidTargetError(
                f"Target word '{self.target_word}' is longer than {MAX_WORD_LENGTH} letters")

    def _words_to_chars(self, words: Tuple[str, ...]) -> np.ndarray:
        """Convert words to letter-code array."""
        arr = np.zeros((len(words), self.word_length), dtype=np.int32)
        for i, w in enumerate(words):
            for j, c in enumerate(w):
                arr[i, j] = self.letter_to_idx[c]
        return arr

    def _calculate_letter_frequencies(self):
        """Count every letter occurrence across the current candidates."""
        self._letter_freq = np.bincount(self.chars[self.possible].ravel(), minlength=self.n_letters)

    def _index(self, word: str) -> int:
        word = normalize_word(word)
        idx = self.word_to_idx.get(word)
        if idx is None:
            raise ValueError(f"'{word}' is not a {self.word_length}-letter dictionary word")
        return idx

    def _indices(self, words: Iterable[str]) -> np.ndarray:
        return np.unique(np.array([self._index(w) for w in words], dtype=np.int64))

    @property
    def possible_words(self) -> FrozenSet[str]:
        return frozenset(self.all_words[i] for i in self.possible)

    @property
    def n_possible(self) -> int:
        return len(self.possible)

    # ------------------------------------------------------------------------
    # Feedback and partitioning
    # ------------------------------------------------------------------------

    def _feedback_codes(self, guess_idx: int, candidates: np.ndarray) -> np.ndarray:
        """
        Pattern codes of a guess against sorted candidate indices, memoized.

        A cached row stays valid for any subset of the candidates it was
        computed against; otherwise it is extended to cover the new ones.
        """
        if len(candidates) == 0:
            return np.zeros(0, dtype=np.int64)

        cached = self._pattern_cache.get(guess_idx)
        if cached is not None:
            domain, codes = cached
            pos = np.minimum(np.searchsorted(domain, candidates), len(domain) - 1)
            if np.array_equal(domain[pos], candidates):
                return codes[pos]
            domain = np.union1d(domain, candidates)
        else:
            domain = candidates

        codes = compute_feedback_row(self.chars[guess_idx], self.chars[domain], self.n_letters)
        self._pattern_cache[guess_idx] = (domain, codes)
        return codes[np.searchsorted(domain, candidates)]

    def _partition(self, guess_idx: int, candidates: Optional[np.ndarray] = None) -> Dict[int, np.ndarray]:
        """Group candidate indices by pattern code, keys in ascending order."""
        if candidates is None:
            candidates = self.possible
        codes = self._feedback_codes(guess_idx, candidates)
        order = np.argsort(codes, kind='stable')
        keys, starts = np.unique(codes[order], return_index=True)
        groups = np.split(candidates[order], starts[1:])
        return dict(zip(keys.tolist(), groups))

    def feedback(self, guess: str, candidate: str) -> str:
        """Feedback pattern string for two dictionary words (cached)."""
        codes = self._feedback_codes(self._index(guess), np.array([self._index(candidate)], dtype=np.int64))
        return pattern_to_string(codes[0], self.word_length)

    def partition(self, guess: str, candidates: Optional[Iterable[str]] = None) -> Dict[str, FrozenSet[str]]:
        """
        Split candidate words (default: the current candidates) by the
        pattern the guess produces against them.
        """
        indices = None if candidates is None else self._indices(candidates)
        return {
            pattern_to_string(code, self.word_length): frozenset(self.all_words[i] for i in group)
            for code, group in self._partition(self._index(guess), indices).items()
        }

    # ------------------------------------------------------------------------
    # Adversarial response
    # ------------------------------------------------------------------------

    def _adversarial_response(self, guess_idx: int) -> Optional[Tuple[int, int]]:
        """
        (pattern code, bucket size) Absurdle reports for a guess, or None if
        the bucket it picks does not hold the target.

        The adversary picks a largest bucket, breaking ties by entropy_loss.
        """
        groups = self._partition(guess_idx)
        max_size = max(len(words) for words in groups.values())

        pattern_scores = {}
        target_patterns = []
        for code, words in groups.items():
            if len(words) != max_size:
                continue
            score = entropy_loss(pattern_to_string(code, self.word_length))
            pattern_scores[code] = score
            if self.target_idx in words:
                target_patterns.append((code, score))

        if not target_patterns:
            return None

        # Buckets are disjoint, so only one can hold the target
        code, score = target_patterns[0]
        if score == max(pattern_scores.values()):
            return code, max_size
        return None

    def _forcing_bucket_size(self, guess_idx: int) -> Optional[int]:
        """
        Size of the bucket the adversary keeps for a guess, if that bucket
        holds the target and is smaller than the current candidate set.
        """
        response = self._adversarial_response(guess_idx)
        if response is None or response[1] == len(self.possible):
            return None
        return response[1]

    def predict_pattern(self, guess: str) -> Optional[str]:
        """
        Pattern Absurdle reports for a guess, if it keeps the target alive.

        Returns None when the target's bucket would not be the one picked.
        """
        response = self._adversarial_response(self._index(guess))
        if response is None:
            return None
        return pattern_to_string(response[0], self.word_length)

    # ------------------------------------------------------------------------
    # Guess selection
    # ------------------------------------------------------------------------

    def _unguessed(self) -> np.ndarray:
        mask = np.ones(self.n_words, dtype=np.bool_)
        for word in self.guessed_words:
            idx = self.word_to_idx.get(word)
            if idx is not None:
                mask[idx] = False
        return np.flatnonzero(mask)

    def make_guess(self) -> Optional[str]:
        """
        Choose the next guess and record it in guessed_words.

        Returns None when no unguessed word makes the adversary keep the target.
        """
        if len(self.possible) == 1:
            guess = self.target_word
        elif len(self.possible) > self.heuristic_threshold:
            guess = self._make_heuristic_guess()
        else:
            guess = self._make_optimal_guess()

        if guess is not None:
            self.guessed_words.add(guess)
        logger.debug("Proposed %s with %d candidates left", guess, len(self.possible))
        return guess

    def _make_heuristic_guess(self) -> Optional[str]:
        """
        Rank unguessed words by letter coverage of the candidates, then by how
        many of their letters the target shares, and scan the shortlist.
        """
        candidates = self._unguessed()
        coverage = self.letter_presence[candidates] @ self._letter_freq
        overlap = self.target_overlap[candidates]
        ranked = candidates[np.lexsort((-overlap, -coverage))]

        for guess_idx in self.shortlist.select(ranked):
            if self._forcing_bucket_size(int(guess_idx)) is not None:
                return self.all_words[guess_idx]
        return None

    def _make_optimal_guess(self) -> Optional[str]:
        """
        Try every unguessed word: smallest largest-bucket wins, then the
        fewest target letters. Ties go to the earlier dictionary word.
        """
        best_idx = None
        best_score = None

        for guess_idx in self._unguessed():
            guess_idx = int(guess_idx)
            max_size = self._forcing_bucket_size(guess_idx)
            if max_size is None:
                continue
            score = (max_size, int(self.target_overlap[guess_idx]))
            if best_score is None or score < best_score:
                best_score = score
                best_idx = guess_idx

        if best_idx is None:
            return None
        return self.all_words[best_idx]

    # ------------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------------

    def filter_candidates(self, guess: str, pattern: str) -> np.ndarray:
        """Candidate indices consistent with the guess producing the pattern."""
        if len(pattern) != self.word_length:
            raise ValueError(f"Pattern '{pattern}' does not have {self.word_length} symbols")
        code = string_to_pattern(pattern)
        codes = self._feedback_codes(self._index(guess), self.possible)
        return self.possible[codes == code]

    def update_possible_words(self, guess: str, pattern: str) -> Union[Filtered, Contradiction]:
        """
        Keep only candidates consistent with (guess, pattern).

        Returns a Contradiction, leaving the state untouched, if the target
        would be filtered out.
        """
        new_possible = self.filter_candidates(guess, pattern)
        if self.target_idx not in new_possible:
            return Contradiction(normalize_word(guess), pattern)

        self.possible = new_possible
        self._calculate_letter_frequencies()
        return Filtered(normalize_word(guess), pattern, len(new_possible))
