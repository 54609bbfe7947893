"""
Feedback Engine
===============

Letter-by-letter feedback between a guess and a candidate word, plus the
helpers that convert feedback patterns between their numeric and string forms.

A pattern has one symbol per position:
- 0 (NO_MATCH): letter not in the candidate (or all occurrences used up)
- 1 (PRESENT):  letter elsewhere in the candidate
- 2 (EXACT):    letter in the right place

Internally a pattern is the base-3 number whose most significant digit is the
first position, so sorting codes sorts patterns lexicographically.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Sequence

import numpy as np
from numba import jit, prange


# ============================================================================
# CONSTANTS
# ============================================================================

NO_MATCH = 0
PRESENT = 1
EXACT = 2
N_SYMBOLS = 3

# 3**39 - 1 is the largest all-exact code that still fits in an int64
MAX_WORD_LENGTH = 39


# ============================================================================
# NUMBA-ACCELERATED FEEDBACK COMPUTATION
# ============================================================================

@jit(nopython=True, cache=True)
def compute_feedback(guess: np.ndarray, answer: np.ndarray, n_letters: int) -> int:
    """
    Compute feedback for a guess against a candidate answer.

    Args:
        guess: shape (L,) array of letter codes (0 to n_letters - 1)
        answer: shape (L,) array of letter codes
        n_letters: size of the alphabet the codes are drawn from

    Returns:
        Integer pattern code (0 to 3**L - 1)
    """
    length = guess.shape[0]
    feedback = np.zeros(length, dtype=np.int64)
    available = np.zeros(n_letters, dtype=np.int64)

    # First pass: exact matches, pool every other answer letter
    for i in range(length):
        if guess[i] == answer[i]:
            feedback[i] = EXACT
        else:
            available[answer[i]] += 1

    # Second pass: present letters, consumed left to right
    for i in range(length):
        if feedback[i] == NO_MATCH:
            c = guess[i]
            if available[c] > 0:
                feedback[i] = PRESENT
                available[c] -= 1

    code = 0
    for i in range(length):
        code = code * N_SYMBOLS + feedback[i]
    return code


@jit(nopython=True, parallel=True, cache=True)
def compute_feedback_row(guess: np.ndarray, answer_chars: np.ndarray, n_letters: int) -> np.ndarray:
    """
    Compute feedback for one guess against many answers in parallel.

    Args:
        guess: shape (L,) array of letter codes
        answer_chars: shape (n_answers, L) array of letter codes
        n_letters: size of the alphabet

    Returns:
        shape (n_answers,) array of pattern codes
    """
    n_answers = answer_chars.shape[0]
    result = np.zeros(n_answers, dtype=np.int64)

    for j in prange(n_answers):
        result[j] = compute_feedback(guess, answer_chars[j], n_letters)

    return result


# ============================================================================
# PATTERN CONVERSION
# ============================================================================

def pattern_to_string(code: int, length: int) -> str:
    """Convert a pattern code to its string form (e.g. 78 -> '2220')."""
    digits = []
    for _ in range(length):
        code, value = divmod(int(code), N_SYMBOLS)
        digits.append(str(value))
    return ''.join(reversed(digits))


def string_to_pattern(pattern: str) -> int:
    """Convert a pattern string over '012' to its code."""
    if not pattern or any(c not in '012' for c in pattern):
        raise ValueError(f"Invalid pattern: {pattern!r}")
    return int(pattern, N_SYMBOLS)


def solved_pattern(length: int) -> int:
    """Code of the all-exact pattern for words of the given length."""
    return N_SYMBOLS ** length - 1


def is_solved(pattern: str) -> bool:
    return bool(pattern) and all(c == str(EXACT) for c in pattern)


def entropy_loss(pattern: str) -> int:
    """
    Tie-break key between equally large buckets; higher is preferred.

    Each symbol adds its value at a place weight that falls with position,
    plus a dominant 10**(L + value) term, so patterns with fewer exact and
    present symbols score higher. This is only a total order, not an
    information measure.
    """
    length = len(pattern)
    entropy = 0
    for i, c in enumerate(pattern):
        value = int(c)
        entropy += value * 10 ** (length - i - 1)
        entropy += 10 ** (length + value)
    return -entropy


# ============================================================================
# PLAIN-WORD HELPERS
# ============================================================================

def _encode(words: Sequence[str]) -> np.ndarray:
    arr = np.zeros((len(words), len(words[0])), dtype=np.int32)
    for i, w in enumerate(words):
        for j, c in enumerate(w):
            arr[i, j] = ord(c)
    return arr


def feedback(guess: str, candidate: str) -> str:
    """
    Feedback pattern string for a guess against a candidate.

    >>> feedback('abce', 'abcd')
    '2220'
    """
    if len(guess) != len(candidate):
        raise ValueError(f"Length mismatch: {guess!r} vs {candidate!r}")
    if not guess:
        return ''
    chars = _encode([guess, candidate])
    n_letters = int(chars.max()) + 1
    code = compute_feedback(chars[0], chars[1], n_letters)
    return pattern_to_string(code, len(guess))


def partition_candidates(guess: str, candidates: Iterable[str]) -> Dict[str, List[str]]:
    """Group candidate words by the pattern the guess produces against them."""
    parts = defaultdict(list)
    for word in candidates:
        parts[feedback(guess, word)].append(word)
    return dict(sorted(parts.items()))
