"""Dictionary loading and normalization."""

import logging
from typing import Iterable, List

logger = logging.getLogger(__name__)


def normalize_word(word: str) -> str:
    return word.strip().lower()


def normalize_words(words: Iterable[str]) -> List[str]:
    """
    Lowercase and strip every entry, dropping blanks, entries with
    non-letter characters, and duplicates. First occurrence order is kept.
    """
    seen = set()
    result = []
    skipped = 0
    for raw in words:
        word = normalize_word(raw)
        if not word:
            continue
        if not word.isalpha():
            skipped += 1
            continue
        if word not in seen:
            seen.add(word)
            result.append(word)
    if skipped:
        logger.debug("Skipped %d dictionary entries with non-letter characters", skipped)
    return result


def load_words(filepath: str) -> List[str]:
    """Load word list from file, one word per line."""
    with open(filepath, 'r', encoding='utf-8') as f:
        words = [line.strip().lower() for line in f if line.strip()]
    logger.info("Loaded %d words from %s", len(words), filepath)
    return words
