"""Command line front end: load a dictionary, force a target, print the path."""

import argparse
import logging
import sys
from typing import List, Optional

from .dictionary import load_words
from .errors import ConfigurationError
from .search import History, SearchDriver, SearchStatus, benchmark, print_results
from .shortlist import RandomShortlist, TopScoreShortlist
from .solver import HEURISTIC_THRESHOLD, SHORTLIST_SIZE

logger = logging.getLogger(__name__)

EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_INVALID = 2
EXIT_CANCELLED = 3

_EMOJI = {'0': '⬜', '1': '🟨', '2': '🟩'}


def pattern_to_emoji(pattern: str) -> str:
    return ''.join(_EMOJI.get(c, c) for c in pattern)


def format_solution(history: History, target: str, elapsed: float) -> str:
    lines = [f"{' '.join(guess.upper())}   {pattern_to_emoji(pattern)}" for guess, pattern in history]
    lines.append(f"Target word: {target.upper()}")
    lines.append(f"Solved in {len(history)} steps!")
    lines.append(f"({round(elapsed * 1000)}ms)")
    return '\n'.join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='absurdle-solver',
        description="Find a guess sequence that forces Absurdle to reveal a chosen word.")
    parser.add_argument('target', nargs='?', help="Word to force")
    parser.add_argument('--dictionary', default='dictionary.txt',
                        help="Word list, one word per line (default: %(default)s)")
    parser.add_argument('--threshold', type=int, default=HEURISTIC_THRESHOLD,
                        help="Candidate count above which guesses are heuristic (default: %(default)s)")
    parser.add_argument('--shortlist-size', type=int, default=SHORTLIST_SIZE,
                        help="Words scanned per heuristic guess (default: %(default)s)")
    parser.add_argument('--sample', action='store_true',
                        help="Random shortlist instead of the top-scoring words")
    parser.add_argument('--seed', type=int, default=None, help="Seed for --sample")
    parser.add_argument('--max-steps', type=int, default=None, help="Give up after this many guess cycles")
    parser.add_argument('--timeout', type=float, default=None, help="Give up after this many seconds")
    parser.add_argument('--benchmark', action='store_true',
                        help="Search every dictionary word (or just TARGET) and print statistics")
    parser.add_argument('-v', '--verbose', action='store_true', help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    if not args.target and not args.benchmark:
        parser.error("a target word is required unless --benchmark is given")
    if args.shortlist_size < 1:
        parser.error("--shortlist-size must be at least 1")
    if args.threshold < 0:
        parser.error("--threshold must not be negative")
    if args.max_steps is not None and args.max_steps < 0:
        parser.error("--max-steps must not be negative")
    if args.timeout is not None and args.timeout < 0:
        parser.error("--timeout must not be negative")

    try:
        words = load_words(args.dictionary)
    except OSError as e:
        print(f"Cannot read dictionary: {e}", file=sys.stderr)
        return EXIT_INVALID

    if args.sample:
        shortlist = RandomShortlist(args.shortlist_size, seed=args.seed)
    else:
        shortlist = TopScoreShortlist(args.shortlist_size)
    options = dict(heuristic_threshold=args.threshold, shortlist=shortlist)

    if args.benchmark:
        targets = [args.target] if args.target else None
        results = benchmark(words, targets, max_steps=args.max_steps, timeout=args.timeout, **options)
        print_results(results)
        if results['invalid']:
            return EXIT_INVALID
        return EXIT_SOLVED if results['failures'] == 0 else EXIT_NO_SOLUTION

    try:
        driver = SearchDriver(words, args.target, **options)
    except ConfigurationError as e:
        print(f"Invalid target word: {e}", file=sys.stderr)
        return EXIT_INVALID

    result = driver.run(max_steps=args.max_steps, timeout=args.timeout)
    if result.status is SearchStatus.SOLVED:
        print(format_solution(result.history, result.target, result.elapsed))
        return EXIT_SOLVED
    if result.status is SearchStatus.CANCELLED:
        print(f"Search cancelled after {result.steps} cycles.", file=sys.stderr)
        return EXIT_CANCELLED
    print("No valid solution found.")
    return EXIT_NO_SOLUTION
