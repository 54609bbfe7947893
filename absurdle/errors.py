"""Errors and result markers shared by the solver and the search driver."""

from typing import NamedTuple


class SolverError(Exception):
    """Internal inconsistency in the solver (a bug, not bad input)."""


class ConfigurationError(SolverError, ValueError):
    """The session cannot start: the target or dictionary is unusable."""


class InvalidTargetError(ConfigurationError):
    pass


class EmptyDictionaryError(ConfigurationError):
    pass


class Contradiction(NamedTuple):
    """Returned instead of a filtered candidate set when the target would be lost."""
    guess: str
    pattern: str

    def __str__(self):
        return f"Failed to update possible words for guess: {self.guess} and pattern: {self.pattern}"


class Filtered(NamedTuple):
    """Successful filtering step."""
    guess: str
    pattern: str
    remaining: int
