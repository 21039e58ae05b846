"""
Guess matching for Code Wordle snippets.

A guess is compared against every aligned window of the same length on
every line of the padded snippet:
1. Exact windows are revealed and counted; they are never counted as fuzzy.
2. With fuzzy matching on, a window differing in at most one character, for
   a guess with at least two non-blank characters, is counted as fuzzy and
   marks its still-unguessed characters as fuzzy.
Guesses shorter than MIN_GUESS_LEN are rejected without touching any state.
"""

import random
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field

from .grid import RevealGrid
from .models import (
    GuessResult,
    MIN_GUESS_LEN,
    FUZZY_FAIL,
    FUZZY_COUNT,
    DISABLED,
    BLANK,
)
from .parsing import prepare_lines


def count_mismatches(window: str, guess: str) -> int:
    """Number of offsets where the window and the guess differ."""
    return sum(1 for a, b in zip(window, guess) if a != b)


def count_significant(guess: str) -> int:
    """Number of non-blank characters in the guess."""
    return sum(1 for c in guess if c != BLANK)


def is_fuzzy_match(window: str, guess: str) -> bool:
    """Near-miss rule: one wrong character at most, two real characters at least."""
    return (
        count_mismatches(window, guess) <= FUZZY_FAIL
        and count_significant(guess) >= FUZZY_COUNT
    )


class MatchingEngine(BaseModel):
    """
    Resolves guesses against a snippet and mutates its reveal grid.

    Attributes:
        grid: The reveal grid owned by this engine
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    grid: RevealGrid = Field(default_factory=RevealGrid)

    @classmethod
    def from_lines(cls, raw_lines: Iterable[str]) -> "MatchingEngine":
        """
        Build an engine from raw snippet lines.

        Args:
            raw_lines: Lines as read from the snippet file (unpadded)

        Returns:
            A MatchingEngine over a fresh, fully hidden grid
        """
        return cls(grid=RevealGrid(lines=prepare_lines(raw_lines)))

    @classmethod
    def from_padded(cls, lines: List[str]) -> "MatchingEngine":
        """Build an engine from lines that are already expanded and padded."""
        return cls(grid=RevealGrid(lines=list(lines)))

    @property
    def lines(self) -> List[str]:
        return self.grid.lines

    @property
    def min_length(self) -> int:
        return MIN_GUESS_LEN

    def resolve(self, guess: str, fuzzy_allowed: bool = True) -> GuessResult:
        """
        Resolve one guess against every window of every line.

        Args:
            guess: The raw guess string
            fuzzy_allowed: Whether near-miss windows are evaluated

        Returns:
            GuessResult with exact and fuzzy counts; the fuzzy count is
            DISABLED when fuzzy matching is off, and both are TOO_SHORT when
            the guess is below the minimum length
        """
        size = len(guess)
        if size < MIN_GUESS_LEN:
            return GuessResult.too_short()

        exact = 0
        fuzzy = 0

        for i, line in enumerate(self.grid.lines):
            for j in range(len(line) - size + 1):
                window = line[j:j + size]

                if window == guess:
                    exact += 1
                    self.grid.mark_exact(i, j, size)
                    continue

                if not fuzzy_allowed:
                    continue

                if is_fuzzy_match(window, guess):
                    fuzzy += 1
                    self.grid.mark_fuzzy(i, j, size)

        return GuessResult(exact=exact, fuzzy=fuzzy if fuzzy_allowed else DISABLED)

    def total_guessable(self) -> int:
        return self.grid.total_guessable()

    def guessed_exact(self) -> int:
        return self.grid.guessed_exact()

    def is_complete(self) -> bool:
        return self.grid.is_complete()

    def reveal(self, rng: random.Random, times: int = 1) -> None:
        """Apply `times` random assist reveals."""
        for _ in range(times):
            self.grid.reveal_one_random(rng)

    def masked(self, placeholder: str = '@', fuzzy_placeholder: str = '#') -> List[str]:
        return self.grid.render_masked(placeholder, fuzzy_placeholder)
