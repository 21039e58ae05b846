"""Data models for snippet matching."""

from typing import NamedTuple
from pydantic import BaseModel, Field


MIN_GUESS_LEN = 3

# Reveal states, one per character of the snippet
UNGUESSED = 0
FUZZY_MATCH = 1
EXACT_MATCH = 2

# Fuzzy rule: at most this many mismatched characters...
FUZZY_FAIL = 1
# ...and at least this many non-blank characters in the guess
FUZZY_COUNT = 2

# Sentinels used in GuessResult
TOO_SHORT = -1
DISABLED = -1

BLANK = ' '


class Position(NamedTuple):
    """A character position in the snippet."""
    line: int
    column: int


class GuessResult(BaseModel):
    """Outcome of resolving one guess against a snippet."""
    exact: int = Field(default=0, ge=-1)
    fuzzy: int = Field(default=0, ge=-1)

    @classmethod
    def too_short(cls) -> "GuessResult":
        """Result for a guess below the minimum length."""
        return cls(exact=TOO_SHORT, fuzzy=TOO_SHORT)

    @property
    def is_too_short(self) -> bool:
        return self.exact == TOO_SHORT

    @property
    def fuzzy_enabled(self) -> bool:
        return self.fuzzy != DISABLED
