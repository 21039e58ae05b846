"""Per-character reveal state for a snippet."""

import random
from typing import List

from pydantic import BaseModel, Field

from .models import Position, BLANK, UNGUESSED, FUZZY_MATCH, EXACT_MATCH


class RevealGrid(BaseModel):
    """
    Reveal state of every character of a padded snippet.

    Holds the snippet lines and a parallel grid of states. Blank positions
    are never guessable and always count as satisfied. The grid owns no
    matching policy, only storage and mutation primitives.

    Attributes:
        lines: Snippet lines, tabs expanded and right-padded
        state: One reveal state per character of each line
    """

    lines: List[str] = Field(default_factory=list)
    state: List[List[int]] = Field(default_factory=list)

    def model_post_init(self, __context) -> None:
        """Build an all-unguessed state grid if none was given."""
        if not self.state:
            self.state = [[UNGUESSED] * len(line) for line in self.lines]

    def _positions(self):
        """Yield every non-blank position with its state."""
        for i, line in enumerate(self.lines):
            for j, char in enumerate(line):
                if char != BLANK:
                    yield Position(i, j), self.state[i][j]

    def total_guessable(self) -> int:
        """Number of non-blank characters in the snippet."""
        return sum(1 for _ in self._positions())

    def guessed_exact(self) -> int:
        """Number of non-blank characters already revealed."""
        return sum(1 for _, state in self._positions() if state == EXACT_MATCH)

    def is_complete(self) -> bool:
        """True once every non-blank character is revealed."""
        return all(state == EXACT_MATCH for _, state in self._positions())

    def remaining(self) -> List[Position]:
        """Non-blank positions not yet revealed, in reading order."""
        return [pos for pos, state in self._positions() if state != EXACT_MATCH]

    def reveal_one_random(self, rng: random.Random) -> None:
        """Reveal one random unrevealed character. No-op when none remain."""
        candidates = self.remaining()
        if not candidates:
            return

        pos = candidates[rng.randrange(len(candidates))]
        self.state[pos.line][pos.column] = EXACT_MATCH

    def mark_exact(self, line: int, start: int, length: int) -> None:
        """Reveal a window, overriding any fuzzy state."""
        row = self.state[line]
        for k in range(start, start + length):
            row[k] = EXACT_MATCH

    def mark_fuzzy(self, line: int, start: int, length: int) -> None:
        """Mark a window as fuzzy-matched without downgrading anything."""
        row = self.state[line]
        for k in range(start, start + length):
            if row[k] == UNGUESSED:
                row[k] = FUZZY_MATCH

    def render_masked(self, placeholder: str = '@', fuzzy_placeholder: str = '#') -> List[str]:
        """
        Render the snippet with hidden characters masked.

        Blanks pass through, revealed characters are shown as-is, fuzzy
        characters become `fuzzy_placeholder` and the rest `placeholder`.
        """
        masked: List[str] = []
        for line, row in zip(self.lines, self.state):
            chars = []
            for char, state in zip(line, row):
                if char == BLANK or state == EXACT_MATCH:
                    chars.append(char)
                elif state == FUZZY_MATCH:
                    chars.append(fuzzy_placeholder)
                else:
                    chars.append(placeholder)
            masked.append(''.join(chars))
        return masked
