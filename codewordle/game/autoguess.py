"""
Auto-guess hints.

Suggests common C/C++ fragments in a fixed order, skipping those already
visible in the masked snippet, then falls back to random guesses.
"""

import random
from typing import List
from pydantic import BaseModel, ConfigDict, Field


ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789_^(){};%=<>+-*&|\""
GUESS_LENGTH = 3

KEYWORDS: List[str] = [
    "int", "for", "if(", "els", "ret", "urn", "cla", "ass", "nam", "esp",
    "#in", "ude", "std", "siz", "lon", "eof", "nul", "ptr", "new", "del",
    "ete", "whi", "ile", "con", "st ", "cou", "t<<", "cin", ">> ", "%d ",
    "sca", "pri", "ntf", "<<\"", "\"<<",
]


def is_visible(masked: List[str], fragment: str) -> bool:
    """True if `fragment` already appears in the masked snippet."""
    return any(fragment in line for line in masked)


class AutoGuess(BaseModel):
    """
    Hint generator for one game.

    Attributes:
        keywords: Fragments to suggest, in order
        count: Index of the next keyword to consider
        rng: Random source for fallback guesses
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    keywords: List[str] = Field(default_factory=lambda: list(KEYWORDS))
    count: int = 0
    rng: random.Random = Field(default_factory=random.Random)

    def guess(self, masked: List[str]) -> str:
        """
        Suggest the next guess.

        Args:
            masked: The current masked snippet

        Returns:
            The first unused keyword not already visible, or a random
            3-character guess once the keywords are exhausted
        """
        while self.count < len(self.keywords):
            keyword = self.keywords[self.count]
            self.count += 1
            if not is_visible(masked, keyword):
                return keyword

        return self.random()

    def random(self) -> str:
        """A random guess over the hint alphabet."""
        return ''.join(self.rng.choice(ALPHABET) for _ in range(GUESS_LENGTH))
