"""Snippet matching and reveal engine for Code Wordle."""

from .matching import MatchingEngine, is_fuzzy_match, count_mismatches, count_significant
from .models import (
    GuessResult,
    Position,
    MIN_GUESS_LEN,
    UNGUESSED,
    FUZZY_MATCH,
    EXACT_MATCH,
    TOO_SHORT,
    DISABLED,
)
from .parsing import prepare_lines, expand_line, split_text
from .grid import RevealGrid

__all__ = [
    # Matching
    "MatchingEngine",
    "is_fuzzy_match",
    "count_mismatches",
    "count_significant",
    # Models
    "GuessResult",
    "Position",
    "MIN_GUESS_LEN",
    "UNGUESSED",
    "FUZZY_MATCH",
    "EXACT_MATCH",
    "TOO_SHORT",
    "DISABLED",
    # Parsing
    "prepare_lines",
    "expand_line",
    "split_text",
    # Grid
    "RevealGrid",
]
