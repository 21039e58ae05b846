"""Text shown to the Code Wordle player."""

from .rules import RULES_TEXT, get_rules
from .game_prompt import (
    build_display_lines,
    format_guess_result,
    format_instructions,
    format_too_short,
    SHOW_IDENTIFIER_TOKEN,
    ENABLE_FUZZY_TOKEN,
    RESIGN_TOKEN,
    AUTO_GUESS_TOKEN,
    IDENTIFIER_ENABLED_MESSAGE,
    FUZZY_ENABLED_MESSAGE,
)

__all__ = [
    "RULES_TEXT",
    "get_rules",
    "build_display_lines",
    "format_guess_result",
    "format_instructions",
    "format_too_short",
    "SHOW_IDENTIFIER_TOKEN",
    "ENABLE_FUZZY_TOKEN",
    "RESIGN_TOKEN",
    "AUTO_GUESS_TOKEN",
    "IDENTIFIER_ENABLED_MESSAGE",
    "FUZZY_ENABLED_MESSAGE",
]
