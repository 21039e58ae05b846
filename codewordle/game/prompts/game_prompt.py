from typing import List, Optional

from ...engine.models import GuessResult

SHOW_IDENTIFIER_TOKEN = "P"
ENABLE_FUZZY_TOKEN = "F"
RESIGN_TOKEN = "E"
AUTO_GUESS_TOKEN = "A"

IDENTIFIER_ENABLED_MESSAGE = "Problem ID showing enabled"
FUZZY_ENABLED_MESSAGE = "Fuzzy match enabled"


def format_too_short(min_length: int) -> str:
    return f"Guess must be at least {min_length} chars"


def format_guess_result(result: GuessResult) -> str:
    """Format the counts of a resolved guess, e.g. '2 matches found, 1 fuzzy matches found.'"""
    msg = f"{result.exact} matches found"
    if result.fuzzy_enabled:
        msg += f", {result.fuzzy} fuzzy matches found"
    return msg + "."


def format_instructions(min_length: int, assisted: bool) -> List[str]:
    """
    Input instructions shown under the snippet.

    Args:
        min_length: Minimum guess length
        assisted: False for point mode, where the player can trade points
            for the problem ID and fuzzy matching
    """
    if assisted:
        return [
            f"Enter your guesses(>= {min_length} chars), or end the game by entering "
            f"{RESIGN_TOKEN}, or get an auto guess by entering {AUTO_GUESS_TOKEN}"
        ]

    return [
        f"Enter {SHOW_IDENTIFIER_TOKEN} to show the problem ID, "
        f"or {ENABLE_FUZZY_TOKEN} to enable fuzzy match",
        "The game will be easier, but you will get LESS points",
        f"Enter your guesses(>= {min_length} chars), or end the game by entering {RESIGN_TOKEN}",
    ]


def build_display_lines(
    status_lines: List[str],
    masked: List[str],
    min_length: int,
    assisted: bool,
    identifier_line: Optional[str] = None,
) -> List[str]:
    """
    Build the full game screen.

    Args:
        status_lines: Mode status (guesses used, time used or points)
        masked: Masked snippet lines
        min_length: Minimum guess length
        assisted: Whether the mode offers auto guesses
        identifier_line: Problem ID line, if the identifier is shown

    Returns:
        Screen lines in display order
    """
    lines = list(status_lines)

    if identifier_line:
        lines.append(identifier_line)

    lines.extend(masked)
    lines.extend(format_instructions(min_length, assisted))

    return lines
