"""Snippet text preparation."""

from typing import Iterable, List

from .models import MIN_GUESS_LEN, BLANK

TAB = ' ' * 4


def expand_line(line: str) -> str:
    """Replace tabs with 4 spaces and pad the line for full-length guesses."""
    line = line.rstrip('\r\n').replace('\t', TAB)
    return line + BLANK * (MIN_GUESS_LEN - 1)


def prepare_lines(raw_lines: Iterable[str]) -> List[str]:
    """
    Turn raw snippet lines into the padded buffer the matcher works on.

    Every line gets MIN_GUESS_LEN - 1 trailing blanks so that a guess window
    can end on any real character, including the last one of a line.
    """
    return [expand_line(line) for line in raw_lines]


def split_text(text: str) -> List[str]:
    """Split snippet text into lines the way a line-by-line file read would."""
    if not text:
        return []
    return text.splitlines()
