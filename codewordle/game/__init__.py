"""Game layer for Code Wordle."""

from .models import (
    GameStatus,
    ModeKind,
    PointConfig,
    GameConfig,
    HistoryRecord,
    CodeWordleError,
    SessionError,
    SnippetNotFoundError,
)
from .modes import GameMode, GuessLimitedMode, TimeAttackMode, PointMode, guess_limit, time_limit
from .repository import SnippetRepository
from .statistics import StatisticsRepository, StatisticsCounters, format_history_line
from .autoguess import AutoGuess, KEYWORDS
from .session import Session
from .console import Console

__all__ = [
    "GameStatus",
    "ModeKind",
    "PointConfig",
    "GameConfig",
    "HistoryRecord",
    "CodeWordleError",
    "SessionError",
    "SnippetNotFoundError",
    "GameMode",
    "GuessLimitedMode",
    "TimeAttackMode",
    "PointMode",
    "guess_limit",
    "time_limit",
    "SnippetRepository",
    "StatisticsRepository",
    "StatisticsCounters",
    "format_history_line",
    "AutoGuess",
    "KEYWORDS",
    "Session",
    "Console",
]
