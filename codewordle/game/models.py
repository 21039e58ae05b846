"""
Pydantic models for the game layer.

This module contains the data models (configuration, history records, status
values) used throughout the game layer. The main logic classes (Session,
SnippetRepository, StatisticsRepository, AutoGuess) remain in their
respective files.
"""

from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field, ConfigDict


# Type aliases
GameStatus = Literal["not_started", "in_progress", "won", "lost"]
ModeKind = Literal["guess_limited", "time_attack", "point"]


class CodeWordleError(RuntimeError):
    """Base class for game errors."""


class SessionError(CodeWordleError):
    """Raised on an illegal session transition (e.g. ending a game twice)."""


class SnippetNotFoundError(CodeWordleError, LookupError):
    """Raised when a snippet identifier is not in the repository."""


class PointConfig(BaseModel):
    """Scoring coefficients for point mode."""
    guess_penalty: float = Field(default=100.0, gt=0)
    point_factor: float = Field(default=500.0, gt=0)
    reward_factor: float = Field(default=1.5, ge=1.0)


class GameConfig(BaseModel):
    """Configuration for the game and its storage."""
    snippet_dir: str = "CodeSnippets"
    statistics_path: str = "Statistics.dat"
    seed: Optional[int] = None
    placeholder: str = Field(default="@", min_length=1, max_length=1)
    fuzzy_placeholder: str = Field(default="#", min_length=1, max_length=1)
    identifier_format: str = "Problem: www.luogu.com.cn/problem/{identifier}"
    point: PointConfig = Field(default_factory=PointConfig)


class HistoryRecord(BaseModel):
    """One finished game, as stored in the statistics history."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    mode: ModeKind
    mode_label: str
    identifier: str
    summary: str
    outcome: float  # 1/0 for win/loss, points in point mode
