import logging
import random
import time
from datetime import datetime
from typing import Callable, Dict, List, Optional, Any
from pydantic import BaseModel, Field, ConfigDict

from ..engine.matching import MatchingEngine
from .models import (
    GameConfig,
    GameStatus,
    HistoryRecord,
    ModeKind,
    SessionError,
    SnippetNotFoundError,
)
from .modes import GameMode, GuessLimitedMode, TimeAttackMode, PointMode
from .prompts import (
    build_display_lines,
    format_guess_result,
    format_too_short,
    SHOW_IDENTIFIER_TOKEN,
    ENABLE_FUZZY_TOKEN,
    IDENTIFIER_ENABLED_MESSAGE,
    FUZZY_ENABLED_MESSAGE,
)
from .repository import SnippetRepository

logger = logging.getLogger(__name__)


class Session(BaseModel):
    """
    One game of Code Wordle, from snippet draw to history record.

    The turn cycle is shared by all modes; the mode object decides the
    limits, the assist reveals, the end condition and the score.

    Attributes:
        mode: Mode policy (guess-limited, time-attack or point)
        repository: Snippet source
        rng: Random source for assist reveals
        clock: Monotonic clock in seconds, used by time-attack
        on_record: Called exactly once with the history record of the game
        fuzzy_allowed: Whether near-miss windows are evaluated
        show_identifier: Whether the snippet identifier is displayed
        identifier: Identifier of the snippet in play
        engine: Matching engine over the snippet in play
        guesses: Number of counted guesses
        status: Lifecycle state
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    mode: GameMode
    repository: SnippetRepository
    rng: random.Random = Field(default_factory=random.Random)
    clock: Callable[[], float] = time.monotonic
    on_record: Optional[Callable[[HistoryRecord], None]] = None
    fuzzy_allowed: bool = True
    show_identifier: bool = False
    identifier_format: str = "Problem: {identifier}"
    placeholder: str = "@"
    fuzzy_placeholder: str = "#"
    identifier: Optional[str] = None
    engine: Optional[MatchingEngine] = None
    guesses: int = 0
    status: GameStatus = "not_started"
    history_record: Optional[HistoryRecord] = None

    @classmethod
    def create(
        cls,
        kind: ModeKind,
        repository: SnippetRepository,
        config: Optional[GameConfig] = None,
        fuzzy_allowed: Optional[bool] = None,
        show_identifier: Optional[bool] = None,
        **session_kwargs: Any
    ) -> "Session":
        """
        Factory method to create a session for a game mode.

        Guess-limited and time-attack games start with fuzzy matching and
        identifier display enabled; point games start with both disabled.

        Args:
            kind: Game mode
            repository: Snippet source
            config: Game configuration (placeholders, scoring coefficients)
            fuzzy_allowed: Override the mode's default fuzzy setting
            show_identifier: Override the mode's default identifier setting
            **session_kwargs: Extra Session fields (rng, clock, on_record)

        Returns:
            A session in the not_started state

        Raises:
            pydantic.ValidationError: If the point coefficients are invalid
        """
        if config is None:
            config = GameConfig()

        if kind == "guess_limited":
            mode = GuessLimitedMode()
        elif kind == "time_attack":
            mode = TimeAttackMode()
        elif kind == "point":
            mode = PointMode(**config.point.model_dump())
        else:
            raise ValueError(f"Unknown game mode: {kind}")

        assisted = mode.has_losing_condition

        return cls(
            mode=mode,
            repository=repository,
            fuzzy_allowed=assisted if fuzzy_allowed is None else fuzzy_allowed,
            show_identifier=assisted if show_identifier is None else show_identifier,
            identifier_format=config.identifier_format,
            placeholder=config.placeholder,
            fuzzy_placeholder=config.fuzzy_placeholder,
            **session_kwargs
        )

    @property
    def is_active(self) -> bool:
        return self.status == "in_progress"

    @property
    def is_ended(self) -> bool:
        return self.status in ("won", "lost")

    def start(self) -> bool:
        """
        Draw a random snippet and begin the game.

        Returns:
            False if no snippet could be drawn (the session stays
            not_started), True once the game is in progress

        Raises:
            SessionError: If the session was already started
            OSError: If the drawn snippet cannot be read
        """
        if self.status != "not_started":
            raise SessionError(f"Session already {self.status}")

        identifier = self.repository.pick_random()
        if identifier is None:
            logger.warning("No snippets in %s", self.repository.root)
            return False

        try:
            lines = self.repository.load_lines(identifier)
        except SnippetNotFoundError:
            logger.warning("Snippet %s disappeared before it could be loaded", identifier)
            return False

        self.identifier = identifier
        self.engine = MatchingEngine.from_padded(lines)
        self.mode.setup(self.engine.total_guessable(), self.clock())
        self.status = "in_progress"

        logger.info(
            "Started %s game on snippet %s (%d characters)",
            self.mode.kind, identifier, self.engine.total_guessable()
        )
        return True

    def _require_active(self) -> None:
        if self.engine is None:
            raise SessionError("Session not started. Call start() first.")
        if self.is_ended:
            raise SessionError(f"Session already ended ({self.status})")

    def _reveal(self, times: int) -> None:
        if times > 0:
            self.engine.reveal(self.rng, times)
            logger.debug("Assist revealed %d character(s)", times)

    def poll(self) -> None:
        """Apply any assist reveals that came due since the last poll."""
        if self.is_active:
            self._reveal(self.mode.pending_reveals(self, self.clock()))

    def submit_guess(self, text: str) -> List[str]:
        """
        Process one line of player input.

        The tokens "P" and "F" enable identifier display and fuzzy matching
        (each only while it is off). Anything else is resolved as a guess;
        a guess below the minimum length is rejected without using a turn.

        Args:
            text: Raw input line

        Returns:
            Result messages to show the player
        """
        self._require_active()

        if not self.show_identifier and text == SHOW_IDENTIFIER_TOKEN:
            self.show_identifier = True
            return [IDENTIFIER_ENABLED_MESSAGE]

        if not self.fuzzy_allowed and text == ENABLE_FUZZY_TOKEN:
            self.fuzzy_allowed = True
            return [FUZZY_ENABLED_MESSAGE]

        result = self.engine.resolve(text, self.fuzzy_allowed)
        if result.is_too_short:
            return [format_too_short(self.engine.min_length)]

        self.guesses += 1
        self._reveal(self.mode.reveal_times(self, self.clock()))

        return [format_guess_result(result)]

    def is_over(self) -> bool:
        """True when the mode's limit is used up (never in point mode)."""
        if not self.is_active:
            return False
        self.poll()
        return self.mode.is_over(self, self.clock())

    def is_finished(self) -> bool:
        """True when every character of the snippet is revealed."""
        return self.engine is not None and self.engine.is_complete()

    def masked_view(
        self,
        placeholder: Optional[str] = None,
        fuzzy_placeholder: Optional[str] = None,
    ) -> List[str]:
        if self.engine is None:
            return []
        return self.engine.masked(
            placeholder or self.placeholder,
            fuzzy_placeholder or self.fuzzy_placeholder,
        )

    def identifier_line(self) -> Optional[str]:
        if not self.show_identifier or self.identifier is None:
            return None
        return self.identifier_format.format(identifier=self.identifier)

    def status_lines(self) -> List[str]:
        """Mode status: guesses used, time used or current points."""
        if self.engine is None:
            return []
        self.poll()
        return self.mode.status_lines(self, self.clock())

    def display_lines(self) -> List[str]:
        """Status, optional identifier, masked snippet and input instructions."""
        return build_display_lines(
            status_lines=self.status_lines(),
            masked=self.masked_view(),
            min_length=self.engine.min_length if self.engine else 0,
            assisted=self.mode.has_losing_condition,
            identifier_line=self.identifier_line(),
        )

    def _finish(self, won: bool) -> str:
        """Move to a terminal state and emit the history record."""
        self._require_active()

        now = self.clock()
        self.status = "won" if won else "lost"
        self.history_record = HistoryRecord(
            timestamp=datetime.now(),
            mode=self.mode.kind,
            mode_label=self.mode.label,
            identifier=self.identifier,
            summary=self.mode.summary(self, won, now),
            outcome=self.mode.outcome(self, won, now),
        )

        logger.info("Game on %s ended: %s", self.identifier, self.history_record.summary)
        if self.on_record:
            self.on_record(self.history_record)

        return self.mode.end_message(self, won, now)

    def win(self) -> str:
        """End the game as won and return the outcome message."""
        return self._finish(True)

    def resign(self) -> str:
        """
        End the game as lost and return the outcome message.

        Point mode has no losing condition, so resigning there records a win.
        """
        return self._finish(not self.mode.has_losing_condition)

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "mode": self.mode.kind,
            "status": self.status,
            "identifier": self.identifier,
            "guesses": self.guesses,
            "fuzzy_allowed": self.fuzzy_allowed,
            "show_identifier": self.show_identifier,
            "total": self.engine.total_guessable() if self.engine else 0,
            "guessed": self.engine.guessed_exact() if self.engine else 0,
        }
