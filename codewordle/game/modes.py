from typing import Annotated, ClassVar, List, Literal, Union, TYPE_CHECKING
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from .session import Session


# Guess-limited mode
MIN_GUESSES = 30
REVEAL_EVERY_GUESSES = 5

# Time-attack mode
MIN_SECONDS = 60
REVEAL_EVERY_SECONDS = 10

# Point mode multipliers
SHOW_IDENTIFIER_PENALTY = 0.5
FUZZY_PENALTY = 0.8


def guess_limit(total: int) -> int:
    """Number of guesses allowed for a snippet with `total` guessable characters."""
    return max(total // 3 + 5, MIN_GUESSES)


def time_limit(total: int) -> int:
    """Seconds allowed for a snippet with `total` guessable characters."""
    return int(max(total / 1.5 + 10, float(MIN_SECONDS)))


def win_label(won: bool) -> str:
    return "Win" if won else "Lose"


class GuessLimitedMode(BaseModel):
    """
    Limited Guesses: finish the snippet within a guess budget.

    One random character is revealed every 5th counted guess.
    """

    kind: Literal["guess_limited"] = "guess_limited"
    label: ClassVar[str] = "Limited Guesses"
    has_losing_condition: ClassVar[bool] = True

    max_guesses: int = 0

    def setup(self, total: int, now: float) -> None:
        self.max_guesses = guess_limit(total)

    def reveal_times(self, session: "Session", now: float) -> int:
        return 1 if session.guesses % REVEAL_EVERY_GUESSES == 0 else 0

    def pending_reveals(self, session: "Session", now: float) -> int:
        return 0

    def is_over(self, session: "Session", now: float) -> bool:
        return session.guesses >= self.max_guesses

    def status_lines(self, session: "Session", now: float) -> List[str]:
        return [f"Guesses: {session.guesses}/{self.max_guesses}"]

    def outcome(self, session: "Session", won: bool, now: float) -> float:
        return 1.0 if won else 0.0

    def summary(self, session: "Session", won: bool, now: float) -> str:
        return f"guesses: {session.guesses}/{self.max_guesses} {win_label(won)}"

    def end_message(self, session: "Session", won: bool, now: float) -> str:
        if won:
            return f"You win! You only used {session.guesses} guesses!"
        return f"You lose. You have used {session.guesses} guesses."


class TimeAttackMode(BaseModel):
    """
    Time Attack: finish the snippet before the clock runs out.

    One random character is revealed for every 10 seconds elapsed. Reveals
    are computed whenever the session is polled, so a slow poll catches up
    with several reveals at once instead of losing them.
    """

    kind: Literal["time_attack"] = "time_attack"
    label: ClassVar[str] = "Time Attack"
    has_losing_condition: ClassVar[bool] = True

    max_seconds: int = 0
    start_time: float = 0.0
    last_reveal_time: float = 0.0

    def setup(self, total: int, now: float) -> None:
        self.max_seconds = time_limit(total)
        self.start_time = now
        self.last_reveal_time = now

    def elapsed(self, now: float) -> int:
        """Whole seconds since the game started."""
        return int(now - self.start_time)

    def reveal_times(self, session: "Session", now: float) -> int:
        # Only whole intervals are consumed; the remainder carries over
        count = int(now - self.last_reveal_time) // REVEAL_EVERY_SECONDS
        self.last_reveal_time += REVEAL_EVERY_SECONDS * count
        return count

    def pending_reveals(self, session: "Session", now: float) -> int:
        return self.reveal_times(session, now)

    def is_over(self, session: "Session", now: float) -> bool:
        return self.elapsed(now) >= self.max_seconds

    def status_lines(self, session: "Session", now: float) -> List[str]:
        return [f"Time: {self.elapsed(now)}s/{self.max_seconds}s"]

    def outcome(self, session: "Session", won: bool, now: float) -> float:
        return 1.0 if won else 0.0

    def summary(self, session: "Session", won: bool, now: float) -> str:
        return f"time: {self.elapsed(now)}s/{self.max_seconds}s {win_label(won)}"

    def end_message(self, session: "Session", won: bool, now: float) -> str:
        if won:
            return f"You win! You only used {self.elapsed(now)} seconds!"
        return f"You lose. You have used {self.elapsed(now)} seconds."


class PointMode(BaseModel):
    """
    Point: open-ended play scored on revealed characters against guesses.

    points = point_factor * guessed^2 / total - guess_penalty * guesses,
    halved if the snippet identifier was shown, times 0.8 if fuzzy matching
    was enabled, and times reward_factor when the snippet is complete.
    There is no losing condition; negative scores are still a "Win".
    """

    kind: Literal["point"] = "point"
    label: ClassVar[str] = "Point"
    has_losing_condition: ClassVar[bool] = False

    guess_penalty: float = Field(default=100.0, gt=0)
    point_factor: float = Field(default=500.0, gt=0)
    reward_factor: float = Field(default=1.5, ge=1.0)
    total: int = 0

    def setup(self, total: int, now: float) -> None:
        self.total = total

    def points(self, session: "Session") -> float:
        guessed = session.engine.guessed_exact()

        points = -self.guess_penalty * session.guesses
        if self.total:
            points += self.point_factor * guessed * guessed / self.total

        if session.show_identifier:
            points *= SHOW_IDENTIFIER_PENALTY

        if session.fuzzy_allowed:
            points *= FUZZY_PENALTY

        if guessed == self.total:
            points *= self.reward_factor

        return points

    def reveal_times(self, session: "Session", now: float) -> int:
        return 0

    def pending_reveals(self, session: "Session", now: float) -> int:
        return 0

    def is_over(self, session: "Session", now: float) -> bool:
        return False

    def status_lines(self, session: "Session", now: float) -> List[str]:
        return [f"Points: {self.points(session):.6f}"]

    def outcome(self, session: "Session", won: bool, now: float) -> float:
        return self.points(session)

    def summary(self, session: "Session", won: bool, now: float) -> str:
        return f"points: {self.points(session):.6f} {win_label(won)}"

    def end_message(self, session: "Session", won: bool, now: float) -> str:
        return f"You achieved {self.points(session):.6f} points!"


GameMode = Annotated[
    Union[GuessLimitedMode, TimeAttackMode, PointMode],
    Field(discriminator="kind"),
]
