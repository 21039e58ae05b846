"""
Persistent game statistics.

The statistics file starts with a fixed little-endian binary header holding
the aggregate counters (six int32 values followed by one float64), followed
by one formatted text line per finished game in the order they were played.
"""

import logging
import struct
from pathlib import Path
from typing import List
from pydantic import BaseModel, ConfigDict, Field

from .models import HistoryRecord

logger = logging.getLogger(__name__)

HEADER = struct.Struct('<6id')

# Column widths of a history line
TIME_WIDTH = 26
MODE_WIDTH = 18
IDENTIFIER_WIDTH = 7


def format_timestamp(record: HistoryRecord) -> str:
    """ctime-style timestamp, e.g. 'Tue May 13 17:21:15 2025 '."""
    return record.timestamp.ctime() + ' '


def format_history_line(record: HistoryRecord) -> str:
    """Render a history record as one fixed-column line."""
    return (
        f"{format_timestamp(record):<{TIME_WIDTH}}"
        f"{record.mode_label:<{MODE_WIDTH}}"
        f"{record.identifier:<{IDENTIFIER_WIDTH}}"
        f"{record.summary}"
    )


class StatisticsCounters(BaseModel):
    """Aggregate counters stored in the binary header."""
    total_games: int = 0
    guess_limited_games: int = 0
    time_attack_games: int = 0
    point_games: int = 0
    guess_limited_wins: int = 0
    time_attack_wins: int = 0
    total_points: float = 0.0

    def pack(self) -> bytes:
        return HEADER.pack(
            self.total_games,
            self.guess_limited_games,
            self.time_attack_games,
            self.point_games,
            self.guess_limited_wins,
            self.time_attack_wins,
            self.total_points,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "StatisticsCounters":
        values = HEADER.unpack(data[:HEADER.size])
        return cls(
            total_games=values[0],
            guess_limited_games=values[1],
            time_attack_games=values[2],
            point_games=values[3],
            guess_limited_wins=values[4],
            time_attack_wins=values[5],
            total_points=values[6],
        )

    @property
    def average_points(self) -> float:
        if self.point_games == 0:
            return 0.0
        return self.total_points / self.point_games


class StatisticsRepository(BaseModel):
    """
    Append-only game history plus aggregate counters, backed by one file.

    The file is created on first use. Records are kept in memory until
    `save()` is called.

    Attributes:
        path: Location of the statistics file
        counters: Aggregate counters
        history: Formatted history lines, oldest first
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    path: Path
    counters: StatisticsCounters = Field(default_factory=StatisticsCounters)
    history: List[str] = Field(default_factory=list)

    def model_post_init(self, __context) -> None:
        """Create the statistics file if needed, then load it."""
        if not self.path.exists():
            logger.info("Creating statistics file %s", self.path)
            self.save()
        self.load()

    def load(self) -> None:
        """
        Read counters and history from disk.

        Raises:
            ValueError: If the file is too short to hold the counters
        """
        data = self.path.read_bytes()
        if len(data) < HEADER.size:
            raise ValueError(
                f"Statistics file {self.path} is truncated "
                f"({len(data)} bytes, need at least {HEADER.size})"
            )

        self.counters = StatisticsCounters.unpack(data)
        self.history = data[HEADER.size:].decode('utf-8').splitlines()

    def save(self) -> None:
        """Write counters and history to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        body = ''.join(line + '\n' for line in self.history)
        with open(self.path, 'wb') as f:
            f.write(self.counters.pack())
            f.write(body.encode('utf-8'))

    def record(self, record: HistoryRecord) -> None:
        """
        Add a finished game to the counters and the history.

        Args:
            record: The history record; its outcome is 1/0 for
                guess-limited and time-attack games, points for point games
        """
        counters = self.counters
        if record.mode == "guess_limited":
            counters.guess_limited_games += 1
            counters.guess_limited_wins += int(record.outcome)
        elif record.mode == "time_attack":
            counters.time_attack_games += 1
            counters.time_attack_wins += int(record.outcome)
        elif record.mode == "point":
            counters.point_games += 1
            counters.total_points += record.outcome

        counters.total_games += 1
        self.history.append(format_history_line(record))
        logger.info("Recorded %s game on %s: %s", record.mode, record.identifier, record.summary)

    def summary_lines(self) -> List[str]:
        """Counters followed by the history, newest game first."""
        c = self.counters
        lines = [
            f"Total Games: {c.total_games}",
            f"Guess Limited Games: {c.guess_limited_wins}/{c.guess_limited_games}",
            f"Time Attack Games: {c.time_attack_wins}/{c.time_attack_games}",
            f"Point Games: {c.point_games}",
            f"Average Points: {c.average_points:.6f}",
            f"Total Points: {c.total_points:.6f}",
            "\n==========Game History==========\n",
        ]
        lines.extend(reversed(self.history))
        return lines
