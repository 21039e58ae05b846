"""
Console driver for Code Wordle.

Runs the game loop and the menu pages on top of a Session, printing
through an injectable output function and reading through an injectable
input function.
"""

import random
from typing import Callable, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .autoguess import AutoGuess
from .models import GameConfig, HistoryRecord, ModeKind
from .prompts import get_rules, RESIGN_TOKEN, AUTO_GUESS_TOKEN
from .repository import SnippetRepository
from .session import Session
from .statistics import StatisticsRepository

CLEAR_SCREEN = "\x1b[2J\x1b[H\x1b[3J"
END_OF_INPUT = "END"

MODE_KEYS = {
    "G": "guess_limited",
    "T": "time_attack",
    "P": "point",
}


class Console(BaseModel):
    """
    Text front end: game loop, rules, snippet management and statistics.

    Attributes:
        repository: Snippet store
        statistics: Statistics store, saved after every game
        config: Game configuration
        rng: Shared random source for snippet draws, reveals and hints
        input_fn: Reads one line of player input
        output_fn: Prints one line
        interactive: Clear the screen and pause between pages
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    repository: SnippetRepository
    statistics: StatisticsRepository
    config: GameConfig = Field(default_factory=GameConfig)
    rng: random.Random = Field(default_factory=random.Random)
    input_fn: Callable[[str], str] = input
    output_fn: Callable[[str], None] = print
    interactive: bool = True

    @classmethod
    def create(cls, config: GameConfig, **kwargs) -> "Console":
        """
        Factory method to build the console and its stores from a config.

        One random generator, seeded from the config, is shared by the
        repository and every session.
        """
        rng = random.Random(config.seed)
        repository = SnippetRepository(root=config.snippet_dir, rng=rng)
        statistics = StatisticsRepository(path=config.statistics_path)
        return cls(repository=repository, statistics=statistics, config=config, rng=rng, **kwargs)

    def print_lines(self, lines: List[str]) -> None:
        for line in lines:
            self.output_fn(line)

    def clear_screen(self) -> None:
        if self.interactive:
            self.output_fn(CLEAR_SCREEN)

    def pause(self) -> None:
        if self.interactive:
            self.output_fn("\n--Enter anything to get back--")
            self.read_line()

    def read_line(self, prompt: str = "") -> Optional[str]:
        """Read one line, or None at end of input."""
        try:
            return self.input_fn(prompt)
        except EOFError:
            return None

    def new_session(self, kind: ModeKind, **kwargs) -> Session:
        return Session.create(
            kind,
            self.repository,
            config=self.config,
            rng=self.rng,
            on_record=self.statistics.record,
            **kwargs
        )

    def play(self, kind: ModeKind, **session_kwargs) -> Optional[HistoryRecord]:
        """
        Run one game until it is won, lost or abandoned.

        Each round shows the screen, ends the game if the limit is used up
        (loss) or the snippet is complete (win), then reads a line: "E"
        resigns, "A" shows an auto guess, anything else is a guess.

        Returns:
            The history record of the game, or None if no snippet was available
        """
        session = self.new_session(kind, **session_kwargs)
        if not session.start():
            self.output_fn("There's no codesnippets")
            return None

        hints = AutoGuess(rng=self.rng)
        messages: List[str] = []

        while True:
            self.clear_screen()
            self.print_lines(session.display_lines())
            self.print_lines(messages)

            if session.is_over():
                self.output_fn(session.resign())
                break

            if session.is_finished():
                self.output_fn(session.win())
                break

            guess = self.read_line()

            if guess is None or guess == RESIGN_TOKEN:
                self.output_fn(session.resign())
                break

            if guess == AUTO_GUESS_TOKEN:
                messages = [hints.guess(session.masked_view())]
                continue

            messages = session.submit_guess(guess)

        self.statistics.save()
        self.pause()
        return session.history_record

    def show_rules(self) -> None:
        self.clear_screen()
        self.print_lines(get_rules().splitlines())
        self.pause()

    def list_snippets(self) -> List[str]:
        ids = self.repository.list()
        if not ids:
            self.output_fn("No codesnippets")
        self.print_lines(ids)
        return ids

    def read_snippet(self, identifier: str) -> Optional[str]:
        data = self.repository.read(identifier)
        if data is None:
            self.output_fn("Code not found")
        else:
            self.output_fn(data)
        return data

    def add_snippet(self, identifier: str, lines: List[str]) -> None:
        """Store a snippet; empty snippets are refused."""
        if not any(line.strip() for line in lines):
            self.output_fn("Code snippet is empty, nothing stored")
            return
        self.repository.add(identifier, lines)
        self.output_fn(f"Code #{identifier} stored")

    def read_snippet_lines(self) -> List[str]:
        """Read snippet lines from input up to an "END" line or end of input."""
        self.output_fn(f"Enter the code, end with entering \"{END_OF_INPUT}\"")
        lines: List[str] = []
        while True:
            line = self.read_line()
            if line is None or line == END_OF_INPUT:
                return lines
            lines.append(line)

    def remove_snippet(self, identifier: str) -> bool:
        removed = self.repository.remove(identifier)
        if removed:
            self.output_fn(f"Code #{identifier} removed")
        else:
            self.output_fn("Code not found")
        return removed

    def show_statistics(self) -> None:
        self.clear_screen()
        self.print_lines(self.statistics.summary_lines())
        self.pause()

    def code_page(self) -> None:
        """Snippet management menu."""
        while True:
            self.clear_screen()
            self.print_lines(["Code Repo", "List(L)", "Read(R)", "Add/Edit(A)", "Remove(M)", "Back(B)"])

            op = self.read_line()
            if op is None or op.strip().upper() == "B":
                return

            op = op.strip().upper()
            self.clear_screen()

            if op == "L":
                self.list_snippets()
                self.pause()
            elif op == "R":
                self.read_snippet(self.read_line("Enter the code ID to read: ") or "")
                self.pause()
            elif op == "A":
                identifier = self.read_line("Enter the code ID: ") or ""
                self.add_snippet(identifier, self.read_snippet_lines())
            elif op == "M":
                self.remove_snippet(self.read_line("Enter the code ID: ") or "")
                self.pause()

    def game_page(self) -> Optional[HistoryRecord]:
        """Mode selection menu followed by one game."""
        self.clear_screen()
        self.print_lines(["Game Mode:", "Limited Guesses(G)", "Time Attack(T)", "Point(P)"])

        op = self.read_line()
        kind = MODE_KEYS.get((op or "").strip().upper())
        if kind is None:
            return None
        return self.play(kind)

    def mainloop(self) -> None:
        """Main menu; returns when the player exits or input ends."""
        while True:
            self.clear_screen()
            self.print_lines(["Play(P)", "Rule(R)", "Code(C)", "Stats(S)", "Exit(E)"])

            op = self.read_line()
            if op is None:
                return

            op = op.strip().upper()
            if op == "P":
                self.game_page()
            elif op == "R":
                self.show_rules()
            elif op == "C":
                self.code_page()
            elif op == "S":
                self.show_statistics()
            elif op == "E":
                return
