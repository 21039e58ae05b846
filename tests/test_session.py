"""Test the game session state machine and the three game modes."""

import random

import pytest
from pydantic import ValidationError

from codewordle.engine import MatchingEngine
from codewordle.game import (
    Session,
    SessionError,
    SnippetRepository,
    GameConfig,
    PointConfig,
    PointMode,
    TimeAttackMode,
    guess_limit,
    time_limit,
)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def repo(tmp_path):
    return SnippetRepository(root=tmp_path / "snippets", rng=random.Random(0))


@pytest.fixture
def records():
    return []


def make_session(kind, repo, records, **kwargs):
    kwargs.setdefault("rng", random.Random(42))
    return Session.create(kind, repo, on_record=records.append, **kwargs)


class TestLimits:
    """Per-mode limit formulas."""

    def test_guess_limit_minimum(self):
        assert guess_limit(60) == 30
        assert guess_limit(0) == 30

    def test_guess_limit_large_snippet(self):
        assert guess_limit(300) == 105

    def test_time_limit_minimum(self):
        assert time_limit(60) == 60

    def test_time_limit_large_snippet(self):
        # 150 / 1.5 + 10 = 110
        assert time_limit(150) == 110
        # 100 / 1.5 + 10 = 76.67, truncated
        assert time_limit(100) == 76


class TestStart:
    """Starting a session."""

    def test_empty_repository(self, repo, records):
        """No snippets: start fails without changing state."""
        session = make_session("guess_limited", repo, records)
        assert session.start() is False
        assert session.status == "not_started"
        assert session.engine is None

    def test_start_loads_snippet(self, repo, records):
        repo.add("1001", ["int main() {", "}"])
        session = make_session("guess_limited", repo, records)
        assert session.start() is True
        assert session.status == "in_progress"
        assert session.identifier == "1001"
        assert session.engine.total_guessable() == 11

    def test_start_with_non_utf8_snippet(self, tmp_path, records):
        root = tmp_path / "latin1"
        root.mkdir()
        (root / "1.txt").write_bytes(b"int x; // caf\xe9\n")
        session = make_session("guess_limited", SnippetRepository(root=root), records)
        assert session.start() is True
        assert session.engine.total_guessable() == 11

    def test_start_twice_rejected(self, repo, records):
        repo.add("1", ["abc"])
        session = make_session("point", repo, records)
        session.start()
        with pytest.raises(SessionError):
            session.start()

    def test_guess_before_start_rejected(self, repo, records):
        session = make_session("point", repo, records)
        with pytest.raises(SessionError):
            session.submit_guess("abc")

    def test_mode_defaults(self, repo, records):
        """Assisted modes start with fuzzy and identifier on; point mode with both off."""
        guess = make_session("guess_limited", repo, records)
        timed = make_session("time_attack", repo, records)
        point = make_session("point", repo, records)
        assert guess.fuzzy_allowed and guess.show_identifier
        assert timed.fuzzy_allowed and timed.show_identifier
        assert not point.fuzzy_allowed and not point.show_identifier

    def test_unknown_mode(self, repo):
        with pytest.raises(ValueError):
            Session.create("sudden_death", repo)


class TestTurnCycle:
    """submit_guess behaviour common to all modes."""

    def test_too_short_does_not_use_turn(self, repo, records):
        repo.add("1", ["int main"])
        session = make_session("guess_limited", repo, records)
        session.start()
        messages = session.submit_guess("in")
        assert messages == ["Guess must be at least 3 chars"]
        assert session.guesses == 0

    def test_result_message(self, repo, records):
        repo.add("1", ["int x; int y;"])
        session = make_session("guess_limited", repo, records)
        session.start()
        assert session.submit_guess("int") == ["2 matches found, 0 fuzzy matches found."]
        assert session.guesses == 1

    def test_result_message_without_fuzzy(self, repo, records):
        repo.add("1", ["int x;"])
        session = make_session("point", repo, records)
        session.start()
        assert session.submit_guess("int") == ["1 matches found."]

    def test_toggle_tokens_in_point_mode(self, repo, records):
        """P and F enable assistance without using a turn."""
        repo.add("1", ["ine"])
        session = make_session("point", repo, records)
        session.start()

        assert session.submit_guess("P") == ["Problem ID showing enabled"]
        assert session.show_identifier
        assert session.submit_guess("F") == ["Fuzzy match enabled"]
        assert session.fuzzy_allowed
        assert session.guesses == 0

        # fuzzy matching now applies to guesses
        assert session.submit_guess("int") == ["0 matches found, 1 fuzzy matches found."]

    def test_toggle_tokens_ignored_when_already_on(self, repo, records):
        """With assistance already on, P is just a too-short guess."""
        repo.add("1", ["abc"])
        session = make_session("guess_limited", repo, records)
        session.start()
        assert session.submit_guess("P") == ["Guess must be at least 3 chars"]

    def test_identifier_line(self, repo, records):
        repo.add("P1001", ["abc"])
        session = make_session("guess_limited", repo, records, config=GameConfig(identifier_format="Problem: {identifier}"))
        session.start()
        assert "Problem: P1001" in session.display_lines()

    def test_display_lines(self, repo, records):
        repo.add("1", ["abc"])
        session = make_session("point", repo, records)
        session.start()
        lines = session.display_lines()
        assert lines[0].startswith("Points: ")
        assert "@@@  " in lines
        assert any("show the problem ID" in line for line in lines)

    def test_is_finished(self, repo, records):
        repo.add("1", ["abc", "def"])
        session = make_session("guess_limited", repo, records)
        session.start()
        session.submit_guess("abc")
        assert not session.is_finished()
        session.submit_guess("def")
        assert session.is_finished()


class TestGuessLimited:
    """Guess-limited mode."""

    def test_terminates_after_limit(self, repo, records):
        """60 guessable characters give 30 guesses; the 30th ends the game."""
        repo.add("1", ["a" * 60])
        session = make_session("guess_limited", repo, records)
        session.start()
        assert session.mode.max_guesses == 30

        for _ in range(29):
            session.submit_guess("zzz")
        assert not session.is_over()

        session.submit_guess("zzz")
        assert session.is_over()
        assert not session.is_finished()

    def test_assist_every_fifth_guess(self, repo, records):
        repo.add("1", ["abcdefghij"])
        session = make_session("guess_limited", repo, records)
        session.start()

        for _ in range(4):
            session.submit_guess("zzz")
        assert session.engine.guessed_exact() == 0

        session.submit_guess("zzz")
        assert session.engine.guessed_exact() == 1

        for _ in range(5):
            session.submit_guess("zzz")
        assert session.engine.guessed_exact() == 2

    def test_rejected_guesses_do_not_trigger_assist(self, repo, records):
        repo.add("1", ["abcdefghij"])
        session = make_session("guess_limited", repo, records)
        session.start()
        for _ in range(10):
            session.submit_guess("zz")
        assert session.engine.guessed_exact() == 0

    def test_lose_record(self, repo, records):
        repo.add("7", ["abcdefghij"])
        session = make_session("guess_limited", repo, records)
        session.start()
        session.submit_guess("zzz")
        message = session.resign()

        assert message == "You lose. You have used 1 guesses."
        assert session.status == "lost"
        assert len(records) == 1
        record = records[0]
        assert record.mode == "guess_limited"
        assert record.mode_label == "Limited Guesses"
        assert record.identifier == "7"
        assert record.summary == "guesses: 1/30 Lose"
        assert record.outcome == 0

    def test_win_record(self, repo, records):
        repo.add("7", ["abc"])
        session = make_session("guess_limited", repo, records)
        session.start()
        session.submit_guess("abc")
        assert session.win() == "You win! You only used 1 guesses!"
        assert session.status == "won"
        assert records[0].outcome == 1
        assert records[0].summary == "guesses: 1/30 Win"


class TestTimeAttack:
    """Time-attack mode with a controlled clock."""

    def test_catch_up_reveal(self, repo, records):
        """25 idle seconds reveal two characters and advance the assist clock by 20."""
        repo.add("1", ["abcdefghij"])
        clock = FakeClock()
        session = make_session("time_attack", repo, records, clock=clock)
        session.start()
        start = clock.now

        clock.advance(25)
        assert not session.is_over()
        assert session.engine.guessed_exact() == 2
        assert session.mode.last_reveal_time == start + 20

        # the leftover 5 seconds carry over
        clock.advance(5)
        session.poll()
        assert session.engine.guessed_exact() == 3

    def test_no_reveal_before_interval(self, repo, records):
        repo.add("1", ["abcdefghij"])
        clock = FakeClock()
        session = make_session("time_attack", repo, records, clock=clock)
        session.start()
        clock.advance(9.9)
        session.poll()
        assert session.engine.guessed_exact() == 0

    def test_reveal_on_guess(self, repo, records):
        repo.add("1", ["abcdefghij"])
        clock = FakeClock()
        session = make_session("time_attack", repo, records, clock=clock)
        session.start()
        clock.advance(10)
        session.submit_guess("zzz")
        assert session.engine.guessed_exact() == 1

    def test_time_limit(self, repo, records):
        repo.add("1", ["abcdefghij"])
        clock = FakeClock()
        session = make_session("time_attack", repo, records, clock=clock)
        session.start()
        assert session.mode.max_seconds == 60

        clock.advance(59.5)
        assert not session.is_over()
        assert session.status_lines() == ["Time: 59s/60s"]

        clock.advance(0.5)
        assert session.is_over()

    def test_lose_message_and_record(self, repo, records):
        repo.add("3", ["abcdefghij"])
        clock = FakeClock()
        session = make_session("time_attack", repo, records, clock=clock)
        session.start()
        clock.advance(61)
        assert session.is_over()
        assert session.resign() == "You lose. You have used 61 seconds."
        assert records[0].summary == "time: 61s/60s Lose"
        assert records[0].mode_label == "Time Attack"


class TestPointMode:
    """Point scoring."""

    def make_point_session(self, repo, records, **mode_kwargs):
        session = make_session("point", repo, records)
        session.mode = PointMode(**mode_kwargs)
        session.engine = MatchingEngine.from_lines(["x" * 100])
        session.identifier = "p"
        session.status = "in_progress"
        session.mode.setup(session.engine.total_guessable(), 0.0)
        return session

    def test_full_completion_formula(self, repo, records):
        """500 * 100^2 / 100 - 100 * 10 = 49000, times 1.5 for completion."""
        session = self.make_point_session(repo, records)
        session.engine.grid.mark_exact(0, 0, 100)
        session.guesses = 10
        assert session.mode.points(session) == pytest.approx(73500)

    def test_partial_score(self, repo, records):
        session = self.make_point_session(repo, records)
        session.engine.grid.mark_exact(0, 0, 50)
        session.guesses = 5
        # 500 * 2500 / 100 - 500
        assert session.mode.points(session) == pytest.approx(12000)

    def test_assistance_penalties(self, repo, records):
        session = self.make_point_session(repo, records)
        session.engine.grid.mark_exact(0, 0, 50)
        session.show_identifier = True
        session.fuzzy_allowed = True
        assert session.mode.points(session) == pytest.approx(12500 * 0.5 * 0.8)

    def test_negative_score_recorded_as_win(self, repo, records):
        session = self.make_point_session(repo, records)
        session.guesses = 3
        message = session.resign()
        assert session.status == "won"
        assert message == "You achieved -300.000000 points!"
        assert records[0].outcome == pytest.approx(-300)
        assert records[0].summary == "points: -300.000000 Win"

    def test_never_over(self, repo, records):
        session = self.make_point_session(repo, records)
        session.guesses = 10_000
        assert not session.is_over()

    def test_invalid_coefficients(self):
        with pytest.raises(ValidationError):
            PointMode(guess_penalty=0)
        with pytest.raises(ValidationError):
            PointMode(point_factor=-1)
        with pytest.raises(ValidationError):
            PointConfig(reward_factor=0.99)

    def test_config_coefficients_used(self, repo, records):
        config = GameConfig(point=PointConfig(guess_penalty=1, point_factor=2, reward_factor=3))
        session = make_session("point", repo, records, config=config)
        assert session.mode.guess_penalty == 1
        assert session.mode.point_factor == 2
        assert session.mode.reward_factor == 3


class TestHistoryEmission:
    """Exactly one history record per session."""

    def test_second_end_rejected(self, repo, records):
        repo.add("1", ["abc"])
        session = make_session("guess_limited", repo, records)
        session.start()
        session.submit_guess("abc")
        session.win()
        with pytest.raises(SessionError):
            session.resign()
        with pytest.raises(SessionError):
            session.win()
        assert len(records) == 1

    def test_no_guesses_after_end(self, repo, records):
        repo.add("1", ["abc"])
        session = make_session("guess_limited", repo, records)
        session.start()
        session.resign()
        with pytest.raises(SessionError):
            session.submit_guess("abc")

    def test_end_before_start_rejected(self, repo, records):
        session = make_session("guess_limited", repo, records)
        with pytest.raises(SessionError):
            session.resign()
        assert records == []

    def test_state_snapshot(self, repo, records):
        repo.add("9", ["abc"])
        session = make_session("guess_limited", repo, records)
        session.start()
        session.submit_guess("abc")
        state = session.get_state()
        assert state["identifier"] == "9"
        assert state["guesses"] == 1
        assert state["guessed"] == state["total"] == 3
