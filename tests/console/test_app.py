"""Tests for the console prompts and game loop."""

import importlib.util

import pytest
from decimal import Decimal

from config import AppConfig, DisplayConfig, GameConfig
from console_ui import prompts
from console_ui.app import ConsoleGame, build_engine
from core.game import GameState


class ScriptedInput:
    """Feeds prepared answers, then behaves like a closed stdin."""

    def __init__(self, *lines: str) -> None:
        self._lines = list(lines)

    def __call__(self) -> str:
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)


@pytest.fixture
def output():
    return []


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def console(stacked_engine, output, sleeps):
    """Factory building a console game over stacked cards."""

    def _console(*cards, answers=(), balance=10, delay=2.0):
        engine = stacked_engine(*cards, balance=balance)
        return ConsoleGame(
            engine,
            display=DisplayConfig(draw_delay=delay, cards_per_row=6, color=False),
            read=ScriptedInput(*answers),
            write=output.append,
            sleep=sleeps.append,
        )

    return _console


class TestPrompts:
    """Tests for the input loops."""

    def test_choice_is_case_insensitive(self, output):
        """Test upper and lower case letters are accepted."""
        assert prompts.ask_hit_or_stand(ScriptedInput("H"), output.append) == "hit"
        assert prompts.ask_hit_or_stand(ScriptedInput("s"), output.append) == "stand"
        assert prompts.ask_start_or_quit(ScriptedInput("Q"), output.append) == "quit"

    def test_choice_retries_without_limit(self, output):
        """Test anything else is rejected and asked again."""
        read = ScriptedInput("x", "hit", "", "stand", "S")
        assert prompts.ask_hit_or_stand(read, output.append) == "stand"
        assert sum("Invalid input" in line for line in output) == 4

    def test_choice_propagates_eof(self, output):
        """Test a closed input stream is not swallowed."""
        with pytest.raises(EOFError):
            prompts.ask_start_or_quit(ScriptedInput(), output.append)

    def test_bet_reprompts(self, output):
        """Test invalid bets are explained and asked again."""
        read = ScriptedInput("10", "-3", "abc", "0", "4")
        assert prompts.ask_bet(read, output.append, Decimal("5")) == 4

        text = "\n".join(output)
        assert "YOUR BALANCE: 5" in text
        assert "do not have enough money" in text
        assert text.count("not a whole number") == 2
        assert "below the minimum bet of 1" in text
        assert text.count("Please place your bet") == 5


class TestConsoleGame:
    """Tests for whole console sessions."""

    def test_blackjack_session(self, console, output, sleeps):
        """Test a natural pays out and the player then quits."""
        game = console("10C", "AS", "KH", "7D", answers=("s", "4", "q"))
        assert game.run() == 0

        text = "\n".join(output)
        assert "BLACKJACK!" in text
        assert "Your balance is now: 16" in text
        assert "Goodbye!" in text
        # one pause per revealed card
        assert sleeps == [2.0, 2.0, 2.0, 2.0]
        assert game.engine.state == GameState.GAME_OVER

    def test_hit_and_stand_loop(self, console, output):
        """Test bad letters are re-asked during the player's turn."""
        game = console("9C", "5S", "6H", "4D", "8S", answers=("s", "2", "x", "h", "s", "q"))
        game.run()

        text = "\n".join(output)
        assert "Invalid input, please try again. Enter 'h' to hit" in text
        assert game.engine.player_total == 15
        assert game.engine.dealer_total == 17
        assert "You lost your bet. Your balance is now: 8" in text

    def test_push_message(self, console, output):
        """Test a tie returns the bet."""
        game = console("5C", "KS", "QH", "5D", "KH", answers=("s", "3", "s", "q"))
        game.run()
        assert "It's a tie. No one won. Your bet has been returned. Your balance is now: 10" in "\n".join(output)

    def test_dealer_blackjack_message(self, console, output):
        """Test a dealer natural is reported as a loss."""
        game = console("AD", "7S", "7H", "7C", "10S", answers=("s", "5", "h", "q"))
        game.run()

        text = "\n".join(output)
        assert "Dealer has BLACKJACK!" in text
        assert "You lost your bet. Your balance is now: 5" in text

    def test_bankrupt_ends_without_prompt(self, console, output):
        """Test running out of money ends the session."""
        game = console("9C", "KS", "QH", "5C", "8D", answers=("s", "2", "h"), balance=2)
        assert game.run() == 0

        text = "\n".join(output)
        assert "The game is over." in text
        assert "start a new round" not in text
        assert game.engine.is_over

    def test_several_rounds(self, console, output):
        """Test balance carries into the next round and the summary is shown."""
        game = console(
            "6S", "10H", "8D", "10C", "9S",
            "10C", "9S", "8H", "KD",
            answers=("s", "2", "s", "S", "3", "s", "q"),
        )
        game.run()

        text = "\n".join(output)
        assert "Your bet has been doubled! Your balance is now: 12" in text
        assert "YOUR BALANCE: 12" in text
        assert "Rounds played: 2" in text
        assert game.engine.balance == Decimal("9")

    def test_quit_immediately(self, console, output):
        """Test quitting from the welcome prompt."""
        game = console(answers=("q",))
        assert game.run() == 0
        assert "Rounds played" not in "\n".join(output)
        assert output[-1] == "Thank you for playing Casino++ Blackjack. Goodbye!"

    def test_closed_input_quits_cleanly(self, console, output):
        """Test end of input mid-round exits with code 0."""
        game = console("9C", "5S", "6H", answers=("s", "1"))
        assert game.run() == 0
        assert game.engine.is_over
        assert output[-1].endswith("Goodbye!")

    def test_no_pause_when_disabled(self, console, sleeps):
        """Test a zero delay never sleeps."""
        game = console("10C", "AS", "KH", "7D", answers=("s", "1", "q"), delay=0)
        game.run()
        assert sleeps == []


class TestBuildEngine:
    """Tests for wiring configuration into the engine."""

    def test_seeded_engines_match(self):
        """Test the same seed deals the same cards."""
        config = AppConfig(
            log_level="WARNING",
            game=GameConfig(starting_balance=50, seed=99),
            display=DisplayConfig(draw_delay=0, cards_per_row=6, color=False),
        )
        first = build_engine(config)
        second = build_engine(config)
        first.bet(1)
        second.bet(1)

        assert first.balance == second.balance
        assert first.player_cards == second.player_cards
        assert first.dealer_cards == second.dealer_cards


class TestEntryPoint:
    """Tests for launching the console game."""

    def test_runnable_as_module(self):
        """Test ``python -m console_ui`` resolves to a main module."""
        found = importlib.util.find_spec("console_ui.__main__")
        assert found is not None
        assert found.origin.endswith("__main__.py")

