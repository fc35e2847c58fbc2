"""Console driver: prompts, renders and paces a RoundEngine."""

import logging
import time
from random import Random
from typing import Callable

from rich.console import Console
from rich.logging import RichHandler

from config import AppConfig, DisplayConfig, load_config
from core.cards import RandomCardSource
from core.game.engine import RoundEngine
from core.game.events import EventType, GameEvent
from core.game.state import GameState
from console_ui import prompts
from console_ui.render import (
    LOST_BANNER,
    TITLE_BANNER,
    WON_BANNER,
    console_writer,
    format_money,
    render_table,
)

logger = logging.getLogger(__name__)


class ConsoleGame:
    """
    Interactive game loop around a RoundEngine.

    All I/O goes through ``read``, ``write`` and ``sleep`` so the loop
    can be driven from tests without a terminal or real pauses.
    """

    def __init__(
        self,
        engine: RoundEngine,
        display: DisplayConfig | None = None,
        read: prompts.Reader = input,
        write: prompts.Writer | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.engine = engine
        self.display = display or DisplayConfig()
        self._read = read
        self._write = write or console_writer()
        self._sleep = sleep

        engine.subscribe(self._on_card_dealt, EventType.CARD_DEALT)

    def _on_card_dealt(self, event: GameEvent) -> None:
        self.show_table()
        self.pause()

    def pause(self) -> None:
        """Give the player time to take in a newly revealed card."""
        if self.display.draw_delay > 0:
            self._sleep(self.display.draw_delay)

    def show_table(self) -> None:
        engine = self.engine
        self._write(
            render_table(
                engine.dealer_cards,
                engine.dealer_total,
                engine.player_cards,
                engine.player_total,
                engine.balance,
                engine.current_bet,
                per_row=self.display.cards_per_row,
                color=self.display.color,
            )
        )

    def run(self) -> int:
        """Play until the player quits or runs out of money. Returns the exit code."""
        self._write("\nWelcome to:")
        self._write(TITLE_BANNER)

        try:
            choice = prompts.ask_start_or_quit(self._read, self._write)
            while choice == "start":
                self.play_round()
                if self.engine.is_over:
                    break
                choice = prompts.ask_start_or_quit(self._read, self._write, new_round=True)
                if choice == "start":
                    self.engine.start_new_round()
        except (EOFError, KeyboardInterrupt):
            logger.debug("Input closed, leaving the table")
            self._write("")

        self.engine.quit()
        self.show_summary()
        self._write("Thank you for playing Casino++ Blackjack. Goodbye!")
        return 0

    def play_round(self) -> None:
        """Take a bet, run the player's turn and report the result."""
        engine = self.engine
        amount = prompts.ask_bet(self._read, self._write, engine.balance)
        engine.bet(amount)

        while engine.state == GameState.PLAYER_TURN:
            if prompts.ask_hit_or_stand(self._read, self._write) == "hit":
                engine.hit()
            else:
                engine.stand()

        self.show_result()

    def show_result(self) -> None:
        result = self.engine.last_result
        if result is None:
            return

        balance = format_money(result.balance)
        outcome = result.outcome
        if outcome.player_won and outcome.blackjack:
            self._write("BLACKJACK!")
            self._write(WON_BANNER)
            self._write(
                "Your payout is one and a half times your bet, plus your initial bet! "
                f"Your balance is now: {balance}\n"
            )
        elif outcome.player_won:
            self._write(WON_BANNER)
            self._write(f"Your bet has been doubled! Your balance is now: {balance}\n")
        elif outcome.dealer_won:
            if outcome.blackjack:
                self._write("Dealer has BLACKJACK!")
            self._write(LOST_BANNER)
            self._write(f"You lost your bet. Your balance is now: {balance}\n")
        else:
            self._write(
                "It's a tie. No one won. Your bet has been returned. "
                f"Your balance is now: {balance}\n"
            )

        if self.engine.state == GameState.GAME_OVER:
            self._write(
                "Oops! It looks like you don't have enough balance to place a bet. "
                "The game is over.\n"
            )

    def show_summary(self) -> None:
        summary = self.engine.history.summary()
        if not summary.rounds:
            return
        self._write(
            f"Rounds played: {summary.rounds} | Won: {summary.wins} "
            f"(blackjacks: {summary.blackjacks}) | Lost: {summary.losses} "
            f"| Tied: {summary.pushes} | Net: {format_money(summary.net)}"
        )


def setup_logging(level: str) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def build_engine(config: AppConfig) -> RoundEngine:
    """Create an engine seeded from configuration (time-based when unset)."""
    seed = config.game.seed if config.game.seed is not None else time.time_ns()
    logger.debug("Random seed: %s", seed)
    return RoundEngine(
        card_source=RandomCardSource(Random(seed)),
        starting_balance=config.game.starting_balance,
    )


def main() -> int:
    """Console entry point."""
    config = load_config()
    setup_logging(config.log_level)
    game = ConsoleGame(build_engine(config), display=config.display)
    return game.run()
