"""Blocking input loops for the console driver."""

from decimal import Decimal
from typing import Callable

from core.game.betting import InvalidBetError, parse_bet
from console_ui.render import format_money

Reader = Callable[[], str]
Writer = Callable[[str], None]

START_OR_QUIT = {"s": "start", "q": "quit"}
HIT_OR_STAND = {"h": "hit", "s": "stand"}


def ask_choice(
    read: Reader,
    write: Writer,
    prompt: str,
    retry: str,
    choices: dict[str, str],
) -> str:
    """
    Ask until one of ``choices`` is typed, case-insensitively.

    There is no retry limit. EOFError from ``read`` propagates.

    Returns:
        The value mapped to the accepted letter
    """
    write(prompt)
    while True:
        answer = read().strip().lower()
        if answer in choices:
            return choices[answer]
        write(retry)


def ask_start_or_quit(read: Reader, write: Writer, new_round: bool = False) -> str:
    """Ask whether to play (another) round; returns "start" or "quit"."""
    if new_round:
        prompt = "Enter 's' to start a new round or 'q' to quit the game: "
    else:
        prompt = "Enter 's' to start or 'q' to quit the game: "
    return ask_choice(
        read,
        write,
        prompt,
        "Invalid input, please try again. Enter 's' to start or 'q' to quit the game",
        START_OR_QUIT,
    )


def ask_hit_or_stand(read: Reader, write: Writer) -> str:
    """Ask for the player's move; returns "hit" or "stand"."""
    return ask_choice(
        read,
        write,
        "Enter 'h' to hit or 's' to stand:",
        "Invalid input, please try again. Enter 'h' to hit or 's' to stand:",
        HIT_OR_STAND,
    )


def ask_bet(read: Reader, write: Writer, balance: Decimal) -> int:
    """Show the balance and ask for a bet until a valid one is given."""
    write(f"\nYOUR BALANCE: {format_money(balance)}")
    while True:
        write("Please place your bet (an integer of at least 1):")
        try:
            return parse_bet(read(), balance)
        except InvalidBetError as exc:
            write(str(exc))
