"""Bet validation and payout amounts."""

from decimal import Decimal

from core.game.outcome import RoundOutcome

MIN_BET = 1

# Multiples of the bet credited back to the balance
WIN_PAYOUT = Decimal("2")
BLACKJACK_PAYOUT = Decimal("2.5")
PUSH_PAYOUT = Decimal("1")


class InvalidBetError(ValueError):
    """Raised when a bet amount cannot be accepted."""


def validate_bet(amount: int, balance: Decimal) -> int:
    """
    Check a bet against the minimum and the current balance.

    Raises:
        InvalidBetError: if the bet is below 1 or exceeds the balance
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidBetError(
            "Your input is not a whole number, or contains letters. Please try again."
        )
    if amount < MIN_BET:
        raise InvalidBetError(
            f"Sorry, this bet is below the minimum bet of {MIN_BET}. Please try again."
        )
    if Decimal(amount) > balance:
        raise InvalidBetError(
            "Sorry, you do not have enough money to place this bet. Please try again."
        )
    return amount


def parse_bet(text: str, balance: Decimal) -> int:
    """
    Parse a bet typed by the player.

    Only plain digits are accepted, so "-3", "1.5" and "abc" are all
    rejected as not being whole numbers.

    Args:
        text: Raw input
        balance: Current balance

    Returns:
        The accepted bet

    Raises:
        InvalidBetError: with a message suitable for the player
    """
    text = text.strip()
    if not text or not (text.isascii() and text.isdigit()):
        raise InvalidBetError(
            "Your input is not a whole number, or contains letters. Please try again."
        )
    return validate_bet(int(text), balance)


def payout_amount(bet: int, result: RoundOutcome) -> Decimal:
    """
    Return what is credited back to the balance for a settled bet.

    The bet itself was deducted when placed, so a loss credits nothing
    and a push credits the bet back.
    """
    stake = Decimal(bet)
    if result.player_won:
        if result.blackjack:
            return stake * BLACKJACK_PAYOUT
        return stake * WIN_PAYOUT
    if result.is_push:
        return stake * PUSH_PAYOUT
    return Decimal("0")
