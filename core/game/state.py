"""Game state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Round engine states.

    Flow: WAITING_FOR_BET → PLAYER_TURN → DEALER_TURN → ROUND_COMPLETE → WAITING_FOR_BET
    """

    # Idle, balance shown, waiting for a stake
    WAITING_FOR_BET = auto()

    # Player hits or stands
    PLAYER_TURN = auto()

    # Dealer draws to 17
    DEALER_TURN = auto()

    # Outcome decided and paid, ready for next
    ROUND_COMPLETE = auto()

    # Game over (balance exhausted or player quit)
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

