"""Round outcome decision table."""

from dataclasses import dataclass
from enum import Enum, auto

from core.hand import BLACKJACK, Hand


class Outcome(Enum):
    """The five ways a round can end."""

    PLAYER_BUST = auto()
    DEALER_BUST = auto()
    PLAYER_HIGHER = auto()
    DEALER_HIGHER = auto()
    PUSH = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


PLAYER_WINS = frozenset({Outcome.DEALER_BUST, Outcome.PLAYER_HIGHER})
DEALER_WINS = frozenset({Outcome.PLAYER_BUST, Outcome.DEALER_HIGHER})


@dataclass(frozen=True)
class RoundOutcome:
    """
    Decided outcome of a round.

    ``blackjack`` marks a win that was settled by a two-card 21 and
    pays the bonus rate when the player is the winner.
    """

    outcome: Outcome
    blackjack: bool = False

    def __post_init__(self) -> None:
        if self.blackjack and self.outcome not in (
            Outcome.PLAYER_HIGHER,
            Outcome.DEALER_HIGHER,
        ):
            raise ValueError(f"{self.outcome} cannot be a blackjack win")

    @property
    def winner(self) -> str | None:
        """Return "player", "dealer", or None on a push."""
        if self.outcome in PLAYER_WINS:
            return "player"
        if self.outcome in DEALER_WINS:
            return "dealer"
        return None

    @property
    def player_won(self) -> bool:
        return self.winner == "player"

    @property
    def dealer_won(self) -> bool:
        return self.winner == "dealer"

    @property
    def is_push(self) -> bool:
        return self.outcome == Outcome.PUSH


def decide_outcome(
    player_sum: int,
    dealer_sum: int,
    player_cards: int,
    dealer_cards: int,
) -> RoundOutcome:
    """
    Decide the round from final totals and card counts.

    Conditions overlap, so the order of the checks matters:
    player bust, dealer bust, equal totals, player 21, dealer 21,
    then higher total.

    Args:
        player_sum: Player's optimal sum
        dealer_sum: Dealer's optimal sum
        player_cards: Number of cards in the player's hand
        dealer_cards: Number of cards in the dealer's hand

    Returns:
        RoundOutcome for the round
    """
    # Player bust loses even if the dealer busts too
    if player_sum > BLACKJACK:
        return RoundOutcome(Outcome.PLAYER_BUST)

    if dealer_sum > BLACKJACK:
        return RoundOutcome(Outcome.DEALER_BUST)

    player_natural = player_sum == BLACKJACK and player_cards == 2
    dealer_natural = dealer_sum == BLACKJACK and dealer_cards == 2

    if player_sum == dealer_sum:
        if player_natural and not dealer_natural:
            return RoundOutcome(Outcome.PLAYER_HIGHER, blackjack=True)
        if dealer_natural and not player_natural:
            return RoundOutcome(Outcome.DEALER_HIGHER, blackjack=True)
        return RoundOutcome(Outcome.PUSH)

    if player_sum == BLACKJACK:
        return RoundOutcome(Outcome.PLAYER_HIGHER, blackjack=player_natural)

    if dealer_sum == BLACKJACK:
        return RoundOutcome(Outcome.DEALER_HIGHER, blackjack=dealer_natural)

    if player_sum > dealer_sum:
        return RoundOutcome(Outcome.PLAYER_HIGHER)
    return RoundOutcome(Outcome.DEALER_HIGHER)


def evaluate_hands(player_hand: Hand, dealer_hand: Hand) -> RoundOutcome:
    """Decide the round for two finished hands."""
    return decide_outcome(
        player_hand.value,
        dealer_hand.value,
        len(player_hand),
        dealer_hand.num_cards,
    )
