"""Hand storage and blackjack scoring."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from core.cards import Card

BLACKJACK = 21
DEALER_STANDS_ON = 17


def optimal_sum(cards: Iterable[Card]) -> int:
    """
    Calculate the best total for a set of cards.

    Every Ace starts at 11 and is dropped to 1 only while the total busts.
    Returns the highest value that doesn't bust, or the lowest bust value.
    """
    total = 0
    aces = 0

    for card in cards:
        total += card.value
        if card.is_ace:
            aces += 1

    # Reduce aces from 11 to 1 as needed
    while total > BLACKJACK and aces > 0:
        total -= 10
        aces -= 1

    return total


@dataclass
class Hand:
    """Cards held by the player or the dealer, in deal order."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def clear(self) -> None:
        """Remove all cards from the hand."""
        self.cards.clear()

    @property
    def value(self) -> int:
        """Return the optimal sum of the hand."""
        return optimal_sum(self.cards)

    @property
    def is_natural(self) -> bool:
        """Check if the hand is exactly two cards totalling 21."""
        return len(self.cards) == 2 and self.value == BLACKJACK

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > BLACKJACK

    @property
    def is_soft(self) -> bool:
        """Check if an Ace is still being counted as 11."""
        hard_total = sum(1 if card.is_ace else card.value for card in self.cards)
        return hard_total != self.value

    @property
    def num_cards(self) -> int:
        """Return the number of cards in the hand."""
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.is_busted:
            return f"{cards_str} (BUST)"
        if self.is_natural:
            return f"{cards_str} (BLACKJACK)"
        return f"{cards_str} ({self.value})"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def dealer_should_draw(hand: Hand) -> bool:
    """
    Dealer draws below 17 and stands on any 17 or more.

    Soft 17 stands as well; there is no hit-soft-17 rule.
    """
    return hand.value < DEALER_STANDS_ON
