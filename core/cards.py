"""Card representations and the sources cards are drawn from."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterable, Protocol


class InvalidCardError(ValueError):
    """Raised when a card is built from an unknown rank or suit."""


class Suit(Enum):
    """Card suits. Suits only matter for display."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        symbols = {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Check if this suit is printed in red."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks, valued by their face label."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the nominal point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


_RANK_ALIASES = {rank.value: rank for rank in Rank}
_RANK_ALIASES["T"] = Rank.TEN

_SUIT_ALIASES = {
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            raise InvalidCardError(f"Invalid rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            raise InvalidCardError(f"Invalid suit: {self.suit!r}")

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the nominal blackjack value; Aces are resolved by the hand."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_names(cls, rank: str, suit: str) -> "Card":
        """
        Create a card from a face label and a suit name.

        Args:
            rank: "2"-"10", "J", "Q", "K" or "A"
            suit: "hearts", "diamonds", "clubs" or "spades"

        Raises:
            InvalidCardError: if either value is not recognised
        """
        try:
            card_rank = Rank(rank.strip().upper())
        except ValueError:
            raise InvalidCardError(
                f"Card value is not 2-10 or A, J, Q or K: {rank!r}"
            ) from None
        try:
            card_suit = Suit(suit.strip().lower())
        except ValueError:
            raise InvalidCardError(
                f"Card suit is not hearts, diamonds, clubs or spades: {suit!r}"
            ) from None
        return cls(card_rank, card_suit)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a short string like '2♣', 'AS', 'Kh', '10d'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise InvalidCardError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANK_ALIASES:
            raise InvalidCardError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_ALIASES:
            raise InvalidCardError(f"Invalid suit: {suit_str}")

        return cls(_RANK_ALIASES[rank_str], _SUIT_ALIASES[suit_str])

    @classmethod
    def random(cls, rng: Random) -> "Card":
        """Draw a uniformly random card."""
        return cls(rng.choice(list(Rank)), rng.choice(list(Suit)))


class CardSource(Protocol):
    """Anything that can hand out the next card."""

    def draw(self) -> Card:
        ...


class RandomCardSource:
    """
    Infinite shoe: every draw is independent and uniform.

    Duplicates within and across hands are expected.
    """

    def __init__(self, rng: Random | None = None) -> None:
        """
        Initialize the source.

        Args:
            rng: Random number generator (time-seeded if not provided)
        """
        self._rng = rng or Random()
        self._cards_drawn = 0

    def draw(self) -> Card:
        """Draw a random card."""
        self._cards_drawn += 1
        return Card.random(self._rng)

    @property
    def cards_drawn(self) -> int:
        """Return how many cards have been drawn so far."""
        return self._cards_drawn


class StackedCardSource:
    """Deals a fixed sequence of cards, in order."""

    def __init__(self, cards: Iterable[Card | str]) -> None:
        self._cards: list[Card] = [
            card if isinstance(card, Card) else Card.from_string(card)
            for card in cards
        ]
        self._position = 0

    def draw(self) -> Card:
        """Draw the next card of the stack."""
        if self._position >= len(self._cards):
            raise IndexError("Cannot draw from exhausted card stack")
        card = self._cards[self._position]
        self._position += 1
        return card

    def extend(self, cards: Iterable[Card | str]) -> None:
        """Append more cards to the bottom of the stack."""
        self._cards.extend(
            card if isinstance(card, Card) else Card.from_string(card)
            for card in cards
        )

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards not yet dealt."""
        return len(self._cards) - self._position

    def __len__(self) -> int:
        return self.cards_remaining
