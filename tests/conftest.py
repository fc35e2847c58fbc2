"""Pytest fixtures for blackjack tests."""

import pytest
from decimal import Decimal
from random import Random

from core.cards import Card, RandomCardSource, Rank, StackedCardSource, Suit
from core.hand import Hand
from core.game import RoundEngine


def _make_hand(*cards: str) -> Hand:
    """Build a hand from short card strings like 'AS', '10H'."""
    hand = Hand()
    for card in cards:
        hand.add_card(Card.from_string(card))
    return hand


def _stacked_engine(*cards: str, balance: int = 10) -> RoundEngine:
    """
    An engine dealing ``cards`` in order.

    Deal order is dealer, player, player, then hits, then dealer draws.
    """
    return RoundEngine(
        card_source=StackedCardSource(cards),
        starting_balance=Decimal(balance),
    )


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def random_source(rng):
    """An infinite random shoe."""
    return RandomCardSource(rng)


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    hand = Hand()
    hand.add_card(Card(Rank.ACE, Suit.SPADES))
    hand.add_card(Card(Rank.KING, Suit.HEARTS))
    return hand


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return _make_hand("AS", "6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return _make_hand("10S", "6H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return _make_hand("KS", "QH", "5C")


@pytest.fixture
def game(random_source):
    """A new game instance with a random shoe."""
    return RoundEngine(card_source=random_source, starting_balance=Decimal("1000"))


@pytest.fixture
def make_hand():
    """Factory building a hand from card strings."""
    return _make_hand


@pytest.fixture
def stacked_engine():
    """Factory building an engine over a fixed card sequence."""
    return _stacked_engine
