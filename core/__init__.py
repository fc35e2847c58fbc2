"""Core blackjack engine - 100% UI-agnostic."""

from core.cards import (
    Card,
    CardSource,
    InvalidCardError,
    RandomCardSource,
    Rank,
    StackedCardSource,
    Suit,
)
from core.hand import Hand, optimal_sum, dealer_should_draw

__all__ = [
    "Card",
    "CardSource",
    "InvalidCardError",
    "RandomCardSource",
    "Rank",
    "StackedCardSource",
    "Suit",
    "Hand",
    "optimal_sum",
    "dealer_should_draw",
]
