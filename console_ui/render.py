"""Text rendering of cards, hands and banners."""

from decimal import Decimal
from typing import Callable, Sequence

from rich.console import Console

from core.cards import Card

# rich style for hearts and diamonds
RED_SUIT_STYLE = "red"

CARD_WIDTH = 12
CARD_GAP = "  "
SEPARATOR = "=" * 67

TITLE_BANNER = r"""
  ____          _                           ____  _            _     _            _
 / ___|__ _ ___(_)_ __   ___    _     _    | __ )| | __ _  ___| | __(_) __ _  ___| | __
| |   / _` / __| | '_ \ / _ \ _| |_ _| |_  |  _ \| |/ _` |/ __| |/ /| |/ _` |/ __| |/ /
| |__| (_| \__ \ | | | | (_) |_   _|_   _| | |_) | | (_| | (__|   < | | (_| | (__|   <
 \____\__,_|___/_|_| |_|\___/  |_|   |_|   |____/|_|\__,_|\___|_|\_\/ |\__,_|\___|_|\_\
                                                                  |__/
"""

WON_BANNER = r"""
 __   __                                       _
 \ \ / /___   _   _    __      __ ___   _ __  | |
  \ V // _ \ | | | |   \ \ /\ / // _ \ | '_ \ | |
   | || (_) || |_| |    \ V  V /| (_) || | | ||_|
   |_| \___/  \__,_|     \_/\_/  \___/ |_| |_|(_)
"""

LOST_BANNER = r"""
 __   __                _              _
 \ \ / /___   _   _    | |  ___   ___ | |_
  \ V // _ \ | | | |   | | / _ \ / __|| __|
   | || (_) || |_| |   | || (_) |\__ \| |_  _  _  _
   |_| \___/  \__,_|   |_| \___/ |___/ \__|(_)(_)(_)
"""


def format_money(amount: Decimal | int) -> str:
    """Format a balance without trailing zeros: 10, 12.5."""
    amount = Decimal(amount)
    if amount == amount.to_integral_value():
        return str(int(amount))
    return f"{amount.normalize():f}"


def console_writer(console: Console | None = None) -> Callable[[str], None]:
    """
    Return a ``write`` callable printing through a rich console.

    Color markup is rendered on a terminal and stripped when output is
    piped or redirected. Lines are never wrapped, so wide card rows stay intact.
    """
    console = console or Console(highlight=False, emoji=False, soft_wrap=True)

    def write(text: str = "") -> None:
        console.print(text, highlight=False, emoji=False, soft_wrap=True)

    return write


def _paint(text: str, card: Card, color: bool) -> str:
    if color and card.suit.is_red:
        return f"[{RED_SUIT_STYLE}]{text}[/{RED_SUIT_STYLE}]"
    return text


def card_lines(card: Card, color: bool = False) -> list[str]:
    """Return the seven lines of a single boxed card."""
    label = str(card.rank)
    symbol = str(card.suit)
    return [
        "+----------+",
        "| " + _paint(label.ljust(2), card, color) + "       |",
        "| " + _paint(symbol, card, color) + "        |",
        "|          |",
        "|        " + _paint(symbol, card, color) + " |",
        "|       " + _paint(label.rjust(2), card, color) + " |",
        "+----------+",
    ]


def render_cards(
    cards: Sequence[Card],
    per_row: int = 6,
    color: bool = False,
) -> str:
    """
    Render cards side by side, wrapping after ``per_row`` cards.

    An empty hand renders as an empty string.
    """
    if per_row < 1:
        raise ValueError("per_row must be at least 1")

    blocks = []
    for start in range(0, len(cards), per_row):
        row = [card_lines(card, color) for card in cards[start:start + per_row]]
        blocks.append("\n".join(CARD_GAP.join(parts) for parts in zip(*row)))
    return "\n".join(blocks)


def render_table(
    dealer_cards: Sequence[Card],
    dealer_total: int,
    player_cards: Sequence[Card],
    player_total: int,
    balance: Decimal,
    bet: int,
    per_row: int = 6,
    color: bool = False,
) -> str:
    """Render the balance line and both hands with their totals."""
    lines = [
        SEPARATOR,
        "",
        f"YOUR BALANCE: {format_money(balance)} | YOUR BET: {bet}",
        "",
        f"Dealer ({dealer_total}):",
    ]
    if dealer_cards:
        lines.append(render_cards(dealer_cards, per_row, color))
    lines.append(f"You ({player_total}):")
    if player_cards:
        lines.append(render_cards(player_cards, per_row, color))
    lines.append("")
    return "\n".join(lines)
