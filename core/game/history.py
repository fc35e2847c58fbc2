"""In-memory history of concluded rounds."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterator

from core.game.outcome import RoundOutcome
from core.hand import Hand


@dataclass
class RoundRecord:
    """Complete record of a single round."""

    round_number: int
    player_cards: list[str] = field(default_factory=list)
    dealer_cards: list[str] = field(default_factory=list)

    player_total: int = 0
    dealer_total: int = 0

    bet: int = 0
    payout: Decimal = Decimal("0")
    balance_after: Decimal = Decimal("0")

    outcome: str = ""  # Outcome name
    winner: str | None = None
    blackjack: bool = False

    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()

    @property
    def net(self) -> Decimal:
        """Return the balance change caused by this round."""
        return self.payout - self.bet

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["payout"] = str(self.payout)
        data["balance_after"] = str(self.balance_after)
        return data


@dataclass
class SessionSummary:
    """Totals over every round of the session."""

    rounds: int = 0
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    blackjacks: int = 0
    total_wagered: int = 0
    net: Decimal = Decimal("0")

    @property
    def win_rate(self) -> float:
        """Return wins as a fraction of decided rounds."""
        decided = self.wins + self.losses
        return self.wins / decided if decided else 0.0


class RoundHistory:
    """Keeps every round of the current process; nothing is written to disk."""

    def __init__(self) -> None:
        self._records: list[RoundRecord] = []

    def record(
        self,
        player_hand: Hand,
        dealer_hand: Hand,
        bet: int,
        result: RoundOutcome,
        payout: Decimal,
        balance_after: Decimal,
    ) -> RoundRecord:
        """Store a finished round and return its record."""
        record = RoundRecord(
            round_number=len(self._records) + 1,
            player_cards=[str(card) for card in player_hand],
            dealer_cards=[str(card) for card in dealer_hand],
            player_total=player_hand.value,
            dealer_total=dealer_hand.value,
            bet=bet,
            payout=payout,
            balance_after=balance_after,
            outcome=result.outcome.name,
            winner=result.winner,
            blackjack=result.blackjack,
        )
        self._records.append(record)
        return record

    def summary(self) -> SessionSummary:
        """Aggregate all recorded rounds."""
        summary = SessionSummary()
        for record in self._records:
            summary.rounds += 1
            summary.total_wagered += record.bet
            summary.net += record.net
            if record.winner == "player":
                summary.wins += 1
                if record.blackjack:
                    summary.blackjacks += 1
            elif record.winner == "dealer":
                summary.losses += 1
            else:
                summary.pushes += 1
        return summary

    @property
    def records(self) -> list[RoundRecord]:
        return self._records.copy()

    @property
    def last(self) -> RoundRecord | None:
        return self._records[-1] if self._records else None

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RoundRecord]:
        return iter(self._records)
