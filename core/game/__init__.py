"""Round engine, outcome rules and state management."""

from core.game.events import GameEvent, EventType, EventEmitter
from core.game.state import GameState
from core.game.outcome import Outcome, RoundOutcome, decide_outcome, evaluate_hands
from core.game.betting import InvalidBetError, parse_bet, payout_amount, validate_bet
from core.game.history import RoundHistory, RoundRecord, SessionSummary
from core.game.engine import RoundEngine, RoundResult

__all__ = [
    "GameEvent",
    "EventType",
    "EventEmitter",
    "GameState",
    "Outcome",
    "RoundOutcome",
    "decide_outcome",
    "evaluate_hands",
    "InvalidBetError",
    "parse_bet",
    "payout_amount",
    "validate_bet",
    "RoundHistory",
    "RoundRecord",
    "SessionSummary",
    "RoundEngine",
    "RoundResult",
]
