"""Round engine driving one player against the dealer."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from transitions import Machine

from core.cards import Card, CardSource, RandomCardSource
from core.hand import Hand, dealer_should_draw, BLACKJACK
from core.game.betting import MIN_BET, InvalidBetError, payout_amount, validate_bet
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.history import RoundHistory
from core.game.outcome import RoundOutcome, evaluate_hands
from core.game.state import GameState

logger = logging.getLogger(__name__)

DEFAULT_STARTING_BALANCE = Decimal("10")


@dataclass(frozen=True)
class RoundResult:
    """Everything the driver needs to report a finished round."""

    outcome: RoundOutcome
    player_total: int
    dealer_total: int
    bet: int
    payout: Decimal
    balance: Decimal

    @property
    def net(self) -> Decimal:
        return self.payout - self.bet


class RoundEngine:
    """
    Blackjack round engine using a state machine.

    Owns both hands, the current bet and the balance. Cards come from an
    injected CardSource so rounds can be replayed deterministically.
    Communication happens through events and return values only.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # Internal triggers behind bet/hit/stand/start_new_round/quit.
    # A round only begins once a validated stake is set.
    TRANSITIONS = [
        {
            "trigger": "_begin_round",
            "source": "waiting_for_bet",
            "dest": "player_turn",
            "conditions": "_has_stake",
        },
        {"trigger": "_continue_turn", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "_finish_player_turn", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "_finish_dealer_turn", "source": "dealer_turn", "dest": "round_complete"},
        {"trigger": "_reset_round", "source": "round_complete", "dest": "waiting_for_bet"},
        {"trigger": "_end_game", "source": "*", "dest": "game_over"},
    ]

    def __init__(
        self,
        card_source: CardSource | None = None,
        starting_balance: Decimal | int = DEFAULT_STARTING_BALANCE,
    ) -> None:
        """
        Initialize a new game.

        Args:
            card_source: Where cards come from (infinite random shoe by default)
            starting_balance: Balance before the first bet
        """
        self.card_source: CardSource = card_source or RandomCardSource()
        self.balance = Decimal(str(starting_balance))
        self.current_bet = 0
        self.last_result: RoundResult | None = None

        self._player_hand = Hand()
        self._dealer_hand = Hand()
        self.events = EventEmitter()
        self.history = RoundHistory()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting_for_bet",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        self.events.emit_new(EventType.GAME_STARTED, balance=float(self.balance))

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> Callable[[], None]:
        """Subscribe to game events; returns a callable that unsubscribes."""
        return self.events.subscribe(handler, event_type)

    @property
    def player_cards(self) -> tuple[Card, ...]:
        return tuple(self._player_hand)

    @property
    def dealer_cards(self) -> tuple[Card, ...]:
        return tuple(self._dealer_hand)

    @property
    def player_total(self) -> int:
        return self._player_hand.value

    @property
    def dealer_total(self) -> int:
        return self._dealer_hand.value

    def _has_stake(self) -> bool:
        return self.current_bet >= MIN_BET

    @property
    def is_over(self) -> bool:
        """Check if no further rounds can be played."""
        return self.state == GameState.GAME_OVER

    def bet(self, amount: int) -> bool:
        """
        Place a bet and deal the opening cards.

        The bet is deducted immediately; payouts only ever add back.

        Args:
            amount: Bet amount

        Returns:
            True if the round started, False if betting is not possible now

        Raises:
            InvalidBetError: if the amount is below 1 or above the balance
        """
        if self.state != GameState.WAITING_FOR_BET:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot bet in current state",
                state=self.state.name,
            )
            return False

        try:
            validate_bet(amount, self.balance)
        except InvalidBetError as exc:
            if isinstance(amount, int) and amount > self.balance:
                self.events.emit_new(
                    EventType.INSUFFICIENT_FUNDS,
                    required=amount,
                    available=float(self.balance),
                )
            else:
                self.events.emit_new(EventType.INVALID_ACTION, message=str(exc))
            raise

        self.balance -= amount
        self.current_bet = amount
        self.last_result = None
        self._player_hand.clear()
        self._dealer_hand.clear()

        self.events.emit_new(EventType.BET_PLACED, amount=amount, balance=float(self.balance))
        self._begin_round()
        logger.debug("Bet of %s placed, balance now %s", amount, self.balance)

        self._deal_initial_cards()
        return True

    def _deal_initial_cards(self) -> None:
        """Deal one card to the dealer, then two to the player."""
        self.events.emit_new(EventType.ROUND_STARTED, bet=self.current_bet)

        self._deal_card_to_hand(self._dealer_hand)
        self._deal_card_to_hand(self._player_hand)
        self._deal_card_to_hand(self._player_hand)

        if self._player_hand.is_natural:
            self.events.emit_new(EventType.PLAYER_BLACKJACK)

        # A dealt 21 needs no decision from the player
        if self._player_hand.value >= BLACKJACK:
            self._end_player_turn()
        else:
            self._continue_turn()

    def _deal_card_to_hand(self, hand: Hand) -> Card:
        """Deal a card to a hand."""
        card = self.card_source.draw()
        hand.add_card(card)
        owner = "dealer" if hand is self._dealer_hand else "player"
        logger.debug("Dealt %s to %s (%d)", card, owner, hand.value)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            hand=owner,
            hand_value=hand.value,
        )
        return card

    def hit(self) -> bool:
        """Player hits (takes another card)."""
        if self.state != GameState.PLAYER_TURN:
            self.events.emit_new(EventType.INVALID_ACTION, message="Cannot hit now")
            return False

        hand = self._player_hand
        self._deal_card_to_hand(hand)
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=hand.value)

        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=hand.value)

        if hand.value >= BLACKJACK:
            self._end_player_turn()
        else:
            self._continue_turn()
        return True

    def stand(self) -> bool:
        """Player stands (keeps current hand)."""
        if self.state != GameState.PLAYER_TURN:
            self.events.emit_new(EventType.INVALID_ACTION, message="Cannot stand now")
            return False

        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self._player_hand.value)
        self._end_player_turn()
        return True

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return self.state == GameState.PLAYER_TURN and self._player_hand.value < BLACKJACK

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.state == GameState.PLAYER_TURN

    def _end_player_turn(self) -> None:
        self._finish_player_turn()
        self._play_dealer()

    def _play_dealer(self) -> None:
        """Dealer draws until reaching 17 or more, then stands."""
        while dealer_should_draw(self._dealer_hand):
            self._deal_card_to_hand(self._dealer_hand)

        if self._dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self._dealer_hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self._dealer_hand.value)

        self._finish_dealer_turn()
        self._resolve_round()

    def _resolve_round(self) -> None:
        """Decide the round and pay out the bet."""
        outcome = evaluate_hands(self._player_hand, self._dealer_hand)
        payout = payout_amount(self.current_bet, outcome)
        self.balance += payout

        if outcome.player_won:
            self.events.emit_new(
                EventType.PLAYER_WINS,
                outcome=outcome.outcome.name,
                blackjack=outcome.blackjack,
                amount=float(payout),
            )
        elif outcome.dealer_won:
            self.events.emit_new(
                EventType.PLAYER_LOSES,
                outcome=outcome.outcome.name,
                blackjack=outcome.blackjack,
                amount=self.current_bet,
            )
        else:
            self.events.emit_new(EventType.PUSH, amount=self.current_bet)

        self.history.record(
            self._player_hand,
            self._dealer_hand,
            self.current_bet,
            outcome,
            payout,
            self.balance,
        )
        self.last_result = RoundResult(
            outcome=outcome,
            player_total=self._player_hand.value,
            dealer_total=self._dealer_hand.value,
            bet=self.current_bet,
            payout=payout,
            balance=self.balance,
        )
        logger.info(
            "Round %d: %s%s, payout %s, balance %s",
            len(self.history),
            outcome.outcome.name,
            " (blackjack)" if outcome.blackjack else "",
            payout,
            self.balance,
        )
        self.events.emit_new(
            EventType.ROUND_ENDED,
            result=float(self.last_result.net),
            balance=float(self.balance),
        )

        # Check for game over
        if self.balance < MIN_BET:
            self.events.emit_new(EventType.GAME_ENDED, reason="bankrupt")
            self._end_game()

    def start_new_round(self) -> bool:
        """Return to betting after a finished round."""
        if self.state == GameState.ROUND_COMPLETE:
            self.current_bet = 0
            self._reset_round()
            return True
        return False

    def quit(self) -> bool:
        """Player leaves the table."""
        if self.state == GameState.GAME_OVER:
            return False
        self.events.emit_new(EventType.GAME_ENDED, reason="quit", balance=float(self.balance))
        self._end_game()
        return True
