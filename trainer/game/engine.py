"""Training session engine with state machine."""

from dataclasses import dataclass
from random import Random
from typing import Callable

from transitions import Machine

from config import config
from trainer.actions import Action, get_allowed_actions
from trainer.cards import Card, Deck
from trainer.dealer import should_dealer_hit
from trainer.game.events import EventEmitter, EventType, GameEvent
from trainer.game.state import (
    GamePhase,
    GameState,
    add_card_to_dealer_hand,
    add_card_to_player_hand,
    create_initial_game_state,
    record_basic_strategy_decision,
    transition_to_dealer_turn,
    transition_to_new_hand,
    transition_to_player_turn,
    transition_to_resolve_hand,
    update_score,
)
from trainer.outcome import HandResult, calculate_score, resolve_hand
from trainer.rules import RuleSet
from trainer.strategy.basic import is_basic_strategy_correct, recommend_action


SPLIT_NOT_IMPLEMENTED = "Split not yet implemented"


@dataclass(frozen=True)
class DecisionFeedback:
    """How a player's action compared with basic strategy."""

    action: Action
    recommended_action: Action
    is_correct: bool
    message: str


class TrainingSession:
    """
    Basic strategy training session driven by a state machine.

    Owns the deck and the current GameState, and runs a hand from the deal
    through the dealer's draw to resolution. Completely UI-agnostic:
    communication happens through events and return values only.
    """

    # State machine states
    STATES = [phase.value for phase in GamePhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal_complete", "source": "new_hand", "dest": "player_turn"},
        {"trigger": "natural_dealt", "source": "new_hand", "dest": "resolve_hand"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "player_busts", "source": "player_turn", "dest": "resolve_hand"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "resolve_hand"},
        {"trigger": "next_hand", "source": ["new_hand", "resolve_hand"], "dest": "new_hand"},
        {"trigger": "restart", "source": "*", "dest": "new_hand"},
    ]

    def __init__(
        self,
        rules: RuleSet | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new training session.

        Args:
            rules: Session rules (built from the environment if not provided)
            rng: Random number generator for reproducible sessions
        """
        self.rules = rules or RuleSet.from_config(config)
        if rng is None:
            rng = Random(config.seed)
        self.deck = Deck(rng=rng)
        self.events = EventEmitter()
        self._state = create_initial_game_state()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=GamePhase.NEW_HAND.value,
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> GameState:
        """Return the current game state."""
        return self._state

    @property
    def phase(self) -> GamePhase:
        return GamePhase(self._machine_state)  # type: ignore[attr-defined]

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to session events."""
        self.events.subscribe(handler, event_type)

    def start_training(self) -> GameState:
        """Start a fresh session: reset score and stats, then deal."""
        self.restart()
        self._state = create_initial_game_state()
        self.events.emit_new(EventType.SESSION_STARTED)
        return self._deal_new_hand()

    def start_new_hand(self) -> GameState:
        """Deal the next hand, keeping score and stats."""
        self.next_hand()
        return self._deal_new_hand()

    def _deal_new_hand(self) -> GameState:
        """Reshuffle, deal two cards each, and check for naturals."""
        self.deck.reshuffle()
        self.events.emit_new(EventType.DECK_RESHUFFLED)

        player_cards = [self.deck.deal(), self.deck.deal()]
        dealer_cards = [self.deck.deal(), self.deck.deal()]
        self._state = transition_to_new_hand(self._state, player_cards, dealer_cards)

        for card in player_cards:
            self._emit_card(card, "player")
        self._emit_card(dealer_cards[0], "dealer")
        self._emit_card(dealer_cards[1], "dealer", face_up=False)

        self.events.emit_new(
            EventType.HAND_STARTED,
            dealer_upcard=str(dealer_cards[0]),
            player_value=self._state.player_hand.best_total,
        )

        player_bj = self._state.player_hand.is_blackjack
        dealer_bj = self._state.dealer_hand.is_blackjack
        if player_bj:
            self.events.emit_new(EventType.PLAYER_BLACKJACK)
        if dealer_bj:
            self.events.emit_new(EventType.DEALER_BLACKJACK)

        if player_bj or dealer_bj:
            self.natural_dealt()
            self._finish(resolve_hand(self._state.player_hand, self._state.dealer_hand))
            return self._state

        self.deal_complete()
        self._state = transition_to_player_turn(self._state)
        return self._state

    def _emit_card(self, card: Card, hand: str, face_up: bool = True) -> None:
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand=hand,
        )

    @property
    def allowed_actions(self) -> list[Action]:
        """Legal actions for the player; empty outside the player's turn."""
        if self.phase != GamePhase.PLAYER_TURN:
            return []
        return get_allowed_actions(self._state.player_hand)

    @property
    def recommended_action(self) -> Action | None:
        """Basic strategy action for the current hand, if the player is to act."""
        upcard = self._state.dealer_upcard
        if self.phase != GamePhase.PLAYER_TURN or upcard is None:
            return None
        return self._recommend(upcard)

    def _recommend(self, dealer_upcard: Card) -> Action:
        allowed = self.allowed_actions if self.rules.clamp_recommendations else None
        return recommend_action(self._state.player_hand, dealer_upcard, allowed)

    @property
    def accuracy(self) -> float:
        """Percentage of decisions that matched basic strategy."""
        return self._state.basic_strategy_stats.accuracy

    def play(self, action: Action) -> DecisionFeedback | None:
        """
        Grade and apply a player action.

        Args:
            action: The action the player chose

        Returns:
            Feedback on the decision, or None if the action was rejected
        """
        upcard = self._state.dealer_upcard
        if self.phase != GamePhase.PLAYER_TURN or upcard is None:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot act in current phase",
                phase=self.phase.value,
            )
            return None

        if action not in self.allowed_actions:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message=f"Cannot {action} this hand",
                action=action.value,
            )
            return None

        recommended = self._recommend(upcard)
        is_correct = is_basic_strategy_correct(action, recommended)
        self._state = record_basic_strategy_decision(self._state, is_correct)
        self.events.emit_new(
            EventType.DECISION_RECORDED,
            action=action.value,
            recommended=recommended.value,
            is_correct=is_correct,
        )

        if is_correct:
            message = f"Correct! Basic strategy recommends {recommended}"
        else:
            message = f"Incorrect. Basic strategy recommends {recommended}"

        if action == Action.HIT:
            self._hit()
        elif action == Action.STAND:
            self._stand()
        elif action == Action.DOUBLE:
            self._double()
        else:
            self.events.emit_new(EventType.SPLIT_NOT_IMPLEMENTED)
            message = SPLIT_NOT_IMPLEMENTED

        return DecisionFeedback(
            action=action,
            recommended_action=recommended,
            is_correct=is_correct,
            message=message,
        )

    def _deal_to_player(self) -> Card:
        card = self.deck.deal()
        self._state = add_card_to_player_hand(self._state, card)
        self._emit_card(card, "player")
        return card

    def _hit(self) -> None:
        """Player takes a card; a bust ends the hand without a comparison."""
        self._deal_to_player()
        hand = self._state.player_hand
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=hand.best_total)

        if hand.is_busted:
            self._player_bust()

    def _stand(self) -> None:
        self.events.emit_new(
            EventType.PLAYER_STAND,
            hand_value=self._state.player_hand.best_total,
        )
        self._play_dealer()

    def _double(self) -> None:
        """Player takes exactly one more card, then the dealer plays."""
        self._deal_to_player()
        hand = self._state.player_hand
        self.events.emit_new(EventType.PLAYER_DOUBLE, hand_value=hand.best_total)

        if hand.is_busted:
            self._player_bust()
            return
        self._play_dealer()

    def _player_bust(self) -> None:
        self.events.emit_new(
            EventType.PLAYER_BUSTS,
            hand_value=self._state.player_hand.best_total,
        )
        self.player_busts()
        self._finish(HandResult.DEALER_WIN)

    def _play_dealer(self) -> None:
        """Reveal the hole card and draw until the dealer rule says stand."""
        self.player_done()
        self._state = transition_to_dealer_turn(self._state)

        dealer_hand = self._state.dealer_hand
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(dealer_hand.cards[1]),
            hand_value=dealer_hand.best_total,
        )

        while (
            should_dealer_hit(self._state.dealer_hand, self.rules.dealer_hits_soft_17)
            and not self._state.dealer_hand.is_busted
        ):
            card = self.deck.deal()
            self._state = add_card_to_dealer_hand(self._state, card)
            self._emit_card(card, "dealer")
            self.events.emit_new(
                EventType.DEALER_HITS,
                hand_value=self._state.dealer_hand.best_total,
            )

        dealer_hand = self._state.dealer_hand
        if dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=dealer_hand.best_total)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=dealer_hand.best_total)

        self.dealer_done()
        self._finish(resolve_hand(self._state.player_hand, dealer_hand))

    def _finish(self, result: HandResult) -> None:
        """Record the result and apply the score change."""
        points = self.rules.points_per_hand
        self._state = transition_to_resolve_hand(self._state, result)
        self._state = update_score(self._state, result, points)
        self.events.emit_new(
            EventType.HAND_RESOLVED,
            result=result.value,
            score_delta=calculate_score(result, points),
            score=self._state.score,
        )

