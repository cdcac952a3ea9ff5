"""Game phases and the pure state transitions of a training hand."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Sequence

from trainer.cards import Card
from trainer.hand import Hand
from trainer.outcome import DEFAULT_POINTS, HandResult, calculate_score


class GamePhase(Enum):
    """
    Game state machine phases.

    Flow: NEW_HAND → PLAYER_TURN → DEALER_TURN → RESOLVE_HAND,
    or NEW_HAND → RESOLVE_HAND when either side is dealt a natural.
    """

    NEW_HAND = "new_hand"
    PLAYER_TURN = "player_turn"
    DEALER_TURN = "dealer_turn"
    RESOLVE_HAND = "resolve_hand"

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid phase transitions. NEW_HAND → NEW_HAND covers dealing the first
# hand of a session; restarting a session is a reset, not a transition.
VALID_TRANSITIONS: dict[GamePhase, list[GamePhase]] = {
    GamePhase.NEW_HAND: [GamePhase.PLAYER_TURN, GamePhase.RESOLVE_HAND, GamePhase.NEW_HAND],
    GamePhase.PLAYER_TURN: [GamePhase.DEALER_TURN, GamePhase.RESOLVE_HAND],
    GamePhase.DEALER_TURN: [GamePhase.RESOLVE_HAND],
    GamePhase.RESOLVE_HAND: [GamePhase.NEW_HAND],
}


def is_valid_transition(from_phase: GamePhase, to_phase: GamePhase) -> bool:
    """
    Check if a phase transition is valid.

    Args:
        from_phase: Current phase
        to_phase: Desired phase

    Returns:
        True if the transition is allowed
    """
    return to_phase in VALID_TRANSITIONS.get(from_phase, [])


@dataclass(frozen=True)
class BasicStrategyStats:
    """Running tally of graded decisions for a session."""

    total_decisions: int = 0
    correct_decisions: int = 0

    @property
    def accuracy(self) -> float:
        """Percentage of correct decisions, 0 when nothing was graded."""
        if self.total_decisions == 0:
            return 0.0
        return self.correct_decisions / self.total_decisions * 100

    def record(self, is_correct: bool) -> "BasicStrategyStats":
        return BasicStrategyStats(
            total_decisions=self.total_decisions + 1,
            correct_decisions=self.correct_decisions + (1 if is_correct else 0),
        )


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of a training hand.

    Every transition returns a new GameState. Hands are never shared
    between player and dealer or carried into the next hand.
    """

    phase: GamePhase = GamePhase.NEW_HAND
    player_hand: Hand = field(default_factory=Hand)
    dealer_hand: Hand = field(default_factory=Hand)
    dealer_upcard: Card | None = None
    score: int = 0
    hand_result: HandResult | None = None
    basic_strategy_stats: BasicStrategyStats = field(default_factory=BasicStrategyStats)


def create_initial_game_state() -> GameState:
    """Return a fresh state with empty hands, zero score and no stats."""
    return GameState()


def transition_to_new_hand(
    state: GameState,
    player_cards: Sequence[Card],
    dealer_cards: Sequence[Card],
) -> GameState:
    """
    Start a new hand from two player cards and two dealer cards.

    The dealer's first card becomes the upcard. Score and stats carry over.
    """
    return replace(
        state,
        phase=GamePhase.NEW_HAND,
        player_hand=Hand(player_cards[:2]),
        dealer_hand=Hand(dealer_cards[:2]),
        dealer_upcard=dealer_cards[0],
        hand_result=None,
    )


def transition_to_player_turn(state: GameState) -> GameState:
    return replace(state, phase=GamePhase.PLAYER_TURN, hand_result=None)


def transition_to_dealer_turn(state: GameState) -> GameState:
    return replace(state, phase=GamePhase.DEALER_TURN, hand_result=None)


def transition_to_resolve_hand(state: GameState, result: HandResult) -> GameState:
    return replace(state, phase=GamePhase.RESOLVE_HAND, hand_result=result)


def add_card_to_player_hand(state: GameState, card: Card) -> GameState:
    """Return a state whose player hand has ``card`` appended."""
    return replace(state, player_hand=Hand((*state.player_hand.cards, card)))


def add_card_to_dealer_hand(state: GameState, card: Card) -> GameState:
    """Return a state whose dealer hand has ``card`` appended."""
    return replace(state, dealer_hand=Hand((*state.dealer_hand.cards, card)))


def update_score(
    state: GameState,
    result: HandResult,
    points: int = DEFAULT_POINTS,
) -> GameState:
    """Apply the flat score change for ``result``."""
    return replace(state, score=state.score + calculate_score(result, points))


def record_basic_strategy_decision(state: GameState, is_correct: bool) -> GameState:
    """Count one graded decision, and one correct decision if it matched."""
    return replace(
        state,
        basic_strategy_stats=state.basic_strategy_stats.record(is_correct),
    )
