"""Tests for the training session driving loop."""

from random import Random

import pytest
from transitions import MachineError

from trainer.actions import Action
from trainer.dealer import should_dealer_hit
from trainer.game import EventType, GamePhase, TrainingSession
from trainer.game.engine import SPLIT_NOT_IMPLEMENTED
from trainer.game.state import is_valid_transition
from trainer.outcome import HandResult, calculate_score
from trainer.rules import RuleSet


def event_types(session):
    return [event.event_type for event in session.events.history]


class TestDeal:
    """Tests for starting hands."""

    def test_start_enters_player_turn(self, stacked_session):
        session = stacked_session("10H", "6S", "10C", "7D")
        state = session.start_training()

        assert session.phase == GamePhase.PLAYER_TURN
        assert state.phase == GamePhase.PLAYER_TURN
        assert state.player_hand.best_total == 16
        assert state.dealer_hand.card_count == 2
        assert state.dealer_upcard.rank.value == "10"
        assert state.hand_result is None

    def test_deck_reshuffled_every_hand(self, session):
        session.start_training()
        assert session.deck.remaining_count == 48
        session.play(Action.STAND)
        session.start_new_hand()
        assert session.deck.remaining_count == 48

    def test_player_blackjack_skips_player_turn(self, stacked_session):
        session = stacked_session("AS", "KH", "10C", "7D")
        state = session.start_training()

        assert session.phase == GamePhase.RESOLVE_HAND
        assert state.hand_result == HandResult.PLAYER_BLACKJACK
        assert state.score == 10
        assert session.allowed_actions == []
        assert session.recommended_action is None
        assert EventType.PLAYER_BLACKJACK in event_types(session)

    def test_dealer_blackjack_skips_player_turn(self, stacked_session):
        session = stacked_session("10H", "9S", "AC", "KD")
        state = session.start_training()

        assert state.hand_result == HandResult.DEALER_BLACKJACK
        assert state.score == -10
        assert EventType.DEALER_BLACKJACK in event_types(session)

    def test_both_blackjack_push(self, stacked_session):
        session = stacked_session("AS", "KH", "AC", "QD")
        state = session.start_training()

        assert state.hand_result == HandResult.PUSH
        assert state.score == 0

    def test_hole_card_masked_in_events(self, stacked_session):
        session = stacked_session("10H", "6S", "10C", "7D")
        dealt = []
        session.subscribe(dealt.append, EventType.CARD_DEALT)
        session.start_training()

        assert [e.data["card"] for e in dealt] == ["10♥", "6♠", "10♣", "??"]
        assert [e.data["hand"] for e in dealt] == ["player", "player", "dealer", "dealer"]

    def test_seeded_sessions_match(self):
        first = TrainingSession(rules=RuleSet(), rng=Random(7))
        second = TrainingSession(rules=RuleSet(), rng=Random(7))
        assert first.start_training().player_hand.cards == second.start_training().player_hand.cards


class TestPlay:
    """Tests for player actions."""

    def test_incorrect_stand(self, stacked_session):
        session = stacked_session("10H", "6S", "10C", "7D")
        session.start_training()
        assert session.recommended_action == Action.HIT

        feedback = session.play(Action.STAND)

        assert feedback is not None
        assert not feedback.is_correct
        assert feedback.recommended_action == Action.HIT
        assert feedback.message == "Incorrect. Basic strategy recommends hit"
        state = session.state
        assert state.hand_result == HandResult.DEALER_WIN
        assert state.score == -10
        assert state.dealer_hand.card_count == 2
        assert state.basic_strategy_stats.total_decisions == 1
        assert state.basic_strategy_stats.correct_decisions == 0

    def test_hit_bust_skips_dealer(self, stacked_session):
        session = stacked_session("10H", "6S", "10C", "7D", "KS")
        session.start_training()

        feedback = session.play(Action.HIT)

        assert feedback.is_correct
        assert feedback.message == "Correct! Basic strategy recommends hit"
        state = session.state
        assert state.player_hand.is_busted
        assert state.hand_result == HandResult.DEALER_WIN
        assert state.dealer_hand.card_count == 2
        assert EventType.PLAYER_BUSTS in event_types(session)
        assert EventType.DEALER_REVEALS not in event_types(session)

    def test_hit_keeps_player_turn(self, stacked_session):
        session = stacked_session("2H", "3S", "10C", "7D", "4D")
        session.start_training()

        session.play(Action.HIT)

        assert session.phase == GamePhase.PLAYER_TURN
        assert session.state.player_hand.cards[-1].rank.value == "4"
        assert session.allowed_actions == [Action.HIT, Action.STAND]

    def test_double_then_dealer_busts(self, stacked_session):
        session = stacked_session("5H", "6S", "6C", "10D", "9S", "8H")
        session.start_training()

        feedback = session.play(Action.DOUBLE)

        assert feedback.is_correct
        state = session.state
        assert state.player_hand.best_total == 20
        assert state.dealer_hand.best_total == 24
        assert state.hand_result == HandResult.PLAYER_WIN
        assert state.score == 10

    def test_double_bust_skips_dealer(self, stacked_session):
        session = stacked_session("10H", "2S", "6C", "10D", "KS")
        session.start_training()

        feedback = session.play(Action.DOUBLE)

        assert not feedback.is_correct
        assert session.state.hand_result == HandResult.DEALER_WIN
        assert session.state.dealer_hand.card_count == 2

    def test_split_not_implemented(self, stacked_session):
        session = stacked_session("8H", "8S", "10C", "7D")
        session.start_training()
        before = session.state.player_hand.cards

        feedback = session.play(Action.SPLIT)

        assert feedback.is_correct
        assert feedback.message == SPLIT_NOT_IMPLEMENTED
        assert session.phase == GamePhase.PLAYER_TURN
        assert session.state.player_hand.cards == before
        assert session.state.basic_strategy_stats.total_decisions == 1
        assert EventType.SPLIT_NOT_IMPLEMENTED in event_types(session)

    def test_disallowed_action_rejected(self, stacked_session):
        session = stacked_session("2H", "3S", "10C", "7D", "4D")
        session.start_training()
        session.play(Action.HIT)

        assert session.play(Action.DOUBLE) is None
        assert session.state.basic_strategy_stats.total_decisions == 1
        assert event_types(session)[-1] == EventType.INVALID_ACTION

    def test_action_after_resolution_rejected(self, stacked_session):
        session = stacked_session("10H", "6S", "10C", "7D")
        session.start_training()
        session.play(Action.STAND)

        assert session.play(Action.HIT) is None
        assert event_types(session)[-1] == EventType.INVALID_ACTION


class TestDealerPlay:
    """Tests for the dealer's draw."""

    @pytest.mark.parametrize("rules", [RuleSet(), RuleSet.stand_soft_17()])
    def test_dealer_draws_on_soft_17(self, stacked_session, rules):
        """A-6 is hard 7; the dealer draws until the hard total reaches 17."""
        session = stacked_session("10H", "8S", "AC", "6D", "3S", "7H", rules=rules)
        session.start_training()
        session.play(Action.STAND)

        dealer = session.state.dealer_hand
        assert dealer.card_count == 4
        assert dealer.hard_total == 17
        assert session.state.hand_result == HandResult.PLAYER_WIN

    def test_dealer_draws_on_soft_18(self, stacked_session):
        session = stacked_session("10H", "9S", "AC", "7D", "2S", "KS")
        session.start_training()
        session.play(Action.STAND)

        dealer = session.state.dealer_hand
        assert [c.rank.value for c in dealer.cards] == ["A", "7", "2", "K"]
        assert dealer.best_total == 20
        assert session.state.hand_result == HandResult.DEALER_WIN

    def test_dealer_finishes_standing_or_busted(self, session):
        results = []
        for _ in range(40):
            session.start_new_hand()
            if session.phase == GamePhase.PLAYER_TURN:
                session.play(Action.STAND)
            state = session.state
            assert session.phase == GamePhase.RESOLVE_HAND
            assert state.dealer_hand.is_busted or not should_dealer_hit(state.dealer_hand)
            results.append(state.hand_result)

        assert session.state.score == sum(calculate_score(r) for r in results)


class TestRecommendations:
    """Tests for raw and clamped recommendations."""

    def test_raw_recommendation_after_hit(self, stacked_session):
        session = stacked_session("2H", "3S", "5C", "10D", "6D")
        session.start_training()
        session.play(Action.HIT)

        assert session.recommended_action == Action.DOUBLE

    def test_clamped_recommendation_after_hit(self, stacked_session):
        rules = RuleSet(clamp_recommendations=True)
        session = stacked_session("2H", "3S", "5C", "10D", "6D", rules=rules)
        session.start_training()
        session.play(Action.HIT)

        assert session.recommended_action == Action.HIT

    def test_clamped_recommendation_grades_play(self, stacked_session):
        rules = RuleSet(clamp_recommendations=True)
        session = stacked_session("2H", "3S", "5C", "10D", "6D", "2C", rules=rules)
        session.start_training()
        session.play(Action.HIT)
        expected = session.recommended_action

        feedback = session.play(Action.HIT)

        assert feedback.recommended_action == expected == Action.HIT
        assert feedback.is_correct
        assert session.state.basic_strategy_stats.correct_decisions == 2


class TestSessionLifecycle:
    """Tests for score and stats across hands."""

    def test_new_hand_keeps_score_and_stats(self, stacked_session):
        session = stacked_session("10H", "6S", "10C", "7D")
        session.start_training()
        session.play(Action.STAND)

        state = session.start_new_hand()

        assert state.phase == GamePhase.PLAYER_TURN
        assert state.score == -10
        assert state.basic_strategy_stats.total_decisions == 1
        assert session.accuracy == 0.0

    def test_start_training_resets(self, stacked_session):
        session = stacked_session("10H", "6S", "10C", "7D")
        session.start_training()
        session.play(Action.HIT)
        session.start_training()

        assert session.state.score == 0
        assert session.state.basic_strategy_stats.total_decisions == 0

    def test_new_hand_mid_hand_raises(self, stacked_session):
        session = stacked_session("10H", "6S", "10C", "7D")
        session.start_training()

        with pytest.raises(MachineError):
            session.start_new_hand()

    def test_first_hand_via_start_new_hand(self, session):
        session.start_new_hand()
        assert session.phase in (GamePhase.PLAYER_TURN, GamePhase.RESOLVE_HAND)

    def test_hand_resolved_event(self, stacked_session):
        session = stacked_session("10H", "9S", "10C", "7D")
        resolved = []
        session.subscribe(resolved.append, EventType.HAND_RESOLVED)
        session.start_training()
        session.play(Action.STAND)

        assert len(resolved) == 1
        assert resolved[0].data == {"result": "player_win", "score_delta": 10, "score": 10}

    def test_machine_transitions_follow_phase_table(self):
        """Every phase-to-phase trigger is allowed by VALID_TRANSITIONS."""
        for transition in TrainingSession.TRANSITIONS:
            if transition["source"] == "*":
                continue
            sources = transition["source"]
            if isinstance(sources, str):
                sources = [sources]
            dest = GamePhase(transition["dest"])
            for source in sources:
                assert is_valid_transition(GamePhase(source), dest), transition["trigger"]
