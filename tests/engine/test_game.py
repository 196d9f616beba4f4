"""Tests for the player bankroll and the game wrapper."""

from decimal import Decimal
from random import Random

import pytest

from blackjack.cards import Card
from blackjack.errors import InvalidConfiguration, ShoeEmpty
from blackjack.game import BlackjackGame, EventEmitter, EventType, Outcome, Player
from config import GameConfig
from conftest import stacked_shoe


@pytest.fixture
def game_config():
    return GameConfig(deck_count=1, reshuffle_limit=20, delay_ms=0, buy_in_amount=Decimal("100"))


@pytest.fixture
def game(game_config, rng):
    return BlackjackGame(game_config, rng=rng)


def stack_game(game: BlackjackGame, *tokens: str) -> None:
    """Replace the game's shoe with one dealing the given tokens."""
    game.shoe = stacked_shoe(*tokens)


class TestPlayer:
    """Tests for Player betting."""

    def test_place_bet(self):
        player = Player(bankroll=Decimal("100"))
        assert player.place_bet(25)
        assert player.bankroll == Decimal("75")
        assert player.current_bet == 25
        assert player.last_bet == 25

    @pytest.mark.parametrize("amount", [0, -5, 101])
    def test_rejects_bad_bets(self, amount):
        player = Player(bankroll=Decimal("100"))
        assert not player.place_bet(amount)
        assert player.bankroll == Decimal("100")
        assert player.current_bet == 0

    def test_can_bet_whole_bankroll(self):
        player = Player(bankroll=Decimal("100"))
        assert player.place_bet(100)
        assert player.bankroll == 0

    @pytest.mark.parametrize(
        "outcome, net, bankroll",
        [
            (Outcome.PLAYER_WIN, Decimal("10"), Decimal("110")),
            (Outcome.DEALER_BUST, Decimal("10"), Decimal("110")),
            (Outcome.PLAYER_BLACKJACK, Decimal("15"), Decimal("115")),
            (Outcome.PUSH, Decimal("0"), Decimal("100")),
            (Outcome.BLACKJACK_PUSH, Decimal("0"), Decimal("100")),
            (Outcome.DEALER_WIN, Decimal("-10"), Decimal("90")),
            (Outcome.PLAYER_BUST, Decimal("-10"), Decimal("90")),
        ],
    )
    def test_settle(self, outcome, net, bankroll):
        player = Player(bankroll=Decimal("100"))
        player.place_bet(10)
        assert player.settle(outcome) == net
        assert player.bankroll == bankroll
        assert player.current_bet == 0

    def test_repeat_bet(self):
        player = Player(bankroll=Decimal("30"))
        assert not player.can_repeat_bet
        player.place_bet(20)
        player.settle(Outcome.PUSH)
        assert player.can_repeat_bet
        player.place_bet(20)
        player.settle(Outcome.DEALER_WIN)
        assert not player.can_repeat_bet

    def test_refund_returns_stake(self):
        player = Player(bankroll=Decimal("100"))
        player.place_bet(40)
        assert player.refund() == Decimal("40")
        assert player.bankroll == Decimal("100")
        assert player.current_bet == 0
        assert player.last_bet == 40

    def test_is_broke(self):
        player = Player(bankroll=Decimal("1"))
        assert not player.is_broke
        player.place_bet(1)
        player.settle(Outcome.DEALER_WIN)
        assert player.is_broke


class TestBlackjackGame:
    """Tests for the game wrapper."""

    def test_builds_shuffled_shoe(self, game):
        assert game.shoe.remaining() == 52
        assert game.running_count == 0
        assert game.true_count == 0.0
        assert game.player.bankroll == Decimal("100")

    def test_invalid_deck_count(self):
        with pytest.raises(InvalidConfiguration):
            GameConfig(deck_count=0)

    def test_start_round_deals(self, game):
        round_ = game.start_round(10)
        assert round_ is not None
        assert game.current_round is round_
        assert game.player.bankroll == Decimal("90")
        assert game.shoe.remaining() <= 48

    def test_start_round_rejects_unaffordable_bet(self, game):
        events = []
        game.subscribe(events.append, EventType.INSUFFICIENT_FUNDS)
        assert game.start_round(500) is None
        assert game.current_round is None
        assert len(events) == 1
        assert events[0].data["required"] == 500

    def test_cannot_start_second_round_mid_round(self, game):
        stack_game(game, "9C", "10S", "9D", "7H", "5S", "5S", "5S", "5S")
        first = game.start_round(10)
        assert first is not None and first.awaiting_decision
        assert game.start_round(10) is None
        assert game.player.bankroll == Decimal("90")

    def test_settle_round(self, game):
        stack_game(game, "9C", "10S", "9D", "7H")
        round_ = game.start_round(10)
        round_.decide("s")
        assert game.settle(round_) == Decimal("-10")
        assert game.player.bankroll == Decimal("90")

    def test_settle_blackjack(self, game):
        stack_game(game, "10C", "AS", "7D", "KH")
        round_ = game.start_round(10)
        assert round_.finished
        assert game.settle(round_) == Decimal("15")
        assert game.player.bankroll == Decimal("115")

    def test_settle_unresolved_round_raises(self, game):
        stack_game(game, "9C", "10S", "9D", "7H")
        round_ = game.start_round(10)
        with pytest.raises(ValueError):
            game.settle(round_)

    def test_bet_resolved_event(self, game):
        resolved = []
        game.subscribe(resolved.append, EventType.BET_RESOLVED)
        stack_game(game, "9C", "10S", "10D", "7H")
        round_ = game.start_round(10)
        round_.decide("s")
        game.settle(round_)
        assert resolved[0].data["outcome"] == Outcome.DEALER_WIN
        assert resolved[0].data["bankroll"] == Decimal("90")

    def test_needs_reshuffle(self, game):
        assert not game.needs_reshuffle
        while game.shoe.remaining() >= 20:
            game.shoe.take_card()
        assert game.needs_reshuffle

    def test_reshuffle_rebuilds_shoe(self, game):
        shuffled = []
        game.subscribe(shuffled.append, EventType.SHOE_SHUFFLED)
        for _ in range(40):
            game.shoe.take_card()

        game.reshuffle()
        assert game.shoe.remaining() == 52
        assert game.running_count == 0
        assert not game.needs_reshuffle
        assert shuffled[0].data["remaining"] == 52

    def test_no_reshuffle_mid_round(self, game):
        stack_game(game, "9C", "10S", "9D", "7H", "5S")
        game.start_round(10)
        game.reshuffle()
        assert game.shoe.remaining() == 1

    def test_counts_persist_across_rounds(self, game):
        stack_game(game, "2C", "10S", "KD", "7H", "5S", "4C", "5H", "6D", "10H", "9C")
        first = game.start_round(10)
        first.decide("s")
        game.settle(first)
        # 2, 10, K, 7 then dealer draws 5: +1 -1 -1 0 +1
        assert first.outcome == Outcome.PUSH
        assert game.running_count == 0

        second = game.start_round(10)
        second.decide("s")
        # 4, 5, 6, 10 then dealer draws 9: +1 +1 +1 -1 0
        assert game.running_count == 2

    def test_shoe_empty_during_deal_aborts_round(self, game):
        aborted = []
        game.subscribe(aborted.append, EventType.ROUND_ABORTED)
        stack_game(game, "9C", "10S", "8D")

        with pytest.raises(ShoeEmpty):
            game.start_round(10)

        assert game.current_round is None
        assert game.player.bankroll == Decimal("100")
        assert aborted[0].data["refund"] == Decimal("10")

    def test_game_recovers_after_aborted_deal(self, game):
        invalid = []
        game.subscribe(invalid.append, EventType.INVALID_ACTION)
        stack_game(game, "9C", "10S", "8D")
        with pytest.raises(ShoeEmpty):
            game.start_round(10)

        game.reshuffle()
        assert game.shoe.remaining() == 52
        assert game.start_round(10) is not None
        assert invalid == []

    def test_abort_after_dealer_exhausts_shoe(self, game):
        stack_game(game, "10C", "10S", "6D", "8H")
        round_ = game.start_round(10)
        with pytest.raises(ShoeEmpty):
            round_.decide("s")

        game.abort_round()
        assert game.current_round is None
        assert game.player.bankroll == Decimal("100")
        game.reshuffle()
        assert game.shoe.remaining() == 52

    def test_abort_without_open_round_does_nothing(self, game):
        stack_game(game, "9C", "10S", "9D", "7H")
        round_ = game.start_round(10)
        round_.decide("s")
        game.abort_round()
        assert game.current_round is round_
        assert game.player.bankroll == Decimal("90")
        assert not game.events.of_type(EventType.ROUND_ABORTED)

    def test_reproducible_with_seed(self, game_config):
        first = BlackjackGame(game_config, rng=Random(7))
        second = BlackjackGame(game_config, rng=Random(7))
        assert list(first.shoe) == list(second.shoe)


class TestEventEmitter:
    """Tests for event dispatch."""

    def test_typed_and_catch_all_handlers(self):
        emitter = EventEmitter()
        typed, everything = [], []
        emitter.subscribe(typed.append, EventType.PLAYER_HIT)
        emitter.subscribe(everything.append)

        emitter.emit_new(EventType.PLAYER_HIT, hand_value=15)
        emitter.emit_new(EventType.PLAYER_STAND, hand_value=15)

        assert [e.event_type for e in typed] == [EventType.PLAYER_HIT]
        assert len(everything) == 2
        assert len(emitter.history) == 2

    def test_clear_history(self):
        emitter = EventEmitter()
        emitter.emit_new(EventType.ROUND_STARTED)
        emitter.clear_history()
        assert emitter.history == []

    def test_event_str(self):
        event = EventEmitter().emit_new(EventType.CARD_DEALT, card=str(Card.from_string("AS")))
        assert str(event) == "CARD_DEALT: {'card': 'A♠'}"
