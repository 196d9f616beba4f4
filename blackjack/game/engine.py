"""Blackjack game: shoe lifetime, rounds and bankroll settlement."""

import logging
from decimal import Decimal
from random import Random
from typing import Callable

from config import GameConfig, config
from blackjack.errors import ShoeEmpty
from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.player import Player
from blackjack.game.round import Round
from blackjack.shoe import Shoe

logger = logging.getLogger(__name__)


class BlackjackGame:
    """
    Owns the shoe and the player's bankroll across rounds.

    Communication happens through events and return values only. Whoever
    drives the game checks needs_reshuffle between rounds; the game never
    reshuffles mid-round.
    """

    def __init__(
        self,
        game_config: GameConfig | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Build and shuffle the shoe.

        Args:
            game_config: Shoe and table settings (global config if not provided)
            rng: Random number generator for reproducible games

        Raises:
            InvalidConfiguration: if the deck count is less than 1
        """
        self.config = game_config or config.game
        self.shoe = Shoe.build(self.config.deck_count, rng=rng)
        self.shoe.shuffle()

        self.player = Player(bankroll=self.config.buy_in_amount)
        self.events = EventEmitter()
        self.current_round: Round | None = None

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    @property
    def needs_reshuffle(self) -> bool:
        """Check if the shoe has fallen below the reshuffle limit."""
        return self.shoe.remaining() < self.config.reshuffle_limit

    def reshuffle(self) -> None:
        """Rebuild the shoe from fresh decks and shuffle it."""
        if self.current_round is not None and not self.current_round.finished:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot reshuffle during a round",
            )
            return

        self.shoe.rebuild()
        logger.info("Shoe rebuilt with %d decks", self.shoe.num_decks)
        self.events.emit_new(EventType.SHOE_SHUFFLED, remaining=self.shoe.remaining())

    def start_round(self, bet: int) -> Round | None:
        """
        Place a bet and deal a new round.

        Args:
            bet: Bet amount

        Returns:
            The dealt round, or None if the bet was rejected

        Raises:
            ShoeEmpty: if the shoe runs out while dealing (the round is
                aborted and the stake refunded first)
        """
        if self.current_round is not None and not self.current_round.finished:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="A round is already in progress",
            )
            return None

        if not self.player.place_bet(bet):
            self.events.emit_new(
                EventType.INSUFFICIENT_FUNDS,
                required=bet,
                available=self.player.bankroll,
            )
            return None

        self.events.emit_new(EventType.BET_PLACED, amount=bet)

        self.current_round = Round(self.shoe, self.events)
        try:
            self.current_round.deal()
        except ShoeEmpty:
            self.abort_round()
            raise
        return self.current_round

    def abort_round(self) -> None:
        """
        Abandon an unfinished round and refund its stake.

        Used when the shoe runs out mid-round. The round's cards stay counted;
        the game can reshuffle and deal again afterwards.
        """
        if self.current_round is None or self.current_round.finished:
            return

        refund = self.player.refund()
        logger.warning("Round aborted in state %s, refunded %s", self.current_round.state, refund)
        self.current_round = None
        self.events.emit_new(
            EventType.ROUND_ABORTED,
            refund=refund,
            bankroll=self.player.bankroll,
        )

    def settle(self, round_: Round) -> Decimal:
        """
        Apply a finished round's outcome to the bankroll.

        Returns:
            The net win (positive) or loss (negative)
        """
        if round_.outcome is None:
            raise ValueError("Cannot settle a round that has not been resolved")

        net = self.player.settle(round_.outcome)
        self.events.emit_new(
            EventType.BET_RESOLVED,
            outcome=round_.outcome,
            amount=net,
            bankroll=self.player.bankroll,
        )
        return net

    @property
    def running_count(self) -> int:
        return self.shoe.running_count

    @property
    def true_count(self) -> float:
        return self.shoe.true_count
