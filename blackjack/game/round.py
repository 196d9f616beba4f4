"""A single round of blackjack as a state machine."""

import logging

from transitions import Machine

from blackjack.cards import Card
from blackjack.game.events import EventEmitter, EventType
from blackjack.game.outcome import Outcome, determine_outcome, natural_outcome
from blackjack.game.state import Decision, RoundState
from blackjack.hand import TWENTY_ONE, Hand
from blackjack.shoe import Shoe

logger = logging.getLogger(__name__)

DEALER_STAND_VALUE = 17


class Round:
    """
    One round between the player and the dealer, drawing from a shared shoe.

    The round never asks for input. While it is in PLAYER_TURN it waits for
    decide() to be called with the player's decision; everything else runs
    through on its own until RESOLVED.
    """

    STATES = [s.name.lower() for s in RoundState]

    TRANSITIONS = [
        {"trigger": "cards_dealt", "source": "dealing", "dest": "player_turn"},
        {"trigger": "player_hits", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_reveal"},
        {"trigger": "settle_natural", "source": "dealer_reveal", "dest": "resolved"},
        {"trigger": "dealer_plays", "source": "dealer_reveal", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "resolved"},
    ]

    def __init__(self, shoe: Shoe, events: EventEmitter | None = None) -> None:
        self.shoe = shoe
        self.events = events or EventEmitter()
        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.outcome: Outcome | None = None
        self._hole_card: Card | None = None

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="dealing",
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_log_state",
        )

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore[attr-defined]

    @property
    def awaiting_decision(self) -> bool:
        """True while the round needs a hit/stand decision."""
        return self.state == RoundState.PLAYER_TURN

    @property
    def finished(self) -> bool:
        return self.state == RoundState.RESOLVED

    @property
    def hole_card(self) -> Card | None:
        """The dealer's face-down card, until it is revealed."""
        return self._hole_card

    def _log_state(self) -> None:
        logger.debug("Round entered %s", self.state)

    def deal(self) -> None:
        """
        Deal the opening cards: dealer up, player, dealer hole, player.

        Raises:
            ShoeEmpty: if the shoe runs out mid-deal
        """
        if self.state != RoundState.DEALING:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cards have already been dealt",
                state=self.state.name,
            )
            return

        self._deal_card_to_hand(self.dealer_hand)
        self._deal_card_to_hand(self.player_hand)
        self._hole_card = self.shoe.take_card()
        self._emit_card_dealt(card_token="??", side="dealer", hand_value=None)
        self._deal_card_to_hand(self.player_hand)

        self.events.emit_new(
            EventType.ROUND_STARTED,
            dealer=str(self.dealer_hand),
            player=str(self.player_hand),
        )
        self.cards_dealt()
        self._check_player_total()

    def decide(self, decision: Decision | str) -> bool:
        """
        Apply a player decision.

        Anything other than hit or stand, or a decision outside the player's
        turn, is rejected without changing state.

        Returns:
            True if the decision was applied
        """
        if isinstance(decision, str):
            parsed = Decision.parse(decision)
        else:
            parsed = decision

        if parsed is None or self.state != RoundState.PLAYER_TURN:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message=f"Invalid choice '{decision}'",
                state=self.state.name,
            )
            return False

        if parsed == Decision.HIT:
            self._hit()
        else:
            self._stand()
        return True

    def _hit(self) -> None:
        self._deal_card_to_hand(self.player_hand)
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=self.player_hand.value)
        self.player_hits()
        self._check_player_total()

    def _stand(self) -> None:
        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.player_hand.value)
        self._finish_player_turn()

    def _check_player_total(self) -> None:
        """End the player's turn once the hand reaches 21 or more."""
        if self.player_hand.value < TWENTY_ONE:
            return

        if self.player_hand.is_blackjack:
            self.events.emit_new(EventType.PLAYER_BLACKJACK)
        elif self.player_hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.player_hand.value)
        self._finish_player_turn()

    def _finish_player_turn(self) -> None:
        self.player_done()
        self._reveal()

    def _reveal(self) -> None:
        """Turn over the hole card and settle a player natural straight away."""
        if self._hole_card is not None:
            self.dealer_hand.add_card(self._hole_card)
            self._hole_card = None

        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(self.dealer_hand.cards[-1]),
            hand_value=self.dealer_hand.value,
        )

        natural = natural_outcome(self.player_hand, self.dealer_hand)
        if natural is not None:
            self.settle_natural()
            self._resolve(natural)
            return

        self.dealer_plays()
        self._play_dealer()

    def _play_dealer(self) -> None:
        """Dealer draws below 17 and stands on 17 or more."""
        while self.dealer_hand.value < DEALER_STAND_VALUE:
            self._deal_card_to_hand(self.dealer_hand)
            self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer_hand.value)

        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)

        self.dealer_done()
        self._resolve(determine_outcome(self.player_hand, self.dealer_hand))

    def _resolve(self, outcome: Outcome) -> None:
        self.outcome = outcome
        logger.info(
            "Round resolved: %s (player %d, dealer %d)",
            outcome.name,
            self.player_hand.value,
            self.dealer_hand.value,
        )
        self.events.emit_new(
            EventType.ROUND_ENDED,
            outcome=outcome,
            player_value=self.player_hand.value,
            dealer_value=self.dealer_hand.value,
        )

    def _deal_card_to_hand(self, hand: Hand) -> Card:
        card = self.shoe.take_card()
        hand.add_card(card)
        self._emit_card_dealt(
            card_token=str(card),
            side="dealer" if hand is self.dealer_hand else "player",
            hand_value=hand.value,
        )
        return card

    def _emit_card_dealt(self, card_token: str, side: str, hand_value: int | None) -> None:
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=card_token,
            hand=side,
            hand_value=hand_value,
            running_count=self.shoe.running_count,
            true_count=self.shoe.true_count,
            remaining=self.shoe.remaining(),
        )
