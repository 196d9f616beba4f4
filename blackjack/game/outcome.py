"""Round outcomes and payouts."""

from decimal import Decimal
from enum import Enum

from blackjack.hand import Hand

BLACKJACK_PAYOUT = Decimal("1.5")


class Outcome(Enum):
    """Final result of a round, from the player's point of view."""

    PLAYER_BUST = "player_bust"
    DEALER_BUST = "dealer_bust"
    PUSH = "push"
    DEALER_WIN = "dealer_win"
    PLAYER_WIN = "player_win"
    PLAYER_BLACKJACK = "player_blackjack"
    BLACKJACK_PUSH = "blackjack_push"

    @property
    def payout(self) -> Decimal:
        """Net multiplier applied to the bet (-1 lose, 0 push, 1 win, 1.5 blackjack)."""
        return _PAYOUTS[self]

    @property
    def player_wins(self) -> bool:
        return self.payout > 0

    @property
    def is_push(self) -> bool:
        return self.payout == 0

    def describe(self) -> str:
        return _DESCRIPTIONS[self]


_PAYOUTS: dict[Outcome, Decimal] = {
    Outcome.PLAYER_BUST: Decimal("-1"),
    Outcome.DEALER_BUST: Decimal("1"),
    Outcome.PUSH: Decimal("0"),
    Outcome.DEALER_WIN: Decimal("-1"),
    Outcome.PLAYER_WIN: Decimal("1"),
    Outcome.PLAYER_BLACKJACK: BLACKJACK_PAYOUT,
    Outcome.BLACKJACK_PUSH: Decimal("0"),
}

_DESCRIPTIONS: dict[Outcome, str] = {
    Outcome.PLAYER_BUST: "Player bust :(",
    Outcome.DEALER_BUST: "Dealer bust! winnings 1:1",
    Outcome.PUSH: "Push! You get your money back",
    Outcome.DEALER_WIN: "Dealer wins, better luck next time!",
    Outcome.PLAYER_WIN: "Congratulations! winnings 1:1",
    Outcome.PLAYER_BLACKJACK: "BlackJack wins 3:2",
    Outcome.BLACKJACK_PUSH: "Push! You get your money back",
}


def natural_outcome(player_hand: Hand, dealer_hand: Hand) -> Outcome | None:
    """Settle a player natural against the revealed dealer hand, if there is one."""
    if not player_hand.is_blackjack:
        return None
    if dealer_hand.is_blackjack:
        return Outcome.BLACKJACK_PUSH
    return Outcome.PLAYER_BLACKJACK


def determine_outcome(player_hand: Hand, dealer_hand: Hand) -> Outcome:
    """
    Compare player and dealer hands.

    A player natural is settled first. Otherwise: player bust beats
    everything, then dealer bust, then equal values push, then the higher
    value wins.
    """
    natural = natural_outcome(player_hand, dealer_hand)
    if natural is not None:
        return natural

    if player_hand.is_busted:
        return Outcome.PLAYER_BUST

    if dealer_hand.is_busted:
        return Outcome.DEALER_BUST

    player_value = player_hand.value
    dealer_value = dealer_hand.value

    if player_value == dealer_value:
        return Outcome.PUSH
    if dealer_value > player_value:
        return Outcome.DEALER_WIN
    return Outcome.PLAYER_WIN
