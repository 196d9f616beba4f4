"""Blackjack rules engine - cards, shoe, counting and hand valuation."""

from blackjack.cards import Card, Deck, Rank, Suit
from blackjack.errors import BlackjackError, InvalidConfiguration, InvalidRank, ShoeEmpty
from blackjack.hand import Hand
from blackjack.shoe import Shoe

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "Hand",
    "Shoe",
    "BlackjackError",
    "InvalidConfiguration",
    "InvalidRank",
    "ShoeEmpty",
]
