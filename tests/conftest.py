"""Pytest fixtures for blackjack engine tests."""

from random import Random

import pytest
from hypothesis import strategies as st

from blackjack.cards import Card, Rank, Suit
from blackjack.game import EventEmitter, Round
from blackjack.hand import Hand
from blackjack.shoe import Shoe


def make_hand(*tokens: str) -> Hand:
    """Build a hand from card tokens like 'AS', '10H'."""
    hand = Hand()
    for token in tokens:
        hand.add_card(Card.from_string(token))
    return hand


def stacked_shoe(*tokens: str) -> Shoe:
    """Build a shoe that deals the given tokens in order."""
    return Shoe.from_cards(Card.from_string(token) for token in reversed(tokens))


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    s = Shoe(num_decks=6, rng=rng)
    s.shuffle()
    return s


@pytest.fixture
def events():
    return EventEmitter()


@pytest.fixture
def dealt_round(events):
    """
    Factory for a dealt round from a stacked shoe.

    Deal order is dealer up, player, dealer hole, player, then any hits.
    """

    def _deal(*tokens: str) -> Round:
        round_ = Round(stacked_shoe(*tokens), events)
        round_.deal()
        return round_

    return _deal


@pytest.fixture
def empty_hand():
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return make_hand("AS", "KH")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return make_hand("10S", "6H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return make_hand("10S", "6H", "KC")


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw, ranks=tuple(Rank)):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(ranks)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=0, max_cards=8, ranks=tuple(Rank)):
    """Generate a random hand."""
    cards = draw(st.lists(card_strategy(ranks), min_size=min_cards, max_size=max_cards))
    return Hand(cards)
