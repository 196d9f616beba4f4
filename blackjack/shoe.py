"""Multi-deck shoe with card counting."""

import logging
from random import Random
from typing import Iterable, Iterator

from blackjack.cards import CARDS_PER_DECK, Card, Deck
from blackjack.counting import CountingSystem, HiLoSystem
from blackjack.errors import InvalidConfiguration, ShoeEmpty

logger = logging.getLogger(__name__)


class Shoe:
    """
    A draw pile built from one or more decks.

    Cards are taken from the end of the list. Every card taken is counted
    before it is handed to the caller.
    """

    def __init__(
        self,
        num_decks: int = 6,
        rng: Random | None = None,
        counting_system: CountingSystem | None = None,
    ) -> None:
        """
        Build an unshuffled shoe.

        Args:
            num_decks: Number of decks in the shoe (at least 1)
            rng: Random number generator for shuffling
            counting_system: Count tracker (Hi-Lo if not provided)

        Raises:
            InvalidConfiguration: if num_decks is less than 1
            InvalidRank: if deck construction fails
        """
        if num_decks < 1:
            raise InvalidConfiguration(f"Shoe must have at least 1 deck, got {num_decks}")

        self._num_decks = num_decks
        self._rng = rng or Random()
        self._counter = counting_system or HiLoSystem()
        self._cards: list[Card] = []
        self._fill()

    @classmethod
    def build(cls, deck_count: int, rng: Random | None = None) -> "Shoe":
        """Concatenate deck_count freshly built decks into a shoe."""
        return cls(num_decks=deck_count, rng=rng)

    @classmethod
    def from_cards(cls, cards: Iterable[Card], rng: Random | None = None) -> "Shoe":
        """Create a stacked shoe. The last card is drawn first."""
        cards = list(cards)
        num_decks = max(-(-len(cards) // CARDS_PER_DECK), 1)
        shoe = cls(num_decks=num_decks, rng=rng)
        shoe._cards = cards
        return shoe

    def _fill(self) -> None:
        self._cards = [
            card
            for _ in range(self._num_decks)
            for card in Deck.build()
        ]

    def shuffle(self) -> None:
        """Shuffle the cards in the shoe and reset the counts."""
        self._rng.shuffle(self._cards)
        self._counter.reset()
        logger.info("Shuffled shoe with %d cards", len(self._cards))

    def rebuild(self) -> None:
        """Replace the shoe with fresh decks, then shuffle."""
        self._fill()
        self.shuffle()

    def take_card(self) -> Card:
        """
        Remove the top card and count it.

        Raises:
            ShoeEmpty: if no cards remain
        """
        if not self._cards:
            raise ShoeEmpty()
        card = self._cards.pop()
        self._counter.count_card(card, len(self._cards))
        logger.debug(
            "Drew %s (running=%d, true=%.2f, remaining=%d)",
            card,
            self.running_count,
            self.true_count,
            len(self._cards),
        )
        return card

    def remaining(self) -> int:
        """Return the number of cards left."""
        return len(self._cards)

    @property
    def running_count(self) -> int:
        return self._counter.running_count

    @property
    def true_count(self) -> float:
        return self._counter.true_count

    @property
    def counting_system(self) -> CountingSystem:
        return self._counter

    @property
    def num_decks(self) -> int:
        return self._num_decks

    @property
    def total_cards(self) -> int:
        """Return the number of cards in a full shoe."""
        return self._num_decks * CARDS_PER_DECK

    @property
    def cards_dealt(self) -> int:
        return self.total_cards - len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
