"""Abstract base class for card counting systems."""

from abc import ABC, abstractmethod
from typing import Mapping

from blackjack.cards import CARDS_PER_DECK, Card, Rank

# Fewer than one full deck left still divides the running count by one deck
MIN_TRUE_COUNT_DECKS = 1


class CountingSystem(ABC):
    """
    Tracks a running count and a true count as cards leave the shoe.

    Both counts persist across rounds and only go back to zero on reset().
    """

    def __init__(self) -> None:
        self._running_count: int = 0
        self._true_count: float = 0.0
        self._cards_seen: int = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the counting system."""
        ...

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, int]:
        """Return the count value of every rank."""
        ...

    @property
    def full_deck_sum(self) -> int:
        """Sum of tag values over a complete 52-card deck (0 when balanced)."""
        return sum(self.tag_values[rank] * 4 for rank in Rank)

    def count_card(self, card: Card, cards_remaining: int) -> int:
        """
        Count a card that has just been drawn.

        Args:
            card: The card leaving the shoe
            cards_remaining: Cards left in the shoe after the draw

        Returns:
            The tag value of the card
        """
        tag_value = self.tag_values[card.rank]
        self._running_count += tag_value
        self._cards_seen += 1
        self._true_count = self.true_count_for(cards_remaining)
        return tag_value

    def true_count_for(self, cards_remaining: int) -> float:
        """Divide the running count by the number of full decks remaining."""
        full_decks = max(cards_remaining // CARDS_PER_DECK, MIN_TRUE_COUNT_DECKS)
        return self._running_count / full_decks

    @property
    def running_count(self) -> int:
        return self._running_count

    @property
    def true_count(self) -> float:
        return self._true_count

    @property
    def cards_seen(self) -> int:
        return self._cards_seen

    def reset(self) -> None:
        """Reset both counts to zero."""
        self._running_count = 0
        self._true_count = 0.0
        self._cards_seen = 0

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(running_count={self._running_count}, "
            f"true_count={self._true_count:.2f})"
        )
