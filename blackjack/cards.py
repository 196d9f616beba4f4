"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from blackjack.errors import InvalidRank

CARDS_PER_DECK = 52

# Numeric rank values used to build a standard deck (2 through Ace-high)
RANK_VALUES = range(2, 15)

ACE_HIGH_VALUE = 11
ACE_LOW_VALUE = 1


class Suit(Enum):
    """Card suits. Irrelevant to scoring."""

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    """Card ranks with blackjack values."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @classmethod
    def from_value(cls, value: int) -> "Rank":
        """
        Look up a rank by its numeric value.

        Both 1 and 14 are accepted for the Ace.

        Raises:
            InvalidRank: if the value is outside 1..14
        """
        if value == 1:
            return cls.ACE
        try:
            return cls(value)
        except ValueError:
            raise InvalidRank(value) from None

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return ACE_HIGH_VALUE
        return 10

    @property
    def is_ace(self) -> bool:
        return self == Rank.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a token like 'A♠', '10H', 'Kc'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str, suit_str = s[:-1], s[-1]

        rank_map = {str(rank): rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {suit.name[0]: suit for suit in Suit}
        suit_map.update({suit.value: suit for suit in Suit})

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


@dataclass(frozen=True)
class Deck:
    """A complete 52-card set, used as a building block for a shoe."""

    cards: tuple[Card, ...]

    @classmethod
    def build(cls, rank_values: Iterable[int] = RANK_VALUES) -> "Deck":
        """
        Build one card of every rank in every suit.

        Raises:
            InvalidRank: if any of the rank values is not a card rank
        """
        ranks = [Rank.from_value(value) for value in rank_values]
        return cls(tuple(Card(rank, suit) for suit in Suit for rank in ranks))

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)
