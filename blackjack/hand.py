"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator

from blackjack.cards import ACE_HIGH_VALUE, ACE_LOW_VALUE, Card

TWENTY_ONE = 21


@dataclass
class Hand:
    """
    Cards held by one participant for one round.

    Cards are only ever appended; insertion order matters for display only.
    """

    cards: list[Card] = field(default_factory=list)

    @classmethod
    def from_card(cls, card: Card) -> "Hand":
        return cls([card])

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def calc_value(self) -> int:
        """
        Calculate the best hand value.

        Counts as many aces high as possible without going over 21. When even
        all-aces-low is over 21, that (bust) total is returned unclamped.
        """
        aces = sum(1 for card in self.cards if card.is_ace)
        value_without_aces = sum(card.value for card in self.cards if not card.is_ace)

        value = value_without_aces
        for low_aces in range(aces + 1):
            high_aces = aces - low_aces
            value = (
                value_without_aces
                + high_aces * ACE_HIGH_VALUE
                + low_aces * ACE_LOW_VALUE
            )
            if value <= TWENTY_ONE:
                return value

        return value

    @property
    def value(self) -> int:
        return self.calc_value()

    @property
    def is_soft(self) -> bool:
        """
        Check if the hand is soft (has an ace counted as 11).

        A hand is soft if it contains an ace that can be counted as 11
        without busting.
        """
        if not any(card.is_ace for card in self.cards):
            return False

        total_hard = sum(ACE_LOW_VALUE if card.is_ace else card.value for card in self.cards)
        return total_hard + ACE_HIGH_VALUE - ACE_LOW_VALUE <= TWENTY_ONE

    @property
    def is_blackjack(self) -> bool:
        """Check for a natural: two cards, exactly one ace, worth 21."""
        num_aces = sum(1 for card in self.cards if card.is_ace)
        return num_aces == 1 and len(self.cards) == 2 and self.calc_value() == TWENTY_ONE

    @property
    def is_busted(self) -> bool:
        return self.calc_value() > TWENTY_ONE

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = f"(BUST {self.value})"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
