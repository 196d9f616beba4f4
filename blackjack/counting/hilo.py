"""Hi-Lo card counting system."""

from typing import Mapping

from blackjack.cards import Rank
from blackjack.counting.base import CountingSystem


class HiLoSystem(CountingSystem):
    """
    Hi-Lo counting system.

    Tag values by blackjack value:
        2-6: +1 (low cards)
        7-9: 0  (neutral)
        10-A: -1 (high cards)
    """

    _TAG_VALUES: Mapping[Rank, int] = {
        rank: 1 if rank.blackjack_value <= 6 else 0 if rank.blackjack_value <= 9 else -1
        for rank in Rank
    }

    @property
    def name(self) -> str:
        return "Hi-Lo"

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES
