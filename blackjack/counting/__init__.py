"""Card counting systems."""

from blackjack.counting.base import CountingSystem
from blackjack.counting.hilo import HiLoSystem

__all__ = [
    "CountingSystem",
    "HiLoSystem",
]
