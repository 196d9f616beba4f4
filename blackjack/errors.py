"""Blackjack engine exceptions."""


class BlackjackError(Exception):
    """Base class for all engine errors."""


class InvalidRank(BlackjackError, ValueError):
    """A numeric rank value has no corresponding card rank."""

    def __init__(self, value: int) -> None:
        super().__init__(f"Invalid card rank value: {value}")
        self.value = value


class InvalidConfiguration(BlackjackError, ValueError):
    """Game or shoe configuration is unusable."""


class ShoeEmpty(BlackjackError, IndexError):
    """A card was requested from a shoe with no cards left."""

    def __init__(self) -> None:
        super().__init__("Cannot draw from empty shoe")
