"""Round state and player decision enumerations."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: DEALING → PLAYER_TURN → DEALER_REVEAL → DEALER_TURN → RESOLVED
    """

    DEALING = auto()
    PLAYER_TURN = auto()
    DEALER_REVEAL = auto()
    DEALER_TURN = auto()
    RESOLVED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class Decision(Enum):
    """Player decisions accepted during the player's turn."""

    HIT = "h"
    STAND = "s"

    @classmethod
    def parse(cls, choice: str) -> "Decision | None":
        """Parse console input ('h', 'hit', 's', 'stand'); None if unrecognised."""
        choice = choice.strip().lower()
        for decision in cls:
            if choice in (decision.value, decision.name.lower()):
                return decision
        return None
