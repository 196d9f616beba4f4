"""Round state machine, outcomes and game flow."""

from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.state import Decision, RoundState
from blackjack.game.outcome import Outcome, determine_outcome
from blackjack.game.player import Player
from blackjack.game.round import Round
from blackjack.game.engine import BlackjackGame

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "Decision",
    "RoundState",
    "Outcome",
    "determine_outcome",
    "Player",
    "Round",
    "BlackjackGame",
]
