"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field
from decimal import Decimal

from blackjack.errors import InvalidConfiguration


@dataclass(frozen=True)
class GameConfig:
    """Shoe and table configuration."""

    deck_count: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_DECK_COUNT", "6"))
    )
    # Minimum cards left in the shoe to play another round
    reshuffle_limit: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_RESHUFFLE_LIMIT", "52"))
    )
    # Pause between moves in milliseconds, 0 means no delay
    delay_ms: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_DELAY_MS", "1000"))
    )
    buy_in_amount: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("BLACKJACK_BUY_IN", "2500"))
    )

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.deck_count < 1:
            raise InvalidConfiguration("deck_count must be at least 1")
        if self.reshuffle_limit < 0:
            raise InvalidConfiguration("reshuffle_limit cannot be negative")
        if self.delay_ms < 0:
            raise InvalidConfiguration("delay_ms cannot be negative")
        if not self.buy_in_amount.is_finite() or self.buy_in_amount <= 0:
            raise InvalidConfiguration("buy_in_amount must be positive")

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    game: GameConfig = field(default_factory=GameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
config = AppConfig()
