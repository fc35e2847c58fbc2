"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_flag(name: str, default: bool) -> bool:
    """Parse a boolean environment variable; unknown spellings are an error."""
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of: " + ", ".join(sorted(_TRUE_VALUES | _FALSE_VALUES)))


def _parse_seed() -> int | None:
    """Parse BLACKJACK_SEED; unset or empty means a time-based seed."""
    raw = os.getenv("BLACKJACK_SEED", "").strip()
    return int(raw) if raw else None


@dataclass(frozen=True)
class DisplayConfig:
    """Console rendering and pacing."""

    draw_delay: float = field(
        default_factory=lambda: float(os.getenv("BLACKJACK_DRAW_DELAY", "2"))
    )
    cards_per_row: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_CARDS_PER_ROW", "6"))
    )
    # Only takes effect on a terminal; piped output is always plain
    color: bool = field(default_factory=lambda: _parse_flag("BLACKJACK_COLOR", True))

    def __post_init__(self) -> None:
        if self.draw_delay < 0:
            raise ValueError("draw_delay cannot be negative")
        if self.cards_per_row < 1:
            raise ValueError("cards_per_row must be at least 1")


@dataclass(frozen=True)
class GameConfig:
    """Table configuration."""

    starting_balance: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_STARTING_BALANCE", "10"))
    )
    seed: int | None = field(default_factory=_parse_seed)

    def __post_init__(self) -> None:
        if self.starting_balance < 1:
            raise ValueError("starting_balance must be at least 1")


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    log_level: str = field(
        default_factory=lambda: os.getenv("BLACKJACK_LOG_LEVEL", "WARNING").upper()
    )
    game: GameConfig = field(default_factory=GameConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")


def load_config() -> AppConfig:
    """Read a fresh configuration from the environment."""
    return AppConfig()
