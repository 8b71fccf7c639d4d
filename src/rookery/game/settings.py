"""Game configuration presets."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_TURNS = 50
DEFAULT_TICK_INTERVAL_MS = 1000


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Immutable per-game configuration.

    Args:
        time_limit_seconds: Thinking time allowed per player, ``None`` for no limit.
        max_turns: Turns each player may take before the game is drawn.
        tick_interval_ms: Period of each player's clock tick.
    """

    time_limit_seconds: int | None = None
    max_turns: int = DEFAULT_MAX_TURNS
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS

    def __post_init__(self) -> None:
        if self.time_limit_seconds is not None and self.time_limit_seconds < 0:
            raise ValueError("Time limit must be >= 0")
        if self.max_turns < 0:
            raise ValueError("Max turns must be >= 0")
        if self.tick_interval_ms <= 0:
            raise ValueError("Tick interval must be > 0")

    # Common presets
    @classmethod
    def blitz_5m(cls) -> GameSettings:
        return cls(time_limit_seconds=300)

    @classmethod
    def rapid_10m(cls) -> GameSettings:
        return cls(time_limit_seconds=600)

    @classmethod
    def classical_30m(cls) -> GameSettings:
        return cls(time_limit_seconds=1800)

    @classmethod
    def unlimited(cls) -> GameSettings:
        """No time limit."""
        return cls(time_limit_seconds=None)

    def __repr__(self) -> str:
        if self.time_limit_seconds is None:
            limit = "unlimited"
        else:
            limit = f"{self.time_limit_seconds / 60:.0f}m"
        return f"GameSettings({limit}, {self.max_turns} turns)"
