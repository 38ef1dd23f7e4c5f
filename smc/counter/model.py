"""Player counters: level plus gear bonus."""

from __future__ import annotations

from dataclasses import dataclass, replace

from smc.core.config import DEFAULT_MAX_LEVEL, DEFAULT_MIN_LEVEL, CounterConfig

from .flip import FlipDirection

__all__ = ["CounterLimits", "Player"]


@dataclass(frozen=True, slots=True)
class CounterLimits:
    """Level bounds (inclusive)."""

    min_level: int = DEFAULT_MIN_LEVEL
    max_level: int = DEFAULT_MAX_LEVEL

    def __post_init__(self) -> None:
        if self.min_level < 1 or self.min_level > self.max_level:
            raise ValueError(f"invalid level bounds {self.min_level}..{self.max_level}")

    @classmethod
    def from_config(cls, config: CounterConfig) -> CounterLimits:
        return cls(min_level=config.min_level, max_level=config.max_level)

    def clamp(self, level: int) -> int:
        return max(self.min_level, min(self.max_level, level))


@dataclass(frozen=True, slots=True)
class Player:
    """A player's counter.

    Attributes:
        name: Display name, never blank
        level: Current level (>= 1)
        gear: Bonus from equipped items (>= 0)
    """

    name: str
    level: int = DEFAULT_MIN_LEVEL
    gear: int = 0

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("player name must not be empty")
        if self.level < 1:
            raise ValueError(f"level must be at least 1, got {self.level}")
        if self.gear < 0:
            raise ValueError(f"gear must be non-negative, got {self.gear}")

    @property
    def strength(self) -> int:
        """Combat strength: level plus gear."""
        return self.level + self.gear

    def with_level(self, delta: int, limits: CounterLimits | None = None) -> Player:
        """Return a copy with ``level`` moved by ``delta``, clamped into limits."""
        bounds = limits or CounterLimits()
        return replace(self, level=bounds.clamp(self.level + delta))

    def with_gear(self, delta: int) -> Player:
        """Return a copy with ``gear`` moved by ``delta``, floored at zero."""
        return replace(self, gear=max(0, self.gear + delta))

    def level_direction(self, updated: Player) -> FlipDirection | None:
        """Direction a level label flips to show ``updated``, or None if equal."""
        if updated.level > self.level:
            return FlipDirection.UP
        if updated.level < self.level:
            return FlipDirection.DOWN
        return None

    def has_won(self, limits: CounterLimits | None = None) -> bool:
        bounds = limits or CounterLimits()
        return self.level >= bounds.max_level
