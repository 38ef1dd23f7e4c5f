"""Tests for smc.counter.model module."""

from __future__ import annotations

import pytest

from smc.core.config import CounterConfig
from smc.counter.flip import FlipDirection
from smc.counter.model import CounterLimits, Player


class TestCounterLimits:
    def test_defaults(self) -> None:
        limits = CounterLimits()
        assert (limits.min_level, limits.max_level) == (1, 10)

    def test_from_config(self) -> None:
        limits = CounterLimits.from_config(CounterConfig(min_level=2, max_level=20))
        assert limits == CounterLimits(2, 20)

    @pytest.mark.parametrize(("level", "expected"), [(0, 1), (1, 1), (5, 5), (10, 10), (11, 10)])
    def test_clamp(self, level: int, expected: int) -> None:
        assert CounterLimits().clamp(level) == expected

    def test_invalid_bounds(self) -> None:
        with pytest.raises(ValueError):
            CounterLimits(min_level=5, max_level=4)


class TestPlayer:
    """Player counter values."""

    def test_strength(self) -> None:
        assert Player("Ana", level=3, gear=4).strength == 7

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="name"):
            Player("  ")

    def test_negative_gear_rejected(self) -> None:
        with pytest.raises(ValueError, match="gear"):
            Player("Ana", gear=-1)

    def test_level_below_one_rejected(self) -> None:
        with pytest.raises(ValueError, match="level"):
            Player("Ana", level=0)

    def test_with_level_clamps(self) -> None:
        player = Player("Ana", level=9)
        assert player.with_level(5).level == 10
        assert player.with_level(-20).level == 1

    def test_with_level_custom_limits(self) -> None:
        player = Player("Ana", level=9)
        assert player.with_level(5, CounterLimits(1, 20)).level == 14

    def test_with_level_returns_copy(self) -> None:
        player = Player("Ana", level=2)
        player.with_level(1)
        assert player.level == 2

    def test_with_gear_floors_at_zero(self) -> None:
        assert Player("Ana", gear=2).with_gear(-5).gear == 0
        assert Player("Ana", gear=2).with_gear(3).gear == 5

    def test_level_direction(self) -> None:
        player = Player("Ana", level=3)
        assert player.level_direction(player.with_level(1)) is FlipDirection.UP
        assert player.level_direction(player.with_level(-1)) is FlipDirection.DOWN
        assert player.level_direction(player.with_gear(1)) is None

    def test_has_won(self) -> None:
        assert Player("Ana", level=10).has_won()
        assert not Player("Ana", level=9).has_won()
        assert Player("Ana", level=5).has_won(CounterLimits(1, 5))
