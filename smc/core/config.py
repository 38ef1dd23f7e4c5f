"""Typed configuration loading and access.

Layout of ``smc.toml``:

    [animation]
    flip_duration = 0.4   # seconds for a full label flip
    step_delay = 0.25     # pause between scripted demo steps

    [counter]
    min_level = 1
    max_level = 10

Every key is optional; missing keys fall back to the defaults below.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_table

__all__ = [
    "AnimationConfig",
    "Config",
    "ConfigError",
    "CounterConfig",
    "load_config",
    "load_config_or_default",
    "DEFAULT_FLIP_DURATION",
    "DEFAULT_STEP_DELAY",
    "DEFAULT_MIN_LEVEL",
    "DEFAULT_MAX_LEVEL",
]

DEFAULT_FLIP_DURATION = 0.4
DEFAULT_STEP_DELAY = 0.25
DEFAULT_MIN_LEVEL = 1
DEFAULT_MAX_LEVEL = 10


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class AnimationConfig:
    """Timing of counter animations, in seconds."""

    flip_duration: float = DEFAULT_FLIP_DURATION
    step_delay: float = DEFAULT_STEP_DELAY


@dataclass(frozen=True, slots=True)
class CounterConfig:
    """Level bounds of a player counter."""

    min_level: int = DEFAULT_MIN_LEVEL
    max_level: int = DEFAULT_MAX_LEVEL


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    animation: AnimationConfig = field(default_factory=AnimationConfig)
    counter: CounterConfig = field(default_factory=CounterConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a value is present but out of range.
        """
        animation: StrDict = get_table(data, "animation") or {}
        counter: StrDict = get_table(data, "counter") or {}

        flip_duration = _or_default(get_float(animation, "flip_duration"), DEFAULT_FLIP_DURATION)
        step_delay = _or_default(get_float(animation, "step_delay"), DEFAULT_STEP_DELAY)
        min_level = _or_default(get_int(counter, "min_level"), DEFAULT_MIN_LEVEL)
        max_level = _or_default(get_int(counter, "max_level"), DEFAULT_MAX_LEVEL)

        for name, seconds in (("flip_duration", flip_duration), ("step_delay", step_delay)):
            if seconds < 0 or not math.isfinite(seconds):
                raise ValueError(f"animation.{name} must be a non-negative number, got {seconds}")
        if min_level < 1:
            raise ValueError(f"counter.min_level must be at least 1, got {min_level}")
        if min_level > max_level:
            raise ValueError(
                f"counter.min_level ({min_level}) is greater than counter.max_level ({max_level})"
            )

        return cls(
            animation=AnimationConfig(flip_duration=flip_duration, step_delay=step_delay),
            counter=CounterConfig(min_level=min_level, max_level=max_level),
        )


def _or_default[T](value: T | None, default: T) -> T:
    # `or` would discard legitimate zero values
    return default if value is None else value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except ValueError as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))


def load_config_or_default(path: Path) -> Config:
    """Load config from file, falling back to defaults on any error."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return Config()
