"""Player counters and their animations."""

from .flip import FlipAnimator, FlipDirection, FlipRecord, LabelProtocol
from .model import CounterLimits, Player

__all__ = [
    "CounterLimits",
    "FlipAnimator",
    "FlipDirection",
    "FlipRecord",
    "LabelProtocol",
    "Player",
]
