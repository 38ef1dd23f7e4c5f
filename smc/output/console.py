"""Console output for commands.

Commands and the flip animator report progress through ``ConsoleProtocol``.
``RichConsole`` writes styled text to the terminal; ``MockConsole`` records
what would have been written so tests can assert on it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()
    STEP = auto()  # one step of a running sequence

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for styled, line-oriented console output.

    Implementations may write to a terminal through Rich or record lines
    for tests.
    """

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling.

        Args:
            message: The text to print
            style: The style to apply
        """
        ...

    def success(self, message: str) -> None:
        """Print a success message, prefixed with ``OK``.

        Args:
            message: What succeeded
        """
        ...

    def error(self, message: str) -> None:
        """Print an error message, prefixed with ``error:``.

        Args:
            message: What went wrong
        """
        ...

    def info(self, message: str) -> None:
        """Print an informational message, prefixed with ``info:``.

        Args:
            message: The information to show
        """
        ...

    def header(self, message: str) -> None:
        """Print a section header.

        Args:
            message: Header title
        """
        ...

    def step(self, index: int, message: str) -> None:
        """Print one numbered step of a sequence.

        Args:
            index: 1-based position of the step
            message: Description of the step
        """
        ...


class RichConsole:
    """Console backed by ``rich``."""

    _STYLES = {
        Style.DEFAULT: "",
        Style.SUCCESS: "green",
        Style.ERROR: "red bold",
        Style.INFO: "cyan",
        Style.DIM: "dim",
        Style.HEADER: "blue bold",
        Style.STEP: "magenta",
    }

    def __init__(self, *, stderr: bool = False) -> None:
        # Import Rich lazily so the core stays importable without it
        from rich.console import Console

        self._console = Console(stderr=stderr)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._STYLES.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style)
        else:
            self._console.print(message)

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {message}")

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {message}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {message}")

    def header(self, message: str) -> None:
        self._console.print(f"\n[blue bold]{message}[/blue bold]")

    def step(self, index: int, message: str) -> None:
        self._console.print(f"[magenta]{index:>3}[/magenta] {message}")


@dataclass
class OutputRecord:
    """A single captured line."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def step(self, index: int, message: str) -> None:
        self.outputs.append(OutputRecord(f"{index} {message}", Style.STEP))

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
