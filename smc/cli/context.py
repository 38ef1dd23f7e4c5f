from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from smc.core.config import Config, load_config
from smc.core.errors import ErrorCode
from smc.core.result import Err
from smc.output.console import ConsoleProtocol, RichConsole

DEFAULT_CONFIG_NAME = "smc.toml"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None) -> CLIContext:
    """Load config and set up output for a command.

    An explicit ``config_path`` must load. Without one, ``smc.toml`` in the
    current directory is used when present, defaults otherwise.
    """
    path = config_path
    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_NAME
        path = candidate if candidate.is_file() else None

    config = Config()
    if path is not None:
        result = load_config(path)
        if isinstance(result, Err):
            typer.echo(f"error: {result.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        config = result.value

    return CLIContext(config=config, console=RichConsole())
