"""Level command - apply a level change and replay its flip."""

from __future__ import annotations

from pathlib import Path

import typer

from smc.cli.context import build_context
from smc.core.errors import ErrorCode
from smc.counter.flip import FlipAnimator
from smc.counter.model import CounterLimits, Player
from smc.platform.scheduler import ManualScheduler


class _Label:
    def __init__(self, text: str) -> None:
        self.text = text


def level(
    name: str = typer.Argument(..., help="Player name."),
    current: int = typer.Option(1, "--level", min=1, help="Current level."),
    gear: int = typer.Option(0, "--gear", min=0, help="Gear bonus."),
    delta: int = typer.Option(1, "--delta", help="Levels gained (negative to lose)."),
    config: Path | None = typer.Option(None, "--config", help="Path to smc.toml."),
) -> None:
    """Change a player's level within the configured bounds."""
    ctx = build_context(config)
    limits = CounterLimits.from_config(ctx.config.counter)

    if not limits.min_level <= current <= limits.max_level:
        typer.echo(
            f"error: --level must be between {limits.min_level} and {limits.max_level}", err=True
        )
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    try:
        player = Player(name=name, level=current, gear=gear)
    except ValueError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    updated = player.with_level(delta, limits)
    direction = player.level_direction(updated)
    if direction is None:
        ctx.console.info(f"{player.name} stays at level {player.level}")
    else:
        # Headless: drive the animation on a virtual clock
        scheduler = ManualScheduler()
        label = _Label(str(player.level))
        animator = FlipAnimator(
            scheduler,
            label,
            duration=ctx.config.animation.flip_duration,
            console=ctx.console,
        )
        animator.flip(updated.level, direction).done(
            lambda: ctx.console.success(f"{updated.name} is now level {label.text}")
        )
        scheduler.run_all()

    ctx.console.print(f"strength: {updated.strength}")
    if updated.has_won(limits):
        ctx.console.success(f"{updated.name} wins!")
