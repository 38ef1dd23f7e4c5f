"""Demo command - replay a scripted level-up sequence on a real event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path

import typer

from smc.cli.context import CLIContext, build_context
from smc.core.errors import ErrorCode
from smc.core.promise import Promise, Settlement, defer_promise
from smc.counter.flip import FlipAnimator, FlipDirection
from smc.output.console import ConsoleProtocol, Style
from smc.platform.scheduler import AsyncioScheduler


class ConsoleLabel:
    """Label that echoes every text change to the console."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value
        self._console.print(f"label shows {value}", Style.DIM)


def demo(
    steps: int = typer.Option(3, "--steps", min=1, help="Number of level-up steps."),
    reject_at: int | None = typer.Option(
        None,
        "--reject-at",
        help="0-based step that rejects the sequence.",
    ),
    config: Path | None = typer.Option(None, "--config", help="Path to smc.toml."),
) -> None:
    """Flip a level counter up and run one check per step."""
    if reject_at is not None and not 0 <= reject_at < steps:
        typer.echo(f"error: --reject-at must be between 0 and {steps - 1}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    ctx = build_context(config)
    ctx.console.header(f"Level-up demo ({steps} steps)")

    outcome = asyncio.run(run_demo(ctx, steps=steps, reject_at=reject_at))
    if outcome is Settlement.FAILED:
        ctx.console.error("sequence rejected")
        raise typer.Exit(code=int(ErrorCode.SEQUENCE_FAILED))
    ctx.console.success("sequence completed")


async def run_demo(ctx: CLIContext, *, steps: int, reject_at: int | None) -> Settlement:
    """Flip the label through ``steps`` levels, then run the checks.

    An exception raised by any scheduled step is re-raised here instead of
    leaving the wait pending.
    """
    loop = asyncio.get_running_loop()
    outcome: asyncio.Future[Settlement] = loop.create_future()

    def forward_error(_: asyncio.AbstractEventLoop, context: dict[str, object]) -> None:
        # Scheduled callbacks report errors to the loop, not to the awaiter
        if outcome.done():
            return
        error = context.get("exception")
        if not isinstance(error, BaseException):
            error = RuntimeError(str(context.get("message", "scheduled callback failed")))
        outcome.set_exception(error)

    loop.set_exception_handler(forward_error)
    scheduler = AsyncioScheduler(loop)
    animator = FlipAnimator(
        scheduler,
        ConsoleLabel(ctx.console),
        duration=ctx.config.animation.flip_duration,
        console=ctx.console,
    )

    checks = defer_promise()
    for index in range(steps):
        checks.then_with(_check_step(ctx.console, index, reject_at))
    checks.fail(lambda: outcome.set_result(Settlement.FAILED)).done(
        lambda: outcome.set_result(Settlement.COMPLETED)
    )

    levels = animator.flip_sequence((level, FlipDirection.UP) for level in range(2, steps + 2))
    levels.done(
        lambda: scheduler.schedule_after(ctx.config.animation.step_delay, checks.resolve())
    )
    return await outcome


def _check_step(
    console: ConsoleProtocol, index: int, reject_at: int | None
) -> Callable[[Promise], None]:
    def check(promise: Promise) -> None:
        console.print(f"check {index + 1}", Style.STEP)
        if index == reject_at:
            console.print(f"check {index + 1} rejected", Style.ERROR)
            promise.reject()

    return check
