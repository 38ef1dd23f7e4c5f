"""Deferred sequencing of zero-argument callbacks.

A ``Promise`` collects continuations with ``then``/``then_with`` and runs
them, in registration order, when the trigger returned by ``resolve()`` is
called. Any continuation handed the promise through ``then_with`` may
``reject()`` it; the pass then stops and the ``fail`` handler runs instead
of the ``done`` handler.

Usage:
    promise = defer_promise()
    promise.then(show_card).then_with(check_hand).fail(shake).done(refresh)
    scheduler.schedule_after(0.3, promise.resolve())

``fail()`` returns the promise typed as ``Finishable``, so a type checker
only accepts ``done()`` after it:

    promise.fail(shake).then(refresh)  # rejected by pyright/mypy

A promise resolves once. Calling a trigger again, or adding continuations
after resolution started, raises ``AlreadyResolvedError``. A promise belongs
to a single event loop; nothing here is locked.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, auto
from typing import Protocol, runtime_checkable

__all__ = [
    "AlreadyResolvedError",
    "Callback",
    "Chainable",
    "Finishable",
    "Promise",
    "PromiseError",
    "PromiseState",
    "Settlement",
    "defer_promise",
]

type Callback = Callable[[], None]


class PromiseError(RuntimeError):
    """Base class for promise misuse."""


class AlreadyResolvedError(PromiseError):
    """Raised when a promise is resolved twice or extended after resolving."""


class PromiseState(Enum):
    """Lifecycle of a promise."""

    PENDING = auto()
    """Accepting continuations; trigger not called yet."""

    RESOLVING = auto()
    """Trigger is running continuations."""

    COMPLETED = auto()
    """Every continuation ran without rejection."""

    FAILED = auto()
    """Rejected, or a continuation raised."""

    @property
    def is_settled(self) -> bool:
        return self in (PromiseState.COMPLETED, PromiseState.FAILED)


class Settlement(Enum):
    """Outcome of one resolution pass, returned by the trigger."""

    COMPLETED = auto()
    FAILED = auto()

    def __str__(self) -> str:
        return self.name.lower()


@runtime_checkable
class Finishable(Protocol):
    """What is left to register once a failure handler is set."""

    def done(self, callback: Callback) -> None: ...


@runtime_checkable
class Chainable(Finishable, Protocol):
    """Full fluent surface of a pending promise."""

    def then(self, callback: Callback) -> Chainable: ...

    def then_with(self, callback: Callable[[Promise], None]) -> Chainable: ...

    def fail(self, callback: Callback) -> Finishable: ...


class Promise:
    """Ordered continuations with one rejection flag.

    Attributes are exposed read-only; mutate through the fluent methods.
    """

    def __init__(self) -> None:
        self._continuations: list[Callback] = []
        self._on_complete: Callback | None = None
        self._on_failure: Callback | None = None
        self._rejected = False
        self._state = PromiseState.PENDING

    @classmethod
    def deferred(cls) -> Promise:
        """Return a new pending promise."""
        return cls()

    @property
    def continuations(self) -> tuple[Callback, ...]:
        return tuple(self._continuations)

    @property
    def on_complete(self) -> Callback | None:
        """Registered completion handler, or None."""
        return self._on_complete

    @property
    def on_failure(self) -> Callback | None:
        """Registered failure handler, or None."""
        return self._on_failure

    @property
    def is_rejected(self) -> bool:
        return self._rejected

    @property
    def state(self) -> PromiseState:
        return self._state

    def then(self, callback: Callback) -> Promise:
        """Append a continuation.

        Raises:
            AlreadyResolvedError: If the trigger has already been called.
        """
        self._ensure_pending("then")
        self._continuations.append(callback)
        return self

    def then_with(self, callback: Callable[[Promise], None]) -> Promise:
        """Append a continuation that receives this promise.

        The callback borrows the promise for the duration of its call,
        typically to ``reject()`` it.

        Raises:
            AlreadyResolvedError: If the trigger has already been called.
        """
        self._ensure_pending("then_with")

        def continuation() -> None:
            callback(self)

        self._continuations.append(continuation)
        return self

    def fail(self, callback: Callback) -> Finishable:
        """Set the failure handler; only ``done`` may follow."""
        self._ensure_unsettled("fail")
        self._on_failure = callback
        return self

    def done(self, callback: Callback) -> None:
        """Set the completion handler."""
        self._ensure_unsettled("done")
        self._on_complete = callback

    def reject(self) -> None:
        """Flag the promise as rejected. Idempotent."""
        self._rejected = True

    def resolve(self) -> Callable[[], Settlement]:
        """Return the trigger that runs the resolution pass.

        Nothing runs until the returned function is called, so it can be
        handed to a scheduler. The trigger returns the pass outcome; callers
        expecting ``() -> None`` can ignore it.
        """

        def trigger() -> Settlement:
            return self._run()

        return trigger

    def _run(self) -> Settlement:
        if self._state is not PromiseState.PENDING:
            raise AlreadyResolvedError(f"promise already resolved ({self._state.name.lower()})")
        self._state = PromiseState.RESOLVING

        try:
            outcome = self._run_continuations()
        except BaseException:
            self._state = PromiseState.FAILED
            raise

        if outcome is Settlement.FAILED:
            self._state = PromiseState.FAILED
            handler = self._on_failure
        else:
            self._state = PromiseState.COMPLETED
            handler = self._on_complete

        if handler is not None:
            handler()
        return outcome

    def _run_continuations(self) -> Settlement:
        for continuation in self._continuations:
            if self._rejected:
                return Settlement.FAILED
            continuation()
        # Catches a rejection made by the last continuation
        if self._rejected:
            return Settlement.FAILED
        return Settlement.COMPLETED

    def _ensure_pending(self, operation: str) -> None:
        if self._state is not PromiseState.PENDING:
            raise AlreadyResolvedError(
                f"cannot call {operation}() once resolution has started "
                f"({self._state.name.lower()})"
            )

    def _ensure_unsettled(self, operation: str) -> None:
        if self._state.is_settled:
            raise AlreadyResolvedError(
                f"cannot call {operation}() on a settled promise ({self._state.name.lower()})"
            )

    def __repr__(self) -> str:
        return (
            f"Promise(state={self._state.name}, continuations={len(self._continuations)}, "
            f"rejected={self._rejected})"
        )


def defer_promise() -> Promise:
    """Return a new pending promise."""
    return Promise.deferred()
