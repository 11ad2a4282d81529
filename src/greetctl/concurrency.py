"""Cooperative cancellation shared by every suspending operation.

A :class:`CancelToken` is created once per process run and threaded through
console I/O, event publishing and the background event logger. Firing it
cancels every anyio ``CancelScope`` currently opened through the token, so
pending suspensions unwind promptly as :class:`OperationCancelled`.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Generator
from contextlib import contextmanager
from typing import ParamSpec, TypeVar

import anyio

from greetctl.errors import OperationCancelled

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


class CancelToken:
    """Process-wide cancellation signal.

    Unlike a bare ``CancelScope`` the token can be fired before any scope
    exists (e.g. from the interrupt watcher) and is observed by every
    operation started afterwards.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._scopes: set[anyio.CancelScope] = set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Fire the token. Idempotent."""
        if self._cancelled:
            return
        self._cancelled = True
        logger.debug("Cancellation requested (%d pending operations)", len(self._scopes))
        for scope in list(self._scopes):
            scope.cancel()

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise OperationCancelled()

    @contextmanager
    def scope(self) -> Generator[anyio.CancelScope]:
        """Open a cancel scope that the token cancels when fired."""
        scope = anyio.CancelScope()
        if self._cancelled:
            scope.cancel()
        self._scopes.add(scope)
        try:
            with scope:
                yield scope
        finally:
            self._scopes.discard(scope)

    async def run(
        self,
        func: Callable[P, Awaitable[T]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> T:
        """Await ``func(*args, **kwargs)`` unless the token fires first.

        Raises:
            OperationCancelled: The token fired before or during the call.
        """
        self.raise_if_cancelled()
        with self.scope():
            return await func(*args, **kwargs)
        # Only reached when our own scope swallowed the cancellation.
        raise OperationCancelled()


async def guarded(
    cancel: CancelToken | None,
    func: Callable[P, Awaitable[T]],
    *args: P.args,
    **kwargs: P.kwargs,
) -> T:
    """Run ``func`` under *cancel* when one is given, otherwise await it directly."""
    if cancel is None:
        return await func(*args, **kwargs)
    return await cancel.run(func, *args, **kwargs)
