"""Calling-convention bridge for hooks and operations.

Callers may supply setup/validate hooks and operations in three forms:

    - plain function: ``def op(): ...`` (return value ignored)
    - direct async: ``async def op(): ...`` or any function returning an awaitable
    - callback style: ``Callback(lambda done: ...)`` where ``done(err=None)``
      follows the error-first convention

Callback style is declared explicitly with the ``Callback`` wrapper (or the
``callback_style`` decorator); it is never guessed from parameter counts.
``normalize`` converts every form once, at registration, into a zero-argument
coroutine function so the scheduler only ever awaits one contract.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeAlias

from fuzzbuzz.diagnostics import CallbackError, ConfigurationError, ErrorTemplate

__all__ = [
    "Callback",
    "Done",
    "Hook",
    "callback_style",
    "hook_name",
    "noop",
    "normalize",
]

Hook: TypeAlias = Callable[[], Awaitable[None]]
Done: TypeAlias = Callable[..., None]


@dataclass(frozen=True, slots=True)
class Callback:
    """Marks a function as callback style.

    The wrapped function receives a single completion callback. Calling it
    with no argument or ``None`` signals success; any other first argument
    fails the operation. Exceptions are raised as-is, other values are
    wrapped in ``CallbackError``. Only the first call counts, and the
    callback may be invoked from another thread.

    Example:
        >>> def slow_op(done):
        ...     loop.call_later(0.01, done)
        >>> fuzz.add(1, Callback(slow_op))
    """

    fn: Callable[[Done], object]

    def __call__(self, done: Done) -> object:
        return self.fn(done)


def callback_style(fn: Callable[[Done], object]) -> Callback:
    """Decorator form of ``Callback``."""
    return Callback(fn)


async def noop() -> None:
    """Default setup/validate hook."""


def hook_name(fn: object) -> str:
    """Human-readable name of a hook or operation for diagnostics."""
    if isinstance(fn, Callback):
        fn = fn.fn
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    return name if isinstance(name, str) else repr(fn)


def normalize(fn: object) -> Hook:
    """Adapt a hook or operation to the zero-argument coroutine contract.

    Args:
        fn: Plain function, async function, or Callback-wrapped function.
            None yields the no-op hook.

    Returns:
        Coroutine function that completes when ``fn`` has completed

    Raises:
        ConfigurationError: If ``fn`` is not callable
    """
    if fn is None:
        return noop
    if isinstance(fn, Callback):
        return _adapt_callback(fn.fn)
    if not callable(fn):
        raise ConfigurationError(ErrorTemplate.invalid_action(fn))
    return _adapt_direct(fn)


def _adapt_direct(fn: Callable[[], object]) -> Hook:
    @functools.wraps(fn)
    async def hook() -> None:
        result = fn()
        if inspect.isawaitable(result):
            await result

    return hook


def _adapt_callback(fn: Callable[[Done], object]) -> Hook:
    if not callable(fn):
        raise ConfigurationError(ErrorTemplate.invalid_action(fn))

    @functools.wraps(fn)
    async def hook() -> None:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[None] = loop.create_future()

        def settle(err: object) -> None:
            if future.done():
                return
            if err is None:
                future.set_result(None)
            elif isinstance(err, BaseException):
                future.set_exception(err)
            else:
                future.set_exception(CallbackError(ErrorTemplate.callback_error(err), err))

        def done(err: object = None, *_results: object) -> None:
            loop.call_soon_threadsafe(settle, err)

        result = fn(done)
        if inspect.isawaitable(result):
            await result
        await future

    return hook
