"""Completion contract for values returned by the pattern under test.

A scenario ends when whatever the pattern returned has settled. Settling is
modelled explicitly as `Ok` or `Err`; the harness inspects neither for its
verdict, only the recorded call sequence decides pass or fail.
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union


@dataclass(frozen=True)
class Ok:
    """The pattern returned, or its awaitable resolved, with ``value``."""

    value: Any = None

    @property
    def kind(self) -> str:
        return "ok"


@dataclass(frozen=True)
class Err:
    """The pattern raised, or its awaitable failed, with ``error``.

    ``timed_out`` is set only when the harness gave up waiting; a
    `TimeoutError` raised by the pattern itself leaves it False.
    """

    error: BaseException
    timed_out: bool = False

    @property
    def kind(self) -> str:
        return "err"


Settled = Union[Ok, Err]


def invoke(fn: Callable[..., Any], *args: Any) -> Settled:
    """Call ``fn`` synchronously and capture a raised exception as `Err`.

    Only `Exception` subclasses are captured; `KeyboardInterrupt`,
    `SystemExit` and cancellation propagate.
    """
    try:
        return Ok(fn(*args))
    except Exception as exc:
        return Err(exc)


async def _await(value: Any) -> Settled:
    try:
        return Ok(await value)
    except Exception as exc:
        return Err(exc)


async def settle(value: Any, timeout: Optional[float] = None) -> Settled:
    """Wait for ``value`` to settle if it is awaitable.

    Plain values settle immediately without suspending.

    Args:
        value: Anything the pattern returned.
        timeout: Optional bound in seconds. Expiry settles to
            ``Err(TimeoutError, timed_out=True)``.

    Returns:
        `Ok` with the resolved value or `Err` with the failure.
    """
    if not inspect.isawaitable(value):
        return Ok(value)
    if timeout is None:
        return await _await(value)
    # Failures of the awaitable are already captured, so a TimeoutError
    # escaping wait_for can only be expiry.
    try:
        return await asyncio.wait_for(_await(value), timeout)
    except asyncio.TimeoutError as exc:
        return Err(exc, timed_out=True)


async def settle_call(
    fn: Callable[..., Any], *args: Any, timeout: Optional[float] = None
) -> Settled:
    """Invoke ``fn`` and settle what it returns.

    A synchronous failure is final; there is nothing to wait for.
    """
    outcome = invoke(fn, *args)
    if isinstance(outcome, Err):
        return outcome
    return await settle(outcome.value, timeout=timeout)
