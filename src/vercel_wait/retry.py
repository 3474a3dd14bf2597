"""Fixed-interval retry budget and poll outcomes shared by all waiters."""

from __future__ import annotations

import inspect
import math
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar, cast

from .errors import ActionError

_T = TypeVar("_T")

SleepFn = Callable[[float], Awaitable[None] | None]

DEFAULT_MAX_TIMEOUT = 60.0
DEFAULT_CHECK_INTERVAL_MS = 2000


def calculate_iterations(max_timeout: float, check_interval_ms: float) -> int:
    """Number of attempts that fit in ``max_timeout`` seconds at the given interval."""
    return math.floor(max_timeout / (check_interval_ms / 1000))


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """How long a waiter may poll, and how long it sleeps between attempts."""

    max_timeout: float = DEFAULT_MAX_TIMEOUT
    check_interval_ms: float = DEFAULT_CHECK_INTERVAL_MS

    def __post_init__(self) -> None:
        if self.max_timeout < 0:
            raise ValueError("max_timeout must not be negative")
        if self.check_interval_ms <= 0:
            raise ValueError("check_interval_ms must be positive")

    @property
    def iterations(self) -> int:
        return calculate_iterations(self.max_timeout, self.check_interval_ms)

    @property
    def interval_seconds(self) -> float:
        return self.check_interval_ms / 1000


@dataclass(frozen=True, slots=True)
class Done(Generic[_T]):
    """The poll step reached its goal."""

    value: _T


@dataclass(frozen=True, slots=True)
class Retry:
    """The poll step should be attempted again after the interval.

    ``reason`` is logged with the attempt counter. ``detail`` is logged on
    its own line, at debug level when ``quiet`` is set.
    """

    reason: str
    detail: str | None = None
    quiet: bool = False


@dataclass(frozen=True, slots=True)
class Abort:
    """The poll step hit a condition that ends the run."""

    error: ActionError


PollOutcome = Done[_T] | Retry | Abort


class CancelEvent(Protocol):
    """Anything with ``is_set()``: ``threading.Event`` or ``asyncio.Event``."""

    def is_set(self) -> bool: ...


def blocking_sleep(seconds: float) -> None:
    time.sleep(seconds)


async def await_if_necessary(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await cast(Awaitable[Any], value)
    return value


__all__ = [
    "DEFAULT_MAX_TIMEOUT",
    "DEFAULT_CHECK_INTERVAL_MS",
    "SleepFn",
    "calculate_iterations",
    "RetryPolicy",
    "Done",
    "Retry",
    "Abort",
    "PollOutcome",
    "CancelEvent",
    "blocking_sleep",
    "await_if_necessary",
]
