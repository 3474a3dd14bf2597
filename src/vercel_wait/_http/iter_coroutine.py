"""Drive non-suspending coroutines from blocking code."""

from __future__ import annotations

import typing

_T = typing.TypeVar("_T")


def iter_coroutine(coro: typing.Coroutine[None, None, _T]) -> _T:
    """
    Run a coroutine to completion in a single step.

    The waiters, the GitHub client and the password exchange are written once
    as ``async def`` methods. Their blocking flavours pair them with a blocking
    transport and ``time.sleep``, so the coroutine never yields to an event
    loop and one ``send(None)`` runs it to the end.

    Raises:
        RuntimeError: If the coroutine suspends, which means an async transport
            or an async sleep function was wired into a blocking client.
    """
    try:
        coro.send(None)
    except StopIteration as ex:
        return ex.value  # type: ignore [no-any-return]
    else:
        raise RuntimeError(f"coroutine {coro!r} suspended; it cannot run without an event loop")
    finally:
        coro.close()


__all__ = ["iter_coroutine"]
