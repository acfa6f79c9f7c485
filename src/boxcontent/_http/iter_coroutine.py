"""Drive non-suspending coroutines to completion without an event loop."""

from __future__ import annotations

import typing

_T = typing.TypeVar("_T")


def iter_coroutine(coro: typing.Coroutine[None, None, _T]) -> _T:
    """
    Run a coroutine that never suspends and return its result.

    The sync clients share their request logic with the async clients as
    ``async def`` methods. Backed by BlockingTransport those methods never
    yield to an event loop, so a single ``send(None)`` runs them to the end.

    Raises:
        RuntimeError: If the coroutine suspends instead of finishing.
    """
    try:
        coro.send(None)
    except StopIteration as ex:
        return ex.value  # type: ignore [no-any-return]
    else:
        raise RuntimeError(f"coroutine {coro!r} did not stop after one iteration!")
    finally:
        coro.close()


__all__ = ["iter_coroutine"]
