"""
Cooperative cancellation for in-flight calls.

A CancelToken is handed to ``ResilientRequestClient.execute``; setting it
abandons the pending request or backoff wait and makes the call return
``Cancelled`` instead of raising.
"""

import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


class CallAbandoned(Exception):
    """Internal signal: the token fired while awaiting. Never leaves the client."""


class CancelToken:
    """
    One-shot cancellation flag backed by ``asyncio.Event``.

    A token may be shared by several calls; cancelling it stops all of them.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()

    async def race(self, awaitable: Awaitable[T]) -> T:
        """
        Await ``awaitable`` unless the token fires first.

        On cancellation the pending work is cancelled and awaited so no
        I/O registration outlives the call, then CallAbandoned is raised.
        """
        if self.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise CallAbandoned()

        work = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            # The caller's task itself was cancelled: stop the work and propagate
            work.cancel()
            raise
        finally:
            waiter.cancel()

        if work.done():
            return work.result()

        work.cancel()
        try:
            await work
        except asyncio.CancelledError:
            pass
        raise CallAbandoned()
