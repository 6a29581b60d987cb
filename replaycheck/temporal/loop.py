"""
Run Temporal SDK coroutines from synchronous code.

One private event loop per bridge; every call runs to completion before the
next starts, so fetches and replays never overlap.
"""

import asyncio
from typing import AsyncIterator, Awaitable, Iterator, Optional, TypeVar

T = TypeVar("T")


async def _next(source: AsyncIterator[T]) -> T:
    # first __anext__ must happen on the running loop so it tracks the generator
    return await source.__anext__()


class LoopBridge:
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self.loop = loop or asyncio.new_event_loop()

    def run(self, awaitable: Awaitable[T]) -> T:
        return self.loop.run_until_complete(awaitable)

    def iterate(self, source: AsyncIterator[T]) -> Iterator[T]:
        """Pull items from an async iterator one at a time, only when asked."""
        while True:
            try:
                yield self.run(_next(source))
            except StopAsyncIteration:
                return

    def close(self) -> None:
        if self.loop.is_closed():
            return
        # listings cut short by the history cap leave async generators suspended
        self.loop.run_until_complete(self.loop.shutdown_asyncgens())
        self.loop.close()
