"""
Contains a helper to await coroutines concurrently.
"""
import asyncio
from typing import Awaitable, Iterable, TypeVar

T = TypeVar("T")


async def gather_or_cancel(awaitables: Iterable[Awaitable[T]]) -> list[T]:
    """
    Awaits all `awaitables` concurrently and returns their results in the order of `awaitables`.
    If one of them raises, the remaining ones are cancelled and awaited before the exception propagates.
    """
    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
