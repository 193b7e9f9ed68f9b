import asyncio
import functools
from collections.abc import Callable

from quizbook.typ import AsyncCallable, P, T


def in_thread(func: Callable[P, T]) -> AsyncCallable[P, T]:
    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        return await asyncio.to_thread(func, *args, **kwargs)

    return wrapper
