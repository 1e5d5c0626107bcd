from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from clawapi.core.errors import NotActiveError
from clawapi.core.provider.runtime import ProviderRuntime

T = TypeVar("T")


class RequestSerializer:
    """Guarantees one in-flight upstream cycle per provider.

    Each provider's runtime state carries an ``asyncio.Lock``; asyncio locks
    hand ownership to waiters in the order they started waiting, so tasks for
    one provider run strictly FIFO. Locks of distinct providers are
    unrelated, so providers never wait on each other.
    """

    def __init__(self, runtime: ProviderRuntime) -> None:
        self.runtime = runtime

    async def with_lock(self, provider: str, task: Callable[[], Awaitable[T]]) -> T:
        """Run ``task`` once every previously enqueued task for ``provider`` is done.

        Raises:
            NotActiveError: If the provider has no runtime state.
        """
        state = self.runtime.get(provider)
        if state is None:
            raise NotActiveError(provider, f"Provider '{provider}' is not running.")

        async with state.lock:
            return await task()

