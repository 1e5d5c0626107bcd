"""Session relay: serialized, deadline-bounded upstream cycles per provider."""

import asyncio
import logging
from collections.abc import Mapping

from clawapi.core.adapters.base import ProtocolAdapter
from clawapi.core.errors import NotActiveError, UpstreamTimeoutError
from clawapi.core.provider.runtime import ProviderRuntime
from clawapi.core.provider.serializer import RequestSerializer

logger = logging.getLogger(__name__)


class SessionRelay:
    """Runs one adapter cycle per request behind the provider's serializer.

    The deadline covers the cycle only, not the time spent queued behind
    earlier requests for the same provider. When it expires the cycle is
    cancelled, which releases the provider lock for the next caller.
    """

    def __init__(
        self,
        runtime: ProviderRuntime,
        adapters: Mapping[str, ProtocolAdapter],
        *,
        cycle_timeout: float | None = None,
        serializer: RequestSerializer | None = None,
    ) -> None:
        self.runtime = runtime
        self.adapters = dict(adapters)
        self.cycle_timeout = cycle_timeout
        self.serializer = serializer or RequestSerializer(runtime)

    async def ask(self, provider: str, prompt: str) -> str:
        """Send ``prompt`` to ``provider`` and return the answer text.

        Raises:
            NotActiveError: If the provider was not loaded at startup.
            UpstreamError: For any failure of the upstream cycle.
        """
        state = self.runtime.get(provider)
        adapter = self.adapters.get(provider)
        if state is None or adapter is None:
            raise NotActiveError(provider, f"Provider '{provider}' is not running.")

        async def cycle() -> str:
            if self.cycle_timeout is None:
                return await adapter.complete(state, prompt)
            try:
                return await asyncio.wait_for(
                    adapter.complete(state, prompt), timeout=self.cycle_timeout
                )
            except asyncio.TimeoutError as e:
                logger.warning(
                    f"{state.descriptor.display_name} cycle exceeded {self.cycle_timeout:g}s; "
                    f"releasing lock"
                )
                raise UpstreamTimeoutError(
                    provider,
                    f"[{state.descriptor.display_name} error]: upstream did not answer "
                    f"within {self.cycle_timeout:g}s",
                ) from e

        return await self.serializer.with_lock(provider, cycle)

    async def aclose(self) -> None:
        for adapter in self.adapters.values():
            await adapter.aclose()
