"""In-process protocol adapters for relay and gateway tests."""

import asyncio

from clawapi.core.adapters.base import ProtocolAdapter
from clawapi.core.provider.runtime import ProviderRuntimeState


class ScriptedAdapter(ProtocolAdapter):
    """Answers from a script instead of the network.

    Attributes:
        prompts: Every prompt received, in order
        answer: Text returned by each cycle
        error: Exception raised by each cycle instead of answering
        delay: Seconds to sleep before answering
    """

    def __init__(self, descriptor, answer: str = "Hello from the adapter", error=None, delay=0.0):
        super().__init__(descriptor)
        self.answer = answer
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []
        self.closed = False

    async def _run_cycle(self, state: ProviderRuntimeState, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.answer

    async def aclose(self) -> None:
        self.closed = True
