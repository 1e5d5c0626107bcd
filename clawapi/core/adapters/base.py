"""Protocol adapter interface.

An adapter drives one complete upstream request/response cycle for one
provider: it turns a flattened prompt into the provider's web protocol and
returns the answer text.
"""

import logging
from abc import ABC, abstractmethod

from clawapi.core.errors import AdapterNotImplementedError, ProviderError, TransportError
from clawapi.core.provider.descriptor import ProviderDescriptor
from clawapi.core.provider.runtime import ProviderRuntimeState

logger = logging.getLogger(__name__)


class ProtocolAdapter(ABC):
    """Base class for per-provider upstream drivers.

    Subclasses implement ``_run_cycle``. ``complete`` guarantees that nothing
    but a ``ProviderError`` leaves the adapter: any transport, stream or
    decoding exception is converted into a ``TransportError`` that names the
    provider.
    """

    def __init__(self, descriptor: ProviderDescriptor) -> None:
        self.descriptor = descriptor

    async def complete(self, state: ProviderRuntimeState, prompt: str) -> str:
        try:
            return await self._run_cycle(state, prompt)
        except ProviderError:
            raise
        except Exception as e:
            logger.error(f"{self.descriptor.display_name} cycle failed: {e!r}")
            raise TransportError(
                self.descriptor.name,
                f"[{self.descriptor.display_name} error]: {str(e) or type(e).__name__}",
            ) from e

    @abstractmethod
    async def _run_cycle(self, state: ProviderRuntimeState, prompt: str) -> str:
        """Execute the provider's upstream call sequence and return the answer."""

    async def aclose(self) -> None:
        """Release transport resources held by the adapter."""


class UnimplementedAdapter(ProtocolAdapter):
    """Stand-in for catalogued providers without a native protocol driver."""

    async def _run_cycle(self, state: ProviderRuntimeState, prompt: str) -> str:
        raise AdapterNotImplementedError(
            self.descriptor.name,
            f"[Provider {self.descriptor.name}]: Native HTTP engine not yet "
            f"implemented for this provider.",
        )
