"""Provider catalog and per-provider runtime state."""

from clawapi.core.provider.descriptor import ProtocolParams, ProviderDescriptor
from clawapi.core.provider.registry import ProviderRegistry

__all__ = ["ProtocolParams", "ProviderDescriptor", "ProviderRegistry"]
