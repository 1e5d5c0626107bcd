"""Protocol adapters, one per supported upstream protocol."""

from clawapi.core.adapters.base import ProtocolAdapter, UnimplementedAdapter
from clawapi.core.adapters.claude import ClaudeWebAdapter
from clawapi.core.provider.descriptor import ProviderDescriptor
from clawapi.core.provider.registry import ProviderRegistry

ADAPTER_CLASSES: dict[str, type[ClaudeWebAdapter]] = {
    "claude-web": ClaudeWebAdapter,
}


def build_adapter(
    descriptor: ProviderDescriptor,
    *,
    connect_timeout: float = 30.0,
    read_timeout: float | None = None,
) -> ProtocolAdapter:
    """Create the adapter for a descriptor's protocol (or the unimplemented stand-in)."""
    adapter_class = ADAPTER_CLASSES.get(descriptor.protocol.protocol or "")
    if adapter_class is None:
        return UnimplementedAdapter(descriptor)
    return adapter_class(
        descriptor, connect_timeout=connect_timeout, read_timeout=read_timeout
    )


def build_adapters(
    registry: ProviderRegistry,
    *,
    connect_timeout: float = 30.0,
    read_timeout: float | None = None,
) -> dict[str, ProtocolAdapter]:
    return {
        descriptor.name: build_adapter(
            descriptor, connect_timeout=connect_timeout, read_timeout=read_timeout
        )
        for descriptor in registry.list_all()
    }


__all__ = [
    "ClaudeWebAdapter",
    "ProtocolAdapter",
    "UnimplementedAdapter",
    "build_adapter",
    "build_adapters",
]
