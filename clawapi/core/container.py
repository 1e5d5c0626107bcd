"""Composition root for the gateway.

Builds every collaborator once from a Config and hands the bundle to the
HTTP layer, which reads it from ``app.state.gateway``.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from clawapi.core.adapters import build_adapters
from clawapi.core.adapters.base import ProtocolAdapter
from clawapi.core.config import Config
from clawapi.core.provider.registry import ProviderRegistry
from clawapi.core.provider.runtime import ProviderLoadResult, ProviderRuntime
from clawapi.core.relay import SessionRelay
from clawapi.core.session.installation import InstallationState
from clawapi.core.session.store import SessionStore


@dataclass
class GatewayState:
    registry: ProviderRegistry
    sessions: SessionStore
    installs: InstallationState
    runtime: ProviderRuntime
    relay: SessionRelay
    model_prefix: str = "clawapi"
    log_request_metrics: bool = True

    def start(self) -> list[ProviderLoadResult]:
        return self.runtime.start()

    async def shutdown(self) -> None:
        self.runtime.shutdown()
        await self.relay.aclose()


def build_gateway_state(
    config: Config,
    *,
    registry: ProviderRegistry | None = None,
    adapters: Mapping[str, ProtocolAdapter] | None = None,
) -> GatewayState:
    """Wire registry, session store, runtime and relay from configuration.

    Args:
        config: Loaded configuration
        registry: Provider catalog (defaults to the built-in providers)
        adapters: Adapter per provider name (defaults to one per descriptor)
    """
    registry = registry or ProviderRegistry()
    sessions = SessionStore(config.sessions_dir, registry)
    installs = InstallationState(config.installed_dir, config.port_file)
    runtime = ProviderRuntime(registry, sessions, installs)

    if adapters is None:
        adapters = build_adapters(
            registry,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
        )
    relay = SessionRelay(runtime, adapters, cycle_timeout=config.request_timeout)

    return GatewayState(
        registry=registry,
        sessions=sessions,
        installs=installs,
        runtime=runtime,
        relay=relay,
        model_prefix=config.model_prefix,
        log_request_metrics=config.log_request_metrics,
    )
