import asyncio
import logging
from dataclasses import dataclass, field

from clawapi.core.errors import SessionError
from clawapi.core.provider.descriptor import ProviderDescriptor
from clawapi.core.provider.registry import ProviderRegistry
from clawapi.core.session.installation import InstallationState
from clawapi.core.session.store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class ProviderRuntimeState:
    """In-memory state for one provider loaded at startup"""

    descriptor: ProviderDescriptor
    cookie_header: str
    user_agent: str
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @property
    def name(self) -> str:
        return self.descriptor.name


@dataclass
class ProviderLoadResult:
    """Result of loading one provider at startup"""

    name: str
    status: str  # "active", "not_installed", "unauthenticated", "failed"
    message: str | None = None


class ProviderRuntime:
    """Holds runtime state for providers that are installed and authenticated.

    State is built once by ``start()`` and dropped by ``shutdown()``. There is
    no hot-add path: a provider authenticated after startup stays inactive
    until the gateway restarts.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        sessions: SessionStore,
        installs: InstallationState,
    ) -> None:
        self.registry = registry
        self.sessions = sessions
        self.installs = installs
        self._states: dict[str, ProviderRuntimeState] = {}
        self._load_results: list[ProviderLoadResult] = []
        self._started = False

    def start(self) -> list[ProviderLoadResult]:
        """Load every installed provider whose session validates."""
        if self._started:
            return list(self._load_results)

        self._load_results = []
        for descriptor in self.registry.list_all():
            result = self._load_provider(descriptor)
            self._load_results.append(result)

        self._started = True
        return list(self._load_results)

    def _load_provider(self, descriptor: ProviderDescriptor) -> ProviderLoadResult:
        name = descriptor.name
        if not self.installs.is_installed(name):
            return ProviderLoadResult(name=name, status="not_installed")

        if not self.sessions.validate(name):
            logger.warning(
                f"SKIP {descriptor.display_name}: no valid session. "
                f"Re-authenticate and restart to activate it."
            )
            return ProviderLoadResult(
                name=name, status="unauthenticated", message="No valid session"
            )

        try:
            credentials = self.sessions.load(name)
        except SessionError as e:
            logger.error(f"ERR Failed to init {name}: {e}")
            return ProviderLoadResult(name=name, status="failed", message=str(e))

        self._states[name] = ProviderRuntimeState(
            descriptor=descriptor,
            cookie_header=credentials.cookie_header,
            user_agent=credentials.user_agent,
        )
        logger.info(
            f"OK  {descriptor.display_name} ready ({credentials.cookie_count} cookies)"
        )
        return ProviderLoadResult(name=name, status="active")

    def shutdown(self) -> None:
        """Drop all runtime state; nothing is persisted."""
        if self._states:
            logger.info(f"Releasing {len(self._states)} provider session(s)")
        self._states.clear()
        self._load_results = []
        self._started = False

    def get(self, provider: str) -> ProviderRuntimeState | None:
        return self._states.get(provider)

    def is_active(self, provider: str) -> bool:
        return provider in self._states

    def active_names(self) -> list[str]:
        return list(self._states)

    @property
    def load_results(self) -> list[ProviderLoadResult]:
        return list(self._load_results)
