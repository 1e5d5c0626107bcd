"""Provider registry for storing and querying provider descriptors."""

from collections.abc import Iterable

from clawapi.core.provider.descriptor import ProtocolParams, ProviderDescriptor

BROWSER_HEADER_TEMPLATE = {
    "Accept": "application/json, text/event-stream",
    "Accept-Language": "en-US,en;q=0.9",
    "Content-Type": "application/json",
    "Referer": "{base_url}/chat",
    "Origin": "{base_url}",
    "Sec-Ch-Ua": '"Not_A Brand";v="8", "Chromium";v="120", "Google Chrome";v="120"',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": '"Windows"',
    "Sec-Fetch-Dest": "empty",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Site": "same-origin",
}

CLAUDE = ProviderDescriptor(
    name="claude",
    display_name="Claude",
    vendor="Anthropic",
    base_url="https://claude.ai",
    login_url="https://claude.ai/login",
    identity_cookies=("sessionKey",),
    protocol=ProtocolParams(
        protocol="claude-web",
        header_template={
            **BROWSER_HEADER_TEMPLATE,
            "anthropic-client-version": "5.4.3",
            "anthropic-client-sha": "da0583fac",
        },
        preferred_model="claude-haiku-4-5-20251001",
        legacy_models=(
            "claude-3-5-sonnet-20240620",
            "claude-3-haiku-20240307",
            "claude-2.1",
            "claude-2.0",
        ),
    ),
    notes="Free tier available. Login via email or Google.",
)

BUILTIN_PROVIDERS = (CLAUDE,)


class ProviderRegistry:
    """Read-only catalog of provider descriptors.

    Responsibilities:
    - Retrieve a descriptor by name
    - List all catalogued providers in declaration order
    """

    def __init__(self, descriptors: Iterable[ProviderDescriptor] = BUILTIN_PROVIDERS) -> None:
        """Build the registry from a fixed set of descriptors.

        Args:
            descriptors: Provider descriptors; names must be unique.

        Raises:
            ValueError: If two descriptors share a name.
        """
        self._descriptors: dict[str, ProviderDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in self._descriptors:
                raise ValueError(f"Duplicate provider '{descriptor.name}' in registry")
            self._descriptors[descriptor.name] = descriptor

    def get(self, provider_name: str) -> ProviderDescriptor | None:
        """Get a descriptor by name, or None if not catalogued."""
        return self._descriptors.get(provider_name)

    def exists(self, provider_name: str) -> bool:
        return provider_name in self._descriptors

    def all_names(self) -> list[str]:
        return list(self._descriptors)

    def list_all(self) -> list[ProviderDescriptor]:
        return list(self._descriptors.values())
