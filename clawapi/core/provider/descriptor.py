from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class ProtocolParams:
    """Upstream protocol parameters for one provider"""

    protocol: str | None = None  # adapter key; None means no adapter exists yet
    header_template: Mapping[str, str] = field(default_factory=dict)
    preferred_model: str | None = None
    legacy_models: tuple[str, ...] = ()
    stream_marker: str = "data: "

    def __post_init__(self) -> None:
        object.__setattr__(self, "header_template", MappingProxyType(dict(self.header_template)))


@dataclass(frozen=True)
class ProviderDescriptor:
    """Immutable catalog entry for one upstream conversational service"""

    name: str
    display_name: str
    vendor: str
    base_url: str
    login_url: str
    identity_cookies: tuple[str, ...] = ()
    protocol: ProtocolParams = field(default_factory=ProtocolParams)
    notes: str = ""

    def __post_init__(self) -> None:
        """Validate descriptor after initialization"""
        if not self.name:
            raise ValueError("Provider name is required")
        if "/" in self.name:
            raise ValueError(f"Provider name '{self.name}' must not contain '/'")
        if not self.base_url:
            raise ValueError(f"Base URL is required for provider '{self.name}'")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def has_adapter(self) -> bool:
        return self.protocol.protocol is not None

    def build_headers(self, cookie_header: str, user_agent: str) -> dict[str, str]:
        """Render the browser-mimicking header template for one request cycle."""
        headers = {
            key: value.format(base_url=self.base_url)
            for key, value in self.protocol.header_template.items()
        }
        headers["Cookie"] = cookie_header
        headers["User-Agent"] = user_agent
        return headers
