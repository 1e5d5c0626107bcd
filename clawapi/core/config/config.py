"""Configuration facade for ClawAPI.

Configuration is organized into focused groups:
- server: Server settings (host, port, log level)
- storage: Where session artifacts and install flags live
- timeouts: Upstream connect/read timeouts and the per-cycle deadline
- gateway: Public model namespace and request logging
"""

from pathlib import Path

from clawapi.core.config.settings import (
    GatewaySettings,
    ServerSettings,
    StorageSettings,
    TimeoutSettings,
)


class Config:
    """Configuration with direct property access to all settings.

    All values are loaded at initialization time from environment variables
    using schema-based validation.
    """

    def __init__(self) -> None:
        self._server = ServerSettings.load()
        self._storage = StorageSettings.load()
        self._timeouts = TimeoutSettings.load()
        self._gateway = GatewaySettings.load()

    # Server settings
    @property
    def host(self) -> str:
        return self._server.host

    @property
    def port(self) -> int:
        return self._server.port

    @property
    def log_level(self) -> str:
        return self._server.log_level

    # Storage settings
    @property
    def home_dir(self) -> Path:
        return self._storage.home_dir

    @property
    def sessions_dir(self) -> Path:
        return self._storage.sessions_dir

    @property
    def installed_dir(self) -> Path:
        return self._storage.installed_dir

    @property
    def port_file(self) -> Path:
        return self._storage.port_file

    # Timeout settings
    @property
    def request_timeout(self) -> float:
        return self._timeouts.request_timeout

    @property
    def connect_timeout(self) -> float:
        return self._timeouts.connect_timeout

    @property
    def read_timeout(self) -> float | None:
        return self._timeouts.read_timeout

    # Gateway settings
    @property
    def model_prefix(self) -> str:
        return self._gateway.model_prefix

    @property
    def log_request_metrics(self) -> bool:
        return self._gateway.log_request_metrics
