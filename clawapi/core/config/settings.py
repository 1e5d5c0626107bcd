"""Focused settings groups loaded from the environment."""

from dataclasses import dataclass
from pathlib import Path

from clawapi.core.config.schema import ConfigSchema
from clawapi.core.config.validation import load_env_var


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int
    log_level: str

    @classmethod
    def load(cls) -> "ServerSettings":
        return cls(
            host=load_env_var(ConfigSchema.HOST),
            port=load_env_var(ConfigSchema.PORT),
            log_level=load_env_var(ConfigSchema.LOG_LEVEL),
        )


@dataclass(frozen=True)
class StorageSettings:
    """Filesystem layout for session artifacts and install flags."""

    home_dir: Path

    @property
    def sessions_dir(self) -> Path:
        return self.home_dir / "sessions"

    @property
    def installed_dir(self) -> Path:
        return self.home_dir / "installed"

    @property
    def port_file(self) -> Path:
        return self.home_dir / "current_port"

    @classmethod
    def load(cls) -> "StorageSettings":
        return cls(home_dir=Path(load_env_var(ConfigSchema.CLAWAPI_HOME)).expanduser())


@dataclass(frozen=True)
class TimeoutSettings:
    request_timeout: float
    connect_timeout: float
    read_timeout: float | None

    @classmethod
    def load(cls) -> "TimeoutSettings":
        return cls(
            request_timeout=load_env_var(ConfigSchema.REQUEST_TIMEOUT),
            connect_timeout=load_env_var(ConfigSchema.STREAMING_CONNECT_TIMEOUT_SECONDS),
            read_timeout=load_env_var(ConfigSchema.STREAMING_READ_TIMEOUT_SECONDS),
        )


@dataclass(frozen=True)
class GatewaySettings:
    model_prefix: str
    log_request_metrics: bool

    @classmethod
    def load(cls) -> "GatewaySettings":
        return cls(
            model_prefix=load_env_var(ConfigSchema.CLAWAPI_MODEL_PREFIX),
            log_request_metrics=load_env_var(ConfigSchema.LOG_REQUEST_METRICS),
        )
