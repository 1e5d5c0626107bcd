"""Declarative schema for environment variable configuration.

This module provides a single source of truth for all environment variables,
including automatic type coercion and validation.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

LOOPBACK_HOSTS = ("127.0.0.1", "localhost", "::1")


@dataclass(frozen=True)
class EnvVarSpec:
    """Specification for a single environment variable.

    Attributes:
        name: Environment variable name (e.g., "PORT", "LOG_LEVEL")
        default: Default value if env var not set
        type_hint: Type for validation (int, str, float, bool)
        description: Human-readable description for docs
        validator: Optional custom validation function
        coerce: Optional function to convert string to target type
    """

    name: str
    default: Any
    type_hint: type
    description: str
    validator: Callable[[Any], bool] | None = None
    coerce: Callable[[str], Any] | None = None


class ConfigSchema:
    """Registry of all configuration environment variables."""

    # === Server Settings ===

    HOST = EnvVarSpec(
        name="HOST",
        default="127.0.0.1",
        type_hint=str,
        description="Loopback address the gateway binds to",
        validator=lambda x: x in LOOPBACK_HOSTS,
    )

    PORT = EnvVarSpec(
        name="PORT",
        default=8855,
        type_hint=int,
        description="Server port number",
        validator=lambda x: 1 <= x <= 65535,
    )

    LOG_LEVEL = EnvVarSpec(
        name="LOG_LEVEL",
        default="INFO",
        type_hint=str,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        validator=lambda x: bool(x.split())
        and x.split()[0].upper() in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )

    # === Storage Settings ===

    CLAWAPI_HOME = EnvVarSpec(
        name="CLAWAPI_HOME",
        default="~/.clawapi",
        type_hint=str,
        description="Root directory for sessions, install flags and the port file",
        validator=lambda x: bool(x.strip()),
    )

    # === Timeout Settings ===

    REQUEST_TIMEOUT = EnvVarSpec(
        name="REQUEST_TIMEOUT",
        default=300.0,
        type_hint=float,
        description="Deadline in seconds for one upstream cycle once the provider lock is held",
        validator=lambda x: x > 0,
    )

    STREAMING_CONNECT_TIMEOUT_SECONDS = EnvVarSpec(
        name="STREAMING_CONNECT_TIMEOUT_SECONDS",
        default=30.0,
        type_hint=float,
        description="Connect timeout for upstream requests",
        validator=lambda x: x > 0,
    )

    STREAMING_READ_TIMEOUT_SECONDS = EnvVarSpec(
        name="STREAMING_READ_TIMEOUT_SECONDS",
        default=None,
        type_hint=float,
        description="Read timeout for upstream event streams (None = unlimited)",
        validator=lambda x: x is None or x > 0,
    )

    # === Gateway Settings ===

    CLAWAPI_MODEL_PREFIX = EnvVarSpec(
        name="CLAWAPI_MODEL_PREFIX",
        default="clawapi",
        type_hint=str,
        description="Namespace used for the prefixed model identifiers (<prefix>/<provider>)",
        validator=lambda x: bool(x) and "/" not in x,
    )

    LOG_REQUEST_METRICS = EnvVarSpec(
        name="LOG_REQUEST_METRICS",
        default=True,
        type_hint=bool,
        description="Log START/SUCCESS/ERROR lines for every chat request",
    )

    @classmethod
    def all_specs(cls) -> dict[str, EnvVarSpec]:
        """Get all environment variable specifications.

        Returns:
            Dictionary mapping spec names to EnvVarSpec objects
        """
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if isinstance(getattr(cls, name), EnvVarSpec)
        }

