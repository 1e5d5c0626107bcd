"""
Exception hierarchy for ClawAPI.

All exceptions inherit from ClawAPIError, allowing callers to catch every
gateway-specific failure with a single except clause. Each class carries
the HTTP status it maps to and an ErrorType used in log lines.

Example:
    >>> try:
    ...     await relay.ask("claude", prompt)
    ... except ClawAPIError as e:
    ...     print(f"{e.error_type.value}: {e}")
"""

from __future__ import annotations

from clawapi.core.error_types import ErrorType


class ClawAPIError(Exception):
    """Base exception for all gateway errors."""

    status_code: int = 500
    error_type: ErrorType = ErrorType.UNEXPECTED_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ProviderError(ClawAPIError):
    """An error scoped to one provider.

    Attributes:
        provider: Registry name of the provider involved
    """

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self.provider!r}, message={self.message!r})"


# === Pre-upstream checks ===


class UnknownProviderError(ProviderError):
    status_code = 404
    error_type = ErrorType.UNKNOWN_PROVIDER


class NotInstalledError(ProviderError):
    status_code = 503
    error_type = ErrorType.NOT_INSTALLED


class UnauthenticatedError(ProviderError):
    status_code = 401
    error_type = ErrorType.UNAUTHENTICATED


class NotActiveError(ProviderError):
    """Installed and authenticated, but absent from the live runtime."""

    status_code = 503
    error_type = ErrorType.NOT_ACTIVE


# === Upstream cycle ===


class UpstreamError(ProviderError):
    """Base for failures raised while driving the upstream cycle."""

    status_code = 500
    error_type = ErrorType.UPSTREAM_FATAL


class UpstreamAuthError(UpstreamError):
    """The upstream refused the replayed session."""

    error_type = ErrorType.UPSTREAM_AUTH


class UpstreamModelUnavailableError(UpstreamError):
    """A candidate model is not permitted for this account.

    Raised only when every candidate of the fallback chain was refused;
    the message is the last recorded refusal reason.
    """

    error_type = ErrorType.MODEL_UNAVAILABLE

    def __init__(self, provider: str, model: str, message: str | None = None) -> None:
        self.model = model
        super().__init__(provider, message or f"Model {model} not available")


class UpstreamFatalError(UpstreamError):
    error_type = ErrorType.UPSTREAM_FATAL


class TransportError(UpstreamError):
    """Network, protocol or stream failure while talking to the upstream."""

    error_type = ErrorType.TRANSPORT


class UpstreamTimeoutError(TransportError):
    error_type = ErrorType.TIMEOUT


class AdapterNotImplementedError(UpstreamError):
    """The provider is catalogued but no protocol adapter drives it yet."""

    error_type = ErrorType.NOT_IMPLEMENTED


# === Local storage ===


class SessionError(ClawAPIError):
    """Raised when a session artifact cannot be read, written or removed."""

    error_type = ErrorType.SESSION_STORAGE


class SessionArchiveError(SessionError):
    """Raised when exporting or importing a session archive fails."""


__all__ = [
    "AdapterNotImplementedError",
    "ClawAPIError",
    "NotActiveError",
    "NotInstalledError",
    "ProviderError",
    "SessionArchiveError",
    "SessionError",
    "TransportError",
    "UnauthenticatedError",
    "UnknownProviderError",
    "UpstreamAuthError",
    "UpstreamError",
    "UpstreamFatalError",
    "UpstreamModelUnavailableError",
    "UpstreamTimeoutError",
]
