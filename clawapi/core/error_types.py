"""Error type enumeration for ClawAPI.

Provides type-safe error categorization for log lines. The wire format
stays coarse (status code plus message); these values keep the failure
kinds apart for diagnostics.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type categories recorded alongside every failed request."""

    # Pre-upstream checks
    BAD_REQUEST = "bad_request"  # Malformed request (e.g. missing model)
    UNKNOWN_PROVIDER = "unknown_provider"  # Provider not in the registry
    NOT_INSTALLED = "not_installed"  # Provider has no installed flag
    UNAUTHENTICATED = "unauthenticated"  # No session, or it fails qualification
    NOT_ACTIVE = "not_active"  # Valid session but not loaded at startup

    # Upstream cycle
    UPSTREAM_AUTH = "upstream_auth"  # Metadata call rejected the session
    MODEL_UNAVAILABLE = "model_unavailable"  # Candidate model not permitted
    UPSTREAM_FATAL = "upstream_fatal"  # Any other upstream rejection
    TRANSPORT = "transport"  # Network or stream failure
    TIMEOUT = "timeout"  # Cycle exceeded its deadline
    NOT_IMPLEMENTED = "not_implemented"  # No adapter for this provider

    # Local storage
    SESSION_STORAGE = "session_storage"

    # Catch-all
    UNEXPECTED_ERROR = "unexpected_error"
