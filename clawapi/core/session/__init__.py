"""Session artifacts: validation, loading, install flags and portable archives."""

from clawapi.core.session.installation import InstallationState
from clawapi.core.session.store import SessionCredentials, SessionStore

__all__ = ["InstallationState", "SessionCredentials", "SessionStore"]
