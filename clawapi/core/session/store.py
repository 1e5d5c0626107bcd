"""
Filesystem-based session artifact storage.

Each provider owns one directory under the sessions root holding a
``cookies.json`` collection (a list of ``{"name", "value", ...}`` entries as
captured from a real browser) and a ``userAgent.txt`` file.
"""

import json
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from clawapi.core.errors import SessionError
from clawapi.core.provider.registry import ProviderRegistry

_logger = logging.getLogger(__name__)

COOKIES_FILE = "cookies.json"
USER_AGENT_FILE = "userAgent.txt"
SESSION_FILES = (COOKIES_FILE, USER_AGENT_FILE)

# Tracking-only cookie sets are assumed to stay at or below this size
MIN_COOKIE_COUNT_EXCLUSIVE = 3

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

SESSION_FILE_PERMISSIONS = 0o600


@dataclass(frozen=True)
class SessionCredentials:
    """Header material derived from a validated session artifact."""

    cookie_header: str
    user_agent: str
    cookie_count: int


def cookie_header_from(cookies: list[dict[str, Any]]) -> str:
    """Join ``name=value`` pairs with ``; `` into a single Cookie header value."""
    return "; ".join(f"{cookie['name']}={cookie.get('value', '')}" for cookie in cookies)


class SessionStore:
    """Validates and loads per-provider session artifacts.

    There is no direct way to ask an upstream "am I logged in", so
    ``validate`` is the only authentication gate: a session qualifies when
    its cookie collection parses as a non-empty list and either contains a
    provider-declared identity cookie (when the provider declares any) or
    holds more than three cookies.
    """

    def __init__(self, sessions_dir: Path, registry: ProviderRegistry) -> None:
        self.sessions_dir = sessions_dir
        self.registry = registry

    def session_dir(self, provider: str) -> Path:
        return self.sessions_dir / provider

    def exists(self, provider: str) -> bool:
        """Check whether any session artifact is present on disk."""
        session_dir = self.session_dir(provider)
        return session_dir.is_dir() and any(session_dir.iterdir())

    def read_cookies(self, provider: str) -> list[dict[str, Any]] | None:
        """Read the persisted cookie collection.

        Returns:
            The cookie list, or None when the file is missing, unparseable,
            not a list, or contains entries without a string ``name``.
        """
        cookie_path = self.session_dir(provider) / COOKIES_FILE
        try:
            with open(cookie_path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            _logger.warning("Unreadable cookie collection %s: %s", cookie_path, e)
            return None

        if not isinstance(data, list):
            return None
        if not all(isinstance(c, dict) and isinstance(c.get("name"), str) for c in data):
            return None
        return data

    def read_user_agent(self, provider: str) -> str | None:
        ua_path = self.session_dir(provider) / USER_AGENT_FILE
        try:
            return ua_path.read_text(encoding="utf-8").strip() or None
        except FileNotFoundError:
            return None
        except OSError as e:
            raise SessionError(f"Cannot read user agent for '{provider}': {e}") from e

    def validate(self, provider: str) -> bool:
        """Apply the session qualification heuristic for ``provider``."""
        cookies = self.read_cookies(provider)
        if not cookies:
            return False

        descriptor = self.registry.get(provider)
        identity_cookies = descriptor.identity_cookies if descriptor else ()
        if identity_cookies:
            names = {cookie["name"] for cookie in cookies}
            return any(name in names for name in identity_cookies)

        return len(cookies) > MIN_COOKIE_COUNT_EXCLUSIVE

    def load(self, provider: str) -> SessionCredentials:
        """Load header material for a provider whose session validates.

        Raises:
            SessionError: If the session does not qualify.
        """
        if not self.validate(provider):
            raise SessionError(
                f"No valid session for '{provider}'. Please re-authenticate."
            )

        cookies = self.read_cookies(provider) or []
        user_agent = self.read_user_agent(provider)
        if user_agent is None:
            _logger.warning("No %s for '%s'. Using default UA.", USER_AGENT_FILE, provider)
            user_agent = DEFAULT_USER_AGENT
        else:
            _logger.info("Loaded custom User-Agent for '%s'", provider)

        return SessionCredentials(
            cookie_header=cookie_header_from(cookies),
            user_agent=user_agent,
            cookie_count=len(cookies),
        )

    def save(self, provider: str, cookies: list[dict[str, Any]], user_agent: str) -> bool:
        """Persist a freshly captured session and keep it only if it qualifies.

        Any earlier session for the provider is removed first. A session that
        fails qualification is removed entirely, so readers never observe a
        half-valid artifact.

        Returns:
            True if the saved session validates.

        Raises:
            SessionError: If the files cannot be written.
        """
        self.clear(provider)
        session_dir = self.session_dir(provider)
        try:
            session_dir.mkdir(parents=True, exist_ok=True)
            with open(session_dir / COOKIES_FILE, "w", encoding="utf-8") as f:
                if hasattr(os, "fchmod"):
                    os.fchmod(f.fileno(), SESSION_FILE_PERMISSIONS)
                json.dump(cookies, f, indent=2)
            if user_agent:
                (session_dir / USER_AGENT_FILE).write_text(user_agent, encoding="utf-8")
        except OSError as e:
            _logger.error("Failed to write session for '%s': %s", provider, e)
            raise SessionError(f"Cannot write session for '{provider}': {e}") from e

        if self.validate(provider):
            return True

        _logger.warning("Session for '%s' does not qualify; discarding it", provider)
        self.clear(provider)
        return False

    def clear(self, provider: str) -> None:
        """Remove the whole session directory for ``provider``.

        Raises:
            SessionError: If removal fails due to I/O errors
        """
        session_dir = self.session_dir(provider)
        if not session_dir.exists():
            return
        try:
            shutil.rmtree(session_dir)
        except OSError as e:
            _logger.error("Failed to remove session %s: %s", session_dir, e)
            raise SessionError(f"Cannot remove session for '{provider}': {e}") from e
