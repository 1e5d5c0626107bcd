"""Shared pytest configuration and fixtures for ClawAPI tests."""

import json
from pathlib import Path

import pytest

from clawapi.core.provider.registry import ProviderRegistry
from clawapi.core.session.installation import InstallationState
from clawapi.core.session.store import COOKIES_FILE, USER_AGENT_FILE, SessionStore

# Import HTTP mocking fixtures from fixtures module
pytest_plugins = ["tests.fixtures.mock_http"]

CLAWAPI_ENV_VARS = (
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "REQUEST_TIMEOUT",
    "STREAMING_CONNECT_TIMEOUT_SECONDS",
    "STREAMING_READ_TIMEOUT_SECONDS",
    "CLAWAPI_MODEL_PREFIX",
    "LOG_REQUEST_METRICS",
)

TEST_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) ClawAPITest/1.0"


def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def clawapi_home(tmp_path, monkeypatch) -> Path:
    """Point every test at an isolated storage root with default settings."""
    home = tmp_path / "clawapi-home"
    monkeypatch.setenv("CLAWAPI_HOME", str(home))
    for name in CLAWAPI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def registry() -> ProviderRegistry:
    return ProviderRegistry()


@pytest.fixture
def session_store(clawapi_home, registry) -> SessionStore:
    return SessionStore(clawapi_home / "sessions", registry)


@pytest.fixture
def installs(clawapi_home) -> InstallationState:
    return InstallationState(clawapi_home / "installed", clawapi_home / "current_port")


@pytest.fixture
def claude_cookies() -> list[dict]:
    """A captured claude.ai cookie collection carrying the identity cookie."""
    return [
        {"name": "sessionKey", "value": "sk-ant-sid01-test", "domain": ".claude.ai"},
        {"name": "lastActiveOrg", "value": "org-123", "domain": ".claude.ai"},
        {"name": "__cf_bm", "value": "cf-token", "domain": ".claude.ai"},
    ]


def write_session(store: SessionStore, provider: str, cookies, user_agent: str | None = None):
    """Write a raw session artifact without any validation."""
    session_dir = store.session_dir(provider)
    session_dir.mkdir(parents=True, exist_ok=True)
    payload = cookies if isinstance(cookies, str) else json.dumps(cookies)
    (session_dir / COOKIES_FILE).write_text(payload, encoding="utf-8")
    if user_agent is not None:
        (session_dir / USER_AGENT_FILE).write_text(user_agent, encoding="utf-8")
    return session_dir


@pytest.fixture
def authenticated_claude(session_store, installs, claude_cookies) -> SessionStore:
    """Claude installed with a qualifying session on disk."""
    write_session(session_store, "claude", claude_cookies, TEST_USER_AGENT)
    installs.set_installed("claude")
    return session_store
