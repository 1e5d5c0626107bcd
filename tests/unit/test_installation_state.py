import pytest

from clawapi.core.config import Config
from clawapi.core.container import build_gateway_state
from clawapi.core.session.installation import DEFAULT_PORT


@pytest.mark.unit
class TestInstallationState:
    def test_install_and_uninstall(self, installs):
        assert installs.is_installed("claude") is False

        installs.set_installed("claude")
        assert installs.is_installed("claude") is True

        installs.set_uninstalled("claude")
        assert installs.is_installed("claude") is False

    def test_uninstall_missing_is_noop(self, installs):
        installs.set_uninstalled("claude")

    def test_installed_names_keeps_candidate_order(self, installs):
        installs.set_installed("gemini")
        installs.set_installed("claude")
        assert installs.installed_names(["claude", "chatgpt", "gemini"]) == ["claude", "gemini"]


@pytest.mark.unit
class TestPortFile:
    def test_default_when_missing(self, installs):
        assert installs.get_port() == DEFAULT_PORT
        assert installs.get_port(default=9000) == 9000

    def test_roundtrip(self, installs):
        installs.set_port(8123)
        assert installs.get_port() == 8123
        assert installs.port_file.read_text() == "8123"

    def test_garbage_falls_back_to_default(self, installs):
        installs.port_file.parent.mkdir(parents=True, exist_ok=True)
        installs.port_file.write_text("not-a-port")
        assert installs.get_port() == DEFAULT_PORT


@pytest.mark.unit
def test_gateway_uses_configured_storage_paths(clawapi_home):
    config = Config()
    installs = build_gateway_state(config).installs

    installs.set_installed("claude")
    installs.set_port(9300)

    assert installs.installed_dir == config.installed_dir == clawapi_home / "installed"
    assert (config.installed_dir / "claude").exists()
    assert config.port_file.read_text() == "9300"
