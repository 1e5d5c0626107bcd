"""Installed-provider flags and the last started port.

Both are plain files managed by the CLI (and any external supervisor):
``<home>/installed/<provider>`` marks a provider installed and
``<home>/current_port`` records where the gateway was last started.
"""

import logging
from pathlib import Path

from clawapi.core.errors import SessionError

_logger = logging.getLogger(__name__)

DEFAULT_PORT = 8855


class InstallationState:
    def __init__(self, installed_dir: Path, port_file: Path) -> None:
        self.installed_dir = installed_dir
        self.port_file = port_file

    def is_installed(self, provider: str) -> bool:
        return (self.installed_dir / provider).exists()

    def set_installed(self, provider: str) -> None:
        try:
            self.installed_dir.mkdir(parents=True, exist_ok=True)
            (self.installed_dir / provider).write_text("true", encoding="utf-8")
        except OSError as e:
            raise SessionError(f"Cannot mark '{provider}' installed: {e}") from e

    def set_uninstalled(self, provider: str) -> None:
        try:
            (self.installed_dir / provider).unlink(missing_ok=True)
        except OSError as e:
            raise SessionError(f"Cannot mark '{provider}' uninstalled: {e}") from e

    def installed_names(self, candidates: list[str]) -> list[str]:
        """Filter ``candidates`` down to installed providers, keeping order."""
        return [name for name in candidates if self.is_installed(name)]

    def get_port(self, default: int = DEFAULT_PORT) -> int:
        try:
            return int(self.port_file.read_text(encoding="utf-8").strip())
        except FileNotFoundError:
            return default
        except (OSError, ValueError) as e:
            _logger.warning("Ignoring unreadable port file %s: %s", self.port_file, e)
            return default

    def set_port(self, port: int) -> None:
        self.port_file.parent.mkdir(parents=True, exist_ok=True)
        self.port_file.write_text(str(port), encoding="utf-8")
