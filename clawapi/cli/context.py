"""Collaborators shared by CLI commands."""

from dataclasses import dataclass

import typer
from rich.console import Console

from clawapi.core.config import Config
from clawapi.core.provider.descriptor import ProviderDescriptor
from clawapi.core.provider.registry import ProviderRegistry
from clawapi.core.session.installation import InstallationState
from clawapi.core.session.store import SessionStore


@dataclass
class CliContext:
    config: Config
    registry: ProviderRegistry
    sessions: SessionStore
    installs: InstallationState

    @classmethod
    def load(cls) -> "CliContext":
        config = Config()
        registry = ProviderRegistry()
        return cls(
            config=config,
            registry=registry,
            sessions=SessionStore(config.sessions_dir, registry),
            installs=InstallationState(config.installed_dir, config.port_file),
        )

    def server_url(self) -> str:
        return f"http://{self.config.host}:{self.installs.get_port(self.config.port)}"

    def require_provider(self, name: str, console: Console) -> ProviderDescriptor:
        """Resolve a provider name or exit with the list of known providers."""
        descriptor = self.registry.get(name.lower())
        if descriptor is None:
            console.print(f"[red]❌ Unknown provider: {name}[/red]")
            console.print(f"Available: {', '.join(self.registry.all_names())}")
            raise typer.Exit(1)
        return descriptor
