"""Presenters for provider tables in the CLI."""

from dataclasses import dataclass

from rich.console import Console
from rich.table import Table


@dataclass(frozen=True)
class ProviderStatusRow:
    name: str
    display_name: str
    vendor: str
    installed: bool
    authenticated: bool
    active: bool | None  # None when the gateway could not be reached


def _flag(value: bool | None) -> str:
    if value is None:
        return "[dim]?[/dim]"
    return "[green]yes[/green]" if value else "[red]no[/red]"


class ProviderTablePresenter:
    """Renders provider rows; contains no business logic."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def present_available(self, rows: list[ProviderStatusRow]) -> None:
        table = Table(title="Available Providers")
        table.add_column("Name", style="cyan")
        table.add_column("Display")
        table.add_column("Vendor")
        table.add_column("Installed")
        for row in rows:
            table.add_row(row.name, row.display_name, row.vendor, _flag(row.installed))
        self.console.print(table)
        self.console.print("Install with: [green]clawapi add <provider>[/green]")

    def present_installed(self, rows: list[ProviderStatusRow]) -> None:
        installed = [row for row in rows if row.installed]
        if not installed:
            self.console.print("[yellow]! No providers installed.[/yellow]")
            self.console.print("Install with: [green]clawapi add <provider>[/green]")
            return

        table = Table(title="Installed Providers")
        table.add_column("Name", style="cyan")
        table.add_column("Display")
        table.add_column("Vendor")
        for row in installed:
            table.add_row(row.name, row.display_name, row.vendor)
        self.console.print(table)

    def present_status(self, server_url: str | None, rows: list[ProviderStatusRow]) -> None:
        if server_url:
            self.console.print(f"Server    [green]running[/green]  →  {server_url}")
        else:
            self.console.print("Server    [red]stopped[/red]")

        installed = [row for row in rows if row.installed]
        if not installed:
            return

        table = Table()
        table.add_column("Provider", style="cyan")
        table.add_column("Display")
        table.add_column("Auth")
        table.add_column("Active")
        for row in installed:
            table.add_row(
                row.name, row.display_name, _flag(row.authenticated), _flag(row.active)
            )
        self.console.print(table)
