"""Session archive commands for the clawapi CLI."""

from pathlib import Path

import typer
from rich.console import Console

from clawapi.cli.context import CliContext
from clawapi.core.errors import SessionArchiveError
from clawapi.core.session.archive import export_session, import_session


def export(
    provider: str = typer.Argument(..., help="Provider name"),
    output: Path = typer.Option(Path("."), "--output", "-o", help="Directory for the archive"),
) -> None:
    """Package a provider's session into a portable zip archive."""
    console = Console()
    ctx = CliContext.load()
    descriptor = ctx.require_provider(provider, console)

    try:
        archive_path = export_session(ctx.sessions, descriptor.name, output)
    except SessionArchiveError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None

    console.print(f"[green]✅ Session exported to {archive_path}[/green]")


def import_archive(
    provider: str = typer.Argument(..., help="Provider name"),
    archive: Path = typer.Argument(..., help="Archive created by 'clawapi export'"),
) -> None:
    """Replace a provider's session with one from an archive."""
    console = Console()
    ctx = CliContext.load()
    descriptor = ctx.require_provider(provider, console)

    try:
        count = import_session(ctx.sessions, ctx.installs, descriptor.name, archive)
    except SessionArchiveError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None

    console.print(
        f"[green]✅ Imported {count} session file(s) for {descriptor.display_name}[/green]"
    )
    console.print("Restart the gateway to apply: [cyan]clawapi start[/cyan]")
