"""Provider installation commands for the clawapi CLI."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from clawapi.cli.context import CliContext
from clawapi.cli.presenters.providers import ProviderStatusRow, ProviderTablePresenter
from clawapi.core.errors import SessionError
from clawapi.core.session.store import DEFAULT_USER_AGENT


def build_rows(ctx: CliContext, active: set[str] | None = None) -> list[ProviderStatusRow]:
    """One row per catalogued provider; ``active`` is None when unknown."""
    return [
        ProviderStatusRow(
            name=descriptor.name,
            display_name=descriptor.display_name,
            vendor=descriptor.vendor,
            installed=ctx.installs.is_installed(descriptor.name),
            authenticated=ctx.sessions.validate(descriptor.name),
            active=None if active is None else descriptor.name in active,
        )
        for descriptor in ctx.registry.list_all()
    ]


def available() -> None:
    """List every provider the gateway knows about."""
    ctx = CliContext.load()
    ProviderTablePresenter().present_available(build_rows(ctx))


def list_installed() -> None:
    """List installed providers."""
    ctx = CliContext.load()
    ProviderTablePresenter().present_installed(build_rows(ctx))


def add(
    provider: str = typer.Argument(..., help="Provider name (e.g. 'claude')"),
    cookies: Path = typer.Option(
        None, "--cookies", help="JSON cookie export captured after logging in"
    ),
    user_agent: str = typer.Option(
        None, "--user-agent", help="User agent of the browser that captured the cookies"
    ),
) -> None:
    """Install a provider, optionally storing a captured browser session.

    Example:
        clawapi add claude --cookies ./claude-cookies.json
    """
    console = Console()
    ctx = CliContext.load()
    descriptor = ctx.require_provider(provider, console)

    if cookies is not None:
        try:
            captured = json.loads(cookies.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            console.print(f"[red]❌ Cannot read cookie file {cookies}: {e}[/red]")
            raise typer.Exit(1) from None
        if not isinstance(captured, list):
            console.print("[red]❌ Cookie file must contain a JSON list of cookies[/red]")
            raise typer.Exit(1)

        try:
            saved = ctx.sessions.save(descriptor.name, captured, user_agent or DEFAULT_USER_AGENT)
        except SessionError as e:
            console.print(f"[red]❌ {e}[/red]")
            raise typer.Exit(1) from None
        if not saved:
            console.print(
                f"[red]❌ The captured session for {descriptor.display_name} "
                "does not look logged in; nothing was stored.[/red]"
            )
            raise typer.Exit(1)

    ctx.installs.set_installed(descriptor.name)

    if ctx.sessions.validate(descriptor.name):
        console.print(
            Panel(
                f"[green]✅ {descriptor.display_name} installed and authenticated.[/green]\n\n"
                "Restart the gateway to start serving it: [cyan]clawapi start[/cyan]",
                title="Provider Added",
                border_style="green",
            )
        )
    else:
        console.print(
            Panel(
                f"[yellow]{descriptor.display_name} installed without a session.[/yellow]\n\n"
                f"1. Log in at {descriptor.login_url}\n"
                f"2. Export the cookies and run: "
                f"[cyan]clawapi add {descriptor.name} --cookies <file>[/cyan]\n"
                f"   or import an archive: [cyan]clawapi import {descriptor.name} <zip>[/cyan]",
                title="Login Required",
                border_style="yellow",
            )
        )


def rm(provider: str = typer.Argument(..., help="Provider name")) -> None:
    """Uninstall a provider and delete its stored session."""
    console = Console()
    ctx = CliContext.load()
    descriptor = ctx.require_provider(provider, console)

    try:
        ctx.installs.set_uninstalled(descriptor.name)
        ctx.sessions.clear(descriptor.name)
    except SessionError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None

    console.print(f"[green]✅ Removed {descriptor.display_name}[/green]")


def reset(provider: str = typer.Argument(..., help="Provider name")) -> None:
    """Delete a provider's stored session but keep it installed."""
    console = Console()
    ctx = CliContext.load()
    descriptor = ctx.require_provider(provider, console)

    try:
        ctx.sessions.clear(descriptor.name)
    except SessionError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None

    console.print(f"[green]✅ Session for {descriptor.display_name} cleared[/green]")
    console.print(f"Log in again with: [cyan]clawapi add {descriptor.name} --cookies <file>[/cyan]")
