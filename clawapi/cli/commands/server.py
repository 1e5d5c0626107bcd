"""Server commands for the clawapi CLI."""

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from clawapi.cli.commands.providers import build_rows
from clawapi.cli.context import CliContext
from clawapi.cli.presenters.providers import ProviderTablePresenter
from clawapi.core.config.schema import LOOPBACK_HOSTS

STATUS_TIMEOUT_SECONDS = 2.0


def start(
    host: str = typer.Option(None, "--host", help="Override host (loopback only)"),
    port: int = typer.Option(None, "--port", help="Override port"),
) -> None:
    """Start the gateway in the foreground."""
    from clawapi.main import run_server

    console = Console()
    ctx = CliContext.load()

    server_host = host or ctx.config.host
    server_port = port or ctx.config.port
    if server_host not in LOOPBACK_HOSTS:
        console.print(f"[red]❌ Refusing to bind non-loopback address: {server_host}[/red]")
        raise typer.Exit(1)

    table = Table(title="ClawAPI Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Server URL", f"http://{server_host}:{server_port}")
    table.add_row("Home", str(ctx.config.home_dir))
    table.add_row(
        "Installed",
        ", ".join(ctx.installs.installed_names(ctx.registry.all_names())) or "-",
    )
    table.add_row("Request Timeout", f"{ctx.config.request_timeout:g}s")
    console.print(table)

    ctx.installs.set_port(server_port)
    run_server(ctx.config, server_host, server_port)


def _fetch_active(url: str) -> set[str] | None:
    """Active providers reported by a running gateway, or None if unreachable."""
    try:
        response = httpx.get(f"{url}/v1/models", timeout=STATUS_TIMEOUT_SECONDS)
        response.raise_for_status()
    except httpx.HTTPError:
        return None
    return {
        entry["provider"]
        for entry in response.json().get("data", [])
        if entry.get("active") and "provider" in entry
    }


def status() -> None:
    """Show whether the gateway is running and which providers it serves."""
    ctx = CliContext.load()
    url = ctx.server_url()
    active = _fetch_active(url)
    ProviderTablePresenter().present_status(
        url if active is not None else None, build_rows(ctx, active)
    )


def test(
    provider: str = typer.Argument(..., help="Provider name"),
    prompt: str = typer.Option("Say hello in one short sentence.", "--prompt", "-p"),
) -> None:
    """Send one prompt through the running gateway."""
    console = Console()
    ctx = CliContext.load()
    descriptor = ctx.require_provider(provider, console)
    url = ctx.server_url()

    console.print(f"[bold cyan]Testing {descriptor.display_name} via {url}[/bold cyan]")
    try:
        response = httpx.post(
            f"{url}/v1/chat/completions",
            json={
                "model": f"{ctx.config.model_prefix}/{descriptor.name}",
                "messages": [{"role": "user", "content": prompt}],
            },
            timeout=ctx.config.request_timeout + 10,
        )
    except httpx.HTTPError as e:
        console.print(f"[red]❌ Gateway not reachable at {url}: {e}[/red]")
        console.print("Start it with: [cyan]clawapi start[/cyan]")
        raise typer.Exit(1) from None

    body = response.json()
    if response.status_code != 200:
        message = body.get("error", {}).get("message", response.text)
        console.print(f"[red]❌ HTTP {response.status_code}: {escape(message)}[/red]")
        raise typer.Exit(1)

    console.print(
        Panel(
            escape(body["choices"][0]["message"]["content"]),
            title=f"{descriptor.display_name} replied",
            border_style="green",
            expand=False,
        )
    )
