"""Main CLI entry point for clawapi."""

import logging

import typer
from rich.console import Console

from clawapi.cli.commands import providers, server, sessions

app = typer.Typer(
    name="clawapi",
    help="ClawAPI - a local chat-completion gateway over browser sessions",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(server.start)
app.command()(server.status)
app.command()(server.test)
app.command()(providers.available)
app.command(name="list")(providers.list_installed)
app.command()(providers.add)
app.command()(providers.rm)
app.command()(providers.reset)
app.command()(sessions.export)
app.command(name="import")(sessions.import_archive)


@app.command()
def version() -> None:
    """Show version information."""
    from clawapi import __version__

    console = Console()
    console.print(f"[bold cyan]clawapi[/bold cyan] version [green]{__version__}[/green]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """ClawAPI CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


if __name__ == "__main__":
    app()
