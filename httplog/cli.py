"""
Command-line interface for httplog.

Starts the HTTP service and exposes the standalone computation helper.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from httplog.core.config import get_config
from httplog.core.exceptions import HttplogError
from httplog.providers import compute as compute_sum

app = typer.Typer(
    name="httplog",
    help="httplog - HTTP service with layered request and error logging",
    add_completion=False,
)
console = Console()


@app.command()
def version() -> None:
    """Show httplog version information."""
    from httplog import __version__

    console.print(f"httplog version: {__version__}")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on"),
    env_file: Path | None = typer.Option(
        None, "--env-file", help="Environment file to load before reading settings"
    ),
) -> None:
    """Run the HTTP service."""
    from httplog.web.main import run_server

    try:
        config = get_config(env_file)
    except HttplogError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1) from e

    if host is not None:
        config.server.host = host
    if port is not None:
        config.server.port = port

    run_server(config)


@app.command()
def compute(
    param1: float = typer.Argument(..., help="First addend"),
    param2: float = typer.Argument(..., help="Second addend"),
    param3: float = typer.Argument(..., help="Third addend"),
) -> None:
    """Print the sum of three non-zero numbers."""
    try:
        result = compute_sum(param1=param1, param2=param2, param3=param3)
    except HttplogError as e:
        console.print(f"Error: {e.message}")
        raise typer.Exit(1) from e

    if float(result).is_integer():
        result = int(result)
    console.print(str(result))


if __name__ == "__main__":
    app()
