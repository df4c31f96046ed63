"""Main CLI application using Typer."""

import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install

from modular import __version__
from modular.commands import module
from modular.config import ConfigManager

# Install rich traceback handler
install(show_locals=False)

console = Console()

app = typer.Typer(
    name="modular",
    help="Modular - self-contained application modules",
    add_completion=True,
    rich_markup_mode="rich",
)

app.add_typer(module.app, name="module", help="Module operations")


@app.command()
def version() -> None:
    """Show the CLI version."""
    console.print(f"[bold blue]Modular[/bold blue] version [green]{__version__}[/green]")


@app.command()
def config(
    ctx: typer.Context,
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    init: bool = typer.Option(False, "--init", help="Initialize configuration file"),
) -> None:
    """Manage modular configuration."""
    cli_overrides = ctx.obj or {}
    config_manager = ConfigManager(
        cli_overrides.get("config_file"), base_path=cli_overrides.get("base_path")
    )

    if init:
        if config_manager.exists():
            console.print(
                f"[yellow]![/yellow] Configuration file already exists at "
                f"[cyan]{config_manager.config_path}[/cyan]"
            )
            return
        try:
            config_manager.create_default_config()
            console.print(
                f"[green]✓[/green] Configuration file created at "
                f"[cyan]{config_manager.config_path}[/cyan]"
            )
            console.print("\nPlease edit the file and declare your modules.")
        except Exception as e:
            console.print(f"[red]✗[/red] Failed to create configuration: {e}")
            raise typer.Exit(code=1)

    elif show:
        try:
            cfg = config_manager.load()
            console.print("\n[bold]Current Configuration:[/bold]\n")
            console.print(f"Config file: [cyan]{config_manager.config_path}[/cyan]")
            console.print(f"Modules directory: [yellow]{cfg.directory}[/yellow]")
            console.print(f"Modules namespace: [yellow]{cfg.namespace}[/yellow]")
            console.print(f"Modules: [yellow]{len(cfg.modules)}[/yellow]")
            for name, options in cfg.modules.items():
                state = "" if options.enabled else " [dim](disabled)[/dim]"
                console.print(f"  - {name}{state}")
        except Exception as e:
            console.print(f"[red]✗[/red] Failed to load configuration: {e}")
            raise typer.Exit(code=1)
    else:
        console.print("Use [cyan]--show[/cyan] to display configuration")
        console.print("Use [cyan]--init[/cyan] to create a new configuration file")


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
        envvar="MODULAR_CONFIG_FILE",
    ),
    base_path: Optional[str] = typer.Option(
        None,
        "--base-path",
        help="Application root the module paths are relative to (defaults to cwd)",
        envvar="MODULAR_BASE_PATH",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode",
        envvar="MODULAR_DEBUG",
    ),
) -> None:
    """
    Modular - self-contained application modules.

    Modules are declared in the configuration file (config/modular.yaml by
    default) and live under the configured modules directory.
    """
    ctx.obj = {
        "config_file": config_file,
        "base_path": base_path,
        "debug": debug,
    }

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
        console.print("[dim]Debug mode enabled[/dim]")


def run() -> None:
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"\n[red]Error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
