"""Module commands."""

import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from modular.commands.seed import ConsoleReporter, ModuleSeed
from modular.config import ConfigManager
from modular.filesystem import LocalFilesystem
from modular.modules import Modular
from modular.seeding import ClassSeedExecutor

console = Console()
app = typer.Typer(help="Module operations")


def _flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[dim]no[/dim]"


def _base_path(ctx: typer.Context) -> Path:
    cli_overrides = ctx.obj or {}
    return Path(cli_overrides.get("base_path") or Path.cwd())


def _config_manager(ctx: typer.Context) -> ConfigManager:
    cli_overrides = ctx.obj or {}
    return ConfigManager(cli_overrides.get("config_file"), base_path=_base_path(ctx))


@app.command("list")
def list_modules(ctx: typer.Context) -> None:
    """List configured modules and what they provide."""
    try:
        config_manager = _config_manager(ctx)
        modular = Modular(config_manager.load(), LocalFilesystem(_base_path(ctx)))

        modules = modular.all()
        if not modules:
            console.print("[yellow]No modules configured[/yellow]")
            return

        table = Table(title="Modules")
        table.add_column("Name", style="cyan")
        table.add_column("Active")
        table.add_column("Routes")
        table.add_column("Seeder")
        table.add_column("Factory")
        table.add_column("Provider")

        for module in modules:
            table.add_row(
                module.get_name(),
                _flag(module.is_active()),
                _flag(module.has_routes()),
                _flag(module.has_seeder()),
                _flag(module.has_factory()),
                _flag(module.has_service_provider()),
            )

        console.print(table)

    except Exception as e:
        console.print(f"[red]✗[/red] Failed to list modules: {e}")
        raise typer.Exit(code=1)


@app.command()
def seed(
    ctx: typer.Context,
    modules: Optional[List[str]] = typer.Argument(
        None,
        help="Names of modules to seed (seeds all active modules if not specified)",
    ),
    seeder_class: Optional[str] = typer.Option(
        None,
        "--class",
        help="Seeder class to run instead of each module's default seeder",
    ),
    database: Optional[str] = typer.Option(
        None,
        "--database",
        help="Database connection to seed",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Force the operation to run in production",
    ),
) -> None:
    """
    Seed the database with records of active modules.

    A failing module seeder is reported and does not stop the remaining ones.
    """
    base_path = str(_base_path(ctx).resolve())
    # module seeders are imported relative to the application root
    added_to_path = base_path not in sys.path
    if added_to_path:
        sys.path.insert(0, base_path)

    try:
        command = ModuleSeed(
            _config_manager(ctx),
            ClassSeedExecutor(),
            ConsoleReporter(console),
            filesystem=LocalFilesystem(base_path),
        )
        exit_code = command.handle(
            modules or [],
            seeder_class=seeder_class,
            options={"database": database, "force": force},
        )

    except Exception as e:
        console.print(f"[red]✗[/red] Seeding failed: {e}")
        raise typer.Exit(code=1)
    finally:
        if added_to_path and base_path in sys.path:
            sys.path.remove(base_path)

    if exit_code:
        raise typer.Exit(code=exit_code)
