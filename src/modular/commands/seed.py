"""Seed runner for module seeders."""

import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

from rich.console import Console
from rich.markup import escape

from modular.config import ConfigManager
from modular.exceptions import ConfigNotFoundError
from modular.filesystem import Filesystem, LocalFilesystem
from modular.modules import Modular, Module
from modular.seeding import SeedExecutor
from modular.support import unique

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    """Line-oriented sink for command output."""

    def info(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class ConsoleReporter:
    """Reports to a rich console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def error(self, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/red]")


class ModuleSeed:
    """
    Runs the main seeder of the given modules.

    Each module is seeded independently: a failing seeder is reported and
    the remaining modules are still seeded. The run itself succeeds unless
    a precondition (configuration existence) fails.
    """

    def __init__(
        self,
        config_manager: ConfigManager,
        executor: SeedExecutor,
        reporter: Reporter,
        modular: Optional[Modular] = None,
        filesystem: Optional[Filesystem] = None,
    ) -> None:
        """
        Initialize the command.

        Args:
            config_manager: Manager of the modular configuration file
            executor: Executor running a single seeder
            reporter: Sink for per-module outcome lines
            modular: Module registry (built from the configuration if omitted)
            filesystem: Filesystem for a registry built from the configuration
        """
        self.config_manager = config_manager
        self.executor = executor
        self.reporter = reporter
        self._modular = modular
        self.filesystem = filesystem or LocalFilesystem()

    @property
    def modular(self) -> Modular:
        if self._modular is None:
            self._modular = Modular(self.config_manager.load(), self.filesystem)
        return self._modular

    def handle(
        self,
        modules: Sequence[str] = (),
        seeder_class: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> int:
        """
        Run the command.

        Args:
            modules: Requested module names (all seedable modules when empty)
            seeder_class: Seeder class to use instead of each module's default
            options: Options passed through to every seeder

        Returns:
            Exit code of the command

        Raises:
            ConfigNotFoundError: If the configuration file does not exist
        """
        self.verify_config_existence()
        return self.proceed(modules, seeder_class, options or {})

    def verify_config_existence(self) -> None:
        """Make sure the configuration file exists before touching modules."""
        if not self.config_manager.exists():
            raise ConfigNotFoundError(str(self.config_manager.config_path))

    def proceed(
        self,
        modules: Sequence[str],
        seeder_class: Optional[str],
        options: Dict[str, Any],
    ) -> int:
        resolved = self.verify_active(unique(modules))
        if not resolved:
            self.reporter.info("There are no active modules to seed")
            return 0

        for module in resolved:
            self.seed(module, seeder_class, options)

        return 0

    def verify_active(self, names: List[str]) -> List[Module]:
        """
        Get the requested modules that are active and have a seeder.

        All such modules are returned when no names are given. Otherwise
        modules come in the order they were requested.
        """
        seedable = self.modular.with_seeders()
        if not names:
            return seedable

        by_name = {module.get_name(): module for module in seedable}
        for name in names:
            if name not in by_name:
                logger.warning("Module %s is not active or has no seeder, skipping", name)

        return [by_name[name] for name in names if name in by_name]

    def seed(self, module: Module, seeder_class: Optional[str], options: Dict[str, Any]) -> bool:
        """Run the seeder of a single module and report the outcome."""
        class_ref = module.get_seeder_class(seeder_class)
        exit_code = self.executor.run(class_ref, {**options, "class": class_ref})

        if exit_code == 0:
            self.reporter.info(f"[Module {module.get_name()}] Seeded: {class_ref}")
            return True

        self.reporter.error(
            f"[Module {module.get_name()}] There was a problem with running seeder {class_ref}"
        )
        return False
