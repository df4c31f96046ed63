"""Seeders and the executor that runs them by class reference."""

import importlib
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class SeedExecutor(Protocol):
    """Runs a single seeder and reports a process-style exit code."""

    def run(self, seeder_class: str, options: Dict[str, Any]) -> int:
        ...


class Seeder(ABC):
    """
    Base class for database seeders.

    Module seeders inherit from this class and implement run(). A seeder
    may run other seeders with call().
    """

    def __init__(
        self,
        database: Optional[str] = None,
        force: bool = False,
        executor: Optional[SeedExecutor] = None,
    ):
        """
        Initialize the seeder.

        Args:
            database: Database connection to seed
            force: Run even when the environment would normally forbid it
            executor: Executor used by call() (defaults to ClassSeedExecutor)
        """
        self.database = database
        self.force = force
        self.executor = executor or ClassSeedExecutor()

    @abstractmethod
    def run(self) -> Optional[int]:
        """Seed the database."""
        pass

    def call(self, seeder_class: str) -> int:
        """Run another seeder with the same options."""
        return self.executor.run(
            seeder_class, {"database": self.database, "force": self.force}
        )


def resolve_class(reference: str) -> type:
    """
    Import a class from a ``package.module:ClassName`` reference.

    A dotted ``package.module.ClassName`` reference is accepted as well.

    Raises:
        ImportError: If the module cannot be imported
        AttributeError: If the module has no such class
    """
    if ":" in reference:
        module_path, _, class_name = reference.partition(":")
    else:
        module_path, _, class_name = reference.rpartition(".")

    if not module_path or not class_name:
        raise ImportError(f"Invalid class reference '{reference}'")

    module = importlib.import_module(module_path)
    return getattr(module, class_name)


class ClassSeedExecutor:
    """Runs seeders in-process by importing their class."""

    def run(self, seeder_class: str, options: Dict[str, Any]) -> int:
        """
        Instantiate and run a seeder.

        Args:
            seeder_class: Class reference of the seeder
            options: Keyword arguments for the seeder constructor

        Returns:
            0 on success, the seeder's own integer result if it returns one,
            1 if the seeder cannot be loaded or fails
        """
        kwargs = {key: value for key, value in options.items() if key != "class"}
        try:
            cls = resolve_class(seeder_class)
            result = cls(**kwargs).run()
        except Exception:
            logger.exception("Seeder %s failed", seeder_class)
            return 1

        if isinstance(result, int) and not isinstance(result, bool):
            return result
        return 0
