"""Module registry for discovering configured modules and filtering them by capability."""

import logging
import threading
from typing import TYPE_CHECKING, List, Optional

from modular.config import ModularConfig
from modular.filesystem import Filesystem
from modular.modules.module import Capability, Module

if TYPE_CHECKING:
    from modular.seeding import Seeder

logger = logging.getLogger(__name__)


class Modular:
    """
    Registry of the modules declared in configuration.

    Modules are built on first access and cached for the lifetime of the
    instance. Every accessor returns a new list in configuration order;
    the cache itself is never changed after loading. Create a new instance
    to pick up a changed configuration.
    """

    def __init__(self, config: ModularConfig, filesystem: Filesystem) -> None:
        """
        Initialize the registry.

        Args:
            config: Loaded modular configuration
            filesystem: Filesystem used for module capability checks
        """
        self.config = config
        self.filesystem = filesystem
        self._modules: Optional[List[Module]] = None
        self._lock = threading.Lock()

    def _load_modules(self) -> List[Module]:
        """Load modules (if not loaded) and get them."""
        if self._modules is None:
            with self._lock:
                if self._modules is None:
                    self._modules = [
                        Module(name, self.config, options, self.filesystem)
                        for name, options in self.config.get_modules().items()
                    ]
                    logger.debug("Loaded %d module(s)", len(self._modules))
        return self._modules

    def get_config(self) -> ModularConfig:
        return self.config

    def all(self) -> List[Module]:
        """Get all modules."""
        return list(self._load_modules())

    def active(self) -> List[Module]:
        """Get active modules."""
        return [module for module in self._load_modules() if module.is_active()]

    def with_capability(self, capability: Capability) -> List[Module]:
        """Get active modules that also provide the given capability."""
        return [module for module in self.active() if module.has(capability)]

    def with_routes(self) -> List[Module]:
        """Get all routable modules (active and having routes file)."""
        return self.with_capability(Capability.ROUTES)

    def with_factories(self) -> List[Module]:
        """Get all active modules having a factory file."""
        return self.with_capability(Capability.FACTORY)

    def with_service_providers(self) -> List[Module]:
        """Get all active modules having a service provider file."""
        return self.with_capability(Capability.SERVICE_PROVIDER)

    def with_seeders(self) -> List[Module]:
        """Get all active modules having a seeder file."""
        return self.with_capability(Capability.SEEDER)

    def find(self, name: str) -> Optional[Module]:
        """
        Find a module by name.

        Inactive modules are found too.

        Returns:
            The module or None if no module has that name
        """
        return next((module for module in self._load_modules() if module.name == name), None)

    def exists(self, name: str) -> bool:
        """Check whether a module with the given name is configured."""
        return self.find(name) is not None

    def seed(self, seeder: "Seeder") -> None:
        """Run the main seeder of every active module through the given seeder."""
        for module in self.with_seeders():
            seeder.call(module.get_seeder_class())
