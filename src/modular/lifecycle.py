"""Wires active modules into the host application's bootstrap lifecycle."""

import logging
from typing import Callable, List, Protocol

from modular.filesystem import Filesystem
from modular.modules.registry import Modular

logger = logging.getLogger(__name__)


class Application(Protocol):
    """Host application hooks used during registration."""

    def register(self, provider_class: str) -> None:
        ...

    def load_migrations_from(self, paths: List[str]) -> None:
        ...


class Router(Protocol):
    """Host router able to open a namespaced route group."""

    def group(self, namespace: str, callback: Callable[["Router"], None]) -> None:
        ...


class ModularServiceProvider:
    """
    Registers modules with the host application.

    register() runs while the application is being set up: it hands over
    migration paths and registers module service providers. boot() runs
    once the router exists: it loads module routes and factories. A routes
    file may define register(router), which is called inside the module's
    route group.
    """

    def __init__(self, app: Application, modular: Modular, filesystem: Filesystem) -> None:
        self.app = app
        self.modular = modular
        self.filesystem = filesystem

    def register(self) -> None:
        """Register migration paths and service providers of active modules."""
        self.set_migration_paths()
        self.load_service_providers()

    def boot(self, router: Router) -> None:
        """Load routes and factories of active modules."""
        self.load_routes(router)
        self.load_factories()

    def set_migration_paths(self) -> None:
        """Set migrations paths for all active modules."""
        paths = [module.migrations_path() for module in self.modular.active()]
        self.app.load_migrations_from(paths)

    def load_service_providers(self) -> None:
        """Register service providers of active modules in configuration order."""
        for module in self.modular.with_service_providers():
            logger.debug("Registering provider %s", module.service_provider_class())
            self.app.register(module.service_provider_class())

    def load_routes(self, router: Router) -> None:
        """Load the routes file of every routable module inside its own route group."""
        for module in self.modular.with_routes():
            router.group(
                module.route_controller_namespace(),
                self._routes_loader(module.routes_file_path()),
            )

    def _routes_loader(self, path: str) -> Callable[[Router], None]:
        # a routes file registers its routes through a register(router) function
        def load(router: Router) -> None:
            routes = self.filesystem.require_once(path)
            register = getattr(routes, "register", None)
            if callable(register):
                register(router)

        return load

    def load_factories(self) -> None:
        """Load factory files of active modules."""
        for module in self.modular.with_factories():
            self.filesystem.require_once(module.factory_file_path())
