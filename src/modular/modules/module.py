"""Module entity: identity, conventional locations and capabilities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from modular.config import ModularConfig, ModuleOptions
from modular.filesystem import Filesystem
from modular.support import join_namespace, normalize_path, replace


class Capability(str, Enum):
    """Optional files a module may provide."""

    ROUTES = "routes"
    SEEDER = "seeder"
    FACTORY = "factory"
    SERVICE_PROVIDER = "service_provider"


@dataclass(frozen=True)
class Module:
    """
    A single configured module.

    All paths are relative to the application base path and all class
    references use the ``package.module:ClassName`` form. Everything is
    derived from the module name, its options and the global configuration.
    """

    name: str
    config: ModularConfig = field(repr=False, compare=False)
    options: ModuleOptions = field(default_factory=ModuleOptions)
    filesystem: Optional[Filesystem] = field(default=None, repr=False, compare=False)

    def get_name(self) -> str:
        """Get the module name."""
        return self.name

    def is_active(self) -> bool:
        """Check whether the module is enabled."""
        return self.options.enabled

    # Locations

    def directory(self) -> str:
        """Get the module directory."""
        if self.options.directory:
            return normalize_path(self.options.directory)
        return normalize_path(self.config.directory, self.name)

    def import_path(self) -> str:
        """Get the dotted package path of the module."""
        if self.options.namespace:
            return join_namespace(self.options.namespace)
        return join_namespace(self.config.namespace, self.name)

    def routes_file_path(self) -> str:
        return self._path(self.options.routes_file or self.config.routing.file)

    def seeder_file_path(self) -> str:
        return self._path(self.options.seeder_file or self.config.seeding.file)

    def factory_file_path(self) -> str:
        return self._path(self.options.factory_file or self.config.factories.file)

    def service_provider_file_path(self) -> str:
        return self._path(self.options.provider_file or self.config.providers.file)

    def migrations_path(self) -> str:
        return self._path(self.options.migrations_path or self.config.migrations.path)

    def _path(self, relative: str) -> str:
        return normalize_path(self.directory(), replace(relative, self.name))

    # Names

    def route_controller_namespace(self) -> str:
        """Get the namespace route groups of this module resolve controllers in."""
        if self.options.controllers_namespace:
            return replace(self.options.controllers_namespace, self.name)
        return join_namespace(self.import_path(), self.config.routing.controllers)

    def service_provider_class(self) -> str:
        """Get the service provider class reference."""
        class_name = self.options.provider_class or self.config.providers.class_name
        return self._qualify(class_name, self.service_provider_file_path())

    def get_seeder_class(self, class_name: Optional[str] = None) -> str:
        """
        Get the seeder class reference.

        An explicitly given class name wins over the module's configured
        seeder class, which wins over the global naming template. A name
        that is already a full ``package.module:ClassName`` reference is
        returned as-is; a bare name is placed in the module defined by the
        seeder file.
        """
        chosen = class_name or self.options.seeder_class or self.config.seeding.class_name
        return self._qualify(chosen, self.seeder_file_path())

    def _qualify(self, class_name: str, file_path: str) -> str:
        class_name = replace(class_name, self.name)
        if ":" in class_name:
            return class_name
        return f"{self._dotted(file_path)}:{class_name}"

    def _dotted(self, file_path: str) -> str:
        # the file relative to the module directory, as a submodule of import_path()
        relative = file_path[len(self.directory()):].strip("/")
        if relative.endswith(".py"):
            relative = relative[: -len(".py")]
        return join_namespace(self.import_path(), relative.replace("/", "."))

    # Capabilities

    def has_routes(self) -> bool:
        return self._exists(self.routes_file_path())

    def has_seeder(self) -> bool:
        return self._exists(self.seeder_file_path())

    def has_factory(self) -> bool:
        return self._exists(self.factory_file_path())

    def has_service_provider(self) -> bool:
        return self._exists(self.service_provider_file_path())

    def has(self, capability: Capability) -> bool:
        """Check a capability by kind."""
        return _PREDICATES[capability](self)

    def _exists(self, path: str) -> bool:
        if self.filesystem is None:
            return False
        return self.filesystem.exists(path)


_PREDICATES = {
    Capability.ROUTES: Module.has_routes,
    Capability.SEEDER: Module.has_seeder,
    Capability.FACTORY: Module.has_factory,
    Capability.SERVICE_PROVIDER: Module.has_service_provider,
}
