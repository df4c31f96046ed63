"""Configuration management with file and environment variable support."""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from modular.exceptions import ConfigError, ConfigNotFoundError

DEFAULT_CONFIG_PATH = Path("config") / "modular.yaml"


class ModuleOptions(BaseModel):
    """Per-module options overriding the global conventions."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    directory: Optional[str] = None
    namespace: Optional[str] = None
    routes_file: Optional[str] = None
    controllers_namespace: Optional[str] = None
    seeder_file: Optional[str] = None
    seeder_class: Optional[str] = None
    factory_file: Optional[str] = None
    provider_file: Optional[str] = None
    provider_class: Optional[str] = None
    migrations_path: Optional[str] = None


class RoutingConfig(BaseModel):
    """Where module routes and controllers live."""

    model_config = ConfigDict(frozen=True)

    file: str = "routes.py"
    controllers: str = "controllers"


class SeedingConfig(BaseModel):
    """Where the main module seeder lives."""

    model_config = ConfigDict(frozen=True)

    file: str = "database/seeders.py"
    class_name: str = "{module}DatabaseSeeder"


class FactoriesConfig(BaseModel):
    """Where module model factories live."""

    model_config = ConfigDict(frozen=True)

    file: str = "database/factories.py"


class ProvidersConfig(BaseModel):
    """Where the module service provider lives."""

    model_config = ConfigDict(frozen=True)

    file: str = "providers.py"
    class_name: str = "{module}ServiceProvider"


class MigrationsConfig(BaseModel):
    """Where module migrations live."""

    model_config = ConfigDict(frozen=True)

    path: str = "database/migrations"


def _expand_options(options: Any) -> Any:
    # "Users:" means default options, "Users: false" means disabled
    if options is None:
        return {}
    if isinstance(options, bool):
        return {"enabled": options}
    return options


class ModularConfig(BaseModel):
    """Main configuration model."""

    model_config = ConfigDict(frozen=True)

    directory: str = "app/modules"
    namespace: str = "app.modules"
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    seeding: SeedingConfig = Field(default_factory=SeedingConfig)
    factories: FactoriesConfig = Field(default_factory=FactoriesConfig)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    migrations: MigrationsConfig = Field(default_factory=MigrationsConfig)
    modules: Dict[str, ModuleOptions] = Field(default_factory=dict)

    @field_validator("modules", mode="before")
    @classmethod
    def _shorthand_options(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(name): _expand_options(options) for name, options in value.items()}
        return value

    def get_modules(self) -> Dict[str, ModuleOptions]:
        """Get configured modules keyed by name, in configuration order."""
        return self.modules


class ConfigManager:
    """Manages configuration loading with precedence: env vars > config file > defaults."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        base_path: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize configuration manager.

        Loads a .env file from the current directory if present. Without an
        explicit path the configuration file is looked up as
        config/modular.yaml under base_path (the current directory by default).

        Note: .env loading is skipped during testing to prevent interference.
        """
        is_testing = os.getenv("PYTEST_CURRENT_TEST") is not None

        if not is_testing and Path(".env").exists():
            load_dotenv(".env", override=False)

        if config_path:
            self.config_path = Path(config_path)
        elif env_path := os.getenv("MODULAR_CONFIG_FILE"):
            self.config_path = Path(env_path)
        else:
            self.config_path = Path(base_path or ".") / DEFAULT_CONFIG_PATH

    def exists(self) -> bool:
        """Check whether the configuration file exists."""
        return self.config_path.is_file()

    def load(self) -> ModularConfig:
        """
        Load configuration.

        Order of precedence (highest to lowest):
        1. Environment variables (including .env file)
        2. Configuration file (config/modular.yaml)
        3. Default values

        Raises:
            ConfigNotFoundError: If the configuration file does not exist
            ConfigError: If the file is not valid YAML or has an invalid shape
        """
        if not self.exists():
            raise ConfigNotFoundError(str(self.config_path))

        try:
            with open(self.config_path, "r") as f:
                config_dict = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read configuration file '{self.config_path}': {e}") from e

        if not isinstance(config_dict, dict):
            raise ConfigError(f"Configuration file '{self.config_path}' must contain a mapping")

        self._load_from_env(config_dict)

        try:
            return ModularConfig(**config_dict)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in '{self.config_path}': {e}") from e

    def _load_from_env(self, config_dict: Dict[str, Any]) -> None:
        """Load configuration from environment variables."""
        if directory := os.getenv("MODULAR_DIRECTORY"):
            config_dict["directory"] = directory

        if namespace := os.getenv("MODULAR_NAMESPACE"):
            config_dict["namespace"] = namespace

    def create_default_config(self) -> None:
        """Create a default configuration file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        default_config = ModularConfig().model_dump(exclude={"modules"})
        default_config["modules"] = {}

        with open(self.config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False, sort_keys=False)
