"""Exceptions raised by modular."""


class ModularError(Exception):
    """Base class for all modular errors."""


class ConfigError(ModularError):
    """Configuration file could not be read or has an invalid shape."""


class ConfigNotFoundError(ConfigError):
    """Configuration file does not exist."""

    def __init__(self, path: str):
        super().__init__(
            f"Configuration file '{path}' does not exist. "
            "Run 'modular config --init' to create it."
        )
        self.path = path
