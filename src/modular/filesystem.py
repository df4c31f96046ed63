"""Filesystem access used by modules and the lifecycle driver."""

import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class Filesystem(Protocol):
    """Minimal filesystem capability."""

    def exists(self, path: str) -> bool:
        ...

    def require_once(self, path: str) -> ModuleType:
        ...


class LocalFilesystem:
    """
    Filesystem rooted at the application base path.

    Relative paths are resolved against the base path. Python files loaded
    through require_once are executed at most once per resolved path.
    """

    def __init__(self, base_path: Optional[Union[str, Path]] = None):
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self._loaded: Dict[Path, ModuleType] = {}

    def resolve(self, path: str) -> Path:
        """Resolve a path against the base path."""
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.base_path / candidate
        return candidate.resolve()

    def exists(self, path: str) -> bool:
        """Check whether a file or directory exists."""
        return self.resolve(path).exists()

    def require_once(self, path: str) -> ModuleType:
        """
        Execute a Python file once and return the resulting module.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        resolved = self.resolve(path)
        if resolved in self._loaded:
            return self._loaded[resolved]

        if not resolved.is_file():
            raise FileNotFoundError(f"File '{resolved}' does not exist")

        module_name = "_modular_" + "_".join(resolved.with_suffix("").parts[1:])
        spec = importlib.util.spec_from_file_location(module_name, resolved)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load '{resolved}'")

        module = importlib.util.module_from_spec(spec)
        # register before executing so a file that requires itself is not re-run
        self._loaded[resolved] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            del self._loaded[resolved]
            raise

        logger.debug("Loaded %s", resolved)
        return module
